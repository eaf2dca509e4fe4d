"""Per-extension timing records. Callers bracket work with start/complete."""

import time

from lintcore.errors import ExtensionProfileError
from lintcore.extensions.descriptor import PROFILE_IN_FLIGHT, ExtensionDescriptor, ProfileRecord


def _now_ms() -> float:
    return time.time() * 1000.0


def start_extension_profile(ext: ExtensionDescriptor, task: str) -> ProfileRecord:
    """Start (or restart) timing task on ext. An existing record is replaced."""
    if ext.profiles is None:
        ext.profiles = {}
    record = ProfileRecord(task=task, start=_now_ms(), length=PROFILE_IN_FLIGHT)
    ext.profiles[task] = record
    return record


def complete_extension_profile(ext: ExtensionDescriptor, task: str) -> ProfileRecord:
    """Stop timing task. Raises ExtensionProfileError if it was never started."""
    end = _now_ms()
    if not ext.profiles:
        raise ExtensionProfileError(
            f"Completed profile {task!r}, but extension {ext.name!r} has no started profiles."
        )
    record = ext.profiles.get(task)
    if record is None:
        raise ExtensionProfileError(
            f"Completed profile {task!r} on extension {ext.name!r} did not have a corresponding start."
        )
    record.length = max(0.0, end - record.start)
    return record
