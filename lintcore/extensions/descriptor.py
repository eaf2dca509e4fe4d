"""Extension descriptor and profile record."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

PROFILE_IN_FLIGHT = -1.0


@dataclass
class ProfileRecord:
    task: str
    start: float  # ms since epoch
    length: float = PROFILE_IN_FLIGHT


@dataclass
class ExtensionDescriptor:
    """One discovered extension export.

    ctor is set only for known kinds that passed validation; opaque holds the
    raw export for custom kinds.
    """

    name: str
    kind: str
    args: Any = None
    profiles: dict[str, ProfileRecord] = field(default_factory=dict)
    ctor: type | None = None
    opaque: Any = None


# Read-only once discovery completes: kind -> descriptors in load order.
ExtensionCollectionMap = Mapping[str, tuple[ExtensionDescriptor, ...]]
