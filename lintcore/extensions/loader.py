"""Loader: resolve configured extension names and load them through the host.

Every failure becomes a diagnostic; nothing raised by resolution or by the
host's load_extension() escapes to the caller.
"""

import logging
import os
import time
import traceback
from dataclasses import dataclass
from typing import Any

from lintcore.diagnostics import Diagnostic, Diagnostics, create_compiler_diagnostic
from lintcore.extensions.host import ExtensionHost, resolve_module_name
from lintcore.extensions.options import CompilerOptions

logger = logging.getLogger(__name__)

# Resolution is rooted at this (possibly nonexistent) file in the current directory.
SYNTHETIC_CONFIG_FILE = "lintcore.yaml"

LOADING_NOT_IMPLEMENTED = "Extension loading not implemented in host!"


@dataclass
class ExtensionLoadResult:
    name: str
    result: Any = None
    error: str | None = None
    # Milliseconds spent in host.load_extension; debug instrumentation only.
    load_time: float | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def describe_error(error: BaseException) -> str:
    text = f"{type(error).__name__}: {error}"
    if error.__traceback__ is None:
        return text
    stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return f"{text}\n    Stack trace:\n{stack}"


def _load_one(
    name: str,
    options: CompilerOptions,
    host: ExtensionHost,
    containing_file: str,
) -> ExtensionLoadResult:
    load_extension = getattr(host, "load_extension", None)
    if load_extension is None:
        return ExtensionLoadResult(name=name, error=LOADING_NOT_IMPLEMENTED)
    try:
        resolved = resolve_module_name(name, containing_file, options, host)
    except Exception as e:
        return ExtensionLoadResult(name=name, error=describe_error(e))
    if resolved is None:
        return ExtensionLoadResult(name=name, error=f"Host could not locate extension '{name}'.")
    start = time.perf_counter()
    try:
        result = load_extension(resolved.resolved_file_name)
    except Exception as e:
        return ExtensionLoadResult(name=name, error=describe_error(e))
    load_time = (time.perf_counter() - start) * 1000.0
    logger.debug("Loaded extension %s from %s in %.1f ms", name, resolved.resolved_file_name, load_time)
    return ExtensionLoadResult(name=name, result=result, load_time=load_time)


def _current_directory(host: ExtensionHost) -> str:
    get_current_directory = getattr(host, "get_current_directory", None)
    if get_current_directory is None:
        return ""
    try:
        return get_current_directory() or ""
    except Exception as e:
        logger.warning("Host could not report its current directory: %s", e)
        return ""


def load_extensions(
    options: CompilerOptions,
    host: ExtensionHost,
    diagnostics: list[Diagnostic],
) -> list[ExtensionLoadResult]:
    """Load every configured extension in order. Failures are appended to diagnostics."""
    containing_file = os.path.join(_current_directory(host), SYNTHETIC_CONFIG_FILE)
    results: list[ExtensionLoadResult] = []
    for name in options.extension_names():
        res = _load_one(name, options, host, containing_file)
        if res.error is not None:
            logger.warning("Failed to load extension %s: %s", name, res.error.splitlines()[0])
            diagnostics.append(
                create_compiler_diagnostic(Diagnostics.EXTENSION_LOADING_FAILED, res.error)
            )
        results.append(res)
    return results
