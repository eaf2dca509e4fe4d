"""Host collaborator: module resolution and dynamic loading of extension files.

Discovery only needs file_exists(); get_current_directory(), load_extension()
and find_module_origin() are optional and probed with getattr.
"""

import importlib.util
import inspect
import logging
import os
import re
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lintcore.extensions.options import CompilerOptions

logger = logging.getLogger(__name__)


@runtime_checkable
class ModuleResolutionHost(Protocol):
    def file_exists(self, path: str) -> bool: ...


class ExtensionHost(ModuleResolutionHost, Protocol):
    """Optional members: get_current_directory(), load_extension(path), find_module_origin(name)."""


@dataclass(frozen=True)
class ResolvedModule:
    resolved_file_name: str


def _is_path_like(name: str) -> bool:
    return (
        name.startswith(".")
        or os.path.isabs(name)
        or "/" in name
        or "\\" in name
        or name.endswith(".py")
    )


def _try_file_or_package(base: str, host: ModuleResolutionHost) -> ResolvedModule | None:
    candidates = [base] if base.endswith(".py") else []
    candidates += [base + ".py", os.path.join(base, "__init__.py")]
    for candidate in candidates:
        if host.file_exists(candidate):
            return ResolvedModule(resolved_file_name=candidate)
    return None


def resolve_module_name(
    name: str,
    containing_file: str,
    options: "CompilerOptions",
    host: ModuleResolutionHost,
) -> ResolvedModule | None:
    """Map an extension name to a Python file, or None when nothing matches.

    Paths resolve against the containing file's directory. Bare and dotted
    names search that directory, then options.module_search_paths, then the
    host's installed-module lookup if it has one.
    """
    containing_dir = os.path.dirname(containing_file)
    if _is_path_like(name):
        return _try_file_or_package(os.path.normpath(os.path.join(containing_dir, name)), host)
    search_dirs = [containing_dir]
    search_dirs += [os.path.join(containing_dir, p) for p in options.module_search_paths]
    for directory in search_dirs:
        found = _try_file_or_package(os.path.join(directory, *name.split(".")), host)
        if found:
            return found
    find_origin = getattr(host, "find_module_origin", None)
    if find_origin is not None:
        origin = find_origin(name)
        if origin:
            return ResolvedModule(resolved_file_name=origin)
    return None


def module_exports(module: Any) -> dict[str, Any]:
    """Exported members in definition order: __all__ if present, else public names.

    Without __all__, submodules and classes/functions imported from elsewhere
    are not exports.
    """
    names = getattr(module, "__all__", None)
    if names is not None:
        return {n: getattr(module, n, None) for n in names}
    exports: dict[str, Any] = {}
    for key, value in vars(module).items():
        if key.startswith("_") or inspect.ismodule(value):
            continue
        if (inspect.isclass(value) or inspect.isfunction(value)) and value.__module__ != module.__name__:
            continue
        exports[key] = value
    default = exports.get("default")
    if default is not None:
        # `default = Rule` aliases Rule; export it once, under "default".
        exports = {k: v for k, v in exports.items() if k == "default" or v is not default}
    return exports


def _module_name_for(path: str) -> str:
    return "lintcore_ext_" + re.sub(r"\W", "_", os.path.splitext(os.path.abspath(path))[0]).strip("_")


class SystemExtensionHost:
    """Host backed by the real filesystem and importlib."""

    def __init__(self, current_directory: str | None = None) -> None:
        self._current_directory = current_directory

    def file_exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def get_current_directory(self) -> str:
        return self._current_directory or os.getcwd()

    def find_module_origin(self, name: str) -> str | None:
        """File of an importable (installed) module, if it is a regular file."""
        try:
            spec = importlib.util.find_spec(name)
        except (ImportError, ValueError):
            return None
        if spec is None or not spec.origin or not os.path.isfile(spec.origin):
            return None
        return spec.origin

    def load_extension(self, path: str) -> dict[str, Any]:
        """Execute the file as a module and return its exports. Raises on failure."""
        module_name = _module_name_for(path)
        locations = [os.path.dirname(path)] if os.path.basename(path) == "__init__.py" else None
        spec = importlib.util.spec_from_file_location(
            module_name, path, submodule_search_locations=locations
        )
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load {path}")
        mod = importlib.util.module_from_spec(spec)
        sys.modules[spec.name] = mod
        try:
            spec.loader.exec_module(mod)
        except BaseException:
            sys.modules.pop(spec.name, None)
            raise
        logger.debug("Imported extension module %s from %s", module_name, path)
        return module_exports(mod)
