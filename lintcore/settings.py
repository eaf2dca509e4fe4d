"""Load lintcore settings from config/settings.yaml."""

from pathlib import Path
from typing import Any

import yaml

from lintcore.extensions.options import CompilerOptions

_DEFAULTS: dict[str, Any] = {
    "compiler_options": {
        "extensions": [],
        "module_search_paths": [],
        "allow_custom_extension_kinds": True,
    },
    "logging": {
        "file": "",
        "level": "WARNING",
        "log_to_console": True,
        "max_bytes": 10485760,  # 10 MB
        "backup_count": 3,
    },
}

_cached: dict[str, Any] | None = None


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Merge overlay into base recursively. Mutates base."""
    for key, value in overlay.items():
        if value is None:
            continue
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def default_settings_path() -> Path:
    return Path.cwd() / "config" / "settings.yaml"


def get_setting(settings: dict[str, Any], path: str, default: Any = None) -> Any:
    """Get a nested value by dot path (e.g. 'logging.level')."""
    current: Any = settings
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def reload_settings() -> None:
    """Clear the settings cache."""
    global _cached
    _cached = None


def load_settings(settings_path: Path | None = None) -> dict[str, Any]:
    """Defaults merged with the YAML file, if it exists. Cached after the first call.

    Raises yaml.YAMLError on a malformed file and ValueError when the top
    level is not a mapping.
    """
    global _cached
    if _cached is not None:
        return _cached

    path = settings_path or default_settings_path()
    result: dict[str, Any] = _deep_copy_nested(_DEFAULTS)
    if path.exists():
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        if data is not None and not isinstance(data, dict):
            raise ValueError(f"Settings must be a YAML object: {path}")
        _deep_merge(result, data or {})

    _cached = result
    return result


def get_compiler_options(settings: dict[str, Any]) -> CompilerOptions:
    """Validate the compiler_options section. Raises pydantic.ValidationError."""
    return CompilerOptions.model_validate(get_setting(settings, "compiler_options") or {})


def _deep_copy_nested(obj: Any) -> Any:
    """Return a deep copy of nested dicts/lists for defaults."""
    if isinstance(obj, dict):
        return {k: _deep_copy_nested(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_deep_copy_nested(x) for x in obj]
    return obj
