"""Entry point for the lintcore CLI: discover configured extensions and report them."""

import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from lintcore.diagnostics import format_diagnostic
from lintcore.extensions import SystemExtensionHost, create_extension_cache
from lintcore.logging_config import setup_logging
from lintcore.settings import get_compiler_options, load_settings


def run(settings_path: Path | None = None, current_directory: str | None = None) -> int:
    """Discover -> print groups -> print diagnostics. Returns the process exit code."""
    try:
        settings = load_settings(settings_path)
    except (yaml.YAMLError, ValueError) as e:
        print(f"Cannot read settings: {e}", file=sys.stderr)
        return 2
    project_root = Path(current_directory) if current_directory else Path.cwd()
    setup_logging(project_root, settings)
    try:
        options = get_compiler_options(settings)
    except ValidationError as e:
        print(f"Invalid compiler_options: {e}", file=sys.stderr)
        return 2
    host = SystemExtensionHost(current_directory=current_directory)
    cache = create_extension_cache(options, host)
    for kind, group in cache.get_compiler_extensions().items():
        print(f"{kind}:")
        for ext in group:
            print(f"  {ext.name}")
    diagnostics = cache.get_extension_loading_diagnostics()
    for diagnostic in diagnostics:
        print(format_diagnostic(diagnostic), file=sys.stderr)
    return 1 if diagnostics else 0


def main() -> None:
    """Usage: python -m lintcore [path/to/settings.yaml]"""
    settings_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    sys.exit(run(settings_path))


__all__ = ["main", "run"]
