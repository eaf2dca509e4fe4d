"""Classifier: turn one loaded module's exports into extension descriptors."""

import inspect
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from lintcore.diagnostics import Diagnostic, Diagnostics, create_compiler_diagnostic
from lintcore.extensions.contract import EXTENSION_KIND_ATTR, KNOWN_EXTENSION_KINDS
from lintcore.extensions.descriptor import ExtensionDescriptor

logger = logging.getLogger(__name__)

DEFAULT_EXPORT = "default"
EXPECTED_CTOR_TYPE = "class"


def _exports_of(module_exports: Any) -> list[tuple[str, Any]]:
    """(key, value) pairs of a loaded module; values without a namespace have none."""
    if isinstance(module_exports, Mapping):
        return list(module_exports.items())
    namespace = getattr(module_exports, "__dict__", None)
    if not isinstance(namespace, Mapping):
        return []
    return list(namespace.items())


def _kind_tag(export: Any) -> Any:
    try:
        return getattr(export, EXTENSION_KIND_ATTR, None)
    except Exception as e:
        logger.warning("Ignoring export whose %s lookup failed: %s", EXTENSION_KIND_ATTR, e)
        return None


def descriptor_name(module_name: str, export_key: str) -> str:
    if export_key == DEFAULT_EXPORT:
        return module_name
    return f"{module_name}[{export_key}]"


def classify_exports(
    module_name: str,
    module_exports: Any,
    args: Any,
    diagnostics: list[Diagnostic],
    allow_custom_kinds: bool = True,
) -> list[ExtensionDescriptor]:
    """Descriptors for every tagged export, in export order.

    Untagged and None exports are skipped silently. Known kinds that are not
    classes, and custom kinds when they are not allowed, are dropped with a
    diagnostic.
    """
    if module_exports is None:
        return []
    accepted: list[ExtensionDescriptor] = []
    for key, export in _exports_of(module_exports):
        if export is None:
            continue
        tag = _kind_tag(export)
        if not isinstance(tag, str):
            continue
        if isinstance(tag, Enum):
            tag = tag.value
        name = descriptor_name(module_name, key)
        if tag in KNOWN_EXTENSION_KINDS:
            kind = tag
            if not inspect.isclass(export):
                diagnostics.append(
                    create_compiler_diagnostic(
                        Diagnostics.EXTENSION_MEMBER_WRONG_TYPE,
                        module_name,
                        key,
                        kind,
                        type(export).__name__,
                        EXPECTED_CTOR_TYPE,
                    )
                )
                logger.warning("Extension %s has kind %s but is not a class", name, kind)
                continue
            accepted.append(ExtensionDescriptor(name=name, kind=kind, args=args, ctor=export))
        elif allow_custom_kinds:
            accepted.append(ExtensionDescriptor(name=name, kind=tag, args=args, opaque=export))
        else:
            diagnostics.append(
                create_compiler_diagnostic(Diagnostics.EXTENSION_UNSUPPORTED_KIND, module_name, key, tag)
            )
    return accepted
