"""Extension system: contract, descriptors, host, loader, classifier, cache, profiling."""

from lintcore.extensions.cache import ExtensionCache, create_extension_cache
from lintcore.extensions.classifier import classify_exports
from lintcore.extensions.contract import (
    EXTENSION_KIND_ATTR,
    ExtensionKind,
    LintFinding,
    LintWalker,
    SemanticLintProvider,
    SemanticLintState,
    StopSignal,
    SyntacticLintProvider,
    SyntacticLintState,
    create_lint_walker,
    normalize_error_args,
)
from lintcore.extensions.descriptor import ExtensionCollectionMap, ExtensionDescriptor, ProfileRecord
from lintcore.extensions.host import ExtensionHost, ResolvedModule, SystemExtensionHost, resolve_module_name
from lintcore.extensions.loader import load_extensions
from lintcore.extensions.options import CompilerOptions
from lintcore.extensions.profiling import complete_extension_profile, start_extension_profile

__all__ = [
    "CompilerOptions",
    "EXTENSION_KIND_ATTR",
    "ExtensionCache",
    "ExtensionCollectionMap",
    "ExtensionDescriptor",
    "ExtensionHost",
    "ExtensionKind",
    "LintFinding",
    "LintWalker",
    "ProfileRecord",
    "ResolvedModule",
    "SemanticLintProvider",
    "SemanticLintState",
    "StopSignal",
    "SyntacticLintProvider",
    "SyntacticLintState",
    "SystemExtensionHost",
    "classify_exports",
    "complete_extension_profile",
    "create_extension_cache",
    "create_lint_walker",
    "load_extensions",
    "normalize_error_args",
    "resolve_module_name",
    "start_extension_profile",
]
