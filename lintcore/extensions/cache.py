"""ExtensionCache: one discovery pass per options+host pair, memoized."""

import logging
from types import MappingProxyType

from lintcore.diagnostics import Diagnostic, Diagnostics, create_compiler_diagnostic
from lintcore.extensions.classifier import classify_exports
from lintcore.extensions.descriptor import ExtensionCollectionMap, ExtensionDescriptor
from lintcore.extensions.host import ExtensionHost
from lintcore.extensions.loader import describe_error, load_extensions
from lintcore.extensions.options import CompilerOptions

logger = logging.getLogger(__name__)


class ExtensionCache:
    """Discovers extensions on first access and serves the same result afterwards.

    Build a new cache when options change; a populated cache is never reloaded.
    The map, its groups and the diagnostics are read-only views.
    """

    def __init__(self, options: CompilerOptions, host: ExtensionHost) -> None:
        self._options = options
        self._host = host
        self._diagnostics: tuple[Diagnostic, ...] = ()
        self._extensions: ExtensionCollectionMap | None = None

    def get_compiler_extensions(self) -> ExtensionCollectionMap:
        if self._extensions is None:
            self._extensions = self._collect_compiler_extensions()
        return self._extensions

    def get_extension_loading_diagnostics(self) -> tuple[Diagnostic, ...]:
        # Diagnostics only exist once discovery has run.
        self.get_compiler_extensions()
        return self._diagnostics

    def get_extensions(self, kind: str) -> tuple[ExtensionDescriptor, ...]:
        return self.get_compiler_extensions().get(kind, ())

    def _classify(self, name: str, result: object, diagnostics: list[Diagnostic]) -> list[ExtensionDescriptor]:
        try:
            return classify_exports(
                name,
                result,
                self._options.extension_args(name),
                diagnostics,
                allow_custom_kinds=self._options.allow_custom_extension_kinds,
            )
        except Exception as e:
            logger.warning("Failed to inspect exports of extension %s: %s", name, e)
            diagnostics.append(
                create_compiler_diagnostic(Diagnostics.EXTENSION_LOADING_FAILED, describe_error(e))
            )
            return []

    def _collect_compiler_extensions(self) -> ExtensionCollectionMap:
        diagnostics: list[Diagnostic] = []
        load_results = load_extensions(self._options, self._host, diagnostics)
        flat: list[ExtensionDescriptor] = []
        for res in load_results:
            if res.ok:
                flat.extend(self._classify(res.name, res.result, diagnostics))
        grouped: dict[str, list[ExtensionDescriptor]] = {}
        for ext in flat:
            grouped.setdefault(ext.kind, []).append(ext)
        logger.info(
            "Discovered %d extension(s) in %d group(s), %d diagnostic(s)",
            len(flat),
            len(grouped),
            len(diagnostics),
        )
        self._diagnostics = tuple(diagnostics)
        return MappingProxyType({kind: tuple(group) for kind, group in grouped.items()})


def create_extension_cache(options: CompilerOptions, host: ExtensionHost) -> ExtensionCache:
    return ExtensionCache(options, host)
