"""Tests for module resolution and SystemExtensionHost against real files."""

import os
from pathlib import Path
from types import ModuleType

import pytest

from lintcore.extensions import CompilerOptions, SystemExtensionHost, create_extension_cache, resolve_module_name
from lintcore.extensions.host import module_exports

_RULES_SOURCE = '''
from lintcore.extensions import ExtensionKind, SyntacticLintProvider


class NoDebugger(SyntacticLintProvider):
    def visit(self, node, stop, error):
        error("no-debugger", "debugger statement")


class TypedRule:
    extension_kind = ExtensionKind.SEMANTIC_LINT

    def __init__(self, state):
        self.state = state


broken = type("Broken", (), {"extension_kind": "syntactic-lint"})()
helper = 3
'''


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestResolveModuleName:
    """Python-native resolution rooted at a containing file."""

    def _resolve(self, name: str, root: Path, **options):
        host = SystemExtensionHost(current_directory=str(root))
        return resolve_module_name(name, str(root / "lintcore.yaml"), CompilerOptions(**options), host)

    def test_bare_name_in_directory(self, tmp_path: Path) -> None:
        target = _write(tmp_path / "rules.py", "")
        assert self._resolve("rules", tmp_path).resolved_file_name == str(target)

    def test_package_init(self, tmp_path: Path) -> None:
        target = _write(tmp_path / "pkg" / "__init__.py", "")
        assert self._resolve("pkg", tmp_path).resolved_file_name == str(target)

    def test_dotted_name(self, tmp_path: Path) -> None:
        target = _write(tmp_path / "pkg" / "sub.py", "")
        assert self._resolve("pkg.sub", tmp_path).resolved_file_name == str(target)

    def test_relative_path(self, tmp_path: Path) -> None:
        target = _write(tmp_path / "lint" / "local.py", "")
        assert self._resolve("./lint/local.py", tmp_path).resolved_file_name == str(target)
        assert self._resolve("./lint/local", tmp_path).resolved_file_name == str(target)

    def test_module_search_paths(self, tmp_path: Path) -> None:
        target = _write(tmp_path / "vendor" / "extra.py", "")
        assert self._resolve("extra", tmp_path) is None
        found = self._resolve("extra", tmp_path, module_search_paths=["vendor"])
        assert os.path.normpath(found.resolved_file_name) == str(target)

    def test_installed_module(self, tmp_path: Path) -> None:
        resolved = self._resolve("lintcore.diagnostics", tmp_path)
        assert resolved is not None
        assert resolved.resolved_file_name.endswith("diagnostics.py")

    def test_missing(self, tmp_path: Path) -> None:
        assert self._resolve("definitely_not_a_module_xyz", tmp_path) is None
        assert self._resolve("./nope", tmp_path) is None


class TestModuleExports:
    def test_all_takes_precedence(self) -> None:
        mod = ModuleType("fake_mod")
        mod.__all__ = ["b", "a"]
        mod.a, mod.b, mod.c = 1, 2, 3
        assert module_exports(mod) == {"b": 2, "a": 1}

    def test_private_and_imported_names_skipped(self) -> None:
        mod = ModuleType("fake_mod")
        mod._private = 1
        mod.os = os
        mod.Path = Path

        class Local:
            pass

        Local.__module__ = "fake_mod"
        mod.Local = Local
        mod.value = 7
        assert module_exports(mod) == {"Local": Local, "value": 7}

    def test_default_alias_exported_once(self) -> None:
        mod = ModuleType("fake_mod")

        class Rule:
            pass

        Rule.__module__ = "fake_mod"
        mod.Rule = Rule
        mod.Other = type("Other", (), {"__module__": "fake_mod"})
        mod.default = Rule
        assert module_exports(mod) == {"Other": mod.Other, "default": Rule}

    def test_default_alias_discovered_under_module_name(self, tmp_path: Path) -> None:
        _write(
            tmp_path / "aliased.py",
            "from lintcore.extensions import SyntacticLintProvider\n\n"
            "class Rule(SyntacticLintProvider):\n"
            "    pass\n\n"
            "default = Rule\n",
        )
        options = CompilerOptions(extensions=["aliased"])
        cache = create_extension_cache(options, SystemExtensionHost(current_directory=str(tmp_path)))
        assert [e.name for e in cache.get_extensions("syntactic-lint")] == ["aliased"]


class TestSystemExtensionHost:
    def test_get_current_directory_defaults_to_cwd(self) -> None:
        assert SystemExtensionHost().get_current_directory() == os.getcwd()

    def test_load_extension_returns_exports(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "rules.py", _RULES_SOURCE)
        exports = SystemExtensionHost().load_extension(str(path))
        assert list(exports) == ["NoDebugger", "TypedRule", "broken", "helper"]

    def test_load_extension_propagates_errors(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "bad.py", "raise ValueError('nope')\n")
        with pytest.raises(ValueError, match="nope"):
            SystemExtensionHost().load_extension(str(path))

    def test_end_to_end_discovery(self, tmp_path: Path) -> None:
        _write(tmp_path / "rules.py", _RULES_SOURCE)
        _write(tmp_path / "crash.py", "import not_a_real_dependency_xyz\n")
        options = CompilerOptions(extensions={"rules": {"strict": True}, "crash": None, "ghost": None})
        cache = create_extension_cache(options, SystemExtensionHost(current_directory=str(tmp_path)))
        groups = cache.get_compiler_extensions()
        assert [e.name for e in groups["syntactic-lint"]] == ["rules[NoDebugger]"]
        assert [e.name for e in groups["semantic-lint"]] == ["rules[TypedRule]"]
        assert groups["syntactic-lint"][0].args == {"strict": True}
        messages = [d.message for d in cache.get_extension_loading_diagnostics()]
        assert len(messages) == 3
        assert "not_a_real_dependency_xyz" in messages[0]
        assert "Stack trace:" in messages[0]
        assert "ghost" in messages[1]
        assert "'rules' exported member 'broken'" in messages[2]
