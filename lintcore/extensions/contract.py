"""Extension kinds and the walker contract lint extensions implement.

An export takes part in discovery only when it carries a string
``extension_kind`` attribute. Known kinds must be classes that build a
LintWalker; any other kind is passed through untouched for consumers that
understand it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lintcore.extensions.descriptor import ExtensionDescriptor

EXTENSION_KIND_ATTR = "extension_kind"


class ExtensionKind(str, Enum):
    SYNTACTIC_LINT = "syntactic-lint"
    SEMANTIC_LINT = "semantic-lint"


KNOWN_EXTENSION_KINDS = frozenset(k.value for k in ExtensionKind)

LintStopMethod = Callable[[], None]
LintErrorMethod = Callable[..., None]


@runtime_checkable
class LintWalker(Protocol):
    """Receives one visit per node from the traversal driver."""

    def visit(self, node: Any, stop: LintStopMethod, error: LintErrorMethod) -> None:
        """Call stop() to skip this node's children, error(...) to report a finding."""


@dataclass(frozen=True)
class SyntacticLintState:
    """Passed to a syntactic-lint constructor. No type information available."""

    api: Any
    args: Any
    host: Any
    program: Any


@dataclass(frozen=True)
class SemanticLintState(SyntacticLintState):
    checker: Any = None


class SyntacticLintProvider:
    """Optional base for syntactic lint extensions."""

    extension_kind = ExtensionKind.SYNTACTIC_LINT

    def __init__(self, state: SyntacticLintState) -> None:
        self.state = state

    def visit(self, node: Any, stop: LintStopMethod, error: LintErrorMethod) -> None:
        raise NotImplementedError


class SemanticLintProvider(SyntacticLintProvider):
    """Optional base for semantic lint extensions; state.checker is set."""

    extension_kind = ExtensionKind.SEMANTIC_LINT

    def __init__(self, state: SemanticLintState) -> None:
        super().__init__(state)
        self.checker = state.checker


@dataclass(frozen=True)
class LintFinding:
    """One error(...) call, normalized. span fields are None when not given."""

    message: str
    rule: str | None = None
    node: Any = None
    start: int | None = None
    length: int | None = None


def _is_offset(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def normalize_error_args(*args: Any) -> LintFinding:
    """Accept every error(...) call form and return a single LintFinding.

    Forms: (msg), (msg, node), (msg, start, length), each optionally
    preceded by a rule short-name. Raises TypeError for anything else.
    """
    rule: str | None = None
    rest = list(args)
    if len(rest) >= 2 and isinstance(rest[0], str) and isinstance(rest[1], str):
        rule = rest.pop(0)
    if not rest or not isinstance(rest[0], str):
        raise TypeError(f"error() expects a message string, got {args!r}")
    message = rest.pop(0)
    if not rest:
        return LintFinding(message=message, rule=rule)
    if len(rest) == 1:
        if rest[0] is None or isinstance(rest[0], str):
            raise TypeError(f"error() expects a node after the message, got {rest[0]!r}")
        return LintFinding(message=message, rule=rule, node=rest[0])
    if len(rest) == 2 and _is_offset(rest[0]) and _is_offset(rest[1]):
        return LintFinding(message=message, rule=rule, start=rest[0], length=rest[1])
    raise TypeError(f"Unsupported error() arguments: {args!r}")


class StopSignal:
    """stop() for a single node. Idempotent; the driver creates one per visit."""

    def __init__(self) -> None:
        self.stopped = False

    def __call__(self) -> None:
        self.stopped = True


def create_lint_walker(
    extension: "ExtensionDescriptor",
    *,
    program: Any,
    host: Any,
    checker: Any = None,
    api: Any = None,
) -> LintWalker:
    """Construct the walker for a known-kind extension with its kind's state."""
    if api is None:
        import lintcore

        api = lintcore
    if extension.ctor is None:
        raise ValueError(f"Extension {extension.name!r} of kind {extension.kind!r} has no constructor")
    if extension.kind == ExtensionKind.SEMANTIC_LINT:
        if checker is None:
            raise ValueError(f"Semantic extension {extension.name!r} requires a type checker")
        state: SyntacticLintState = SemanticLintState(
            api=api, args=extension.args, host=host, program=program, checker=checker
        )
    elif extension.kind == ExtensionKind.SYNTACTIC_LINT:
        state = SyntacticLintState(api=api, args=extension.args, host=host, program=program)
    else:
        raise ValueError(f"Cannot build a walker for extension kind {extension.kind!r}")
    return extension.ctor(state)
