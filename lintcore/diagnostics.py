"""Diagnostic catalog and factory for extension discovery failures.

Messages use positional placeholders ({0}, {1}, ...) filled from the
diagnostic args at creation time.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DiagnosticCategory(Enum):
    WARNING = "warning"
    ERROR = "error"
    SUGGESTION = "suggestion"
    MESSAGE = "message"


@dataclass(frozen=True)
class DiagnosticMessage:
    """Catalog entry: stable code, category and message template."""

    code: int
    category: DiagnosticCategory
    template: str

    def format(self, *args: Any) -> str:
        return self.template.format(*args)


@dataclass(frozen=True)
class Diagnostic:
    category: DiagnosticCategory
    code: int
    message: str
    args: tuple[Any, ...] = field(default_factory=tuple)


class Diagnostics:
    """Messages produced while loading and validating extensions."""

    EXTENSION_LOADING_FAILED = DiagnosticMessage(
        6151,
        DiagnosticCategory.ERROR,
        "Extension loading failed with error '{0}'.",
    )
    EXTENSION_MEMBER_WRONG_TYPE = DiagnosticMessage(
        6152,
        DiagnosticCategory.ERROR,
        "Extension '{0}' exported member '{1}' has extension kind '{2}', "
        "but was type '{3}' when type '{4}' was expected.",
    )
    EXTENSION_UNSUPPORTED_KIND = DiagnosticMessage(
        6153,
        DiagnosticCategory.ERROR,
        "Extension '{0}' exported member '{1}' has unsupported extension kind '{2}'.",
    )


def create_compiler_diagnostic(message: DiagnosticMessage, *args: Any) -> Diagnostic:
    """Render message with args into a Diagnostic not tied to any source file."""
    return Diagnostic(
        category=message.category,
        code=message.code,
        message=message.format(*args),
        args=tuple(args),
    )


def format_diagnostic(diagnostic: Diagnostic) -> str:
    return f"{diagnostic.category.value} LC{diagnostic.code}: {diagnostic.message}"
