"""Exceptions for the Vitrine template engine.

Exception Hierarchy:
TemplateError (base)
├── TemplateNotFoundError     # partial not registered and not in the loader
├── TemplateSyntaxError       # lexer or parser rejected the source
└── TemplateRuntimeError      # failure while rendering
    └── HelperError           # a helper raised; original chained as __cause__

Runtime errors carry the template name, line, a snippet of the offending
source and the chain of partials that led there:

    V-RUN-002: Helper 'divide' raised TypeError: unsupported operand
      Location: card:5
       |
    >  5 | <span>{{divide total count}}</span>
       |

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from vitrine.environment import terminal


class ErrorCode(Enum):
    """Searchable error codes, formatted ``V-{CATEGORY}-{NUMBER}``.

    LEX and PAR come from reading template source, RUN from rendering,
    TPL from partial lookup. DSC, CMP and RND belong to the component
    pipeline.
    """

    UNCLOSED_TAG = "V-LEX-001"
    UNCLOSED_COMMENT = "V-LEX-002"
    UNEXPECTED_CHARACTER = "V-LEX-003"

    UNEXPECTED_TOKEN = "V-PAR-001"
    UNCLOSED_BLOCK = "V-PAR-002"
    MISMATCHED_BLOCK = "V-PAR-003"
    INVALID_EXPRESSION = "V-PAR-004"

    RUNTIME_ERROR = "V-RUN-001"
    HELPER_ERROR = "V-RUN-002"
    UNKNOWN_HELPER = "V-RUN-003"
    PARTIAL_DEPTH = "V-RUN-004"

    TEMPLATE_NOT_FOUND = "V-TPL-001"
    SYNTAX_ERROR = "V-TPL-002"

    DISCOVERY = "V-DSC-001"
    STYLE_COMPILE = "V-CMP-001"
    TEMPLATE_COMPILE = "V-CMP-002"
    MISSING_SOURCE = "V-CMP-003"
    COMPONENT_RENDER = "V-RND-001"


def format_template_stack(stack: list[tuple[str, int]] | None) -> str:
    """Partials entered before the failure, outermost first.

    Example:
        >>> print(format_template_stack([("card", 4), ("badge", 1)]))
        Partials:
          • card:4
          • badge:1
    """
    if not stack:
        return ""
    lines = [terminal.style("muted", "Partials:")]
    lines.extend(f"  • {terminal.style('location', f'{name}:{lineno}')}" for name, lineno in stack)
    return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Numbered template lines around ``error_line`` (1-based)."""

    lines: tuple[tuple[int, str], ...]
    error_line: int

    def format(self) -> str:
        rule = terminal.style("muted", "   |")
        body = [terminal.format_source_line(n, text, is_error=n == self.error_line) for n, text in self.lines]
        return "\n".join([rule, *body, rule])


def build_source_snippet(source: str, error_line: int, *, context_lines: int = 2) -> SourceSnippet:
    all_lines = source.splitlines()
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    return SourceSnippet(tuple((i + 1, all_lines[i]) for i in range(start, end)), error_line)


class TemplateError(Exception):
    """Base exception for all template errors."""

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Single diagnostic block without traceback noise."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class TemplateNotFoundError(TemplateError):
    """A partial name resolved to neither a registered partial nor a loader entry."""

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND


class TemplateSyntaxError(TemplateError):
    """The lexer or parser rejected template source.

    ``str()`` names the template and line and, when ``source`` is known,
    quotes the line with a caret under ``col_offset``.
    """

    code: ErrorCode | None = ErrorCode.SYNTAX_ERROR

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
        source: str | None = None,
        col_offset: int | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.name = name
        self.source = source
        self.col_offset = col_offset
        if code is not None:
            self.code = code
        super().__init__("\n".join([f"Syntax Error: {message}", *self._details()]))

    def _location(self) -> str:
        location = self.name or "<template>"
        if self.lineno:
            location += f":{self.lineno}"
            if self.col_offset is not None:
                location += f":{self.col_offset}"
        return location

    def _details(self) -> list[str]:
        details = [f"  --> {self._location()}"]
        lines = self.source.splitlines() if self.source else []
        if self.lineno and 0 < self.lineno <= len(lines):
            details += ["   |", f"{self.lineno:>3} | {lines[self.lineno - 1]}"]
            if self.col_offset is not None:
                details.append(f"   | {' ' * self.col_offset}^")
        return details

    def format_compact(self) -> str:
        header = terminal.format_error_header(self.code.value if self.code else None, self.message)
        return "\n".join([header, *self._details()])


class TemplateRuntimeError(TemplateError):
    """Failure while rendering, with the template position it happened at.

    Attributes:
        message: Error description
        template_name: Template or partial being rendered
        lineno: Line in that template's source
        suggestion: Actionable fix, when one is known
        source_snippet: Lines around ``lineno``
        template_stack: ``(partial, line)`` pairs entered before the failure
    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        template_name: str | None = None,
        lineno: int | None = None,
        suggestion: str | None = None,
        source_snippet: SourceSnippet | None = None,
        template_stack: list[tuple[str, int]] | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.template_name = template_name
        self.lineno = lineno
        self.suggestion = suggestion
        self.source_snippet = source_snippet
        self.template_stack = template_stack or []
        if code is not None:
            self.code = code
        super().__init__("\n".join([f"Runtime Error: {message}", *self._details()]))

    def _details(self) -> list[str]:
        details = []
        if self.template_name or self.lineno:
            location = self.template_name or "<template>"
            if self.lineno:
                location += f":{self.lineno}"
            details.append(f"  Location: {terminal.style('location', location)}")
        if self.source_snippet:
            details.append(self.source_snippet.format())
        if self.template_stack:
            details += ["", format_template_stack(self.template_stack)]
        if self.suggestion:
            details.append(f"  {terminal.style('hint', 'Hint:')} {self.suggestion}")
        return details

    def format_compact(self) -> str:
        header = terminal.format_error_header(self.code.value if self.code else None, self.message)
        return "\n".join([header, *self._details()])


class HelperError(TemplateRuntimeError):
    """A registered helper raised while rendering."""

    code: ErrorCode | None = ErrorCode.HELPER_ERROR

    def __init__(self, helper_name: str, error: Exception, **kwargs: Any):
        self.helper_name = helper_name
        super().__init__(f"Helper '{helper_name}' raised {type(error).__name__}: {error}", **kwargs)
