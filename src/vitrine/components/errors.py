"""Exceptions for the component pipeline.

Exception Hierarchy:
VitrineError (base)
├── MetadataError       # meta.json missing fields or malformed
├── CompileFailure      # stylesheet or template failed to compile
└── RenderFailure       # template failed while rendering

Each failure is scoped to one component: callers catch these per
component or per request and carry on.

"""

from __future__ import annotations

from pathlib import Path

from vitrine.environment import terminal
from vitrine.environment.exceptions import ErrorCode


class VitrineError(Exception):
    """Base exception for component pipeline errors.

    Attributes:
        code: Searchable error code
        location: Component directory the error belongs to, when known
    """

    code: ErrorCode | None = None

    def __init__(
        self,
        message: str,
        *,
        location: Path | str | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.location = Path(location) if location is not None else None
        if code is not None:
            self.code = code
        super().__init__(message)

    def format_compact(self) -> str:
        """Format error as a human-readable summary without traceback noise."""
        parts = [terminal.format_error_header(self.code.value if self.code else None, self.message)]
        if self.location is not None:
            parts.append(f"  Component: {terminal.style('location', str(self.location))}")
        cause = self.__cause__
        if cause is not None:
            detail = cause.format_compact() if hasattr(cause, "format_compact") else str(cause)
            parts.append("  Caused by:")
            parts.extend(f"    {line}" for line in detail.splitlines())
        return "\n".join(parts)


class MetadataError(VitrineError):
    """A component's ``meta.json`` could not be turned into a definition."""

    code: ErrorCode | None = ErrorCode.DISCOVERY


class CompileFailure(VitrineError):
    """A component's stylesheet or template failed to compile."""

    code: ErrorCode | None = ErrorCode.TEMPLATE_COMPILE


class RenderFailure(VitrineError):
    """A component's template failed while rendering; no partial output is returned."""

    code: ErrorCode | None = ErrorCode.COMPONENT_RENDER
