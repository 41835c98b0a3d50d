"""Vitrine RenderContext: per-render state isolated from user data.

Render-scoped bookkeeping (current template, current line, partial depth,
the partial call stack) lives in a ContextVar instead of the data passed to
the template, so templates can use any key names.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field


@dataclass
class RenderContext:
    """Per-render state.

    Attributes:
        template_name: Current template or partial name for error messages
        source: Template source for runtime error snippets
        line: Current line number (updated by compiled emitters)
        partial_depth: Current partial nesting depth
        max_partial_depth: Maximum allowed nesting before the render is aborted
        template_stack: Stack of (template_name, line) for error traces
    """

    template_name: str | None = None
    source: str | None = None
    line: int = 0

    # Deep enough for any real component tree while catching a partial that
    # includes itself early.
    partial_depth: int = 0
    max_partial_depth: int = 50

    template_stack: list[tuple[str, int]] = field(default_factory=list)

    def check_partial_depth(self, partial_name: str) -> None:
        """Raise TemplateRuntimeError when including ``partial_name`` would nest too deep."""
        if self.partial_depth >= self.max_partial_depth:
            from vitrine.environment.exceptions import ErrorCode, TemplateRuntimeError

            raise TemplateRuntimeError(
                f"Maximum partial depth exceeded ({self.max_partial_depth}) "
                f"when including '{partial_name}'",
                template_name=self.template_name,
                lineno=self.line or None,
                suggestion="Check for partials that include themselves: A → B → A",
                template_stack=self.template_stack,
                code=ErrorCode.PARTIAL_DEPTH,
            )

    def child_context(self, template_name: str, source: str | None = None) -> RenderContext:
        """Create the context for a partial, one level deeper."""
        stack = self.template_stack.copy()
        if self.template_name and self.line > 0:
            stack.append((self.template_name, self.line))
        return RenderContext(
            template_name=template_name,
            source=source,
            partial_depth=self.partial_depth + 1,
            max_partial_depth=self.max_partial_depth,
            template_stack=stack,
        )


_render_context: ContextVar[RenderContext | None] = ContextVar(
    "vitrine_render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Get current render context (None if not in render)."""
    return _render_context.get()


@contextmanager
def render_context(
    template_name: str | None = None,
    source: str | None = None,
    max_partial_depth: int = 50,
) -> Iterator[RenderContext]:
    """Context manager for render-scoped state.

    Example:
        with render_context(template_name="card") as ctx:
            render_func(frame, buf, ctx)
    """
    ctx = RenderContext(
        template_name=template_name,
        source=source,
        max_partial_depth=max_partial_depth,
    )
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)
