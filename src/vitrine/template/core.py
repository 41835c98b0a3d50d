"""Vitrine Template: compiled template ready for rendering.

The Template class wraps the render closure built by the Compiler and
provides ``render()``. Per-render state (template name, current line,
partial depth) lives in a ContextVar RenderContext, never in user data.

Thread-Safety:
Templates are immutable after construction. ``render()`` allocates its
own buffer and frame, so concurrent renders do not interfere.

"""

from __future__ import annotations

import weakref
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from vitrine.template.frame import Frame

if TYPE_CHECKING:
    from vitrine.environment import Environment
    from vitrine.render_context import RenderContext

    RenderFunc = Callable[[Frame, list[str], RenderContext], None]


class Template:
    """Compiled template ready for rendering.

    Example:
        >>> from vitrine import Environment
        >>> template = Environment().from_string("Hello, {{name}}!")
        >>> template.render({"name": "World"})
        'Hello, World!'
    """

    __slots__ = ("__weakref__", "_env_ref", "_name", "_render_func", "_source")

    def __init__(
        self,
        env: Environment,
        render_func: RenderFunc,
        name: str | None = None,
        source: str | None = None,
    ):
        self._env_ref: weakref.ref[Environment] = weakref.ref(env)
        self._render_func = render_func
        self._name = name
        self._source = source

    @property
    def _env(self) -> Environment:
        env = self._env_ref()
        if env is None:
            raise RuntimeError(
                f"Environment has been garbage collected (template: {self._name or 'unknown'})"
            )
        return env

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def source(self) -> str | None:
        return self._source

    def render(self, data: Any = None, /, **kwargs: Any) -> str:
        """Render the template against ``data``.

        Args:
            data: The root context; usually a mapping, but any object works
                (paths fall back to attribute access)
            **kwargs: Extra top-level values, merged over a mapping ``data``

        Raises:
            TemplateRuntimeError: A helper raised, or partials nested too deep
            TemplateNotFoundError: A referenced partial does not exist
        """
        from vitrine.environment.exceptions import TemplateError
        from vitrine.render_context import render_context

        context: Any = {} if data is None else data
        if kwargs:
            if not isinstance(context, Mapping):
                raise TypeError("render() keyword arguments require a mapping as data")
            context = {**context, **kwargs}

        buf: list[str] = []
        with render_context(
            template_name=self._name,
            source=self._source,
            max_partial_depth=self._env.max_partial_depth,
        ) as render_ctx:
            try:
                self._render_func(Frame.root(context), buf, render_ctx)
            except TemplateError:
                raise
            except Exception as e:
                raise self._enhance_error(e, render_ctx) from e
        return "".join(buf)

    def __call__(self, data: Any = None, /, **kwargs: Any) -> str:
        return self.render(data, **kwargs)

    def _render_into(self, frame: Frame, buf: list[str], render_ctx: RenderContext) -> None:
        """Render as a partial into an existing buffer."""
        self._render_func(frame, buf, render_ctx)

    def _enhance_error(self, error: Exception, render_ctx: RenderContext) -> Exception:
        """Convert a generic exception into TemplateRuntimeError with location context."""
        from vitrine.environment.exceptions import TemplateRuntimeError, build_source_snippet

        lineno = render_ctx.line or None
        message = str(error).strip() or f"{type(error).__name__} (no details available)"
        source = render_ctx.source
        snippet = build_source_snippet(source, lineno) if source and lineno else None
        return TemplateRuntimeError(
            message,
            template_name=render_ctx.template_name,
            lineno=lineno,
            source_snippet=snippet,
            template_stack=render_ctx.template_stack,
        )

    def __repr__(self) -> str:
        return f"<Template {self._name or '(inline)'}>"
