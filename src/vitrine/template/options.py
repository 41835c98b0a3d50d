"""The options object handed to helpers that ask for it."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from vitrine.template.helpers import MISSING

if TYPE_CHECKING:
    from vitrine.render_context import RenderContext
    from vitrine.template.frame import Frame

    Emitter = Callable[[Frame, list[str], RenderContext], None]


class HelperOptions:
    """Invocation details passed as the last argument to option-aware helpers.

    Attributes:
        name: The helper name as written in the template
        hash: ``key=value`` arguments, evaluated
        data: ``@``-variables visible at the call site
        context: The current ``this``

    Methods:
        fn(context, data): Render the block body and return it
        inverse(context, data): Render the ``{{else}}`` section and return it

    Example:
        >>> @pass_options
        ... def times(n, options):
        ...     return "".join(
        ...         options.fn(options.context, data={"index": i}) for i in range(n)
        ...     )

    For inline calls (``{{name args}}``) both ``fn`` and ``inverse`` return
    an empty string.
    """

    __slots__ = ("_body", "_frame", "_inverse", "_rctx", "hash", "name")

    def __init__(
        self,
        name: str,
        hash: Mapping[str, Any],
        frame: Frame,
        rctx: RenderContext,
        body: Emitter | None = None,
        inverse: Emitter | None = None,
    ):
        self.name = name
        self.hash = dict(hash)
        self._frame = frame
        self._rctx = rctx
        self._body = body
        self._inverse = inverse

    @property
    def context(self) -> Any:
        return self._frame.context

    @property
    def data(self) -> dict[str, Any]:
        return self._frame.data

    @property
    def is_block(self) -> bool:
        return self._body is not None

    def fn(self, context: Any = MISSING, data: Mapping[str, Any] | None = None) -> str:
        return self._render(self._body, context, data)

    def inverse(self, context: Any = MISSING, data: Mapping[str, Any] | None = None) -> str:
        return self._render(self._inverse, context, data)

    def _render(self, emitter: Emitter | None, context: Any, data: Mapping[str, Any] | None) -> str:
        if emitter is None:
            return ""
        target = self._frame.context if context is MISSING else context
        buf: list[str] = []
        emitter(self._frame.child(target, data), buf, self._rctx)
        return "".join(buf)

    def __repr__(self) -> str:
        return f"HelperOptions(name={self.name!r}, hash={self.hash!r})"
