"""Control flow compilation: if/unless, each, with."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from vitrine.template.helpers import is_empty, iteration_items

if TYPE_CHECKING:
    from vitrine.compiler.expressions import Emitter, Evaluator
    from vitrine.nodes import Each, Expr, If, Node, With
    from vitrine.render_context import RenderContext
    from vitrine.template.frame import Frame


def render_items(
    body: Emitter,
    items: Sequence[tuple[Any, Any]],
    frame: Frame,
    buf: list[str],
    rctx: RenderContext,
) -> None:
    """Render ``body`` once per (key, item) with ``@index/@key/@first/@last`` set."""
    last = len(items) - 1
    for index, (key, item) in enumerate(items):
        data = {"index": index, "key": key, "first": index == 0, "last": index == last}
        body(frame.child(item, data), buf, rctx)


class ControlFlowMixin:
    """Mixin for the built-in conditional and iteration blocks.

    Required Host Attributes:
        - _compile_expr (ExpressionCompilationMixin)
        - _compile_body (Compiler)
    """

    if TYPE_CHECKING:
        def _compile_expr(self, node: Expr) -> Evaluator: ...
        def _compile_body(self, nodes: Sequence[Node]) -> Emitter: ...

    def _compile_optional_body(self, nodes: Sequence[Node]) -> Emitter | None:
        return self._compile_body(nodes) if nodes else None

    def _compile_if(self, node: If) -> Emitter:
        """Compile ``{{#if}}`` / ``{{#unless}}`` / ``{{^name}}``.

        Falsy values are ``None``, ``False``, ``0``, ``""`` and empty lists;
        ``includeZero=true`` makes ``0`` true.
        """
        test = self._compile_expr(node.test)
        body = self._compile_body(node.body)
        else_ = self._compile_optional_body(node.else_)
        negate = node.negate
        include_zero = node.include_zero
        lineno = node.lineno

        def emit_if(frame: Frame, buf: list[str], rctx: RenderContext) -> None:
            rctx.line = lineno
            truthy = not is_empty(test(frame, rctx), include_zero)
            if truthy != negate:
                body(frame, buf, rctx)
            elif else_ is not None:
                else_(frame, buf, rctx)

        return emit_if

    def _compile_each(self, node: Each) -> Emitter:
        iterate = self._compile_expr(node.iter)
        body = self._compile_body(node.body)
        empty = self._compile_optional_body(node.empty)
        lineno = node.lineno

        def emit_each(frame: Frame, buf: list[str], rctx: RenderContext) -> None:
            rctx.line = lineno
            items = iteration_items(iterate(frame, rctx))
            if items:
                render_items(body, items, frame, buf, rctx)
            elif empty is not None:
                empty(frame, buf, rctx)

        return emit_each

    def _compile_with(self, node: With) -> Emitter:
        evaluate = self._compile_expr(node.value)
        body = self._compile_body(node.body)
        else_ = self._compile_optional_body(node.else_)
        lineno = node.lineno

        def emit_with(frame: Frame, buf: list[str], rctx: RenderContext) -> None:
            rctx.line = lineno
            value = evaluate(frame, rctx)
            if not is_empty(value):
                body(frame.child(value), buf, rctx)
            elif else_ is not None:
                else_(frame, buf, rctx)

        return emit_with
