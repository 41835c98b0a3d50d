"""Block helper compilation: ``{{#name args}}...{{/name}}``.

When ``name`` is a registered helper it is called with a HelperOptions
whose ``fn``/``inverse`` render the two halves of the block. Otherwise the
block is a *section* over the context value ``name``:

- a non-empty list renders the body once per item
- any other truthy value renders the body with that value as ``this``
  (``true`` keeps the current context)
- a falsy value renders the ``{{else}}`` half
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from vitrine.compiler.statements.control_flow import render_items
from vitrine.template.helpers import is_empty, to_string

if TYPE_CHECKING:
    from vitrine.compiler.expressions import Emitter, Evaluator
    from vitrine.nodes import BlockCall, Call, Node, Path
    from vitrine.render_context import RenderContext
    from vitrine.template.frame import Frame


class FunctionCompilationMixin:
    """Mixin for ``BlockCall`` nodes.

    Required Host Attributes:
        - _helpers
        - _compile_call, _compile_path, _missing_helper (ExpressionCompilationMixin)
        - _compile_body (Compiler)
    """

    if TYPE_CHECKING:
        _helpers: Mapping[str, Callable[..., Any]]

        def _compile_body(self, nodes: Sequence[Node]) -> Emitter: ...
        def _compile_optional_body(self, nodes: Sequence[Node]) -> Emitter | None: ...
        def _compile_call(
            self, node: Call, body: Emitter | None = None, inverse: Emitter | None = None
        ) -> Evaluator: ...
        def _compile_path(self, node: Path) -> Evaluator: ...
        def _missing_helper(self, name: str, lineno: int) -> Evaluator: ...

    def _compile_block_call(self, node: BlockCall) -> Emitter:
        call = node.call
        body = self._compile_body(node.body)
        inverse = self._compile_optional_body(node.inverse)

        if call.name.is_simple and call.name.parts[0] in self._helpers:
            evaluate = self._compile_call(call, body=body, inverse=inverse)

            def emit_block_helper(frame: Frame, buf: list[str], rctx: RenderContext) -> None:
                buf.append(to_string(evaluate(frame, rctx)))

            return emit_block_helper

        if call.params or call.hash:
            missing = self._missing_helper(call.name.original, call.lineno)

            def emit_missing(frame: Frame, buf: list[str], rctx: RenderContext) -> None:
                missing(frame, rctx)

            return emit_missing

        return self._compile_section(call.name, body, inverse, node.lineno)

    def _compile_section(
        self,
        path: Path,
        body: Emitter,
        inverse: Emitter | None,
        lineno: int,
    ) -> Emitter:
        lookup = self._compile_path(path)

        def emit_section(frame: Frame, buf: list[str], rctx: RenderContext) -> None:
            rctx.line = lineno
            value = lookup(frame, rctx)
            if isinstance(value, (list, tuple)):
                if value:
                    render_items(body, list(enumerate(value)), frame, buf, rctx)
                elif inverse is not None:
                    inverse(frame, buf, rctx)
            elif not is_empty(value):
                body(frame if value is True else frame.child(value), buf, rctx)
            elif inverse is not None:
                inverse(frame, buf, rctx)

        return emit_section
