"""Basic statement compilation: raw text and output."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from vitrine.nodes import Path
from vitrine.template.helpers import escape_output, to_string

if TYPE_CHECKING:
    from vitrine.compiler.expressions import Emitter, Evaluator
    from vitrine.nodes import Data, Expr, Output
    from vitrine.render_context import RenderContext
    from vitrine.template.frame import Frame


class BasicStatementMixin:
    """Mixin for ``Data`` and ``Output`` nodes.

    Required Host Attributes:
        - _helpers
        - _compile_expr, _compile_name_or_helper (ExpressionCompilationMixin)
    """

    if TYPE_CHECKING:
        _helpers: Mapping[str, Callable[..., Any]]

        def _compile_expr(self, node: Expr) -> Evaluator: ...
        def _compile_name_or_helper(self, node: Path) -> Evaluator: ...

    def _compile_data(self, node: Data) -> Emitter:
        text = node.value

        def emit_data(frame: Frame, buf: list[str], rctx: RenderContext) -> None:
            buf.append(text)

        return emit_data

    def _compile_output(self, node: Output) -> Emitter:
        expr = node.expr
        if isinstance(expr, Path) and expr.is_simple and expr.parts[0] in self._helpers:
            evaluate = self._compile_name_or_helper(expr)
        else:
            evaluate = self._compile_expr(expr)
        convert = escape_output if node.escape else to_string

        def emit_output(frame: Frame, buf: list[str], rctx: RenderContext) -> None:
            buf.append(convert(evaluate(frame, rctx)))

        return emit_output
