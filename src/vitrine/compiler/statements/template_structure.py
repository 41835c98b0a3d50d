"""Partial inclusion compilation: ``{{> name [context] [key=value]}}``."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from vitrine.template.helpers import to_string

if TYPE_CHECKING:
    from vitrine.compiler.expressions import Emitter, Evaluator
    from vitrine.environment import Environment
    from vitrine.nodes import Expr, Partial
    from vitrine.render_context import RenderContext
    from vitrine.template.frame import Frame


class TemplateStructureMixin:
    """Mixin for ``Partial`` nodes.

    Partials are resolved by name at render time through the Environment,
    so a partial may be registered after the including template compiles.

    Required Host Attributes:
        - _env
        - _compile_expr, _compile_hash (ExpressionCompilationMixin)
    """

    if TYPE_CHECKING:
        _env: Environment

        def _compile_expr(self, node: Expr) -> Evaluator: ...
        def _compile_hash(
            self, hash_: Sequence[tuple[str, Expr]]
        ) -> tuple[tuple[str, Evaluator], ...]: ...

    def _compile_partial(self, node: Partial) -> Emitter:
        env = self._env
        static_name = node.name if isinstance(node.name, str) else None
        name_eval = None if isinstance(node.name, str) else self._compile_expr(node.name)
        context_eval = self._compile_expr(node.context) if node.context is not None else None
        hash_evals = self._compile_hash(node.hash)
        lineno = node.lineno

        def emit_partial(frame: Frame, buf: list[str], rctx: RenderContext) -> None:
            rctx.line = lineno
            name = static_name if name_eval is None else to_string(name_eval(frame, rctx))
            rctx.check_partial_depth(name)
            template = env.get_partial(name)

            context = frame.context if context_eval is None else context_eval(frame, rctx)
            if hash_evals:
                values = {key: evaluate(frame, rctx) for key, evaluate in hash_evals}
                context = {**context, **values} if isinstance(context, Mapping) else values

            template._render_into(
                frame.child(context),
                buf,
                rctx.child_context(name, template.source),
            )

        return emit_partial
