"""Expression compilation: literals, paths and helper calls to evaluators."""

from __future__ import annotations

import difflib
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from vitrine.environment.exceptions import ErrorCode, TemplateRuntimeError, build_source_snippet
from vitrine.nodes import Call, Expr, Literal, Path
from vitrine.template.helpers import MISSING, get_member, invoke_helper, resolve_path, wants_options
from vitrine.template.options import HelperOptions

if TYPE_CHECKING:
    from vitrine.render_context import RenderContext
    from vitrine.template.frame import Frame

    Emitter = Callable[[Frame, list[str], RenderContext], None]
    Evaluator = Callable[[Frame, RenderContext], Any]


class ExpressionCompilationMixin:
    """Mixin for compiling expression nodes.

    Required Host Attributes:
        - _helpers: Mapping[str, Callable] snapshot of the helper registry
    """

    if TYPE_CHECKING:
        _helpers: Mapping[str, Callable[..., Any]]

    def _compile_expr(self, node: Expr) -> Evaluator:
        if isinstance(node, Literal):
            value = node.value

            def literal(frame: Frame, rctx: RenderContext) -> Any:
                return value

            return literal
        if isinstance(node, Path):
            return self._compile_path(node)
        if isinstance(node, Call):
            return self._compile_call(node)
        raise NotImplementedError(f"Cannot compile expression {type(node).__name__}")

    def _compile_path(self, node: Path) -> Evaluator:
        parts = tuple(node.parts)
        depth = node.depth
        data = node.data

        if not parts and not depth and not data:

            def this(frame: Frame, rctx: RenderContext) -> Any:
                return frame.context

            return this

        if len(parts) == 1 and not depth and not data:
            key = parts[0]

            def lookup(frame: Frame, rctx: RenderContext) -> Any:
                return get_member(frame.context, key)

            return lookup

        def lookup_path(frame: Frame, rctx: RenderContext) -> Any:
            return resolve_path(frame, parts, depth, data)

        return lookup_path

    def _compile_hash(self, hash_: Sequence[tuple[str, Expr]]) -> tuple[tuple[str, Evaluator], ...]:
        return tuple((key, self._compile_expr(value)) for key, value in hash_)

    def _compile_call(
        self,
        node: Call,
        body: Emitter | None = None,
        inverse: Emitter | None = None,
    ) -> Evaluator:
        """Compile a helper call.

        Helpers decorated with ``pass_options`` (and every block helper)
        receive a HelperOptions as their last argument, with ``key=value``
        arguments in ``options.hash``. Other helpers receive ``key=value``
        arguments as Python keyword arguments.
        """
        path = node.name
        name = path.parts[0] if path.is_simple else (path.original or ".".join(path.parts))
        func = self._helpers.get(name) if path.is_simple else None
        if func is None:
            return self._missing_helper(name, node.lineno)

        params = tuple(self._compile_expr(param) for param in node.params)
        hash_evals = self._compile_hash(node.hash)
        with_options = body is not None or wants_options(func)
        lineno = node.lineno

        def call_helper(frame: Frame, rctx: RenderContext) -> Any:
            rctx.line = lineno
            args = [param(frame, rctx) for param in params]
            kwargs = {key: evaluate(frame, rctx) for key, evaluate in hash_evals}
            if with_options:
                args.append(HelperOptions(name, kwargs, frame, rctx, body, inverse))
                return invoke_helper(name, func, args, {}, rctx, lineno)
            return invoke_helper(name, func, args, kwargs, rctx, lineno)

        return call_helper

    def _compile_name_or_helper(self, node: Path) -> Evaluator:
        """A bare ``{{name}}`` that is also a helper name.

        A value in the current context wins; the helper is called only when
        the context has no such key.
        """
        key = node.parts[0]
        call_helper = self._compile_call(Call(node.lineno, node.col_offset, node))

        def lookup_or_call(frame: Frame, rctx: RenderContext) -> Any:
            value = get_member(frame.context, key, MISSING)
            if value is MISSING:
                return call_helper(frame, rctx)
            return value

        return lookup_or_call

    def _missing_helper(self, name: str, lineno: int) -> Evaluator:
        matches = difflib.get_close_matches(name, list(self._helpers), n=1)
        suggestion = f"Did you mean '{matches[0]}'?" if matches else "Register it with Environment.register_helper()"

        def missing(frame: Frame, rctx: RenderContext) -> Any:
            rctx.line = lineno
            snippet = build_source_snippet(rctx.source, lineno) if rctx.source else None
            raise TemplateRuntimeError(
                f"Missing helper: '{name}'",
                template_name=rctx.template_name,
                lineno=lineno,
                suggestion=suggestion,
                source_snippet=snippet,
                template_stack=rctx.template_stack,
                code=ErrorCode.UNKNOWN_HELPER,
            )

        return missing
