"""Vitrine Compiler Core: main Compiler class.

The Compiler turns a parsed Template node into a tree of closures. Each
statement node becomes an *emitter* ``(frame, buf, rctx) -> None`` that
appends text to a shared buffer; each expression node becomes an
*evaluator* ``(frame, rctx) -> value``.

Design Principles:
1. **StringBuilder**: Output via ``buf.append()``, joined once by ``Template.render``
2. **Bind early**: Helpers are looked up once, at compile time, from a
   snapshot of the environment's registry
3. **O(1) dispatch**: Dict-based node type → handler lookup

Line Tracking:
Emitters for nodes that can fail at runtime (helper calls, partials,
blocks) set ``rctx.line`` before doing work, so runtime errors carry the
template line number.

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from vitrine.compiler.expressions import ExpressionCompilationMixin
from vitrine.compiler.statements import StatementCompilationMixin

if TYPE_CHECKING:
    from vitrine.compiler.expressions import Emitter
    from vitrine.environment import Environment
    from vitrine.nodes import Node
    from vitrine.nodes import Template as TemplateNode
    from vitrine.render_context import RenderContext
    from vitrine.template.frame import Frame


def _emit_nothing(frame: Frame, buf: list[str], rctx: RenderContext) -> None:
    return None


class Compiler(ExpressionCompilationMixin, StatementCompilationMixin):
    """Compile a Vitrine node tree into a render closure.

    Attributes:
        _env: Parent Environment (for partial lookup)
        _helpers: Snapshot of the helper registry taken at construction
        _name: Template name for error messages

    Example:
        >>> from vitrine import Environment
        >>> from vitrine.lexer import tokenize
        >>> from vitrine.parser import Parser
        >>> env = Environment()
        >>> node = Parser(tokenize("Hello, {{name}}!")).parse()
        >>> render = Compiler(env).compile(node)
        >>> buf = []
        >>> render(Frame.root({"name": "World"}), buf, RenderContext())
        >>> "".join(buf)
        'Hello, World!'

    """

    __slots__ = ("_dispatch", "_env", "_helpers", "_name")

    def __init__(self, env: Environment):
        self._env = env
        self._helpers = env.helpers.snapshot()
        self._name: str | None = None
        self._dispatch: dict[str, Callable[[Any], Emitter]] = {
            "Data": self._compile_data,
            "Output": self._compile_output,
            "If": self._compile_if,
            "Each": self._compile_each,
            "With": self._compile_with,
            "BlockCall": self._compile_block_call,
            "Partial": self._compile_partial,
        }

    def compile(self, node: TemplateNode, name: str | None = None) -> Emitter:
        self._name = name or node.name
        return self._compile_body(node.body)

    def _compile_body(self, nodes: Sequence[Node]) -> Emitter:
        emitters = tuple(self._compile_node(node) for node in nodes)
        if not emitters:
            return _emit_nothing
        if len(emitters) == 1:
            return emitters[0]

        def emit_body(frame: Frame, buf: list[str], rctx: RenderContext) -> None:
            for emit in emitters:
                emit(frame, buf, rctx)

        return emit_body

    def _compile_node(self, node: Node) -> Emitter:
        handler = self._dispatch.get(type(node).__name__)
        if handler is None:
            raise NotImplementedError(f"Cannot compile node type {type(node).__name__}")
        return handler(node)
