"""Template structure nodes for the Vitrine template AST."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from vitrine.nodes.base import Node
from vitrine.nodes.expressions import Expr


@dataclass(frozen=True, slots=True)
class Template(Node):
    """Root node of a parsed template."""

    body: Sequence[Node]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class Partial(Node):
    """Partial inclusion: ``{{> name}}``, ``{{> name ctx key=value}}``

    ``name`` is a literal string for static partials or an expression for
    dynamic ones (``{{> (whichPartial)}}``).
    """

    name: str | Expr
    context: Expr | None = None
    hash: Sequence[tuple[str, Expr]] = ()
