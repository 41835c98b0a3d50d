"""Control flow nodes for the Vitrine template AST."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from vitrine.nodes.base import Node
from vitrine.nodes.expressions import Expr


@dataclass(frozen=True, slots=True)
class If(Node):
    """Conditional: ``{{#if cond}}...{{else if other}}...{{else}}...{{/if}}``

    ``negate`` is set for ``{{#unless}}``. ``include_zero`` mirrors the
    ``includeZero=true`` hash argument.
    """

    test: Expr
    body: Sequence[Node]
    else_: Sequence[Node] = ()
    negate: bool = False
    include_zero: bool = False


@dataclass(frozen=True, slots=True)
class Each(Node):
    """Iteration: ``{{#each items}}...{{else}}...{{/each}}``"""

    iter: Expr
    body: Sequence[Node]
    empty: Sequence[Node] = ()


@dataclass(frozen=True, slots=True)
class With(Node):
    """Context shift: ``{{#with author}}{{name}}{{else}}...{{/with}}``"""

    value: Expr
    body: Sequence[Node]
    else_: Sequence[Node] = ()
