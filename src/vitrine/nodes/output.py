"""Output nodes for the Vitrine template AST."""

from __future__ import annotations

from dataclasses import dataclass

from vitrine.nodes.base import Node
from vitrine.nodes.expressions import Expr


@dataclass(frozen=True, slots=True)
class Data(Node):
    """Raw text data between template constructs."""

    value: str


@dataclass(frozen=True, slots=True)
class Output(Node):
    """Output expression: ``{{expr}}`` (escaped) or ``{{{expr}}}`` (raw)."""

    expr: Expr
    escape: bool = True
