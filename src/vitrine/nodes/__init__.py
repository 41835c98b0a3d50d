"""Vitrine template AST nodes.

Nodes are frozen, slotted dataclasses produced by the Parser and consumed by
the Compiler.
"""

from vitrine.nodes.base import Node
from vitrine.nodes.control_flow import Each, If, With
from vitrine.nodes.expressions import Call, Expr, Literal, Path
from vitrine.nodes.functions import BlockCall
from vitrine.nodes.output import Data, Output
from vitrine.nodes.structure import Partial, Template

__all__ = [
    "BlockCall",
    "Call",
    "Data",
    "Each",
    "Expr",
    "If",
    "Literal",
    "Node",
    "Output",
    "Partial",
    "Path",
    "Template",
    "With",
]
