"""Block helper nodes for the Vitrine template AST."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from vitrine.nodes.base import Node
from vitrine.nodes.expressions import Call


@dataclass(frozen=True, slots=True)
class BlockCall(Node):
    """Block helper: ``{{#times 3}}...{{else}}...{{/times}}``

    When ``call.name`` does not name a registered helper, the block falls
    back to section semantics over the looked-up value.
    """

    call: Call
    body: Sequence[Node]
    inverse: Sequence[Node] = ()
