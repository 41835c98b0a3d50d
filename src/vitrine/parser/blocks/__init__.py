"""Block parsing mixins for the Vitrine parser.

Split by construct:
- control_flow: ``#if``, ``#unless``, ``#each``, ``#with``, ``{{^name}}``, else chains
- functions: block helpers (``{{#name args}}...{{/name}}``)
- template_structure: partial inclusion (``{{> name}}``)
"""

from __future__ import annotations

from vitrine.parser.blocks.control_flow import ControlFlowBlockParsingMixin
from vitrine.parser.blocks.core import BlockStackMixin
from vitrine.parser.blocks.functions import FunctionBlockParsingMixin
from vitrine.parser.blocks.template_structure import TemplateStructureBlockParsingMixin


class BlockParsingMixin(
    ControlFlowBlockParsingMixin,
    FunctionBlockParsingMixin,
    TemplateStructureBlockParsingMixin,
):
    """All block parsing behaviour, mixed into ``Parser``."""


__all__ = [
    "BlockParsingMixin",
    "BlockStackMixin",
    "ControlFlowBlockParsingMixin",
    "FunctionBlockParsingMixin",
    "TemplateStructureBlockParsingMixin",
]
