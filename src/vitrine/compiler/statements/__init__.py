"""Statement compilation for the Vitrine compiler.

The statements package is organized into logical modules:
- basic: Raw text and ``{{expr}}`` output
- control_flow: ``#if``, ``#unless``, ``#each``, ``#with``
- functions: Block helpers and section blocks
- template_structure: Partial inclusion

Uses inline TYPE_CHECKING declarations for host attributes.

"""

from __future__ import annotations

from vitrine.compiler.statements.basic import BasicStatementMixin
from vitrine.compiler.statements.control_flow import ControlFlowMixin
from vitrine.compiler.statements.functions import FunctionCompilationMixin
from vitrine.compiler.statements.template_structure import TemplateStructureMixin


class StatementCompilationMixin(
    BasicStatementMixin,
    ControlFlowMixin,
    FunctionCompilationMixin,
    TemplateStructureMixin,
):
    """Combined mixin for compiling all statement types.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks in each individual mixin.

    """


__all__ = [
    "BasicStatementMixin",
    "ControlFlowMixin",
    "FunctionCompilationMixin",
    "StatementCompilationMixin",
    "TemplateStructureMixin",
]
