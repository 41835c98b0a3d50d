"""Block helper parsing: ``{{#name args}}...{{else}}...{{/name}}``."""

from __future__ import annotations

from collections.abc import Sequence

from vitrine._types import Token
from vitrine.nodes import BlockCall, Call, Expr
from vitrine.parser.blocks.core import BlockStackMixin
from vitrine.parser.expressions import split_path


class FunctionBlockParsingMixin(BlockStackMixin):
    """Mixin for block helpers and section blocks.

    Whether ``name`` is a registered helper or a context value to iterate
    or descend into is decided at compile time, not here.
    """

    def _parse_block_call(
        self,
        keyword: Token,
        start: Token,
        params: Sequence[Expr],
        hash_: Sequence[tuple[str, Expr]],
    ) -> BlockCall:
        call = Call(keyword.lineno, keyword.col_offset, split_path(keyword), tuple(params), tuple(hash_))
        body = tuple(self._parse_body())
        inverse = tuple(self._parse_else_clause())
        return BlockCall(start.lineno, start.col_offset, call, body, inverse)
