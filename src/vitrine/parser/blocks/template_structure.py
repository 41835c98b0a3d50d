"""Partial inclusion parsing: ``{{> name [context] [key=value ...]}}``."""

from __future__ import annotations

from vitrine._types import TokenType
from vitrine.environment.exceptions import ErrorCode
from vitrine.nodes import Expr, Literal, Partial
from vitrine.parser.blocks.core import BlockStackMixin


class TemplateStructureBlockParsingMixin(BlockStackMixin):
    """Mixin for partial tags.

    Partial names may be written bare (``{{> card}}``, ``{{> shared/badge}}``),
    quoted (``{{> "my card"}}``) or computed (``{{> (partialFor kind)}}``).
    """

    def _parse_partial(self) -> Partial:
        start = self._expect(TokenType.OPEN_PARTIAL)
        token = self._current

        name: str | Expr
        if token.type is TokenType.PATH:
            self._advance()
            name = token.value
        elif token.type is TokenType.STRING:
            literal = self._parse_operand()
            assert isinstance(literal, Literal)
            name = str(literal.value)
        elif token.type is TokenType.LPAREN:
            name = self._parse_subexpression()
        else:
            raise self._error("Expected a partial name after '{{>'", token, ErrorCode.UNEXPECTED_TOKEN)

        params, hash_ = self._parse_arguments()
        if len(params) > 1:
            raise self._error(
                "A partial accepts at most one context argument", token, ErrorCode.INVALID_EXPRESSION
            )
        self._expect(TokenType.CLOSE)
        return Partial(
            start.lineno,
            start.col_offset,
            name,
            params[0] if params else None,
            tuple(hash_),
        )
