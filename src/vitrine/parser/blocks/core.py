"""Shared helpers for block parsing: closing tags and else clauses."""

from __future__ import annotations

from typing import TYPE_CHECKING

from vitrine._types import Token, TokenType
from vitrine.environment.exceptions import ErrorCode

if TYPE_CHECKING:
    from vitrine.environment.exceptions import TemplateSyntaxError
    from vitrine.nodes import Call, Expr, Node


class BlockStackMixin:
    """Closing-tag matching and ``{{else}}`` handling.

    Required Host Attributes:
        - _current, _advance, _expect, _error (token navigation)
        - _parse_body, _at_else
        - _parse_block_inner (from ControlFlowBlockParsingMixin)
    """

    if TYPE_CHECKING:
        @property
        def _current(self) -> Token: ...
        def _peek(self, offset: int = 1) -> Token: ...
        def _advance(self) -> Token: ...
        def _expect(self, type_: TokenType) -> Token: ...
        def _error(self, message: str, token: Token, code: ErrorCode) -> TemplateSyntaxError: ...
        def _at_else(self) -> bool: ...
        def _parse_body(self) -> list[Node]: ...
        def _parse_block_inner(self, keyword: Token, start: Token) -> Node: ...
        def _parse_arguments(self) -> tuple[list[Expr], list[tuple[str, Expr]]]: ...
        def _parse_operand(self) -> Expr: ...
        def _parse_subexpression(self) -> Call: ...

    def _expect_end(self, name: str, start: Token) -> None:
        """Consume ``{{/name}}`` for a block opened at ``start``."""
        token = self._current
        if token.type is TokenType.EOF:
            raise self._error(
                f"Unclosed block '{{{{#{name}}}}}'", start, ErrorCode.UNCLOSED_BLOCK
            )
        self._expect(TokenType.OPEN_END)
        closing = self._expect(TokenType.PATH)
        if closing.value != name:
            raise self._error(
                f"Expected '{{{{/{name}}}}}', found '{{{{/{closing.value}}}}}'",
                closing,
                ErrorCode.MISMATCHED_BLOCK,
            )
        self._expect(TokenType.CLOSE)

    def _parse_else_clause(self) -> list[Node]:
        """Parse an optional ``{{else}}`` / ``{{^}}`` / ``{{else name ...}}`` clause.

        A chained ``{{else if cond}}`` becomes a nested block that shares the
        enclosing block's closing tag.
        """
        if not self._at_else():
            return []

        token = self._advance()
        if token.type is TokenType.OPEN_INVERSE:
            self._expect(TokenType.CLOSE)
        else:
            self._advance()  # 'else'
            if self._current.type is TokenType.PATH:
                keyword = self._advance()
                return [self._parse_block_inner(keyword, token)]
            self._expect(TokenType.CLOSE)

        body = self._parse_body()
        if self._at_else():
            raise self._error(
                "Only one '{{else}}' is allowed per block", self._current, ErrorCode.UNEXPECTED_TOKEN
            )
        return body
