"""Control flow block parsing: if, unless, each, with, inverse sections."""

from __future__ import annotations

from collections.abc import Sequence

from vitrine._types import Token, TokenType
from vitrine.environment.exceptions import ErrorCode
from vitrine.nodes import Each, Expr, If, Literal, Node, With
from vitrine.parser.blocks.core import BlockStackMixin
from vitrine.parser.expressions import split_path


class ControlFlowBlockParsingMixin(BlockStackMixin):
    """Mixin for the built-in block keywords.

    Anything that is not a built-in keyword is handed to
    ``_parse_block_call`` (FunctionBlockParsingMixin).
    """

    _BUILTIN_BLOCKS = frozenset({"if", "unless", "each", "with"})

    def _parse_block(self) -> Node:
        """Parse ``{{#name ...}}...{{/name}}``."""
        start = self._expect(TokenType.OPEN_BLOCK)
        keyword = self._current
        if keyword.type is not TokenType.PATH:
            raise self._error("Expected a block name after '{{#'", keyword, ErrorCode.UNEXPECTED_TOKEN)
        self._advance()
        node = self._parse_block_inner(keyword, start)
        self._expect_end(keyword.value, start)
        return node

    def _parse_block_inner(self, keyword: Token, start: Token) -> Node:
        """Parse arguments, body and else clause; the caller consumes the end tag."""
        params, hash_ = self._parse_arguments()
        self._expect(TokenType.CLOSE)
        name = keyword.value

        if name not in self._BUILTIN_BLOCKS:
            return self._parse_block_call(keyword, start, params, hash_)

        subject = self._single_param(keyword, params)
        body = tuple(self._parse_body())
        else_ = tuple(self._parse_else_clause())

        if name == "each":
            return Each(start.lineno, start.col_offset, subject, body, empty=else_)
        if name == "with":
            return With(start.lineno, start.col_offset, subject, body, else_=else_)
        return If(
            start.lineno,
            start.col_offset,
            subject,
            body,
            else_=else_,
            negate=name == "unless",
            include_zero=self._include_zero(keyword, hash_),
        )

    def _parse_inverse_section(self) -> If:
        """Parse ``{{^name}}...{{/name}}``: the body renders when ``name`` is falsy."""
        start = self._expect(TokenType.OPEN_INVERSE)
        keyword = self._expect(TokenType.PATH)
        self._expect(TokenType.CLOSE)
        body = tuple(self._parse_body())
        else_ = tuple(self._parse_else_clause())
        self._expect_end(keyword.value, start)
        return If(start.lineno, start.col_offset, split_path(keyword), body, else_=else_, negate=True)

    def _single_param(self, keyword: Token, params: Sequence[Expr]) -> Expr:
        if len(params) != 1:
            raise self._error(
                f"'#{keyword.value}' takes exactly one argument, got {len(params)}",
                keyword,
                ErrorCode.INVALID_EXPRESSION,
            )
        return params[0]

    def _include_zero(self, keyword: Token, hash_: Sequence[tuple[str, Expr]]) -> bool:
        for key, value in hash_:
            if key != "includeZero":
                raise self._error(
                    f"Unknown option '{key}' for '#{keyword.value}'", keyword, ErrorCode.INVALID_EXPRESSION
                )
            if not isinstance(value, Literal):
                raise self._error(
                    "'includeZero' must be a literal", keyword, ErrorCode.INVALID_EXPRESSION
                )
            return bool(value.value)
        return False
