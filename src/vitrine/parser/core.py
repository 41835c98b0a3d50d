"""Vitrine Parser: token stream to immutable AST.

The Parser walks the token list produced by the Lexer and builds a tree of
frozen nodes. Block constructs (``{{#if}}``, ``{{#each}}``, block helpers)
and partials are handled by mixins in ``vitrine.parser.blocks``; argument
lists and sub-expressions by ``ExpressionParsingMixin``.

Body Parsing:
``_parse_body()`` collects nodes until it reaches a *terminator*: a closing
tag ``{{/name}}``, an ``{{else ...}}`` or ``{{^}}`` clause, or end of input.
The terminator is left for the caller to consume.

"""

from __future__ import annotations

from collections.abc import Sequence

from vitrine._types import Token, TokenType
from vitrine.environment.exceptions import ErrorCode, TemplateSyntaxError
from vitrine.nodes import Data, Node, Output
from vitrine.nodes import Template as TemplateNode
from vitrine.parser.blocks import BlockParsingMixin
from vitrine.parser.expressions import ExpressionParsingMixin


class Parser(ExpressionParsingMixin, BlockParsingMixin):
    """Parse a token stream into a ``Template`` node.

    Example:
        >>> from vitrine.lexer import tokenize
        >>> Parser(tokenize("Hi {{name}}")).parse().body
        (Data(lineno=1, col_offset=0, value='Hi '), Output(...))

    Raises:
        TemplateSyntaxError: On malformed tags, unclosed or mismatched blocks.
    """

    __slots__ = ("_name", "_pos", "_source", "_tokens")

    def __init__(self, tokens: Sequence[Token], name: str | None = None, source: str | None = None):
        self._tokens = tokens
        self._pos = 0
        self._name = name
        self._source = source

    def parse(self) -> TemplateNode:
        body = self._parse_body()
        token = self._current
        if token.type is TokenType.OPEN_END:
            name = self._peek(1).value
            raise self._error(
                f"Unexpected closing tag '{{{{/{name}}}}}' with no open block",
                token,
                ErrorCode.MISMATCHED_BLOCK,
            )
        if token.type is not TokenType.EOF:
            raise self._error("'{{else}}' outside of a block", token, ErrorCode.UNEXPECTED_TOKEN)
        return TemplateNode(1, 0, tuple(body), self._name)

    # ------------------------------------------------------------------
    # Token navigation
    # ------------------------------------------------------------------

    @property
    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _peek(self, offset: int = 1) -> Token:
        index = min(self._pos + offset, len(self._tokens) - 1)
        return self._tokens[index]

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        if token.type is not TokenType.EOF:
            self._pos += 1
        return token

    def _expect(self, type_: TokenType) -> Token:
        token = self._current
        if token.type is not type_:
            found = "end of template" if token.type is TokenType.EOF else repr(token.value)
            raise self._error(
                f"Expected '{type_.value}', found {found}", token, ErrorCode.UNEXPECTED_TOKEN
            )
        return self._advance()

    def _error(self, message: str, token: Token, code: ErrorCode) -> TemplateSyntaxError:
        return TemplateSyntaxError(
            message,
            lineno=token.lineno,
            name=self._name,
            source=self._source,
            col_offset=token.col_offset,
            code=code,
        )

    # ------------------------------------------------------------------
    # Bodies
    # ------------------------------------------------------------------

    def _at_else(self) -> bool:
        """True at ``{{else ...}}`` or a bare ``{{^}}``."""
        token = self._current
        if token.type is TokenType.OPEN:
            nxt = self._peek(1)
            return nxt.type is TokenType.PATH and nxt.value == "else"
        if token.type is TokenType.OPEN_INVERSE:
            return self._peek(1).type is TokenType.CLOSE
        return False

    def _parse_body(self) -> list[Node]:
        body: list[Node] = []
        while True:
            token = self._current
            ttype = token.type
            if ttype in (TokenType.EOF, TokenType.OPEN_END) or self._at_else():
                return body

            if ttype is TokenType.DATA:
                self._advance()
                body.append(Data(token.lineno, token.col_offset, token.value))
            elif ttype is TokenType.COMMENT:
                self._advance()
            elif ttype is TokenType.OPEN:
                self._advance()
                expr = self._parse_call_expr()
                self._expect(TokenType.CLOSE)
                body.append(Output(token.lineno, token.col_offset, expr, escape=True))
            elif ttype is TokenType.OPEN_UNESCAPED:
                self._advance()
                expr = self._parse_call_expr()
                self._expect(TokenType.CLOSE)
                body.append(Output(token.lineno, token.col_offset, expr, escape=False))
            elif ttype is TokenType.OPEN_RAW:
                self._advance()
                expr = self._parse_call_expr()
                self._expect(TokenType.CLOSE_RAW)
                body.append(Output(token.lineno, token.col_offset, expr, escape=False))
            elif ttype is TokenType.OPEN_BLOCK:
                body.append(self._parse_block())
            elif ttype is TokenType.OPEN_INVERSE:
                body.append(self._parse_inverse_section())
            elif ttype is TokenType.OPEN_PARTIAL:
                body.append(self._parse_partial())
            else:
                raise self._error(
                    f"Unexpected {token.value!r} outside of a tag", token, ErrorCode.UNEXPECTED_TOKEN
                )
