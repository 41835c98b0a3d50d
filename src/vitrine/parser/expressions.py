"""Expression parsing: operands, argument lists, hash pairs, sub-expressions."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from vitrine._types import Token, TokenType
from vitrine.environment.exceptions import ErrorCode
from vitrine.nodes import Call, Expr, Literal, Path

if TYPE_CHECKING:
    from vitrine.environment.exceptions import TemplateSyntaxError

_PATH_SEGMENT = re.compile(r"\[([^\]]*)\]|([^./\[\]]+)")
_STRING_ESCAPE = re.compile(r"\\(.)")

_ARGUMENT_END = frozenset({TokenType.CLOSE, TokenType.CLOSE_RAW, TokenType.RPAREN, TokenType.EOF})


def unescape_string(quoted: str) -> str:
    """Strip the quotes from a STRING token and unescape the enclosing quote.

    Other backslash sequences are kept as written, so ``'\\.'`` reaches
    the ``replace`` helper as a regex escape.

    Example:
        ``'it\\'s'`` → ``it's``
        ``'a\\.b'``  → ``a\\.b``
    """
    quote = quoted[0]
    return _STRING_ESCAPE.sub(lambda m: quote if m.group(1) == quote else m.group(0), quoted[1:-1])


def split_path(token: Token) -> Path:
    """Build a ``Path`` node from a PATH token value.

    Example:
        ``../author.name`` → Path(parts=("author", "name"), depth=1)
        ``@index``         → Path(parts=("index",), data=True)
        ``this.title``     → Path(parts=("title",), scoped=True)
    """
    text = token.value
    depth = 0
    while text.startswith("../"):
        depth += 1
        text = text[3:]
    if text == "..":
        depth += 1
        text = "."

    data = text.startswith("@")
    if data:
        text = text[1:]

    scoped = text == "." or text.startswith("./")
    parts = [bracket or plain for bracket, plain in _PATH_SEGMENT.findall(text)]
    if parts and parts[0] == "this" and not data:
        scoped = True
        parts = parts[1:]

    return Path(
        token.lineno,
        token.col_offset,
        tuple(parts),
        depth=depth,
        data=data,
        scoped=scoped,
        original=token.value,
    )


class ExpressionParsingMixin:
    """Mixin for parsing the inside of a tag."""

    if TYPE_CHECKING:
        @property
        def _current(self) -> Token: ...
        def _peek(self, offset: int = 1) -> Token: ...
        def _advance(self) -> Token: ...
        def _expect(self, type_: TokenType) -> Token: ...
        def _error(self, message: str, token: Token, code: ErrorCode) -> TemplateSyntaxError: ...

    def _parse_call_expr(self) -> Expr:
        """Parse ``head [params...] [key=value...]``.

        A bare path is returned as-is so the compiler can choose between a
        helper call and a context lookup; anything with arguments becomes a
        ``Call``.
        """
        start = self._current
        head = self._parse_operand()
        params, hash_ = self._parse_arguments()
        if not params and not hash_:
            return head
        if not isinstance(head, Path):
            raise self._error(
                "Only a helper name may be followed by arguments", start, ErrorCode.INVALID_EXPRESSION
            )
        return Call(start.lineno, start.col_offset, head, tuple(params), tuple(hash_))

    def _parse_arguments(self) -> tuple[list[Expr], list[tuple[str, Expr]]]:
        params: list[Expr] = []
        hash_: list[tuple[str, Expr]] = []
        while self._current.type not in _ARGUMENT_END:
            token = self._current
            if token.type is TokenType.PATH and self._peek(1).type is TokenType.EQUALS:
                self._advance()
                self._advance()
                hash_.append((token.value, self._parse_operand()))
            elif hash_:
                raise self._error(
                    "Positional argument after key=value argument",
                    token,
                    ErrorCode.INVALID_EXPRESSION,
                )
            else:
                params.append(self._parse_operand())
        return params, hash_

    def _parse_operand(self) -> Expr:
        token = self._current
        ttype = token.type

        if ttype is TokenType.PATH:
            self._advance()
            return split_path(token)
        if ttype is TokenType.STRING:
            self._advance()
            return Literal(token.lineno, token.col_offset, unescape_string(token.value))
        if ttype is TokenType.NUMBER:
            self._advance()
            value = float(token.value) if "." in token.value else int(token.value)
            return Literal(token.lineno, token.col_offset, value)
        if ttype is TokenType.BOOLEAN:
            self._advance()
            return Literal(token.lineno, token.col_offset, token.value == "true")
        if ttype is TokenType.NULL:
            self._advance()
            return Literal(token.lineno, token.col_offset, None)
        if ttype is TokenType.LPAREN:
            return self._parse_subexpression()

        found = "end of tag" if ttype in _ARGUMENT_END else repr(token.value)
        raise self._error(f"Expected an expression, found {found}", token, ErrorCode.INVALID_EXPRESSION)

    def _parse_subexpression(self) -> Call:
        """Parse ``(helper arg1 key=value)``; the head must name a helper."""
        start = self._expect(TokenType.LPAREN)
        name_token = self._current
        if name_token.type is not TokenType.PATH:
            raise self._error(
                "Sub-expression must start with a helper name", name_token, ErrorCode.INVALID_EXPRESSION
            )
        self._advance()
        params, hash_ = self._parse_arguments()
        self._expect(TokenType.RPAREN)
        return Call(start.lineno, start.col_offset, split_path(name_token), tuple(params), tuple(hash_))
