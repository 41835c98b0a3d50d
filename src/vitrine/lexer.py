"""Template lexer: source text to token stream.

Recognized constructs:
- ``{{expr}}`` escaped output, ``{{{expr}}}`` / ``{{&expr}}`` raw output
- ``{{#name ...}}`` block open, ``{{/name}}`` block close, ``{{^}}`` inverse
- ``{{> name}}`` partial inclusion
- ``{{! text}}`` and ``{{!-- text --}}`` comments
- ``~`` whitespace control on either side of a tag
- ``\\{{`` escapes a literal ``{{``

Inside a tag, expressions are split into paths, literals, ``=`` (hash
arguments) and parentheses (sub-expressions).
"""

from __future__ import annotations

import re
from bisect import bisect_right

from vitrine._types import Token, TokenType
from vitrine.environment.exceptions import ErrorCode, TemplateSyntaxError

_SIGILS: dict[str, TokenType] = {
    "#": TokenType.OPEN_BLOCK,
    "/": TokenType.OPEN_END,
    ">": TokenType.OPEN_PARTIAL,
    "^": TokenType.OPEN_INVERSE,
    "&": TokenType.OPEN_UNESCAPED,
}

# A literal must be followed by a delimiter, otherwise it is part of a path
_END = r"(?=[\s)}~=]|$)"
_SEGMENT = r"(?:[A-Za-z_$0-9][\w$\-]*|\[[^\]]*\])"

_EXPRESSION_RULES: tuple[tuple[TokenType, re.Pattern[str]], ...] = (
    (TokenType.STRING, re.compile(r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\'')),
    (TokenType.NUMBER, re.compile(r"-?\d+(?:\.\d+)?" + _END)),
    (TokenType.BOOLEAN, re.compile(r"(?:true|false)" + _END)),
    (TokenType.NULL, re.compile(r"(?:null|undefined)" + _END)),
    (TokenType.EQUALS, re.compile(r"=")),
    (TokenType.LPAREN, re.compile(r"\(")),
    (TokenType.RPAREN, re.compile(r"\)")),
    (
        TokenType.PATH,
        re.compile(
            rf"(?:\.\./)*(?:@?{_SEGMENT}|\.\.(?![\w/])|\.(?![\w.]))(?:[./]{_SEGMENT})*"
        ),
    ),
)

_WHITESPACE = re.compile(r"\s+")
_COMMENT_END = re.compile(r"(~?)\}\}")
_LONG_COMMENT_END = re.compile(r"--(~?)\}\}")


class Lexer:
    """Tokenize template source.

    Example:
        >>> Lexer("Hi {{name}}!").tokenize()
        [Token(DATA, 'Hi ', 1:0), Token(OPEN, '{{', 1:3), Token(PATH, 'name', 1:5),
         Token(CLOSE, '}}', 1:9), Token(DATA, '!', 1:11), Token(EOF, '', 1:12)]
    """

    __slots__ = ("_line_starts", "_name", "_source", "_strip_next", "_tokens")

    def __init__(self, source: str, name: str | None = None):
        self._source = source
        self._name = name
        self._tokens: list[Token] = []
        self._strip_next = False
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", source)]

    def tokenize(self) -> list[Token]:
        source = self._source
        pos = 0
        pending = ""

        while pos < len(source):
            idx = source.find("{{", pos)
            if idx == -1:
                pending += source[pos:]
                break

            if idx > 0 and source[idx - 1] == "\\":
                pending += source[pos : idx - 1] + "{{"
                pos = idx + 2
                continue

            pending += source[pos:idx]
            cursor = idx + 2
            raw = source.startswith("{", cursor)
            if raw:
                cursor += 1
            strip_before = source.startswith("~", cursor)
            if strip_before:
                cursor += 1

            if not raw and source.startswith("!", cursor):
                self._flush_data(pending, idx, strip_before)
                pending = ""
                pos = self._lex_comment(idx, cursor)
                continue

            self._flush_data(pending, idx, strip_before)
            pending = ""

            if raw:
                opener = TokenType.OPEN_RAW
            elif cursor < len(source) and source[cursor] in _SIGILS:
                opener = _SIGILS[source[cursor]]
                cursor += 1
            else:
                opener = TokenType.OPEN
            self._emit(opener, source[idx:cursor], idx)
            pos = self._lex_expression(idx, cursor, raw)

        self._flush_data(pending, len(source), False)
        self._emit(TokenType.EOF, "", len(source))
        return self._tokens

    # ------------------------------------------------------------------

    def _position(self, offset: int) -> tuple[int, int]:
        line_index = bisect_right(self._line_starts, offset) - 1
        return line_index + 1, offset - self._line_starts[line_index]

    def _emit(self, type_: TokenType, value: str, offset: int) -> None:
        lineno, col = self._position(offset)
        self._tokens.append(Token(type_, value, lineno, col))

    def _error(self, message: str, offset: int, code: ErrorCode) -> TemplateSyntaxError:
        lineno, col = self._position(offset)
        return TemplateSyntaxError(
            message, lineno=lineno, name=self._name, source=self._source, col_offset=col, code=code
        )

    def _flush_data(self, text: str, end_offset: int, strip_before: bool) -> None:
        if self._strip_next:
            text = text.lstrip()
            self._strip_next = False
        if strip_before:
            text = text.rstrip()
        if text:
            self._emit(TokenType.DATA, text, end_offset - len(text))

    def _lex_comment(self, start: int, cursor: int) -> int:
        source = self._source
        long_form = source.startswith("!--", cursor)
        pattern = _LONG_COMMENT_END if long_form else _COMMENT_END
        match = pattern.search(source, cursor + (3 if long_form else 1))
        if match is None:
            raise self._error("Unclosed comment", start, ErrorCode.UNCLOSED_COMMENT)

        self._strip_next = bool(match.group(1))
        self._emit(TokenType.COMMENT, source[cursor : match.start()], start)
        return match.end()

    def _lex_expression(self, start: int, cursor: int, raw: bool) -> int:
        source = self._source
        closer = "}}}" if raw else "}}"
        close_type = TokenType.CLOSE_RAW if raw else TokenType.CLOSE

        while cursor < len(source):
            ws = _WHITESPACE.match(source, cursor)
            if ws:
                cursor = ws.end()
                continue

            if source.startswith("~" + closer, cursor):
                self._strip_next = True
                self._emit(close_type, closer, cursor + 1)
                return cursor + 1 + len(closer)
            if source.startswith(closer, cursor):
                self._emit(close_type, closer, cursor)
                return cursor + len(closer)

            for token_type, pattern in _EXPRESSION_RULES:
                match = pattern.match(source, cursor)
                if match and match.end() > cursor:
                    self._emit(token_type, match.group(), cursor)
                    cursor = match.end()
                    break
            else:
                if source.startswith("}", cursor):
                    raise self._error(
                        f"Expected '{closer}' to close tag", cursor, ErrorCode.UNCLOSED_TAG
                    )
                raise self._error(
                    f"Unexpected character {source[cursor]!r} in tag",
                    cursor,
                    ErrorCode.UNEXPECTED_CHARACTER,
                )

        raise self._error("Unclosed tag", start, ErrorCode.UNCLOSED_TAG)


def tokenize(source: str, name: str | None = None) -> list[Token]:
    """Tokenize template source into a list ending with an EOF token."""
    return Lexer(source, name).tokenize()
