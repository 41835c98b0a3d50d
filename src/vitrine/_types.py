"""Token types for the Vitrine template lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Lexer token kinds.

    Tag openers carry the sigil that follows ``{{``; everything between an
    opener and ``}}`` is tokenized as an expression.
    """

    DATA = "data"
    COMMENT = "comment"

    OPEN = "{{"
    OPEN_BLOCK = "{{#"
    OPEN_END = "{{/"
    OPEN_PARTIAL = "{{>"
    OPEN_INVERSE = "{{^"
    OPEN_UNESCAPED = "{{&"
    OPEN_RAW = "{{{"
    CLOSE = "}}"
    CLOSE_RAW = "}}}"

    PATH = "path"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    EQUALS = "="
    LPAREN = "("
    RPAREN = ")"

    EOF = "eof"


OPENERS: frozenset[TokenType] = frozenset(
    {
        TokenType.OPEN,
        TokenType.OPEN_BLOCK,
        TokenType.OPEN_END,
        TokenType.OPEN_PARTIAL,
        TokenType.OPEN_INVERSE,
        TokenType.OPEN_UNESCAPED,
        TokenType.OPEN_RAW,
    }
)


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token with its source position (1-based line, 0-based column)."""

    type: TokenType
    value: str
    lineno: int
    col_offset: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.lineno}:{self.col_offset})"
