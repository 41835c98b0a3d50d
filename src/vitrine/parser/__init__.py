"""Vitrine Parser: token stream to immutable AST."""

from vitrine.parser.core import Parser

__all__ = ["Parser"]
