"""Vitrine Compiler: node tree to render closures."""

from vitrine.compiler.core import Compiler

__all__ = ["Compiler"]
