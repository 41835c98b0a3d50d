"""Base node class for the Vitrine template AST."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source location for error reporting.
    Nodes are immutable so a parsed tree can be compiled any number of times.

    """

    lineno: int
    col_offset: int
