"""Expression nodes for the Vitrine template AST."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from vitrine.nodes.base import Node


@dataclass(frozen=True, slots=True)
class Expr(Node):
    """Base class for expressions."""


@dataclass(frozen=True, slots=True)
class Literal(Expr):
    """Constant value: string, number, boolean, null."""

    value: str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class Path(Expr):
    """Context lookup: ``name``, ``this.title``, ``../parent``, ``@index``.

    Attributes:
        parts: Property names to walk, in order (``this``/``.`` removed)
        depth: Number of ``../`` prefixes (frames to climb)
        data: True for ``@``-prefixed private data variables
        scoped: True when the path began with ``this`` or ``.``, which
            forbids helper resolution for bare names
        original: Path as written, for error messages
    """

    parts: Sequence[str]
    depth: int = 0
    data: bool = False
    scoped: bool = False
    original: str = ""

    @property
    def is_simple(self) -> bool:
        """True for a bare single identifier that may name a helper."""
        return len(self.parts) == 1 and not self.depth and not self.data and not self.scoped


@dataclass(frozen=True, slots=True)
class Call(Expr):
    """Helper invocation: ``name arg1 arg2 key=value``.

    Also used for sub-expressions ``(name arg1 arg2)``.
    """

    name: Path
    params: Sequence[Expr] = ()
    hash: Sequence[tuple[str, Expr]] = ()
