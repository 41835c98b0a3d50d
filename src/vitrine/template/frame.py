"""Context frames: the data a template body sees at one nesting level."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class Frame:
    """One level of template context.

    ``context`` is what ``this`` refers to; ``parent`` is what ``../`` climbs
    to; ``data`` holds the ``@``-variables (``@index``, ``@key``, ``@root``...).
    """

    __slots__ = ("context", "data", "parent")

    def __init__(
        self,
        context: Any,
        parent: Frame | None = None,
        data: Mapping[str, Any] | None = None,
    ):
        self.context = context
        self.parent = parent
        self.data = dict(data) if data else {}

    @classmethod
    def root(cls, context: Any) -> Frame:
        return cls(context, None, {"root": context})

    def child(self, context: Any, data: Mapping[str, Any] | None = None) -> Frame:
        """Push a frame for ``context``.

        Re-using the current context only layers new ``@`` data on top, so
        ``../`` keeps pointing at the same parent.
        """
        merged = {**self.data, **data} if data else self.data
        if context is self.context:
            return Frame(context, self.parent, merged)
        return Frame(context, self, merged)

    def climb(self, depth: int) -> Frame:
        frame = self
        while depth and frame.parent is not None:
            frame = frame.parent
            depth -= 1
        return frame

    def __repr__(self) -> str:
        return f"Frame(context={self.context!r}, data={sorted(self.data)})"
