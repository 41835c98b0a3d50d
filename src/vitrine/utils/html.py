"""HTML escaping and the ``Markup`` safe-string type.

``{{expr}}`` output is escaped unless the value implements ``__html__``.
Helpers that build markup return ``Markup`` so their output survives
escaped interpolation untouched.
"""

from __future__ import annotations

from typing import Any

_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#x27;",
        "`": "&#x60;",
        "=": "&#x3D;",
    }
)


def html_escape(text: str) -> str:
    """Escape the characters that are unsafe in HTML text and attribute values.

    Example:
        >>> html_escape('<a href="x">')
        '&lt;a href&#x3D;&quot;x&quot;&gt;'
    """
    return text.translate(_ESCAPE_TABLE)


class Markup(str):
    """A string that is already safe for HTML output.

    Concatenating or formatting with plain strings escapes the plain side.

    Example:
        >>> Markup("<b>") + "<i>"
        Markup('<b>&lt;i&gt;')
    """

    __slots__ = ()

    def __new__(cls, value: Any = "") -> Markup:
        if hasattr(value, "__html__"):
            value = value.__html__()
        return super().__new__(cls, value)

    def __html__(self) -> Markup:
        return self

    def __add__(self, other: str) -> Markup:
        if isinstance(other, str):
            return Markup(str.__add__(self, escape(other)))
        return NotImplemented

    def __radd__(self, other: str) -> Markup:
        if isinstance(other, str):
            return Markup(str.__add__(escape(other), self))
        return NotImplemented

    def join(self, iterable: Any) -> Markup:
        return Markup(str.join(self, (escape(item) for item in iterable)))

    def __repr__(self) -> str:
        return f"Markup({str.__repr__(self)})"


def escape(value: Any) -> Markup:
    """Return ``value`` as Markup, escaping it unless it is already safe."""
    if hasattr(value, "__html__"):
        return Markup(value.__html__())
    return Markup(html_escape(str(value)))
