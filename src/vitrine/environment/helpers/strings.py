"""String helpers: uppercase, lowercase, capitalize, truncate, replace, slugify.

Falsy input (``None``, ``""``) is returned unchanged.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from typing import Any

from vitrine.environment.helpers.arithmetic import to_number
from vitrine.template.helpers import js_truthy, to_string

_SLUG_STRIP = re.compile(r"[^\w\s-]", re.ASCII)
_SLUG_SEPARATORS = re.compile(r"[\s_-]+", re.ASCII)


def uppercase(value: Any) -> Any:
    return to_string(value).upper() if js_truthy(value) else value


def lowercase(value: Any) -> Any:
    return to_string(value).lower() if js_truthy(value) else value


def capitalize(value: Any) -> Any:
    """Upper-case the first character only; the rest is left as is."""
    if not js_truthy(value):
        return value
    text = to_string(value)
    return text[:1].upper() + text[1:]


def truncate(value: Any, length: Any) -> Any:
    """Cut to ``length`` characters, appending ``...`` only when something was cut."""
    if not js_truthy(value):
        return value
    text = to_string(value)
    limit = to_number(length)
    if math.isnan(limit) or len(text) <= limit:
        return text
    return text[: max(int(limit), 0)] + "..."


def replace(value: Any, find: str, replace_with: Any = "") -> Any:
    """Replace every match of the regular expression ``find``.

    ``replace_with`` is inserted literally.
    """
    if not js_truthy(value):
        return value
    replacement = to_string(replace_with)
    return re.sub(to_string(find), lambda _match: replacement, to_string(value))


def slugify(value: Any) -> Any:
    """Lower-case, drop punctuation, join words with single hyphens.

    Example:
        >>> slugify("Hello, World!  Foo")
        'hello-world-foo'
    """
    if not js_truthy(value):
        return value
    text = _SLUG_STRIP.sub("", to_string(value).lower())
    return _SLUG_SEPARATORS.sub("-", text).strip("-")


STRING_HELPERS: dict[str, Callable[..., Any]] = {
    "uppercase": uppercase,
    "lowercase": lowercase,
    "capitalize": capitalize,
    "truncate": truncate,
    "replace": replace,
    "slugify": slugify,
}
