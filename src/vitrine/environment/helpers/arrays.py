"""Array helpers. Non-list input yields a safe default instead of an error."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from vitrine.template.helpers import strict_equals, to_string


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def length(value: Any) -> int:
    return len(value) if _is_array(value) else 0


def first(value: Any) -> Any:
    return value[0] if _is_array(value) and value else None


def last(value: Any) -> Any:
    return value[-1] if _is_array(value) and value else None


def join(value: Any, separator: str = ", ") -> str:
    if not _is_array(value):
        return ""
    return to_string(separator or ", ").join(to_string(item) for item in value)


def contains(value: Any, item: Any) -> bool:
    return _is_array(value) and any(strict_equals(element, item) for element in value)


def limit(value: Any, count: int) -> list[Any]:
    if not _is_array(value):
        return []
    return list(value[: max(int(count), 0)])


ARRAY_HELPERS: dict[str, Callable[..., Any]] = {
    "length": length,
    "first": first,
    "last": last,
    "join": join,
    "contains": contains,
    "limit": limit,
}
