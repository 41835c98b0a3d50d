"""Comparison helpers: eq, ne, lt, gt, lte, gte, and, or.

``eq``/``ne`` never coerce across types (``1`` is not ``"1"``). Ordering
helpers return ``False`` for values that cannot be ordered.
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any

from vitrine.environment.registry import pass_options
from vitrine.template.helpers import js_truthy, strict_equals


def eq(a: Any, b: Any) -> bool:
    return strict_equals(a, b)


def ne(a: Any, b: Any) -> bool:
    return not strict_equals(a, b)


def _ordering(op: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def compare(a: Any, b: Any) -> bool:
        try:
            return bool(op(a, b))
        except TypeError:
            return False

    compare.__name__ = op.__name__
    return compare


lt = _ordering(operator.lt)
gt = _ordering(operator.gt)
lte = _ordering(operator.le)
gte = _ordering(operator.ge)


@pass_options
def and_(*args: Any) -> bool:
    """True when every argument is truthy. The trailing options object is ignored."""
    return all(js_truthy(value) for value in args[:-1])


@pass_options
def or_(*args: Any) -> bool:
    """True when any argument is truthy. The trailing options object is ignored."""
    return any(js_truthy(value) for value in args[:-1])


COMPARISON_HELPERS: dict[str, Callable[..., Any]] = {
    "eq": eq,
    "ne": ne,
    "lt": lt,
    "gt": gt,
    "lte": lte,
    "gte": gte,
    "and": and_,
    "or": or_,
}
