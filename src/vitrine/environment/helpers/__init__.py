"""Built-in helper catalog.

Helpers are grouped by category; ``DEFAULT_HELPERS`` is the union that
every new Environment starts with.

Categories:
- comparison: eq, ne, lt, gt, lte, gte, and, or
- strings: uppercase, lowercase, capitalize, truncate, replace, slugify
- arrays: length, first, last, join, contains, limit
- arithmetic: add, subtract, multiply, divide, mod, round, floor, ceil
- dates: formatDate, relativeTime
- utility: json, typeof, default, random, times, switch, case, asset,
  componentClass, lookup, log
"""

from __future__ import annotations

from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from vitrine.environment.helpers.arithmetic import ARITHMETIC_HELPERS
from vitrine.environment.helpers.arrays import ARRAY_HELPERS
from vitrine.environment.helpers.comparison import COMPARISON_HELPERS
from vitrine.environment.helpers.dates import DATE_HELPERS
from vitrine.environment.helpers.strings import STRING_HELPERS
from vitrine.environment.helpers.utility import UTILITY_HELPERS, make_asset_helper

DEFAULT_HELPERS: MappingProxyType[str, Callable[..., Any]] = MappingProxyType(
    {
        **COMPARISON_HELPERS,
        **STRING_HELPERS,
        **ARRAY_HELPERS,
        **ARITHMETIC_HELPERS,
        **DATE_HELPERS,
        **UTILITY_HELPERS,
    }
)

__all__ = [
    "ARITHMETIC_HELPERS",
    "ARRAY_HELPERS",
    "COMPARISON_HELPERS",
    "DATE_HELPERS",
    "DEFAULT_HELPERS",
    "STRING_HELPERS",
    "UTILITY_HELPERS",
    "make_asset_helper",
]
