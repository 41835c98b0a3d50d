"""Utility helpers: json, typeof, default, random, times, switch/case,
asset, componentClass, lookup, log."""

from __future__ import annotations

import json as _json
import logging
import random as _random
from collections.abc import Callable, Mapping
from typing import Any

from vitrine.environment.registry import pass_options
from vitrine.template.helpers import get_member, js_truthy, strict_equals, to_string

logger = logging.getLogger(__name__)


def json(value: Any) -> str:
    """Pretty-print as JSON (two-space indent); ``None`` renders as ``null``."""
    return _json.dumps(value, indent=2, ensure_ascii=False, default=str)


def typeof(value: Any) -> str:
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if callable(value):
        return "function"
    return "object"


def default(value: Any, fallback: Any) -> Any:
    """``value`` unless it is falsy (``None``, ``False``, ``0``, ``""``)."""
    return value if js_truthy(value) else fallback


def random(minimum: Any, maximum: Any) -> int:
    """Random integer in ``[minimum, maximum]``, both ends inclusive."""
    return _random.randint(int(minimum), int(maximum))


@pass_options
def times(count: Any, options: Any) -> str:
    """Render the block ``count`` times.

    Each pass sees ``{index, first, last}`` as its context and as ``@`` data.
    """
    total = int(count) if isinstance(count, (int, float)) else 0
    parts = []
    for index in range(total):
        state = {"index": index, "first": index == 0, "last": index == total - 1}
        parts.append(options.fn(state, data=state))
    return "".join(parts)


@pass_options
def switch(value: Any, options: Any) -> str:
    """Render the block with ``value`` captured for the ``case`` blocks inside it."""
    return options.fn(options.context, data={"switch_value": value})


@pass_options
def case(value: Any, options: Any) -> str:
    """Render the block when ``value`` strictly equals the enclosing ``switch`` value."""
    if "switch_value" in options.data and strict_equals(value, options.data["switch_value"]):
        return options.fn(options.context)
    return ""


def make_asset_helper(prefix: str = "/assets/") -> Callable[[Any], str]:
    """Build an ``asset`` helper that maps relative paths under ``prefix``."""
    base = prefix if prefix.endswith("/") else prefix + "/"

    def asset(path: Any) -> str:
        return base + to_string(path).lstrip("/")

    return asset


def component_class(base: Any, modifiers: Any = None) -> str:
    """``base`` plus ``base--key`` for every truthy entry of ``modifiers``.

    Example:
        >>> component_class("card", {"featured": True, "dark": False})
        'card card--featured'
    """
    name = to_string(base)
    classes = [name]
    if isinstance(modifiers, Mapping):
        classes.extend(f"{name}--{key}" for key, enabled in modifiers.items() if js_truthy(enabled))
    return " ".join(classes)


def lookup(obj: Any, key: Any) -> Any:
    return get_member(obj, to_string(key))


@pass_options
def log(*args: Any) -> str:
    """Log the arguments at the level given by ``level=`` (default info)."""
    options = args[-1]
    level = logging.getLevelName(str(options.hash.get("level", "info")).upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.log(level, " ".join(to_string(value) for value in args[:-1]))
    return ""


UTILITY_HELPERS: dict[str, Callable[..., Any]] = {
    "json": json,
    "typeof": typeof,
    "default": default,
    "random": random,
    "times": times,
    "switch": switch,
    "case": case,
    "asset": make_asset_helper(),
    "componentClass": component_class,
    "lookup": lookup,
    "log": log,
}
