"""Pure runtime helper functions used by compiled template emitters.

These implement the value semantics of the template language: path
lookup, truthiness, string conversion and output escaping. None of them
close over Environment state.

Thread-Safety:
All functions are stateless and safe for concurrent use.

"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from vitrine.utils.html import html_escape

if TYPE_CHECKING:
    from vitrine.render_context import RenderContext
    from vitrine.template.frame import Frame


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def get_member(obj: Any, key: str, default: Any = None) -> Any:
    """Look up one path segment on ``obj``.

    Mappings are indexed by key, sequences by integer position; anything
    else falls back to attribute access. ``length`` works on sequences and
    strings. Private attributes are never exposed.
    """
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        return obj.get(key, default)
    if isinstance(obj, (str, Sequence)):
        if key == "length":
            return len(obj)
        if key.isdigit():
            index = int(key)
            return obj[index] if index < len(obj) else default
        if isinstance(obj, str):
            return default
    if key.startswith("_"):
        return default
    return getattr(obj, key, default)


def resolve_path(frame: Frame, parts: Sequence[str], depth: int = 0, data: bool = False) -> Any:
    """Resolve a dotted path against a frame.

    Example:
        ``../author.name`` → resolve_path(frame, ("author", "name"), depth=1)
        ``@root.title``    → resolve_path(frame, ("root", "title"), data=True)
    """
    target = frame.climb(depth)
    if data:
        if not parts:
            return None
        value = target.data.get(parts[0])
        rest = parts[1:]
    else:
        value = target.context
        rest = parts
    for part in rest:
        if value is None:
            return None
        value = get_member(value, part)
    return value


def iteration_items(value: Any) -> list[tuple[Any, Any]]:
    """(key, item) pairs for ``{{#each}}``.

    Mappings yield their items; other iterables yield (position, item).
    Strings and non-iterables yield nothing.
    """
    if value is None or isinstance(value, (str, bytes)):
        return []
    if isinstance(value, Mapping):
        return list(value.items())
    if isinstance(value, Iterable):
        return list(enumerate(value))
    return []


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def js_truthy(value: Any) -> bool:
    """Truthiness as the ``default``, ``and`` and ``or`` helpers see it.

    Only ``None``, ``False``, zero, NaN and the empty string are falsy.
    Empty lists and mappings count as values.
    """
    if value is None or value is False:
        return False
    if is_number(value):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


def is_empty(value: Any, include_zero: bool = False) -> bool:
    """Whether ``{{#if}}`` treats ``value`` as false.

    Like ``js_truthy`` but an empty list is also false; ``includeZero``
    makes ``0`` count as true.
    """
    if include_zero and is_number(value) and value == 0:
        return False
    if isinstance(value, (list, tuple)):
        return not value
    return not js_truthy(value)


def strict_equals(a: Any, b: Any) -> bool:
    """Equality without cross-type coercion: ``1 == 1.0`` but ``1 != "1"`` and ``1 != True``."""
    if is_number(a) and is_number(b):
        return a == b
    return type(a) is type(b) and a == b


def format_number(value: int | float) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def to_string(value: Any) -> str:
    """Convert a value for output.

    ``None`` renders as nothing, booleans as ``true``/``false``, whole
    floats without a trailing ``.0``, lists comma-joined.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return format_number(value)
    if isinstance(value, (list, tuple)):
        return ",".join(to_string(item) for item in value)
    if isinstance(value, Mapping):
        return "[object Object]"
    return str(value)


def escape_output(value: Any) -> str:
    """Render a value for ``{{expr}}``: escaped unless it implements ``__html__``."""
    if hasattr(value, "__html__"):
        return str(value.__html__())
    return html_escape(to_string(value))


def wants_options(func: Callable[..., Any]) -> bool:
    """True when ``func`` was decorated with ``pass_options``."""
    return getattr(func, "_vitrine_pass_options", False)


def invoke_helper(
    name: str,
    func: Callable[..., Any],
    args: Sequence[Any],
    kwargs: Mapping[str, Any],
    rctx: RenderContext,
    lineno: int,
) -> Any:
    """Call a helper, wrapping anything it raises in ``HelperError``."""
    from vitrine.environment.exceptions import HelperError, TemplateError, build_source_snippet

    try:
        return func(*args, **kwargs)
    except TemplateError:
        raise
    except Exception as e:
        snippet = build_source_snippet(rctx.source, lineno) if rctx.source else None
        raise HelperError(
            name,
            e,
            template_name=rctx.template_name,
            lineno=lineno,
            source_snippet=snippet,
            template_stack=rctx.template_stack,
        ) from e
