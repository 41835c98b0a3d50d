"""Helper registry for Vitrine environments.

A HelperRegistry maps helper names to plain Python callables. Each
Environment owns one; pass the same registry to several environments to
share helpers, or ``copy()`` it to fork.

All mutations use copy-on-write: compiled templates hold the snapshot that
was current when they compiled, so a later registration affects only
templates compiled afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from vitrine.render_context import get_render_context

F = TypeVar("F", bound=Callable[..., Any])


def pass_options(func: F) -> F:
    """Mark a helper as wanting a HelperOptions as its last positional argument.

    Example:
        >>> @pass_options
        ... def bold(options):
        ...     return Markup("<b>") + options.fn() + Markup("</b>")
    """
    func._vitrine_pass_options = True  # type: ignore[attr-defined]
    return func


class HelperRegistry:
    """Name → helper mapping with copy-on-write updates.

    Supports:
        - registry.register('name', func)
        - registry['name'] = func
        - func = registry['name']
        - 'name' in registry

    Registering a name that already exists replaces it (last write wins).
    Registering while a template is rendering raises RuntimeError.
    """

    __slots__ = ("_helpers", "_version")

    def __init__(self, helpers: Mapping[str, Callable[..., Any]] | None = None):
        self._helpers: dict[str, Callable[..., Any]] = dict(helpers or {})
        self._version = 0

    @property
    def version(self) -> int:
        """Incremented on every mutation; lets caches notice stale compilations."""
        return self._version

    def _check_mutable(self) -> None:
        if get_render_context() is not None:
            raise RuntimeError("Helpers cannot be registered while a template is rendering")

    def register(self, name: str, func: Callable[..., Any]) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError(f"Helper name must be a non-empty string, got {name!r}")
        if not callable(func):
            raise TypeError(f"Helper '{name}' must be callable, got {type(func).__name__}")
        self._check_mutable()
        new = self._helpers.copy()
        new[name] = func
        self._helpers = new
        self._version += 1

    def unregister(self, name: str) -> None:
        self._check_mutable()
        new = self._helpers.copy()
        del new[name]
        self._helpers = new
        self._version += 1

    def update(self, mapping: Mapping[str, Callable[..., Any]]) -> None:
        """Batch register helpers."""
        for name, func in mapping.items():
            if not callable(func):
                raise TypeError(f"Helper '{name}' must be callable, got {type(func).__name__}")
        self._check_mutable()
        new = self._helpers.copy()
        new.update(mapping)
        self._helpers = new
        self._version += 1

    def snapshot(self) -> Mapping[str, Callable[..., Any]]:
        """Read-only view of the current helpers; unaffected by later registrations."""
        return MappingProxyType(self._helpers)

    def copy(self) -> HelperRegistry:
        return HelperRegistry(self._helpers)

    def names(self) -> list[str]:
        return sorted(self._helpers)

    def get(self, name: str, default: Callable[..., Any] | None = None) -> Callable[..., Any] | None:
        return self._helpers.get(name, default)

    def __getitem__(self, name: str) -> Callable[..., Any]:
        return self._helpers[name]

    def __setitem__(self, name: str, func: Callable[..., Any]) -> None:
        self.register(name, func)

    def __contains__(self, name: object) -> bool:
        return name in self._helpers

    def __iter__(self) -> Iterator[str]:
        return iter(self._helpers)

    def __len__(self) -> int:
        return len(self._helpers)

    def __repr__(self) -> str:
        return f"<HelperRegistry {len(self._helpers)} helpers>"
