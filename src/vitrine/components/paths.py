"""Component naming and path utilities."""

from __future__ import annotations

import re
from pathlib import Path, PurePath

_COMPONENT_NAME = re.compile(r"^[a-z0-9-]+$")


def validate_component_name(name: str) -> bool:
    """True for lower-case names made of letters, digits and hyphens."""
    return bool(_COMPONENT_NAME.match(name))


def validate_component_type(component_type: str) -> bool:
    return bool(_COMPONENT_NAME.match(component_type))


def component_path(component_type: str, variation: str, base: str | Path = "components") -> Path:
    """Directory of a component: ``{base}/{type}/{variation}``."""
    return Path(base) / component_type / variation


def parse_component_path(path: str | PurePath) -> tuple[str, str] | None:
    """Split a component directory into ``(type, variation)``.

    The last two path segments are used.

    Example:
        >>> parse_component_path("components/hero/dark")
        ('hero', 'dark')
        >>> parse_component_path("hero") is None
        True
    """
    parts = [part for part in PurePath(path).parts if part not in ("/", "")]
    if len(parts) < 2:
        return None
    return parts[-2], parts[-1]
