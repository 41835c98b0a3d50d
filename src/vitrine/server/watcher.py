"""Components tree change watch.

``watch_components`` follows the components root recursively with
watchfiles and publishes one ``component-update`` message per affected
``type/variation`` pair per batch of changes. Nothing is rebuilt here;
the next preview request rebuilds from disk.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from watchfiles import Change, awatch

from vitrine.components.repository import IGNORED_DIRS
from vitrine.components.snapshot import CSS_FILE, SCSS_FILE
from vitrine.server.channel import UpdateChannel

logger = logging.getLogger(__name__)

UPDATE_MESSAGE_TYPE = "component-update"


def resolve_component(root: str | Path, path: str | Path) -> tuple[str, str] | None:
    """Map a changed file to the ``(type, variation)`` pair it belongs to.

    Returns None for paths outside a ``type/variation`` subtree, hidden or
    ignored directories, source maps, and the CSS the builder writes from
    an SCSS source.

    Example:
        >>> resolve_component("components", "components/hero/dark/template.html")
        ('hero', 'dark')
        >>> resolve_component("components", "components/README.md") is None
        True
    """
    root = Path(root).resolve()
    path = Path(path).resolve()
    try:
        relative = path.relative_to(root)
    except ValueError:
        return None

    parts = relative.parts
    if len(parts) < 2:
        return None
    if any(part.startswith(".") or part in IGNORED_DIRS for part in parts[:-1]):
        return None
    if path.suffix == ".map":
        return None

    component_type, variation = parts[0], parts[1]
    location = root / component_type / variation
    if len(parts) > 2 and path == location / CSS_FILE and (location / SCSS_FILE).exists():
        return None
    return component_type, variation


def update_messages(
    root: str | Path,
    changes: Iterable[tuple[Change, str]],
    *,
    display_root: str | Path | None = None,
) -> list[dict[str, Any]]:
    """Notifications for one batch of watchfiles changes, one per component.

    ``path`` in each message is ``{display_root}/{type}/{variation}`` in
    posix form; ``display_root`` defaults to ``root`` as given.
    """
    base = Path(display_root if display_root is not None else root)
    seen: set[tuple[str, str]] = set()
    messages = []
    for _change, changed_path in sorted(changes, key=lambda item: item[1]):
        pair = resolve_component(root, changed_path)
        if pair is None or pair in seen:
            continue
        seen.add(pair)
        logger.debug("Change in %s affects %s/%s", changed_path, *pair)
        messages.append({"type": UPDATE_MESSAGE_TYPE, "path": (base / pair[0] / pair[1]).as_posix()})
    return messages


async def watch_components(
    root: str | Path,
    channel: UpdateChannel,
    *,
    stop_event: asyncio.Event | None = None,
) -> None:
    """Publish a notification for every component change until stopped."""
    root = Path(root)
    logger.info("Watching %s for component changes", root)
    try:
        async for changes in awatch(root, stop_event=stop_event):
            for message in update_messages(root, changes):
                await channel.publish(message)
    finally:
        logger.info("Stopped watching %s", root)
