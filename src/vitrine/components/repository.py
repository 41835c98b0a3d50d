"""Component discovery.

The repository walks ``{root}/{type}/{variation}`` two levels deep and
parses every ``meta.json`` it finds. A directory with a missing or broken
descriptor is skipped with a DiscoveryWarning; it never aborts the scan.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from vitrine.components.errors import MetadataError
from vitrine.components.models import ComponentDefinition
from vitrine.components.snapshot import META_FILE

logger = logging.getLogger(__name__)

IGNORED_DIRS = frozenset({"node_modules", "dist", "build", ".git", "__pycache__", ".venv"})


@dataclass(frozen=True, slots=True)
class DiscoveryWarning:
    """A component directory that was skipped, and why."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True, slots=True)
class DiscoveredComponent:
    type: str
    variation: str
    location: Path
    definition: ComponentDefinition

    @property
    def key(self) -> tuple[str, str]:
        return (self.type, self.variation)


def load_definition(location: Path, meta_text: str) -> ComponentDefinition:
    """Parse ``meta.json`` text for the component at ``location``.

    Raises:
        MetadataError: If the text is not valid JSON or not a valid definition
    """
    try:
        raw = json.loads(meta_text)
    except json.JSONDecodeError as e:
        raise MetadataError(f"Invalid JSON in {META_FILE}: {e}", location=location) from e
    try:
        return ComponentDefinition.from_meta(raw, type=location.parent.name, variation=location.name)
    except MetadataError as e:
        raise MetadataError(e.message, location=location) from e


class ComponentRepository:
    """Scan a components root.

    Attributes:
        root: The directory scanned
        warnings: Directories skipped during the last scan

    Example:
        >>> repo = ComponentRepository("components")
        >>> [c.key for c in repo.scan()]
        [('footer', 'simple'), ('hero', 'dark')]
        >>> repo.warnings
        [DiscoveryWarning(path=PosixPath('components/hero/broken'), message='Invalid JSON ...')]
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.warnings: list[DiscoveryWarning] = []

    def _warn(self, path: Path, message: str) -> None:
        warning = DiscoveryWarning(path, message)
        self.warnings.append(warning)
        logger.warning("Skipping component %s: %s", path, message)

    @staticmethod
    def _subdirectories(directory: Path) -> list[Path]:
        return sorted(
            child
            for child in directory.iterdir()
            if child.is_dir() and not child.name.startswith(".") and child.name not in IGNORED_DIRS
        )

    def scan(self) -> list[DiscoveredComponent]:
        """Discover and parse every component under ``root``."""
        self.warnings = []
        if not self.root.is_dir():
            self._warn(self.root, "components directory does not exist")
            return []

        found: list[DiscoveredComponent] = []
        for type_dir in self._subdirectories(self.root):
            for location in self._subdirectories(type_dir):
                meta_path = location / META_FILE
                try:
                    meta_text = meta_path.read_text(encoding="utf-8")
                except FileNotFoundError:
                    self._warn(location, f"no {META_FILE}")
                    continue
                except OSError as e:
                    self._warn(location, f"cannot read {META_FILE}: {e}")
                    continue

                try:
                    definition = load_definition(location, meta_text)
                except MetadataError as e:
                    self._warn(location, e.message)
                    continue

                found.append(DiscoveredComponent(type_dir.name, location.name, location, definition))

        logger.debug("Discovered %d components under %s", len(found), self.root)
        return found

    def discover(self) -> list[Path]:
        """Locations of every component with a readable descriptor."""
        return [component.location for component in self.scan()]

    def find(self, component_type: str, variation: str) -> Path | None:
        """Location of ``type/variation`` if it exists on disk; no scan needed."""
        if component_type.startswith(".") or variation.startswith("."):
            return None
        location = self.root / component_type / variation
        return location if location.is_dir() else None


def discover(root: str | Path) -> list[Path]:
    """Locations of every component under ``root`` with a readable descriptor."""
    return ComponentRepository(root).discover()
