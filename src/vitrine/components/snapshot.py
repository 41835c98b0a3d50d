"""Point-in-time reads of a component directory.

A build reads every file it needs once, up front, so a change that lands
while the build is running is either wholly visible to it or not at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

META_FILE = "meta.json"
TEMPLATE_FILE = "index.html"
SCSS_FILE = Path("assets", "scss", "styles.scss")
CSS_FILE = Path("assets", "css", "styles.css")
SCRIPT_FILE = Path("assets", "js", "script.js")
ASSETS_DIR = "assets"


def _read(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


@dataclass(frozen=True, slots=True)
class ComponentSnapshot:
    """The contents of one component directory at a single moment.

    Missing files are ``None``; ``asset_files`` lists every file under
    ``assets/`` as sorted posix paths relative to it.
    """

    location: Path
    meta: str | None
    template: str | None
    scss: str | None
    css: str | None
    script: str | None
    asset_files: tuple[str, ...]

    @classmethod
    def capture(cls, location: str | Path) -> ComponentSnapshot:
        location = Path(location)
        assets_root = location / ASSETS_DIR
        asset_files: tuple[str, ...] = ()
        if assets_root.is_dir():
            asset_files = tuple(
                sorted(p.relative_to(assets_root).as_posix() for p in assets_root.rglob("*") if p.is_file())
            )
        return cls(
            location=location,
            meta=_read(location / META_FILE),
            template=_read(location / TEMPLATE_FILE),
            scss=_read(location / SCSS_FILE),
            css=_read(location / CSS_FILE),
            script=_read(location / SCRIPT_FILE),
            asset_files=asset_files,
        )
