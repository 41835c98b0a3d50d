"""Asset compilation: stylesheets, scripts and the asset manifest.

Stylesheets:
``assets/scss/styles.scss`` is compiled with libsass; the include path is
the component's own scss directory, the component directory, the
components root and the shared global-assets tree. The result is written
to ``assets/css/styles.css`` (only when it changed) so static servers can
use it. Without SCSS, ``assets/css/styles.css`` is read verbatim; without
either, styles are empty.

Scripts:
``assets/js/script.js`` verbatim, or whitespace-compacted in minify mode
(an approximation, not a real minifier).
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import sass

from vitrine.components.errors import CompileFailure
from vitrine.components.models import AssetManifest
from vitrine.components.snapshot import CSS_FILE, SCSS_FILE, ComponentSnapshot
from vitrine.config import BuildOptions
from vitrine.environment.exceptions import ErrorCode

logger = logging.getLogger(__name__)

# Imports of user files; ``@use "sass:math"`` and friends are built in.
_IMPORT = re.compile(r"""@(?:import|use|forward)\s+["'](?!sass:)""")
_WHITESPACE = re.compile(r"\s+")
GLOBAL_SCSS_FILE = Path("scss", "vitrine-global.scss")
IMAGE_SUFFIXES = frozenset({".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp"})


def _write_if_changed(path: Path, content: str) -> bool:
    try:
        if path.read_text(encoding="utf-8") == content:
            return False
    except FileNotFoundError:
        pass
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return True


class AssetCompiler:
    """Compile one component's styles and scripts.

    Every method accepts a component directory or a ComponentSnapshot; the
    builder passes a snapshot so one build sees one version of the files.
    """

    def __init__(self, options: BuildOptions | None = None):
        self.options = options or BuildOptions()

    @staticmethod
    def _snapshot(source: str | Path | ComponentSnapshot) -> ComponentSnapshot:
        if isinstance(source, ComponentSnapshot):
            return source
        return ComponentSnapshot.capture(source)

    def include_paths(self, location: Path) -> list[str]:
        paths = [
            location / SCSS_FILE.parent,
            location,
            self.options.components_dir,
        ]
        if self.options.global_assets_dir is not None:
            paths.append(self.options.global_assets_dir)
            paths.append(self.options.global_assets_dir / "scss")
        return [str(path) for path in paths]

    def compile_styles(self, source: str | Path | ComponentSnapshot) -> str:
        """Compiled CSS for the component; empty when it has no stylesheet.

        Raises:
            CompileFailure: The SCSS does not compile, or it imports files
                while the global-assets tree is missing
        """
        snapshot = self._snapshot(source)
        if snapshot.scss is not None:
            return self._compile_scss(snapshot)
        if snapshot.css is not None:
            return snapshot.css
        return ""

    def _compile_scss(self, snapshot: ComponentSnapshot) -> str:
        location = snapshot.location
        scss_path = location / SCSS_FILE
        css_path = location / CSS_FILE
        global_assets = self.options.global_assets_dir

        if _IMPORT.search(snapshot.scss or "") and (global_assets is None or not global_assets.is_dir()):
            raise CompileFailure(
                f"{scss_path} imports shared styles but the global assets directory "
                f"{global_assets} does not exist",
                location=location,
                code=ErrorCode.STYLE_COMPILE,
            )

        output_style = "compressed" if self.options.minify else "expanded"
        try:
            if self.options.source_map:
                # Source maps need a real filename, so this reads styles.scss again.
                css, source_map = sass.compile(
                    filename=str(scss_path),
                    include_paths=self.include_paths(location),
                    output_style=output_style,
                    source_map_filename=f"{css_path}.map",
                    output_filename_hint=str(css_path),
                    source_map_contents=True,
                )
            else:
                css = sass.compile(
                    string=snapshot.scss,
                    include_paths=self.include_paths(location),
                    output_style=output_style,
                )
                source_map = None
        except sass.CompileError as e:
            raise CompileFailure(
                f"Failed to compile {scss_path}: {e}",
                location=location,
                code=ErrorCode.STYLE_COMPILE,
            ) from e

        if _write_if_changed(css_path, css):
            logger.debug("Wrote %s", css_path)
        if source_map is not None:
            _write_if_changed(Path(f"{css_path}.map"), source_map)
        return css

    def compile_script(self, source: str | Path | ComponentSnapshot) -> str:
        snapshot = self._snapshot(source)
        script = snapshot.script or ""
        if self.options.minify:
            return _WHITESPACE.sub(" ", script).strip()
        return script

    def collect_assets(self, source: str | Path | ComponentSnapshot) -> AssetManifest:
        """Enumerate ``css/**/*.css``, ``js/**/*.js`` and ``img/**`` images under ``assets/``."""
        snapshot = self._snapshot(source)
        css: list[str] = []
        js: list[str] = []
        images: list[str] = []
        for path in snapshot.asset_files:
            if path.startswith("css/") and path.endswith(".css"):
                css.append(path)
            elif path.startswith("js/") and path.endswith(".js"):
                js.append(path)
            elif path.startswith("img/") and Path(path).suffix in IMAGE_SUFFIXES:
                images.append(path)
        return AssetManifest(tuple(css), tuple(js), tuple(images))

    def compile_global_styles(self) -> str:
        """Compile ``scss/vitrine-global.scss`` from the global-assets tree.

        Raises:
            CompileFailure: The tree or its entry stylesheet is missing, or
                it does not compile
        """
        global_assets = self.options.global_assets_dir
        entry = global_assets / GLOBAL_SCSS_FILE if global_assets is not None else None
        if entry is None or not entry.is_file():
            raise CompileFailure(
                f"Global stylesheet {entry or GLOBAL_SCSS_FILE} does not exist",
                location=global_assets,
                code=ErrorCode.MISSING_SOURCE,
            )
        try:
            return sass.compile(
                filename=str(entry),
                include_paths=[str(entry.parent)],
                output_style="compressed" if self.options.minify else "expanded",
            )
        except sass.CompileError as e:
            raise CompileFailure(
                f"Failed to compile {entry}: {e}", location=global_assets, code=ErrorCode.STYLE_COMPILE
            ) from e
