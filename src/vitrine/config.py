"""Configuration for builds and the preview server.

Options are frozen dataclasses built in code; ``PreviewConfig.from_env()``
layers environment variable overrides on top:

- ``VITRINE_COMPONENTS_DIR``: components root
- ``VITRINE_GLOBAL_ASSETS_DIR``: shared SCSS/JS tree
- ``VITRINE_HOT_UPDATE``: ``0``/``false``/``no``/``off`` disables hot update
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

DEFAULT_GLOBAL_ASSETS_DIR = Path(__file__).parent / "global_assets"

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class BuildOptions:
    """How components are compiled.

    Attributes:
        components_dir: Root holding ``{type}/{variation}`` component directories
        global_assets_dir: Shared stylesheet tree on the SCSS include path
        minify: Compressed CSS and whitespace-compacted scripts
        source_map: Write ``styles.css.map`` next to compiled CSS
    """

    components_dir: Path = field(default_factory=lambda: Path("components"))
    global_assets_dir: Path | None = DEFAULT_GLOBAL_ASSETS_DIR
    minify: bool = False
    source_map: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "components_dir", Path(self.components_dir))
        if self.global_assets_dir is not None:
            object.__setattr__(self, "global_assets_dir", Path(self.global_assets_dir))


@dataclass(frozen=True, slots=True)
class PreviewConfig:
    """Preview server settings.

    Attributes:
        components_dir: Root holding component directories
        global_assets_dir: Shared assets served under ``{static_prefix}/global-assets``
        hot_update: Watch the components tree and push reload notifications
        asset_url_prefix: URL prefix the ``asset`` helper maps paths under
        static_prefix: URL prefix for the server's own routes
    """

    components_dir: Path = field(default_factory=lambda: Path("components"))
    global_assets_dir: Path = DEFAULT_GLOBAL_ASSETS_DIR
    hot_update: bool = True
    asset_url_prefix: str = "/assets/"
    static_prefix: str = "/__vitrine"

    def __post_init__(self) -> None:
        object.__setattr__(self, "components_dir", Path(self.components_dir))
        object.__setattr__(self, "global_assets_dir", Path(self.global_assets_dir))

    @property
    def build_options(self) -> BuildOptions:
        return BuildOptions(
            components_dir=self.components_dir,
            global_assets_dir=self.global_assets_dir,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> PreviewConfig:
        """Build a config from ``VITRINE_*`` variables; explicit overrides win."""
        env = os.environ if environ is None else environ
        config = cls()
        values: dict[str, Any] = {}
        if env.get("VITRINE_COMPONENTS_DIR"):
            values["components_dir"] = Path(env["VITRINE_COMPONENTS_DIR"])
        if env.get("VITRINE_GLOBAL_ASSETS_DIR"):
            values["global_assets_dir"] = Path(env["VITRINE_GLOBAL_ASSETS_DIR"])
        if "VITRINE_HOT_UPDATE" in env:
            values["hot_update"] = env["VITRINE_HOT_UPDATE"].strip().lower() not in _FALSE_VALUES
        values.update({key: value for key, value in overrides.items() if value is not None})
        return replace(config, **values)
