"""Tests for build and preview configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from vitrine import BuildOptions, PreviewConfig
from vitrine.config import DEFAULT_GLOBAL_ASSETS_DIR


class TestBuildOptions:
    def test_defaults(self):
        options = BuildOptions()
        assert options.components_dir == Path("components")
        assert options.global_assets_dir == DEFAULT_GLOBAL_ASSETS_DIR
        assert (options.minify, options.source_map) == (False, False)

    def test_strings_become_paths(self):
        options = BuildOptions(components_dir="ui", global_assets_dir="shared")
        assert options.components_dir == Path("ui")
        assert options.global_assets_dir == Path("shared")

    def test_frozen(self):
        with pytest.raises(AttributeError):
            BuildOptions().minify = True  # type: ignore[misc]

    def test_packaged_global_assets_exist(self):
        assert (DEFAULT_GLOBAL_ASSETS_DIR / "scss" / "vitrine-global.scss").is_file()
        assert (DEFAULT_GLOBAL_ASSETS_DIR / "js" / "vendor-loader.js").is_file()


class TestPreviewConfig:
    def test_defaults(self):
        config = PreviewConfig()
        assert config.hot_update is True
        assert config.asset_url_prefix == "/assets/"
        assert config.static_prefix == "/__vitrine"

    def test_build_options(self, tmp_path):
        config = PreviewConfig(components_dir=tmp_path, global_assets_dir=tmp_path / "g")
        assert config.build_options == BuildOptions(components_dir=tmp_path, global_assets_dir=tmp_path / "g")

    def test_from_env(self):
        config = PreviewConfig.from_env(
            {"VITRINE_COMPONENTS_DIR": "ui", "VITRINE_GLOBAL_ASSETS_DIR": "shared", "VITRINE_HOT_UPDATE": "1"}
        )
        assert config.components_dir == Path("ui")
        assert config.global_assets_dir == Path("shared")
        assert config.hot_update is True

    @pytest.mark.parametrize("value", ["0", "false", "No", " off "])
    def test_hot_update_disabled(self, value):
        assert PreviewConfig.from_env({"VITRINE_HOT_UPDATE": value}).hot_update is False

    def test_empty_environment(self):
        assert PreviewConfig.from_env({}) == PreviewConfig()

    def test_overrides_win(self):
        config = PreviewConfig.from_env({"VITRINE_COMPONENTS_DIR": "ui"}, components_dir=Path("other"))
        assert config.components_dir == Path("other")

    def test_none_overrides_are_ignored(self):
        config = PreviewConfig.from_env({"VITRINE_HOT_UPDATE": "off"}, hot_update=None, components_dir=None)
        assert config.hot_update is False
        assert config.components_dir == Path("components")

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("VITRINE_COMPONENTS_DIR", "from-env")
        assert PreviewConfig.from_env().components_dir == Path("from-env")
