"""Tests for component discovery and naming utilities."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from vitrine import ComponentRepository, discover
from vitrine.components import (
    component_path,
    parse_component_path,
    validate_component_name,
    validate_component_type,
)

from .conftest import write_component


class TestScan:
    def test_finds_components_sorted(self, components_dir):
        repository = ComponentRepository(components_dir)
        found = repository.scan()
        assert [c.key for c in found] == [("footer", "simple"), ("hero", "dark")]
        assert repository.warnings == []

    def test_discovered_record(self, components_dir):
        (_, hero) = ComponentRepository(components_dir).scan()
        assert hero.location == components_dir / "hero" / "dark"
        assert hero.definition.display_name == "Dark Hero"
        assert hero.definition.key == hero.key

    def test_corrupt_descriptor_is_skipped_with_warning(self, tmp_path, caplog):
        root = tmp_path / "components"
        write_component(root, "hero", "dark")
        write_component(root, "hero", "broken", meta="{ not json")
        repository = ComponentRepository(root)
        with caplog.at_level(logging.WARNING, logger="vitrine.components.repository"):
            found = repository.scan()
        assert [c.key for c in found] == [("hero", "dark")]
        assert len(repository.warnings) == 1
        warning = repository.warnings[0]
        assert warning.path == root / "hero" / "broken"
        assert "Invalid JSON" in warning.message
        assert "hero/broken" in caplog.text

    def test_missing_meta(self, tmp_path):
        root = tmp_path / "components"
        (root / "hero" / "empty").mkdir(parents=True)
        repository = ComponentRepository(root)
        assert repository.scan() == []
        assert [w.message for w in repository.warnings] == ["no meta.json"]

    def test_invalid_definition(self, tmp_path):
        root = tmp_path / "components"
        write_component(root, "hero", "dark", meta={"fields": [{"name": "a"}, {"name": "a"}]})
        repository = ComponentRepository(root)
        assert repository.scan() == []
        assert "Duplicate field name" in repository.warnings[0].message

    def test_missing_root(self, tmp_path):
        repository = ComponentRepository(tmp_path / "nowhere")
        assert repository.scan() == []
        assert repository.warnings[0].path == tmp_path / "nowhere"

    def test_warnings_reset_between_scans(self, tmp_path):
        root = tmp_path / "components"
        broken = write_component(root, "hero", "broken", meta="nope")
        repository = ComponentRepository(root)
        repository.scan()
        (broken / "meta.json").write_text('{"name": "Fixed"}', encoding="utf-8")
        assert [c.key for c in repository.scan()] == [("hero", "broken")]
        assert repository.warnings == []

    @pytest.mark.parametrize("ignored", ["node_modules", "dist", ".git", ".hidden"])
    def test_ignored_directories(self, tmp_path, ignored):
        root = tmp_path / "components"
        write_component(root, ignored, "thing")
        write_component(root, "hero", ignored)
        repository = ComponentRepository(root)
        assert repository.scan() == []
        assert repository.warnings == []

    def test_loose_files_are_ignored(self, tmp_path):
        root = tmp_path / "components"
        write_component(root, "hero", "dark")
        (root / "README.md").write_text("docs", encoding="utf-8")
        (root / "hero" / "notes.txt").write_text("notes", encoding="utf-8")
        assert len(ComponentRepository(root).scan()) == 1


class TestLookup:
    def test_discover(self, components_dir):
        assert discover(components_dir) == [
            components_dir / "footer" / "simple",
            components_dir / "hero" / "dark",
        ]

    def test_find(self, components_dir):
        repository = ComponentRepository(components_dir)
        assert repository.find("hero", "dark") == components_dir / "hero" / "dark"
        assert repository.find("hero", "light") is None

    def test_find_rejects_hidden_names(self, components_dir):
        (components_dir / ".cache" / "x").mkdir(parents=True)
        assert ComponentRepository(components_dir).find(".cache", "x") is None


class TestPaths:
    @pytest.mark.parametrize(
        ("name", "valid"),
        [("dark-hero", True), ("hero2", True), ("Dark", False), ("dark_hero", False), ("", False), ("a b", False)],
    )
    def test_validate_name(self, name, valid):
        assert validate_component_name(name) is valid
        assert validate_component_type(name) is valid

    def test_component_path(self):
        assert component_path("hero", "dark") == Path("components/hero/dark")
        assert component_path("hero", "dark", base="ui") == Path("ui/hero/dark")

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("components/hero/dark", ("hero", "dark")),
            ("/abs/ui/hero/dark/", ("hero", "dark")),
            (Path("hero/dark"), ("hero", "dark")),
            ("hero", None),
            ("", None),
        ],
    )
    def test_parse_component_path(self, path, expected):
        assert parse_component_path(path) == expected
