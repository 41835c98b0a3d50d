"""Pytest configuration and fixtures for Vitrine tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from vitrine import BuildOptions, DictLoader, Environment
from vitrine.config import PreviewConfig


@pytest.fixture
def env():
    """Create a basic Vitrine Environment."""
    return Environment()


@pytest.fixture
def env_with_loader():
    """Create a Vitrine Environment with DictLoader partials."""
    loader = DictLoader(
        {
            "badge": "<b>{{label}}</b>",
            "card": "<div class=\"card\">{{title}}{{#if badge}} {{> badge label=badge}}{{/if}}</div>",
            "shared/footer": "<footer>{{@root.site}}</footer>",
        }
    )
    return Environment(loader=loader)


def write_component(
    root: Path,
    component_type: str,
    variation: str,
    *,
    meta: dict[str, Any] | str | None = None,
    template: str | None = "<section>{{title}}</section>",
    scss: str | None = None,
    css: str | None = None,
    script: str | None = None,
) -> Path:
    """Create ``root/type/variation`` with the given files; returns its path.

    ``meta`` may be a dict (serialized as JSON) or raw text, which lets
    tests write corrupt descriptors.
    """
    location = root / component_type / variation
    location.mkdir(parents=True, exist_ok=True)
    if meta is None:
        meta = {
            "name": variation.replace("-", " ").title(),
            "type": component_type,
            "variation": variation,
            "fields": [{"name": "title", "type": "text", "default": "Hello"}],
        }
    (location / "meta.json").write_text(meta if isinstance(meta, str) else json.dumps(meta), encoding="utf-8")
    if template is not None:
        (location / "index.html").write_text(template, encoding="utf-8")
    files = {
        Path("assets", "scss", "styles.scss"): scss,
        Path("assets", "css", "styles.css"): css,
        Path("assets", "js", "script.js"): script,
    }
    for relative, content in files.items():
        if content is not None:
            target = location / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
    return location


@pytest.fixture
def components_dir(tmp_path):
    """A components tree with a hero and a footer component."""
    root = tmp_path / "components"
    write_component(
        root,
        "hero",
        "dark",
        meta={
            "name": "Dark Hero",
            "type": "hero",
            "variation": "dark",
            "description": "Full-width hero on a dark background",
            "vendors": ["gsap"],
            "fields": [
                {"name": "title", "type": "text", "label": "Title", "default": "Welcome"},
                {"name": "subtitle", "type": "textarea"},
                {"name": "items", "type": "list", "default": ["one", "two"]},
            ],
            "preview": {"width": 800, "responsive": True},
        },
        template=(
            '<section class="hero">'
            "<h1>{{title}}</h1>"
            "{{#if subtitle}}<p>{{subtitle}}</p>{{/if}}"
            "<ul>{{#each items}}<li>{{this}}</li>{{/each}}</ul>"
            "</section>"
        ),
        css=".hero { color: white; }",
        script="console.log('hero');",
    )
    write_component(
        root,
        "footer",
        "simple",
        meta={
            "name": "Simple Footer",
            "type": "footer",
            "variation": "simple",
            "fields": [{"name": "copyright", "type": "text", "default": "ACME"}],
        },
        template="<footer>&copy; {{copyright}}</footer>",
    )
    return root


@pytest.fixture
def build_options(components_dir, tmp_path):
    """Build options over ``components_dir`` with an empty global-assets tree."""
    global_assets = tmp_path / "global-assets"
    (global_assets / "scss").mkdir(parents=True)
    return BuildOptions(components_dir=components_dir, global_assets_dir=global_assets)


@pytest.fixture
def preview_config(components_dir):
    """Preview settings over ``components_dir`` with hot update off."""
    return PreviewConfig(components_dir=components_dir, hot_update=False)


def assert_contains(result: str, *expected_parts: str) -> None:
    """Assert result contains all expected parts.

    Args:
        result: The actual rendering result.
        expected_parts: Strings that should all be present in the result.
    """
    for part in expected_parts:
        assert part in result, (
            f"Output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {result!r}"
        )
