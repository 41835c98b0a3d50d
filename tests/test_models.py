"""Tests for component definitions parsed from meta.json."""

from __future__ import annotations

import pytest
from hypothesis import given

from vitrine import ComponentDefinition, Field, FieldKind, MetadataError
from vitrine.components import NO_DEFAULT, AssetManifest, CompiledComponent, PreviewHints, RenderRequest

from .strategies import field_definitions

META = {
    "name": "Dark Hero",
    "type": "hero",
    "variation": "dark",
    "description": "A hero",
    "version": "1.2.0",
    "author": "Design",
    "tags": ["landing"],
    "vendors": ["gsap", "aos"],
    "fields": [
        {"name": "title", "type": "text", "label": "Title", "default": "Welcome", "required": True},
        {"name": "count", "type": "number"},
        {"name": "theme", "type": "select", "options": [{"label": "Dark", "value": "dark"}, "light"]},
        {"name": "cleared", "type": "text", "default": None},
    ],
    "preview": {"width": 800, "height": 400, "responsive": True},
}


class TestComponentDefinition:
    def test_from_meta(self):
        definition = ComponentDefinition.from_meta(META)
        assert definition.key == ("hero", "dark")
        assert definition.display_name == "Dark Hero"
        assert definition.vendors == ("gsap", "aos")
        assert definition.tags == ("landing",)
        assert definition.preview == PreviewHints(width=800, height=400, responsive=True)
        assert definition.meta["version"] == "1.2.0"

    def test_meta_is_read_only(self):
        definition = ComponentDefinition.from_meta(META)
        with pytest.raises(TypeError):
            definition.meta["name"] = "changed"  # type: ignore[index]

    def test_directory_names_win(self):
        definition = ComponentDefinition.from_meta(META, type="banner", variation="light")
        assert definition.key == ("banner", "light")

    def test_display_name_falls_back_to_variation(self):
        definition = ComponentDefinition.from_meta({"fields": []}, type="hero", variation="dark")
        assert definition.display_name == "dark"

    def test_defaults(self):
        definition = ComponentDefinition.from_meta(META)
        assert definition.defaults() == {"title": "Welcome", "cleared": None}

    def test_defaults_are_private_copies(self):
        definition = ComponentDefinition.from_meta(
            {"fields": [{"name": "items", "type": "list", "default": ["a"]}]}, type="t", variation="v"
        )
        first = definition.defaults()
        first["items"].append("b")
        assert definition.defaults() == {"items": ["a"]}

    def test_get_field(self):
        definition = ComponentDefinition.from_meta(META)
        assert definition.get_field("count").kind is FieldKind.NUMBER
        assert definition.get_field("missing") is None

    @pytest.mark.parametrize(
        "raw",
        [
            [],
            {"variation": "dark"},
            {"type": "hero"},
            {"type": "hero", "variation": "dark", "fields": {}},
            {"type": "hero", "variation": "dark", "vendors": "gsap"},
            {"type": "hero", "variation": "dark", "preview": "wide"},
            {"type": "hero", "variation": "dark", "preview": {"width": "100%"}},
            {"type": "hero", "variation": "dark", "preview": {"height": 1.5}},
            {"type": "hero", "variation": "dark", "preview": {"width": True}},
            {"type": "hero", "variation": "dark", "fields": [{"name": "a"}, {"name": "a"}]},
        ],
    )
    def test_invalid_meta(self, raw):
        with pytest.raises(MetadataError):
            ComponentDefinition.from_meta(raw)

    @given(raw_fields=field_definitions())
    def test_fields_roundtrip(self, raw_fields):
        definition = ComponentDefinition.from_meta({"fields": raw_fields}, type="t", variation="v")
        assert [f.name for f in definition.fields] == [raw["name"] for raw in raw_fields]
        assert set(definition.defaults()) == {raw["name"] for raw in raw_fields if "default" in raw}


class TestField:
    def test_kind_defaults_to_text(self):
        assert Field.from_meta({"name": "title"}).kind is FieldKind.TEXT

    def test_label_defaults_to_name(self):
        assert Field.from_meta({"name": "title"}).label == "title"

    def test_declared_null_default(self):
        field = Field.from_meta({"name": "x", "default": None})
        assert field.has_default
        assert field.default is None

    def test_no_default(self):
        field = Field.from_meta({"name": "x"})
        assert not field.has_default
        assert field.default is NO_DEFAULT

    def test_option_values(self):
        field = Field.from_meta({"name": "x", "type": "select", "options": [{"label": "A", "value": "a"}, "b"]})
        assert field.option_values == ("a", "b")

    def test_validation_rules(self):
        field = Field.from_meta({"name": "x", "validation": {"min": 2, "max": 5, "message": "2-5 please"}})
        assert field.validation.min == 2
        assert field.validation.message == "2-5 please"

    @pytest.mark.parametrize(
        "raw",
        [
            "title",
            {},
            {"name": ""},
            {"name": "x", "type": "color"},
            {"name": "x", "options": "a,b"},
            {"name": "x", "validation": []},
            {"name": "x", "validation": {"min": "2"}},
            {"name": "x", "validation": {"pattern": "([unclosed"}},
            {"name": "x", "validation": {"pattern": 5}},
        ],
    )
    def test_invalid_field(self, raw):
        with pytest.raises(MetadataError):
            Field.from_meta(raw)

    def test_invalid_pattern_names_field(self):
        with pytest.raises(MetadataError, match="invalid validation pattern"):
            Field.from_meta({"name": "code", "validation": {"pattern": "([unclosed"}})


class TestValueTypes:
    def test_manifest_including_css(self):
        manifest = AssetManifest(css=("css/b.css",))
        updated = manifest.including_css("css/a.css")
        assert updated.css == ("css/a.css", "css/b.css")
        assert updated.including_css("css/a.css") is updated

    def test_manifest_to_dict(self):
        assert AssetManifest(js=("js/a.js",)).to_dict() == {"css": [], "js": ["js/a.js"], "images": []}

    def test_compiled_component_name(self):
        definition = ComponentDefinition.from_meta({}, type="hero", variation="dark")
        assert CompiledComponent(definition, "<p></p>").name == "hero/dark"

    def test_render_request_create(self):
        request = RenderRequest.create(None, preview=True)
        assert request.data == {}
        assert request.preview is True
        assert request.inline_styles is False
