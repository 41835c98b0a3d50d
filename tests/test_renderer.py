"""Tests for ComponentRenderer and default merging."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from vitrine import (
    CompileFailure,
    ComponentBuilder,
    ComponentDefinition,
    ComponentRenderer,
    ErrorCode,
    RenderFailure,
    RenderRequest,
    merge_defaults,
)
from vitrine.components import CompiledComponent

from .conftest import assert_contains
from .strategies import context_data, field_definitions


def make_component(template: str, fields=(), **meta) -> CompiledComponent:
    definition = ComponentDefinition.from_meta({"fields": list(fields), **meta}, type="card", variation="basic")
    return CompiledComponent(definition, template, styles=".card{}", script="init();")


@pytest.fixture
def hero(components_dir, build_options):
    return ComponentBuilder(build_options).build(components_dir / "hero" / "dark")


@pytest.fixture
def renderer():
    return ComponentRenderer()


class TestRender:
    def test_defaults_fill_missing_fields(self, renderer, hero):
        html = renderer.render(hero)
        assert html == '<section class="hero"><h1>Welcome</h1><ul><li>one</li><li>two</li></ul></section>'

    def test_defaults_match_explicit_data(self, renderer, hero):
        explicit = RenderRequest({"title": "Welcome", "items": ["one", "two"]})
        assert renderer.render(hero) == renderer.render(hero, explicit)

    def test_explicit_data_wins(self, renderer, hero):
        html = renderer.render(hero, RenderRequest({"title": "Hi", "subtitle": "Sub", "items": []}))
        assert html == '<section class="hero"><h1>Hi</h1><p>Sub</p><ul></ul></section>'

    def test_explicit_none_wins_over_default(self, renderer, hero):
        assert "<h1></h1>" in renderer.render(hero, RenderRequest({"title": None}))

    def test_render_is_pure(self, renderer, hero):
        data = {"title": "Same"}
        request = RenderRequest(data)
        assert renderer.render(hero, request) == renderer.render(hero, request)
        assert data == {"title": "Same"}

    def test_inline_styles(self, renderer):
        component = make_component("<p>x</p>")
        assert renderer.render(component, RenderRequest(inline_styles=True)) == "<style>.card{}</style>\n<p>x</p>"

    def test_inline_scripts(self, renderer):
        component = make_component("<p>x</p>")
        html = renderer.render(component, RenderRequest(inline_scripts=True))
        assert html == "<p>x</p>\n<script>init();</script>"

    def test_empty_assets_are_not_inlined(self, renderer):
        definition = ComponentDefinition.from_meta({}, type="card", variation="basic")
        component = CompiledComponent(definition, "<p>x</p>")
        assert renderer.render(component, RenderRequest(inline_styles=True, inline_scripts=True)) == "<p>x</p>"

    def test_preview_chrome(self, renderer, hero):
        html = renderer.render(hero, RenderRequest(preview=True))
        assert_contains(
            html,
            '<div class="vitrine-preview vitrine-preview--responsive" style="max-width: 800px">',
            '<span class="vitrine-preview__type">hero</span>',
            '<span class="vitrine-preview__name">Dark Hero</span>',
            '<div class="vitrine-preview__content">',
            "<h1>Welcome</h1>",
        )

    def test_preview_chrome_escapes_names(self, renderer):
        component = make_component("<p></p>", name="<Card>")
        assert "&lt;Card&gt;" in renderer.render(component, RenderRequest(preview=True))

    def test_preview_wraps_inlined_assets(self, renderer):
        component = make_component("<p>x</p>")
        html = renderer.render(component, RenderRequest(preview=True, inline_styles=True))
        assert html.index("vitrine-preview__content") < html.index("<style>")


class TestRenderFailures:
    def test_syntax_error(self, renderer):
        with pytest.raises(CompileFailure) as exc_info:
            renderer.render(make_component("{{#if x}}"))
        assert exc_info.value.code is ErrorCode.TEMPLATE_COMPILE

    def test_helper_error(self, renderer):
        renderer.register_helper("explode", lambda value: value / 0)
        with pytest.raises(RenderFailure) as exc_info:
            renderer.render(make_component("{{explode 1}}"))
        error = exc_info.value
        assert error.code is ErrorCode.COMPONENT_RENDER
        assert error.__cause__ is not None

    def test_missing_partial(self, renderer):
        with pytest.raises(RenderFailure, match="card/basic"):
            renderer.render(make_component("{{> nope}}"))

    def test_unknown_helper(self, renderer):
        with pytest.raises(RenderFailure):
            renderer.render(make_component("{{nope 1}}"))


class TestRendererRegistry:
    def test_register_partial(self, renderer):
        renderer.register_partial("badge", "<b>{{label}}</b>")
        html = renderer.render(make_component("{{> badge label=title}}"), RenderRequest({"title": "New"}))
        assert html == "<b>New</b>"
        assert renderer.partials() == ["badge"]

    def test_register_helper(self, renderer):
        renderer.register_helper("shout", lambda value: f"{value}!")
        assert renderer.render(make_component("{{shout title}}"), RenderRequest({"title": "Hi"})) == "Hi!"
        assert "shout" in renderer.helpers()

    def test_renderers_are_isolated(self):
        first, second = ComponentRenderer(), ComponentRenderer()
        first.register_helper("only_first", lambda: "x")
        assert "only_first" not in second.helpers()

    def test_render_many(self, renderer, hero, components_dir, build_options):
        footer = ComponentBuilder(build_options).build(components_dir / "footer" / "simple")
        results = renderer.render_many([(hero, {"title": "A"}), (footer, {})], inline_styles=True)
        assert results[0].startswith("<style>.hero { color: white; }</style>\n")
        assert results[1] == "<footer>&copy; ACME</footer>"


class TestMergeDefaults:
    def test_merge(self):
        definition = make_component(
            "", fields=[{"name": "a", "default": 1}, {"name": "b", "default": 2}, {"name": "c"}]
        ).definition
        assert merge_defaults(definition, {"b": None, "extra": True}) == {"a": 1, "b": None, "extra": True}

    @given(raw_fields=field_definitions(), data=context_data)
    def test_merge_properties(self, raw_fields, data):
        definition = ComponentDefinition.from_meta({"fields": raw_fields}, type="t", variation="v")
        merged = merge_defaults(definition, data)
        for key, value in data.items():
            assert merged[key] == value
        for field in definition.fields:
            if field.name not in data:
                assert (field.name in merged) == field.has_default

    @given(value=st.text(max_size=20))
    def test_merge_does_not_mutate_input(self, value):
        definition = make_component("", fields=[{"name": "a", "default": "x"}]).definition
        data = {"b": value}
        merge_defaults(definition, data)
        assert data == {"b": value}
