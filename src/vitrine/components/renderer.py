"""Component renderer: CompiledComponent + data → HTML.

Rendering merges field defaults into the data, compiles the template
(once per call) and renders it. Optional flags inline the styles and
script and wrap the result in the preview chrome.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from vitrine.components.errors import CompileFailure, RenderFailure
from vitrine.components.models import CompiledComponent, ComponentDefinition, RenderRequest
from vitrine.environment import Environment, TemplateError, TemplateSyntaxError
from vitrine.environment.exceptions import ErrorCode
from vitrine.utils.html import html_escape


def merge_defaults(definition: ComponentDefinition, data: Mapping[str, Any]) -> dict[str, Any]:
    """Fill in declared defaults for fields absent from ``data``.

    Explicit data always wins, even when it is ``None``. Fields without a
    default stay absent.
    """
    merged = dict(data)
    for field in definition.fields:
        if field.name not in merged and field.has_default:
            merged[field.name] = field.default_value()
    return merged


def preview_chrome(html: str, definition: ComponentDefinition) -> str:
    """Wrap rendered HTML in the preview container with its info strip."""
    classes = ["vitrine-preview"]
    styles = []
    hints = definition.preview
    if hints is not None:
        if hints.responsive:
            classes.append("vitrine-preview--responsive")
        if hints.width:
            styles.append(f"max-width: {hints.width}px")
        if hints.height:
            styles.append(f"min-height: {hints.height}px")

    return (
        f'\n<div class="{" ".join(classes)}" style="{html_escape("; ".join(styles))}">\n'
        f'  <div class="vitrine-preview__info">\n'
        f'    <span class="vitrine-preview__type">{html_escape(definition.type)}</span>\n'
        f'    <span class="vitrine-preview__name">{html_escape(definition.display_name)}</span>\n'
        f"  </div>\n"
        f'  <div class="vitrine-preview__content">\n'
        f"    {html}\n"
        f"  </div>\n"
        f"</div>"
    )


class ComponentRenderer:
    """Render compiled components.

    Each renderer owns an Environment, so helpers and partials registered on
    one renderer never leak into another.

    Example:
        >>> renderer = ComponentRenderer()
        >>> renderer.render(component, RenderRequest({"title": "Hi"}, inline_styles=True))
        '<style>.hero{...}</style>\\n<section class="hero">Hi</section>'
    """

    def __init__(self, environment: Environment | None = None):
        self.environment = environment or Environment()

    def render(self, component: CompiledComponent, request: RenderRequest | None = None) -> str:
        """Render ``component`` for ``request``.

        Raises:
            CompileFailure: The template does not compile
            RenderFailure: A helper raised, a partial is missing, or nesting
                ran too deep
        """
        request = request or RenderRequest()
        definition = component.definition
        data = merge_defaults(definition, request.data)

        try:
            template = self.environment.from_string(component.template_source, name=component.name)
        except TemplateSyntaxError as e:
            raise CompileFailure(
                f"Template for {component.name} does not compile: {e.message}",
                location=component.location,
                code=ErrorCode.TEMPLATE_COMPILE,
            ) from e

        try:
            html = template.render(data)
        except TemplateError as e:
            raise RenderFailure(
                f"Failed to render {component.name}: {e}",
                location=component.location,
            ) from e

        if request.inline_styles and component.styles:
            html = f"<style>{component.styles}</style>\n{html}"
        if request.inline_scripts and component.script:
            html = f"{html}\n<script>{component.script}</script>"
        if request.preview:
            html = preview_chrome(html, definition)
        return html

    def render_many(
        self,
        items: Iterable[tuple[CompiledComponent, Mapping[str, Any]]],
        *,
        preview: bool = False,
        inline_styles: bool = False,
        inline_scripts: bool = False,
    ) -> list[str]:
        """Render several components with the same flags."""
        return [
            self.render(
                component,
                RenderRequest(
                    dict(data),
                    preview=preview,
                    inline_styles=inline_styles,
                    inline_scripts=inline_scripts,
                ),
            )
            for component, data in items
        ]

    def register_partial(self, name: str, source: str) -> None:
        self.environment.register_partial(name, source)

    def register_helper(self, name: str, func: Callable[..., Any]) -> None:
        self.environment.register_helper(name, func)

    def helpers(self) -> list[str]:
        return self.environment.helpers.names()

    def partials(self) -> list[str]:
        return self.environment.list_partials()
