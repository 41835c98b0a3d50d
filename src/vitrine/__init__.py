"""Vitrine: discover, build, render and preview UI components.

A component is a directory ``{type}/{variation}`` holding a ``meta.json``
descriptor, an ``index.html`` template and optional SCSS, CSS and script
assets. Vitrine scans a components tree, compiles each component's assets,
renders its template against data with a Handlebars-style engine, and
serves live previews with hot update.

Quickstart:
    >>> from vitrine import Environment
    >>> env = Environment()
    >>> render = env.compile("<h1>{{uppercase title}}</h1>")
    >>> render({"title": "Hello"})
    '<h1>HELLO</h1>'

Components:
    >>> from vitrine import BuildOptions, ComponentBuilder, ComponentRenderer, RenderRequest
    >>> builder = ComponentBuilder(BuildOptions(components_dir="components"))
    >>> component = builder.build("components/hero/dark")
    >>> ComponentRenderer().render(component, RenderRequest({"title": "Hi"}, preview=True))

Architecture:
Template Source → Lexer → Parser → Vitrine AST → Compiler → render closures

Pipeline stages:
1. **Repository**: scans ``{type}/{variation}`` directories for descriptors
2. **Builder**: snapshots one directory, compiles SCSS with libsass,
   syntax-checks the template
3. **Renderer**: merges field defaults, renders, optionally inlines
   assets and wraps the preview chrome
4. **Preview server**: FastAPI app with the preview middleware, gallery
   and hot-update websocket (``vitrine serve``)

Thread-Safety:
- Templates compile to closures over an immutable helper snapshot
- Rendering uses only local state (StringBuilder pattern, no shared buffers)
- Helper and partial registration use copy-on-write and are refused while
  a render is in progress

"""

from vitrine._types import Token, TokenType
from vitrine.components import (
    AssetCompiler,
    AssetManifest,
    CompileFailure,
    CompiledComponent,
    ComponentBuilder,
    ComponentDefinition,
    ComponentRenderer,
    ComponentRepository,
    DiscoveryWarning,
    Field,
    FieldKind,
    MetadataError,
    RenderFailure,
    RenderRequest,
    VitrineError,
    discover,
    merge_defaults,
    validate_data,
)
from vitrine.config import BuildOptions, PreviewConfig
from vitrine.environment import (
    DEFAULT_HELPERS,
    DictLoader,
    Environment,
    ErrorCode,
    FileSystemLoader,
    HelperError,
    HelperRegistry,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
    pass_options,
)
from vitrine.render_context import RenderContext, get_render_context, render_context
from vitrine.template import HelperOptions, Markup, Template
from vitrine.utils.html import escape, html_escape

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_HELPERS",
    "AssetCompiler",
    "AssetManifest",
    "BuildOptions",
    "CompileFailure",
    "CompiledComponent",
    "ComponentBuilder",
    "ComponentDefinition",
    "ComponentRenderer",
    "ComponentRepository",
    "DictLoader",
    "DiscoveryWarning",
    "Environment",
    "ErrorCode",
    "Field",
    "FieldKind",
    "FileSystemLoader",
    "HelperError",
    "HelperOptions",
    "HelperRegistry",
    "Markup",
    "MetadataError",
    "PreviewConfig",
    "RenderContext",
    "RenderFailure",
    "RenderRequest",
    "Template",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "Token",
    "TokenType",
    "VitrineError",
    "__version__",
    "discover",
    "escape",
    "get_render_context",
    "html_escape",
    "merge_defaults",
    "pass_options",
    "render_context",
    "validate_data",
]
