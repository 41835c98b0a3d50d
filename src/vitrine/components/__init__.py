"""Component pipeline: discovery, asset compilation, build and render."""

from vitrine.components.assets import AssetCompiler
from vitrine.components.builder import ComponentBuilder
from vitrine.components.errors import CompileFailure, MetadataError, RenderFailure, VitrineError
from vitrine.components.models import (
    NO_DEFAULT,
    AssetManifest,
    CompiledComponent,
    ComponentDefinition,
    Field,
    FieldKind,
    FieldValidation,
    PreviewHints,
    RenderRequest,
)
from vitrine.components.paths import (
    component_path,
    parse_component_path,
    validate_component_name,
    validate_component_type,
)
from vitrine.components.renderer import ComponentRenderer, merge_defaults
from vitrine.components.repository import (
    IGNORED_DIRS,
    ComponentRepository,
    DiscoveredComponent,
    DiscoveryWarning,
    discover,
)
from vitrine.components.snapshot import ComponentSnapshot
from vitrine.components.validation import FieldIssue, validate_data

__all__ = [
    "IGNORED_DIRS",
    "NO_DEFAULT",
    "AssetCompiler",
    "AssetManifest",
    "CompileFailure",
    "CompiledComponent",
    "ComponentBuilder",
    "ComponentDefinition",
    "ComponentRenderer",
    "ComponentRepository",
    "ComponentSnapshot",
    "DiscoveredComponent",
    "DiscoveryWarning",
    "Field",
    "FieldIssue",
    "FieldKind",
    "FieldValidation",
    "MetadataError",
    "PreviewHints",
    "RenderFailure",
    "RenderRequest",
    "VitrineError",
    "component_path",
    "discover",
    "merge_defaults",
    "parse_component_path",
    "validate_component_name",
    "validate_component_type",
    "validate_data",
]
