"""Component data model.

Definitions are parsed once from ``meta.json`` and never mutated; compiled
components are produced fresh by every build.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any

from vitrine.components.errors import MetadataError


class FieldKind(Enum):
    """The kinds of input a component field accepts."""

    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SELECT = "select"
    URL = "url"
    IMAGE = "image"
    LIST = "list"
    OBJECT = "object"


class _NoDefault:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True, slots=True)
class FieldValidation:
    min: float | None = None
    max: float | None = None
    pattern: str | None = None
    message: str | None = None

    @classmethod
    def from_meta(cls, raw: Any, field_name: str) -> FieldValidation:
        if not isinstance(raw, Mapping):
            raise MetadataError(f"Field '{field_name}': 'validation' must be an object")
        for key in ("min", "max"):
            value = raw.get(key)
            if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
                raise MetadataError(f"Field '{field_name}': validation '{key}' must be a number")
        pattern = raw.get("pattern")
        if pattern is not None:
            if not isinstance(pattern, str):
                raise MetadataError(f"Field '{field_name}': validation 'pattern' must be a string")
            try:
                re.compile(pattern)
            except re.error as e:
                raise MetadataError(
                    f"Field '{field_name}': invalid validation pattern {pattern!r}: {e}"
                ) from e
        return cls(
            min=raw.get("min"),
            max=raw.get("max"),
            pattern=pattern,
            message=raw.get("message"),
        )


@dataclass(frozen=True, slots=True)
class Field:
    """One named, typed input slot of a component.

    ``default`` is ``NO_DEFAULT`` when the field declares none, which is
    different from a declared ``null`` default.
    """

    name: str
    kind: FieldKind
    label: str
    default: Any = NO_DEFAULT
    required: bool = False
    options: tuple[Any, ...] = ()
    placeholder: str | None = None
    help_text: str | None = None
    validation: FieldValidation | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    def default_value(self) -> Any:
        """A private copy of the default, so renders never share mutable state."""
        return copy.deepcopy(self.default)

    @property
    def option_values(self) -> tuple[Any, ...]:
        """Select options as plain values (``{label, value}`` entries unwrapped)."""
        return tuple(
            option.get("value") if isinstance(option, Mapping) else option for option in self.options
        )

    @classmethod
    def from_meta(cls, raw: Any) -> Field:
        if not isinstance(raw, Mapping):
            raise MetadataError("Each field must be an object")
        name = raw.get("name")
        if not isinstance(name, str) or not name:
            raise MetadataError("Each field needs a non-empty 'name'")
        try:
            kind = FieldKind(raw.get("type", "text"))
        except ValueError:
            raise MetadataError(f"Field '{name}': unknown type {raw.get('type')!r}") from None
        options = raw.get("options") or ()
        if not isinstance(options, (list, tuple)):
            raise MetadataError(f"Field '{name}': 'options' must be a list")
        validation = raw.get("validation")
        return cls(
            name=name,
            kind=kind,
            label=str(raw.get("label") or name),
            default=raw["default"] if "default" in raw else NO_DEFAULT,
            required=bool(raw.get("required", False)),
            options=tuple(options),
            placeholder=raw.get("placeholder"),
            help_text=raw.get("helpText"),
            validation=FieldValidation.from_meta(validation, name) if validation is not None else None,
        )


@dataclass(frozen=True, slots=True)
class PreviewHints:
    width: int | None = None
    height: int | None = None
    responsive: bool = False

    @classmethod
    def from_meta(cls, raw: Any) -> PreviewHints:
        if not isinstance(raw, Mapping):
            raise MetadataError("'preview' must be an object")
        for key in ("width", "height"):
            value = raw.get(key)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
                raise MetadataError(f"'preview.{key}' must be a whole number of pixels")
        return cls(
            width=raw.get("width"),
            height=raw.get("height"),
            responsive=bool(raw.get("responsive", False)),
        )


@dataclass(frozen=True, slots=True)
class ComponentDefinition:
    """The declared shape of one ``type/variation`` pair.

    Attributes:
        type: Component type (``hero``, ``header``)
        variation: Named variation of the type (``dark-header``)
        display_name: Human-readable name (``meta.name``)
        vendors: Third-party bundles the component needs, in load order
        fields: Declared inputs, names unique
        meta: The parsed ``meta.json`` as read
    """

    type: str
    variation: str
    display_name: str
    fields: tuple[Field, ...] = ()
    vendors: tuple[str, ...] = ()
    description: str | None = None
    version: str | None = None
    author: str | None = None
    tags: tuple[str, ...] = ()
    preview: PreviewHints | None = None
    meta: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @property
    def key(self) -> tuple[str, str]:
        return (self.type, self.variation)

    def get_field(self, name: str) -> Field | None:
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        return None

    def defaults(self) -> dict[str, Any]:
        """Default data: every field that declares a default."""
        return {f.name: f.default_value() for f in self.fields if f.has_default}

    @classmethod
    def from_meta(
        cls,
        raw: Any,
        *,
        type: str | None = None,
        variation: str | None = None,
    ) -> ComponentDefinition:
        """Build a definition from parsed ``meta.json``.

        ``type``/``variation`` (normally the directory names) take precedence
        over the values written in the file.

        Raises:
            MetadataError: If the document is not an object or a field is malformed
        """
        if not isinstance(raw, Mapping):
            raise MetadataError("meta.json must contain a JSON object")

        component_type = type or raw.get("type")
        component_variation = variation or raw.get("variation")
        if not isinstance(component_type, str) or not component_type:
            raise MetadataError("meta.json is missing 'type'")
        if not isinstance(component_variation, str) or not component_variation:
            raise MetadataError("meta.json is missing 'variation'")

        raw_fields = raw.get("fields", [])
        if not isinstance(raw_fields, list):
            raise MetadataError("'fields' must be a list")
        fields = tuple(Field.from_meta(item) for item in raw_fields)
        seen: set[str] = set()
        for item in fields:
            if item.name in seen:
                raise MetadataError(f"Duplicate field name '{item.name}'")
            seen.add(item.name)

        vendors = raw.get("vendors") or []
        if not isinstance(vendors, list) or not all(isinstance(v, str) for v in vendors):
            raise MetadataError("'vendors' must be a list of names")

        preview = raw.get("preview")
        return cls(
            type=component_type,
            variation=component_variation,
            display_name=str(raw.get("name") or component_variation),
            fields=fields,
            vendors=tuple(vendors),
            description=raw.get("description"),
            version=raw.get("version"),
            author=raw.get("author"),
            tags=tuple(raw.get("tags") or ()),
            preview=PreviewHints.from_meta(preview) if preview is not None else None,
            meta=MappingProxyType(dict(raw)),
        )


@dataclass(frozen=True, slots=True)
class AssetManifest:
    """Auxiliary asset files, as posix paths relative to the ``assets`` directory."""

    css: tuple[str, ...] = ()
    js: tuple[str, ...] = ()
    images: tuple[str, ...] = ()

    def including_css(self, path: str) -> AssetManifest:
        if path in self.css:
            return self
        return AssetManifest(tuple(sorted((*self.css, path))), self.js, self.images)

    def to_dict(self) -> dict[str, list[str]]:
        return {"css": list(self.css), "js": list(self.js), "images": list(self.images)}


@dataclass(frozen=True, slots=True)
class CompiledComponent:
    """Everything needed to render one component, produced by a single build."""

    definition: ComponentDefinition
    template_source: str
    styles: str = ""
    script: str = ""
    assets: AssetManifest = field(default_factory=AssetManifest)
    location: Path | None = None

    @property
    def name(self) -> str:
        return f"{self.definition.type}/{self.definition.variation}"


@dataclass(frozen=True, slots=True)
class RenderRequest:
    """Data and output flags for one render call."""

    data: Mapping[str, Any] = field(default_factory=dict)
    preview: bool = False
    inline_styles: bool = False
    inline_scripts: bool = False

    @classmethod
    def create(cls, data: Mapping[str, Any] | None = None, **flags: bool) -> RenderRequest:
        return cls(dict(data or {}), **flags)
