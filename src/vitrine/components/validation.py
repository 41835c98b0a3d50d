"""Field validation, keyed by FieldKind.

The template engine never enforces field kinds; this side-table lets the
preview server (or any caller) report data that does not match what a
component declares.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from vitrine.components.models import ComponentDefinition, Field, FieldKind
from vitrine.template.helpers import is_number


@dataclass(frozen=True, slots=True)
class FieldIssue:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


def _check_text(field: Field, value: Any) -> str | None:
    if not isinstance(value, str):
        return "must be text"
    rules = field.validation
    if rules is None:
        return None
    if rules.min is not None and len(value) < rules.min:
        return f"must be at least {rules.min:g} characters"
    if rules.max is not None and len(value) > rules.max:
        return f"must be at most {rules.max:g} characters"
    if rules.pattern:
        try:
            matched = re.search(rules.pattern, value)
        except (re.error, TypeError):
            return f"has an unusable validation pattern {rules.pattern!r}"
        if not matched:
            return f"must match {rules.pattern}"
    return None


def _check_number(field: Field, value: Any) -> str | None:
    if not is_number(value):
        return "must be a number"
    rules = field.validation
    if rules is None:
        return None
    if rules.min is not None and value < rules.min:
        return f"must be at least {rules.min:g}"
    if rules.max is not None and value > rules.max:
        return f"must be at most {rules.max:g}"
    return None


def _check_boolean(field: Field, value: Any) -> str | None:
    return None if isinstance(value, bool) else "must be true or false"


def _check_select(field: Field, value: Any) -> str | None:
    choices = field.option_values
    if choices and value not in choices:
        return f"must be one of {', '.join(map(str, choices))}"
    return None


def _check_url(field: Field, value: Any) -> str | None:
    if not isinstance(value, str):
        return "must be a URL"
    if value.startswith(("/", "#", "?")):
        return None
    parsed = urlparse(value)
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return None
    if parsed.scheme in ("mailto", "tel") and parsed.path:
        return None
    return "must be an absolute http(s) URL or a site-relative path"


def _check_image(field: Field, value: Any) -> str | None:
    return None if isinstance(value, str) and value else "must be an image path or URL"


def _check_list(field: Field, value: Any) -> str | None:
    if not isinstance(value, (list, tuple)):
        return "must be a list"
    rules = field.validation
    if rules is None:
        return None
    if rules.min is not None and len(value) < rules.min:
        return f"must have at least {rules.min:g} items"
    if rules.max is not None and len(value) > rules.max:
        return f"must have at most {rules.max:g} items"
    return None


def _check_object(field: Field, value: Any) -> str | None:
    return None if isinstance(value, Mapping) else "must be an object"


KIND_CHECKS: dict[FieldKind, Callable[[Field, Any], str | None]] = {
    FieldKind.TEXT: _check_text,
    FieldKind.TEXTAREA: _check_text,
    FieldKind.NUMBER: _check_number,
    FieldKind.BOOLEAN: _check_boolean,
    FieldKind.SELECT: _check_select,
    FieldKind.URL: _check_url,
    FieldKind.IMAGE: _check_image,
    FieldKind.LIST: _check_list,
    FieldKind.OBJECT: _check_object,
}


def validate_data(definition: ComponentDefinition, data: Mapping[str, Any]) -> list[FieldIssue]:
    """Check ``data`` against the component's fields.

    Missing optional fields are fine; ``None`` counts as missing. A field's
    ``validation.message`` replaces the generated message.

    Example:
        >>> validate_data(definition, {"title": 5})
        [FieldIssue(field='title', message='must be text')]
    """
    issues: list[FieldIssue] = []
    for field in definition.fields:
        value = data.get(field.name)
        if value is None or value == "":
            if field.required:
                issues.append(FieldIssue(field.name, "is required"))
            continue

        problem = KIND_CHECKS[field.kind](field, value)
        if problem is not None:
            message = field.validation.message if field.validation and field.validation.message else problem
            issues.append(FieldIssue(field.name, message))
    return issues
