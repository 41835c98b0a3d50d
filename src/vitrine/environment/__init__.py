"""Vitrine environment: configuration, helpers, loaders and errors."""

from vitrine.environment.core import Environment
from vitrine.environment.exceptions import (
    ErrorCode,
    HelperError,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
)
from vitrine.environment.helpers import DEFAULT_HELPERS
from vitrine.environment.loaders import DictLoader, FileSystemLoader
from vitrine.environment.registry import HelperRegistry, pass_options

__all__ = [
    "DEFAULT_HELPERS",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "HelperError",
    "HelperRegistry",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "pass_options",
]
