"""Vitrine Template package: compiled template objects ready for rendering."""

from vitrine.template.core import Template
from vitrine.template.frame import Frame
from vitrine.template.options import HelperOptions
from vitrine.utils.html import Markup

__all__ = [
    "Frame",
    "HelperOptions",
    "Markup",
    "Template",
]
