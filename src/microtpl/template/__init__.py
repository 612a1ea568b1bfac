"""microtpl Template package: compiled template objects ready for rendering."""

from microtpl.template.core import Template
from microtpl.template.helpers import str_safe

__all__ = [
    "Template",
    "str_safe",
]
