"""microtpl environment package: configuration and errors."""

from microtpl.environment.core import Environment, compile
from microtpl.environment.exceptions import (
    ErrorCode,
    TemplateError,
    TemplateSyntaxError,
    UnterminatedDirectiveError,
)

__all__ = [
    "Environment",
    "ErrorCode",
    "TemplateError",
    "TemplateSyntaxError",
    "UnterminatedDirectiveError",
    "compile",
]
