"""microtpl Environment: compilation configuration.

An Environment bundles the settings shared by the templates it compiles:

- ``lexer_config``: directive markers (``<%``, ``%>``, ``=`` by default)
- ``globals``: names visible to every template; context keys win on clash

The module-level ``compile()`` uses a default Environment.

Example:
    >>> env = Environment(globals={"site": "example.org"})
    >>> env.from_string("<%= site %>/<%= page %>").render(page="about")
    'example.org/about'

"""

from __future__ import annotations

import logging
from typing import Any

from microtpl.compiler import Compiler
from microtpl.lexer import LexerConfig
from microtpl.template import Template

logger = logging.getLogger(__name__)


class Environment:
    """Configuration for compiling templates.

    Templates snapshot ``globals`` when they are compiled; later changes to
    the environment do not affect existing templates. The environment keeps
    no reference to the templates it produces.

    Attributes:
        lexer_config: Directive delimiters
        globals: Variables available in all templates
    """

    __slots__ = ("globals", "lexer_config")

    def __init__(
        self,
        *,
        lexer_config: LexerConfig | None = None,
        globals: dict[str, Any] | None = None,
    ):
        self.lexer_config = lexer_config or LexerConfig()
        self.globals: dict[str, Any] = dict(globals or {})

    def from_string(self, source: str, name: str | None = None) -> Template:
        """Compile a template from a string.

        Args:
            source: Template source code
            name: Optional template name for error messages

        Returns:
            Compiled Template object

        Raises:
            UnterminatedDirectiveError: A directive is never closed.
            SyntaxError: Directive code is not valid Python.
        """
        compiler = Compiler(self.lexer_config)
        code = compiler.compile(source, name)
        logger.debug("Created template %s", name or "<inline>")
        return Template(
            code,
            source=source,
            python_source=compiler.python_source,
            names=compiler.names,
            name=name,
            globals=self.globals,
        )

    def __repr__(self) -> str:
        config = self.lexer_config
        return (
            f"<Environment markers={config.open_marker!r}..{config.close_marker!r}"
            f" globals={len(self.globals)}>"
        )


def compile(template: str, *, name: str | None = None) -> Template:
    """Compile template source into a render callable.

    Example:
        >>> render = compile("<% for item in items: %>-<%= item %>-<% end %>")
        >>> render({"items": ["a", "b"]})
        '-a--b-'
    """
    return Environment().from_string(template, name)
