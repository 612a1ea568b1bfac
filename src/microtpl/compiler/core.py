"""microtpl Compiler: drives the template pipeline.

Template Source → normalize → Lexer → CodeGenerator → compile() → code object

The Compiler turns template text into a Python code object that defines a
single ``render(ctx)`` function. Executing the code object is left to
``Template``, which owns the resulting function.

Design Principles:
1. **StringBuilder**: Output via ``_append()``, one ``''.join(_buf)`` at the end
2. **Explicit scope**: Context keys are bound as locals at function entry
3. **No wrapping**: Python errors in directive code propagate unchanged
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from microtpl.compiler.codegen import CodeGenerator
from microtpl.lexer import LexerConfig, normalize, tokenize

if TYPE_CHECKING:
    import types

    from microtpl._types import Token

logger = logging.getLogger(__name__)


class Compiler:
    """Compile template source to a Python code object.

    Attributes:
        python_source: Generated Python source of the last compilation
        names: Context names the last compiled template reads

    Example:
        >>> compiler = Compiler()
        >>> code = compiler.compile("Hello, <%= name %>!")
        >>> template = Template(code, source="Hello, <%= name %>!")
        >>> template({"name": "World"})
        'Hello, World!'

    """

    __slots__ = ("_config", "names", "python_source")

    def __init__(self, config: LexerConfig | None = None):
        self._config = config
        self.python_source: str = ""
        self.names: frozenset[str] = frozenset()

    def compile(self, source: str, name: str | None = None) -> types.CodeType:
        """Compile template source.

        Args:
            source: Raw template text
            name: Template name for error messages

        Returns:
            Compiled code object ready for exec()

        Raises:
            UnterminatedDirectiveError: A directive is never closed.
            SyntaxError: Directive code is not valid Python.
        """
        filename = f"<template {name}>" if name else "<template>"
        tokens = tokenize(normalize(source), self._config, name)

        generator = CodeGenerator(filename)
        self.python_source = generator.assemble(self._emit(generator, tokens))
        self.names = generator.names

        logger.debug(
            "Compiled %s: %d tokens, context names %s",
            name or "<inline>",
            len(tokens),
            sorted(self.names),
        )
        return compile(self.python_source, filename, "exec")

    @staticmethod
    def _emit(generator: CodeGenerator, tokens: list[Token]) -> list[str]:
        return [generator.emit(token) for token in tokens]

