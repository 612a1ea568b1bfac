"""microtpl: a micro template compiler.

Compiles text templates with embedded Python directives into render
callables.

Quickstart:
    >>> from microtpl import compile
    >>> render = compile("Hello, <%= name %>!")
    >>> render({"name": "World"})
    'Hello, World!'

Syntax:
    ```
    <% for user in users: %>      statement; a trailing ':' opens a block
      <li><%= user.name %></li>   expression; its value is written out
    <% end %>                     closes the innermost block
    ```

Architecture:
Template Source → normalize → tokenize → CodeGenerator → compile() → exec()

Pipeline stages:
1. **Preprocessor**: Escapes newlines so literal text fits a one-line string literal
2. **Lexer**: Splits normalized text into literal, control-flow and expression tokens
3. **Code generator**: Emits one Python fragment per token, assembles ``render(ctx)``
4. **Template**: Wraps the compiled function with the ``render()`` interface

Context keys are bound to local names at function entry, so directives
read ``user`` rather than ``ctx['user']``. Output is not escaped.

Thread-Safety:
Compilation is pure and rendering uses only local state, so a Template can
be rendered from many threads at once.

"""

from microtpl._types import Token, TokenKind
from microtpl.environment import (
    Environment,
    ErrorCode,
    TemplateError,
    TemplateSyntaxError,
    UnterminatedDirectiveError,
    compile,
)
from microtpl.lexer import Lexer, LexerConfig, normalize, restore, tokenize
from microtpl.template import Template

__version__ = "0.1.0"

__all__ = [
    "Environment",
    "ErrorCode",
    "Lexer",
    "LexerConfig",
    "Template",
    "TemplateError",
    "TemplateSyntaxError",
    "Token",
    "TokenKind",
    "UnterminatedDirectiveError",
    "__version__",
    "compile",
    "normalize",
    "restore",
    "tokenize",
]
