"""microtpl lexer: preprocessing and tokenization of template source.

Two steps, both pure and single-pass:

1. ``normalize()`` escapes backslashes, carriage returns and newlines so that
   any run of literal text is a valid body for a single-line, single-quoted
   Python string literal. ``restore()`` is its exact inverse.
2. ``tokenize()`` scans normalized text into LITERAL, CONTROL_FLOW and
   EXPRESSION tokens.

Directive syntax:
    ```
    <% statement %>      CONTROL_FLOW, body kept verbatim
    <%= expression %>    EXPRESSION, descriptor stripped, body trimmed
    anything else        LITERAL
    ```

Example:
    >>> tokenize("Hi <%= name %>!")
    [Token(LITERAL, 'Hi '), Token(EXPRESSION, 'name'), Token(LITERAL, '!')]

"""

from __future__ import annotations

import re
from dataclasses import dataclass

from microtpl._types import Token, TokenKind
from microtpl.environment.exceptions import UnterminatedDirectiveError

# Order matters: backslashes are doubled before the other escapes are added
_ESCAPES = (("\\", "\\\\"), ("\r", "\\r"), ("\n", "\\n"))
_UNESCAPES = {"\\": "\\", "r": "\r", "n": "\n"}
_ESCAPE_RE = re.compile(r"\\([\\rn])")


def normalize(template: str) -> str:
    """Escape line breaks (and backslashes) in raw template text.

    Every newline becomes the two characters ``\\n``. Backslashes are doubled
    first so the transformation stays reversible, and carriage returns become
    ``\\r``.

    Example:
        >>> normalize("a\\nb")
        'a\\\\nb'
    """
    for raw, escaped in _ESCAPES:
        template = template.replace(raw, escaped)
    return template


def restore(text: str) -> str:
    """Undo ``normalize()``."""
    return _ESCAPE_RE.sub(lambda m: _UNESCAPES[m.group(1)], text)


@dataclass(frozen=True, slots=True)
class LexerConfig:
    """Delimiter configuration for the lexer.

    Attributes:
        open_marker: Start of a directive
        close_marker: End of a directive
        expression_descriptor: Leading text that turns a directive into an
            output expression
    """

    open_marker: str = "<%"
    close_marker: str = "%>"
    expression_descriptor: str = "="

    def __post_init__(self) -> None:
        for field_name in ("open_marker", "close_marker", "expression_descriptor"):
            value = getattr(self, field_name)
            if not value:
                raise ValueError(f"LexerConfig.{field_name} must not be empty")
            # normalize() rewrites these, so a marker holding one never matches
            if any(raw in value for raw, _ in _ESCAPES):
                raise ValueError(
                    f"LexerConfig.{field_name} must not contain a backslash or line break, got {value!r}"
                )


DEFAULT_CONFIG = LexerConfig()


class Lexer:
    """Scan normalized template text into tokens.

    The lexer is a two-state scanner driven by a single cursor: at each step
    the text under the cursor is either the start of a directive or the start
    of a literal run. Literal runs are maximal, so two literal tokens are never
    adjacent.

    Example:
        >>> lexer = Lexer("<% x = 1 %><%= x %>")
        >>> [t.kind.name for t in lexer.tokenize()]
        ['CONTROL_FLOW', 'EXPRESSION']

    """

    __slots__ = ("_config", "_name", "_pos", "_source")

    def __init__(
        self,
        source: str,
        config: LexerConfig | None = None,
        name: str | None = None,
    ):
        self._source = source
        self._config = config or DEFAULT_CONFIG
        self._name = name
        self._pos = 0

    def tokenize(self) -> list[Token]:
        """Tokenize the whole source.

        Raises:
            UnterminatedDirectiveError: An open marker has no close marker.
        """
        source = self._source
        open_marker = self._config.open_marker
        tokens: list[Token] = []
        self._pos = 0

        while self._pos < len(source):
            if source.startswith(open_marker, self._pos):
                tokens.append(self._directive_token())
            else:
                tokens.append(self._literal_token())

        return tokens

    def _directive_token(self) -> Token:
        config = self._config
        start = self._pos
        end = self._source.find(config.close_marker, start)
        if end < 0:
            raise self._unterminated(start)

        body = self._source[start + len(config.open_marker) : end]
        self._pos = end + len(config.close_marker)

        descriptor = config.expression_descriptor
        if body.startswith(descriptor):
            return Token(TokenKind.EXPRESSION, body[len(descriptor) :].strip(), start)
        return Token(TokenKind.CONTROL_FLOW, body, start)

    def _literal_token(self) -> Token:
        start = self._pos
        end = self._source.find(self._config.open_marker, start)
        if end < 0:
            end = len(self._source)
        self._pos = end
        return Token(TokenKind.LITERAL, self._source[start:end], start)

    def _unterminated(self, pos: int) -> UnterminatedDirectiveError:
        # Positions are reported against the original (restored) text
        prefix = restore(self._source[:pos])
        lineno = prefix.count("\n") + 1
        col_offset = len(prefix) - (prefix.rfind("\n") + 1)
        return UnterminatedDirectiveError(
            f"unterminated directive, expected {self._config.close_marker!r}",
            lineno=lineno,
            name=self._name,
            source=restore(self._source),
            col_offset=col_offset,
        )


def tokenize(
    template: str,
    config: LexerConfig | None = None,
    name: str | None = None,
) -> list[Token]:
    """Tokenize normalized template text.

    Convenience function wrapping ``Lexer``. Empty input yields an empty list.

    Args:
        template: Template text, normally already passed through ``normalize()``
        config: Delimiter configuration (defaults to ``<%``/``%>``/``=``)
        name: Template name used in error messages

    Raises:
        UnterminatedDirectiveError: An open marker has no close marker.
    """
    return Lexer(template, config, name).tokenize()
