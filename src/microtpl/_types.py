"""Token types for the microtpl tokenizer.

A template scans into a flat sequence of tokens. Literal tokens carry raw
output text; directive tokens carry Python source extracted from
``<% ... %>`` regions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Kind of a template token."""

    LITERAL = "literal"
    """Raw output text, reproduced verbatim."""

    CONTROL_FLOW = "control_flow"
    """Python statement executed for its side effect (``<% ... %>``)."""

    EXPRESSION = "expression"
    """Python expression whose value is appended to the output (``<%= ... %>``)."""


@dataclass(frozen=True, slots=True)
class Token:
    """A single template token.

    Tokens are immutable for thread-safety.

    Attributes:
        kind: Literal, control-flow or expression token
        content: Literal text, or the Python source of a directive. Text is
            in normalized form (see ``microtpl.lexer.normalize``).
        offset: Index in the normalized text where the token starts. For
            directives this is the position of the open marker.
    """

    kind: TokenKind
    content: str
    offset: int = 0

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.content!r})"
