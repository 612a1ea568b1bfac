"""Exceptions for the microtpl template compiler.

Exception Hierarchy:
TemplateError (base)
└── TemplateSyntaxError              # Compile-time template syntax error
    └── UnterminatedDirectiveError   # ``<%`` without a matching ``%>``

Only the tokenizer raises these. Errors inside directive code (a Python
``SyntaxError`` in a statement, a ``NameError`` at render time, ...) are
not translated: they surface as the native Python exception.

Example:
    ```
    Syntax Error: unterminated directive, expected '%>'
      --> greeting.html:2:7
       |
      2 | Hello <%= name
       |       ^
    ```

"""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Searchable error codes for microtpl errors.

    Format: M-{CATEGORY}-{NUMBER}
    Categories: LEX (tokenizer)
    """

    UNTERMINATED_DIRECTIVE = "M-LEX-001"

    @property
    def category(self) -> str:
        """Error category (e.g., 'lexer')."""
        prefix = self.value.split("-")[1]
        return {
            "LEX": "lexer",
        }.get(prefix, "unknown")


class TemplateError(Exception):
    """Base exception for all microtpl template errors.

    Enables broad exception handling:

        >>> try:
        ...     template = compile(source)
        ... except TemplateError as e:
        ...     log.error("Template error: %s", e)

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a one-header summary prefixed with its error code."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class TemplateSyntaxError(TemplateError):
    """Compile-time syntax error in template source.

    When ``source`` and ``lineno`` are provided, the error message includes
    a source snippet with the offending line.  If ``col_offset`` is also
    given, a caret (``^``) points at the exact column.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
        source: str | None = None,
        col_offset: int | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.name = name
        self.source = source
        self.col_offset = col_offset
        super().__init__(self._format_message())

    def _location(self) -> str:
        location = self.name or "<template>"
        if self.lineno:
            location += f":{self.lineno}"
            if self.col_offset is not None:
                location += f":{self.col_offset}"
        return location

    def _snippet(self) -> list[str]:
        if not (self.source and self.lineno):
            return []
        lines = self.source.splitlines()
        if not 0 < self.lineno <= len(lines):
            return []
        parts = ["   |", f"{self.lineno:>3} | {lines[self.lineno - 1]}"]
        if self.col_offset is not None:
            parts.append(f"   | {' ' * self.col_offset}^")
        return parts

    def _format_message(self) -> str:
        header = f"Syntax Error: {self.message}\n  --> {self._location()}"
        snippet = self._snippet()
        if snippet:
            return header + "\n" + "\n".join(snippet)
        return header

    def format_compact(self) -> str:
        """Format syntax error as structured terminal diagnostic."""
        code_prefix = f"{self.code.value}: " if self.code else ""
        parts = [f"{code_prefix}{self.message}", f"  --> {self._location()}"]
        snippet = self._snippet()
        if snippet:
            parts.extend(snippet)
            parts.append("   |")
        return "\n".join(parts)


class UnterminatedDirectiveError(TemplateSyntaxError):
    """An open marker has no matching close marker before end of input.

    Fatal: compilation stops and no partial token list or template is
    produced.

    Example:
        >>> tokenize("<% foo")
        UnterminatedDirectiveError: Syntax Error: unterminated directive, expected '%>'

    """

    code: ErrorCode | None = ErrorCode.UNTERMINATED_DIRECTIVE
