"""Python source generation from template tokens.

Each token maps to one fragment of Python source; ``assemble()`` joins the
fragments into a ``render(ctx)`` function:

    ```python
    def render(ctx):
        _buf = []
        _append = _buf.append
        if 'item' in ctx: item = ctx['item']
        if 'items' in ctx: items = ctx['items']
        for item in items:
            pass
            _append('-')
            _append(_str(item))
            _append('-')
        return ''.join(_buf)
    ```

Block structure:
Python blocks are delimited by indentation, so control-flow directives
follow a small convention:

- a statement ending in ``:`` opens a block
- ``<% end %>`` closes the innermost block
- ``elif``/``else``/``except``/``finally`` close the current block and
  open the next one at the same depth
- ``case`` opens inside its ``match``; the ``end`` after the last case
  closes the ``match`` as well

Every opened block starts with ``pass`` so empty bodies stay valid.
"""

from __future__ import annotations

import builtins
import io
import re
import textwrap
from collections.abc import Iterable
from tokenize import COMMENT, TokenError, generate_tokens

from microtpl._types import Token, TokenKind
from microtpl.compiler.scope import collect_names
from microtpl.lexer import restore

INDENT = "    "

END_KEYWORD = "end"
_CONTINUATION_KEYWORDS = frozenset({"elif", "else", "except", "finally"})
_BUILTIN_NAMES = frozenset(name for name in dir(builtins) if not name.startswith("_"))
_KEYWORD_RE = re.compile(r"\s*([A-Za-z_]\w*)")
# Characters a Python source string cannot carry verbatim
_UNSAFE_LITERAL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f\ud800-\udfff]")

_PROLOGUE = (
    "def render(ctx):\n"
    f"{INDENT}_buf = []\n"
    f"{INDENT}_append = _buf.append\n"
)
_EPILOGUE = f"{INDENT}return ''.join(_buf)\n"


def _leading_keyword(line: str) -> str:
    match = _KEYWORD_RE.match(line)
    return match.group(1) if match else ""


def _strip_comment(line: str) -> str:
    """Return ``line`` without a trailing ``#`` comment."""
    if "#" not in line:
        return line
    try:
        for tok in generate_tokens(io.StringIO(line).readline):
            if tok.type == COMMENT:
                return line[: tok.start[1]].rstrip()
    except (TokenError, SyntaxError):
        # Unbalanced line: compile() reports it with the full body
        return line
    return line


def _escape_unsafe(match: re.Match[str]) -> str:
    code = ord(match.group())
    return f"\\x{code:02x}" if code < 0x100 else f"\\u{code:04x}"


def quote_literal(text: str) -> str:
    """Wrap normalized literal text in a single-quoted Python string literal.

    NUL, other control characters and lone surrogates become ``\\xNN`` and
    ``\\uNNNN`` escapes; normalized text has every backslash doubled, so the
    escapes cannot merge with a preceding backslash.
    """
    return "'" + _UNSAFE_LITERAL_RE.sub(_escape_unsafe, text.replace("'", "\\'")) + "'"


class CodeGenerator:
    """Turn tokens into the source of a ``render(ctx)`` function.

    The generator is stateful: it tracks the stack of open blocks so each
    fragment is emitted at the right indentation. Use one instance per
    template.

    Attributes:
        names: Context names the last ``assemble()`` body reads but never assigns
        filename: Filename used for ``SyntaxError`` reporting

    Example:
        >>> gen = CodeGenerator()
        >>> body = [gen.emit(t) for t in tokenize("Hi <%= name %>")]
        >>> print(gen.assemble(body))

    """

    __slots__ = ("_blocks", "filename", "names")

    def __init__(self, filename: str = "<template>"):
        self.filename = filename
        self.names: frozenset[str] = frozenset()
        # (keyword, statement) for every open block, innermost last
        self._blocks: list[tuple[str, str]] = []

    @property
    def depth(self) -> int:
        """Number of currently open blocks."""
        return len(self._blocks)

    def _indent(self) -> str:
        return INDENT * (len(self._blocks) + 1)

    def emit(self, token: Token) -> str:
        """Generate the Python fragment for a single token."""
        if token.kind is TokenKind.CONTROL_FLOW:
            return self._emit_control_flow(token.content)
        if token.kind is TokenKind.EXPRESSION:
            return f"{self._indent()}_append(_str({restore(token.content).strip()}))\n"
        return f"{self._indent()}_append({quote_literal(token.content)})\n"

    def _emit_control_flow(self, content: str) -> str:
        code = textwrap.dedent(restore(content))
        lines = [line.rstrip() for line in code.splitlines() if line.strip()]
        if not lines:
            return ""

        keyword = _leading_keyword(lines[0])
        if _strip_comment(lines[0].strip()) == END_KEYWORD:
            self._close_block()
            return ""
        if keyword in _CONTINUATION_KEYWORDS or (keyword == "case" and self._top() == "case"):
            self._pop_block(lines[0].strip())

        indent = self._indent()
        fragment = "".join(f"{indent}{line}\n" for line in lines)
        last = next((code for code in map(_strip_comment, reversed(lines)) if code.strip()), "")
        if last.endswith(":"):
            opener = _leading_keyword(last)
            self._blocks.append((opener, last.strip()))
            # A match body may only hold case blocks
            if opener != "match":
                fragment += f"{self._indent()}pass\n"
        return fragment

    def _top(self) -> str | None:
        return self._blocks[-1][0] if self._blocks else None

    def _pop_block(self, statement: str) -> tuple[str, str]:
        if not self._blocks:
            raise SyntaxError(
                f"{statement!r} outside of a block",
                (self.filename, None, None, statement),
            )
        return self._blocks.pop()

    def _close_block(self) -> None:
        keyword, _ = self._pop_block(END_KEYWORD)
        if keyword == "case" and self._top() == "match":
            self._blocks.pop()

    def assemble(self, fragments: Iterable[str]) -> str:
        """Join fragments into the complete ``render(ctx)`` source.

        Context names read by the body are bound right after the buffer is
        initialized: ``n = ctx['n']`` when the key is present. Builtins fall
        back to the builtin; any other missing name stays unbound and raises
        ``NameError`` only if the code that reads it runs.

        Raises:
            SyntaxError: A block is still open, or the body is not valid
                Python.
        """
        if self._blocks:
            _, statement = self._blocks[-1]
            raise SyntaxError(
                f"block {statement!r} is never closed, expected {END_KEYWORD!r}",
                (self.filename, None, None, statement),
            )

        body = "".join(fragments)
        collector = collect_names(_PROLOGUE + body + _EPILOGUE, self.filename)
        self.names = frozenset(collector.free)
        # Names the template also assigns are bound too, so read-modify-write works
        bindings = "".join(self._binding(name) for name in sorted(collector.referenced))
        return _PROLOGUE + bindings + body + _EPILOGUE

    @staticmethod
    def _binding(name: str) -> str:
        if name in _BUILTIN_NAMES:
            return f"{INDENT}{name} = ctx.get({name!r}, _builtins.{name})\n"
        return f"{INDENT}if {name!r} in ctx: {name} = ctx[{name!r}]\n"
