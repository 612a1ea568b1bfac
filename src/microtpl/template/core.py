"""microtpl Template: compiled template object ready for rendering.

The Template class wraps a compiled code object and provides the ``render()``
API. Templates are immutable and thread-safe for concurrent rendering.

Architecture:
    ```
    Template
    ├── _render_func: callable   # render(ctx) extracted from the code object
    ├── _globals: MappingProxy   # Snapshot of environment globals
    ├── _code: str               # Generated Python source (introspection)
    └── _source, _name           # Template text and name
    ```

Thread-Safety:
- Templates are immutable after construction
- ``render()`` creates only local state (the output buffer)
- Multiple threads can call ``render()`` concurrently

"""

from __future__ import annotations

import builtins
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from microtpl.template.helpers import str_safe

if TYPE_CHECKING:
    import types

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class Template:
    """Compiled template ready for rendering.

    A Template is a callable: ``template(context)`` renders with a mapping of
    template variables and returns the output string. ``render()`` also
    accepts keyword arguments.

    Errors raised by directive code (``NameError``, ``TypeError``, ...) are
    not caught or wrapped.

    Attributes:
        name: Template identifier
        source: Template text the template was compiled from
        code: Generated Python source of the render function
        names: Context names the template reads

    Example:
            >>> from microtpl import compile
            >>> t = compile("Hello, <%= name.upper() %>!")
            >>> t.render(name="World")
            'Hello, WORLD!'

            >>> t({"name": "World"})
            'Hello, WORLD!'

    """

    __slots__ = (
        "_code",
        "_globals",
        "_name",
        "_names",
        "_render_func",
        "_source",
    )

    def __init__(
        self,
        code: types.CodeType,
        *,
        source: str = "",
        python_source: str = "",
        names: frozenset[str] = frozenset(),
        name: str | None = None,
        globals: Mapping[str, Any] | None = None,
    ):
        self._source = source
        self._code = python_source
        self._names = names
        self._name = name
        self._globals = MappingProxyType(dict(globals)) if globals else _EMPTY

        namespace: dict[str, Any] = {"_str": str_safe, "_builtins": builtins}
        exec(code, namespace)
        self._render_func = namespace["render"]

    @property
    def name(self) -> str | None:
        """Template name."""
        return self._name

    @property
    def source(self) -> str:
        """Template source text."""
        return self._source

    @property
    def code(self) -> str:
        """Generated Python source."""
        return self._code

    @property
    def names(self) -> frozenset[str]:
        """Context names read by the template."""
        return self._names

    def __call__(self, context: Mapping[str, Any]) -> str:
        """Render with a single context mapping."""
        if self._globals:
            context = {**self._globals, **context}
        result: str = self._render_func(context)
        return result

    def render(self, *args: Any, **kwargs: Any) -> str:
        """Render template with given context.

        Args:
            *args: Single mapping of context variables
            **kwargs: Context variables as keyword arguments

        Returns:
            Rendered template as string

        Example:
            >>> t.render(name="World")
            'Hello, World!'
            >>> t.render({"name": "World"})
            'Hello, World!'
        """
        if len(args) > 1:
            raise TypeError(f"render() takes at most 1 positional argument, got {len(args)}")
        if args and not isinstance(args[0], Mapping):
            raise TypeError(
                f"render() argument must be a mapping, not {type(args[0]).__name__}"
            )

        if not kwargs:
            return self(args[0] if args else _EMPTY)

        ctx: dict[str, Any] = {}
        if args:
            ctx.update(args[0])
        ctx.update(kwargs)
        return self(ctx)

    def __repr__(self) -> str:
        return f"<Template {self._name or '(inline)'}>"
