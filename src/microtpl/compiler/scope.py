"""Free-name analysis for generated render functions.

Templates address context keys as bare names (``<%= user %>`` rather than
``<%= ctx['user'] %>``). Instead of injecting the context as an ambient scope,
the compiler binds each name explicitly at function entry. This module finds
which names need binding: every name the body reads.

Two views are exposed. ``referenced`` is every name read anywhere in the
body, which is what gets bound, so a template may both read and reassign a
context key (``<% n += 1 %>``). ``free`` drops the names the body also binds
and is reported as the template's context dependencies.
"""

from __future__ import annotations

import ast

# Names the generated prologue defines or the render namespace provides
RESERVED_NAMES = frozenset({"ctx", "_buf", "_append", "_str", "_builtins"})


class NameCollector(ast.NodeVisitor):
    """Collect loaded and bound names across a Python AST.

    Binding sites are gathered from every nested scope (comprehensions,
    lambdas, nested functions) so that loop variables and parameters never
    leak out as context dependencies.
    """

    def __init__(self) -> None:
        self.loaded: set[str] = set()
        self.bound: set[str] = set()
        # Names declared ``global``; binding them locally is a SyntaxError
        self.declared_global: set[str] = set()

    def visit_Name(self, node: ast.Name) -> None:
        if isinstance(node.ctx, ast.Load):
            self.loaded.add(node.id)
        else:
            self.bound.add(node.id)

    def visit_AugAssign(self, node: ast.AugAssign) -> None:
        # ``n += 1`` reads ``n`` before storing it
        if isinstance(node.target, ast.Name):
            self.loaded.add(node.target.id)
        self.generic_visit(node)

    def visit_arg(self, node: ast.arg) -> None:
        self.bound.add(node.arg)
        self.generic_visit(node)

    def _visit_definition(self, node: ast.FunctionDef | ast.AsyncFunctionDef | ast.ClassDef) -> None:
        self.bound.add(node.name)
        self.generic_visit(node)

    visit_FunctionDef = _visit_definition
    visit_AsyncFunctionDef = _visit_definition
    visit_ClassDef = _visit_definition

    def _visit_import(self, node: ast.Import | ast.ImportFrom) -> None:
        for alias in node.names:
            self.bound.add(alias.asname or alias.name.split(".")[0])

    visit_Import = _visit_import
    visit_ImportFrom = _visit_import

    def visit_ExceptHandler(self, node: ast.ExceptHandler) -> None:
        if node.name:
            self.bound.add(node.name)
        self.generic_visit(node)

    def visit_Global(self, node: ast.Global) -> None:
        self.declared_global.update(node.names)

    def visit_Nonlocal(self, node: ast.Nonlocal) -> None:
        self.bound.update(node.names)

    # Capture patterns in match statements
    def visit_MatchAs(self, node: ast.MatchAs) -> None:
        if node.name:
            self.bound.add(node.name)
        self.generic_visit(node)

    def visit_MatchStar(self, node: ast.MatchStar) -> None:
        if node.name:
            self.bound.add(node.name)

    def visit_MatchMapping(self, node: ast.MatchMapping) -> None:
        if node.rest:
            self.bound.add(node.rest)
        self.generic_visit(node)

    @property
    def referenced(self) -> set[str]:
        """Names read anywhere in the body, bound or not."""
        return self.loaded - self.declared_global - RESERVED_NAMES

    @property
    def free(self) -> set[str]:
        """Names read but never bound by the body."""
        return self.referenced - self.bound


def collect_names(source: str, filename: str = "<template>") -> NameCollector:
    """Parse ``source`` and collect the names of its render function body.

    Raises:
        SyntaxError: ``source`` is not valid Python (propagated from ``ast``).
    """
    collector = NameCollector()
    for node in ast.parse(source, filename=filename).body:
        # Look inside the render function, not at its own name
        if isinstance(node, ast.FunctionDef):
            collector.visit(node.args)
            for stmt in node.body:
                collector.visit(stmt)
        else:
            collector.visit(node)
    return collector


def find_free_names(source: str, filename: str = "<template>") -> frozenset[str]:
    """Return the names read by ``source`` that it never binds.

    Args:
        source: Python source of the render function
        filename: Filename reported in a ``SyntaxError``

    Raises:
        SyntaxError: ``source`` is not valid Python (propagated from ``ast``).
    """
    return frozenset(collect_names(source, filename).free)
