"""Read-only traversal helpers over ast trees."""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from .parse import SourceUnit

FUNCTION_TYPES: tuple[type, ...] = (ast.FunctionDef, ast.AsyncFunctionDef)

SCOPE_TYPES: tuple[type, ...] = (
    ast.Module,
    ast.ClassDef,
    ast.FunctionDef,
    ast.AsyncFunctionDef,
    ast.Lambda,
    ast.ListComp,
    ast.SetComp,
    ast.DictComp,
    ast.GeneratorExp,
)


def walk(node: ast.AST) -> Iterator[ast.AST]:
    """Walk nodes in document order (pre-order), node first."""
    yield node
    for child in ast.iter_child_nodes(node):
        yield from walk(child)


def walk_function_body(func: ast.AST) -> Iterator[ast.AST]:
    """Walk a function's body in document order without entering nested
    function or class definitions."""
    for stmt in getattr(func, "body", []):
        yield from _walk_same_function(stmt)


def _walk_same_function(node: ast.AST) -> Iterator[ast.AST]:
    if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef, ast.Lambda)):
        return
    yield node
    for child in ast.iter_child_nodes(node):
        yield from _walk_same_function(child)


def ancestors(node: ast.AST, unit: SourceUnit) -> Iterator[ast.AST]:
    """Parents of node, nearest first."""
    current = unit.parent(node)
    while current is not None:
        yield current
        current = unit.parent(current)


def enclosing(node: ast.AST, unit: SourceUnit, types: type | tuple[type, ...]) -> ast.AST | None:
    for parent in ancestors(node, unit):
        if isinstance(parent, types):
            return parent
    return None


def enclosing_function(node: ast.AST, unit: SourceUnit) -> ast.FunctionDef | ast.AsyncFunctionDef | None:
    return enclosing(node, unit, FUNCTION_TYPES)


def enclosing_scope(node: ast.AST, unit: SourceUnit) -> ast.AST | None:
    return enclosing(node, unit, SCOPE_TYPES)


def is_callee(node: ast.AST, unit: SourceUnit) -> bool:
    parent = unit.parent(node)
    return isinstance(parent, ast.Call) and parent.func is node


def is_variable(node: ast.AST) -> bool:
    """Name or attribute reference, load or store."""
    return isinstance(node, (ast.Name, ast.Attribute))


def node_text(node: ast.AST, unit: SourceUnit) -> str:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.arg):
        return node.arg
    return unit.text(node)
