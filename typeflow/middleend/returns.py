"""Return statements of a function and whether each always executes."""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING, Iterator

from ..frontend.ast_compat import walk_function_body

if TYPE_CHECKING:
    from ..frontend.parse import SourceUnit

LOOP_TYPES: tuple[type, ...] = (ast.For, ast.AsyncFor, ast.While)

TRY_TYPES: tuple[type, ...] = tuple(
    t for t in (ast.Try, getattr(ast, "TryStar", None)) if t is not None
)


def function_returns(func: ast.AST) -> Iterator[ast.Return]:
    """Return statements belonging to func in document order; returns of
    nested functions are not func's returns."""
    for node in walk_function_body(func):
        if isinstance(node, ast.Return):
            yield node


def _is_guarded_by(parent: ast.AST, child: ast.AST) -> bool:
    if isinstance(parent, ast.If):
        return True
    if isinstance(parent, LOOP_TYPES):
        return True
    if isinstance(parent, ast.match_case):
        return True
    if isinstance(parent, TRY_TYPES):
        # try-body returns count as unconditional; only the handlers, else
        # and finally are treated as branches
        return child not in parent.body
    if isinstance(parent, ast.ExceptHandler):
        return True
    return False


def is_conditionally_reachable(ret: ast.Return, func: ast.AST, unit: SourceUnit) -> bool:
    """True when ret sits inside a branch, loop, except/else/finally clause
    or match case between it and func."""
    child: ast.AST = ret
    parent = unit.parent(ret)
    while parent is not None and parent is not func:
        if _is_guarded_by(parent, child):
            return True
        child = parent
        parent = unit.parent(parent)
    return False
