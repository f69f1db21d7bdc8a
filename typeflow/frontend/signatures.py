"""Function signatures: parameter lists and callee resolution."""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

from .ast_compat import FUNCTION_TYPES, ancestors, enclosing, enclosing_function

if TYPE_CHECKING:
    from .parse import SourceUnit

FunctionNode = ast.FunctionDef | ast.AsyncFunctionDef


def all_params(args: ast.arguments) -> list[ast.arg]:
    """Collect parameters in declaration order: posonly, regular, *args,
    keyword-only, **kwargs."""
    result: list[ast.arg] = []
    for a in args.posonlyargs:
        result.append(a)
    for a in args.args:
        result.append(a)
    if args.vararg is not None:
        result.append(args.vararg)
    for a in args.kwonlyargs:
        result.append(a)
    if args.kwarg is not None:
        result.append(args.kwarg)
    return result


def param_index(func: FunctionNode, param: ast.arg) -> int:
    """Zero-based position of param in the declared parameter list.

    Matching is by name, so a parameter that is not declared by func yields
    the list length.
    """
    params = all_params(func.args)
    for i, p in enumerate(params):
        if p.arg == param.arg:
            return i
    return len(params)


def function_of_param(param: ast.arg, unit: SourceUnit) -> FunctionNode | None:
    """Function declaring param (None for lambda parameters)."""
    owner = enclosing(param, unit, FUNCTION_TYPES + (ast.Lambda,))
    if isinstance(owner, FUNCTION_TYPES):
        return owner
    return None


def find_param(func: FunctionNode, name: str) -> ast.arg | None:
    for p in all_params(func.args):
        if p.arg == name:
            return p
    return None


def param_for_usage(name: ast.Name, unit: SourceUnit) -> ast.arg | None:
    """Parameter of the innermost enclosing function that a load of name
    refers to, by name."""
    if not isinstance(name.ctx, ast.Load):
        return None
    func = enclosing_function(name, unit)
    if func is None:
        return None
    return find_param(func, name.id)


def callee_name(call: ast.Call) -> str | None:
    """Bare name of the called object: foo() and obj.foo() both give foo."""
    func = call.func
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        return func.attr
    return None


def _defs_in_body(body: list[ast.stmt], name: str) -> list[ast.AST]:
    """Definitions bound to name in a scope body, including ones nested in
    if/try/with blocks of the same scope."""
    found: list[ast.AST] = []
    for stmt in body:
        if isinstance(stmt, FUNCTION_TYPES + (ast.ClassDef,)):
            if stmt.name == name:
                found.append(stmt)
            continue
        for field in ("body", "orelse", "finalbody"):
            found.extend(_defs_in_body(getattr(stmt, field, []) or [], name))
        for handler in getattr(stmt, "handlers", []) or []:
            found.extend(_defs_in_body(handler.body, name))
        for case in getattr(stmt, "cases", []) or []:
            found.extend(_defs_in_body(case.body, name))
    return found


def _lookup_function(body: list[ast.stmt], name: str) -> FunctionNode | None:
    # later definitions rebind earlier ones
    defs = _defs_in_body(body, name)
    if len(defs) == 0:
        return None
    last = defs[-1]
    if isinstance(last, FUNCTION_TYPES):
        return last
    return None


def _lookup_class(body: list[ast.stmt], name: str) -> ast.ClassDef | None:
    defs = _defs_in_body(body, name)
    if len(defs) > 0 and isinstance(defs[-1], ast.ClassDef):
        return defs[-1]
    return None


def resolve_callee(call: ast.Call, unit: SourceUnit) -> FunctionNode | None:
    """Resolve the called function definition, or None.

    foo()               lexical lookup: enclosing function bodies outward,
                        then the module (class bodies are skipped, as in
                        Python's own scoping)
    self.foo(), cls.foo()  method of the enclosing class
    Klass.foo()         method of a module-level class
    """
    func = call.func
    if isinstance(func, ast.Name):
        for scope in ancestors(call, unit):
            if isinstance(scope, FUNCTION_TYPES + (ast.Module,)):
                found = _lookup_function(scope.body, func.id)
                if found is not None:
                    return found
        return None
    if isinstance(func, ast.Attribute) and isinstance(func.value, ast.Name):
        owner = func.value.id
        if owner in ("self", "cls"):
            klass = enclosing(call, unit, ast.ClassDef)
        else:
            klass = _lookup_class(unit.tree.body, owner)
        if isinstance(klass, ast.ClassDef):
            return _lookup_function(klass.body, func.attr)
    return None


def class_names(unit: SourceUnit) -> set[str]:
    """Names of every class defined anywhere in the unit."""
    return {n.name for n in ast.walk(unit.tree) if isinstance(n, ast.ClassDef)}
