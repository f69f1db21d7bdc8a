"""Union splitting, annotation text, and the default literal type oracle."""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

from ..oracle import TypeDescriptor, union_of
from .signatures import class_names

if TYPE_CHECKING:
    from .parse import SourceUnit


def split_union_types(s: str, max_parts: int | None = None) -> list[str]:
    """Split union types on | respecting nested brackets.

    At most max_parts members are returned; later members are dropped, so
    "A | B | C" with max_parts=2 gives ["A", "B"].
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for c in s:
        if c in "[(":
            depth += 1
            current.append(c)
        elif c in "])":
            depth -= 1
            current.append(c)
        elif c == "|" and depth == 0:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(c)
    if current:
        parts.append("".join(current).strip())
    parts = [p for p in parts if p]
    if max_parts is not None:
        return parts[:max_parts]
    return parts


def descriptor_labels(descriptor: TypeDescriptor, max_parts: int | None) -> list[str]:
    """Labels of an oracle answer. A union is split like its written form,
    so the same truncation applies."""
    return split_union_types(descriptor.name, max_parts)


def annotation_text(annotation: ast.expr, unit: SourceUnit) -> str:
    """Source text of an annotation; string annotations are unquoted."""
    if isinstance(annotation, ast.Constant) and isinstance(annotation.value, str):
        return annotation.value
    return unit.text(annotation)


# ============================================================
# LITERAL ORACLE
# ============================================================

CONSTANT_TYPES: dict[type, str] = {
    bool: "bool",
    int: "int",
    float: "float",
    complex: "complex",
    str: "str",
    bytes: "bytes",
}

# Builtins whose call result type is the builtin's own name
CONSTRUCTORS: set[str] = {
    "int",
    "float",
    "complex",
    "str",
    "bool",
    "bytes",
    "bytearray",
    "list",
    "dict",
    "set",
    "frozenset",
    "tuple",
    "range",
    "object",
    "slice",
    "memoryview",
}

BUILTIN_RETURNS: dict[str, str] = {
    "len": "int",
    "hash": "int",
    "id": "int",
    "ord": "int",
    "chr": "str",
    "repr": "str",
    "ascii": "str",
    "bin": "str",
    "hex": "str",
    "oct": "str",
    "format": "str",
    "input": "str",
    "isinstance": "bool",
    "issubclass": "bool",
    "callable": "bool",
    "hasattr": "bool",
    "all": "bool",
    "any": "bool",
    "sorted": "list",
    "enumerate": "enumerate",
    "zip": "zip",
    "open": "TextIOWrapper",
}

STR_METHODS: dict[str, str] = {
    "join": "str",
    "strip": "str",
    "lstrip": "str",
    "rstrip": "str",
    "lower": "str",
    "upper": "str",
    "title": "str",
    "capitalize": "str",
    "replace": "str",
    "format": "str",
    "split": "list[str]",
    "rsplit": "list[str]",
    "splitlines": "list[str]",
    "startswith": "bool",
    "endswith": "bool",
    "isdigit": "bool",
    "isalpha": "bool",
    "isspace": "bool",
    "find": "int",
    "rfind": "int",
    "index": "int",
    "count": "int",
    "encode": "bytes",
}

NUMERIC_RANK: dict[str, int] = {"bool": 0, "int": 1, "float": 2, "complex": 3}


class LiteralTypeOracle:
    """Answers for expressions whose type is evident from their syntax.

    Names, attributes and subscripts are left to the resolvers (or to a
    richer host oracle); this one only looks at literals, displays,
    operators, builtin calls and constructors of classes in the same unit.
    """

    def type_of(self, expr: ast.expr, unit: SourceUnit) -> TypeDescriptor | None:
        names = self._names(expr, unit)
        if names is None:
            return None
        return union_of(names)

    def _name(self, expr: ast.expr, unit: SourceUnit) -> str | None:
        """Single label for expr, unions joined with ' | '."""
        descriptor = self.type_of(expr, unit)
        if descriptor is None:
            return None
        return descriptor.name

    def _names(self, expr: ast.expr, unit: SourceUnit) -> list[str] | None:
        if isinstance(expr, ast.Constant):
            if expr.value is None:
                return ["None"]
            if expr.value is Ellipsis:
                return ["ellipsis"]
            label = CONSTANT_TYPES.get(type(expr.value))
            return [label] if label is not None else None
        if isinstance(expr, ast.JoinedStr):
            return ["str"]
        if isinstance(expr, (ast.List, ast.Set)):
            base = "list" if isinstance(expr, ast.List) else "set"
            return [self._container(base, expr.elts, unit)]
        if isinstance(expr, ast.Tuple):
            return [self._tuple(expr, unit)]
        if isinstance(expr, ast.Dict):
            return [self._dict(expr, unit)]
        if isinstance(expr, ast.ListComp):
            return ["list"]
        if isinstance(expr, ast.SetComp):
            return ["set"]
        if isinstance(expr, ast.DictComp):
            return ["dict"]
        if isinstance(expr, ast.GeneratorExp):
            return ["Generator"]
        if isinstance(expr, ast.Lambda):
            return ["Callable"]
        if isinstance(expr, ast.Compare):
            return ["bool"]
        if isinstance(expr, ast.UnaryOp):
            if isinstance(expr.op, ast.Not):
                return ["bool"]
            operand = self._name(expr.operand, unit)
            if operand is None:
                return None
            return ["int" if operand == "bool" else operand]
        if isinstance(expr, ast.BinOp):
            result = self._binop(expr, unit)
            return [result] if result is not None else None
        if isinstance(expr, ast.BoolOp):
            return self._all_names(expr.values, unit)
        if isinstance(expr, ast.IfExp):
            return self._all_names([expr.body, expr.orelse], unit)
        if isinstance(expr, ast.Call):
            result = self._call(expr, unit)
            return [result] if result is not None else None
        return None

    def _all_names(self, exprs: list[ast.expr], unit: SourceUnit) -> list[str] | None:
        # every operand must be known, otherwise the union would be a guess
        names: list[str] = []
        for e in exprs:
            part = self._names(e, unit)
            if part is None:
                return None
            names.extend(part)
        return names

    def _container(self, base: str, elts: list[ast.expr], unit: SourceUnit) -> str:
        if len(elts) == 0:
            return base
        names = self._all_names(elts, unit)
        if names is None:
            return base
        element = union_of(names)
        return base + "[" + element.name + "]"

    def _tuple(self, expr: ast.Tuple, unit: SourceUnit) -> str:
        if len(expr.elts) == 0:
            return "tuple"
        parts: list[str] = []
        for e in expr.elts:
            name = self._name(e, unit)
            if name is None:
                return "tuple"
            parts.append(name)
        return "tuple[" + ", ".join(parts) + "]"

    def _dict(self, expr: ast.Dict, unit: SourceUnit) -> str:
        if len(expr.keys) == 0 or any(k is None for k in expr.keys):
            return "dict"
        keys = self._all_names(expr.keys, unit)
        values = self._all_names(expr.values, unit)
        if keys is None or values is None:
            return "dict"
        return "dict[" + union_of(keys).name + ", " + union_of(values).name + "]"

    def _binop(self, expr: ast.BinOp, unit: SourceUnit) -> str | None:
        left = self._name(expr.left, unit)
        right = self._name(expr.right, unit)
        if left is None or right is None:
            return None
        if left in NUMERIC_RANK and right in NUMERIC_RANK:
            if isinstance(expr.op, ast.Div):
                if "complex" in (left, right):
                    return "complex"
                return "float"
            widest = max(NUMERIC_RANK[left], NUMERIC_RANK[right], NUMERIC_RANK["int"])
            for name, rank in NUMERIC_RANK.items():
                if rank == widest:
                    return name
        if left == right and left in ("str", "bytes") and isinstance(expr.op, ast.Add):
            return left
        if left in ("str", "bytes") and isinstance(expr.op, ast.Mod):
            return left
        if isinstance(expr.op, ast.Mult) and "int" in (left, right):
            other = right if left == "int" else left
            if other in ("str", "bytes") or other.startswith("list"):
                return other
        if isinstance(expr.op, ast.Add) and left.startswith("list") and right.startswith("list"):
            return left if left == right else "list"
        return None

    def _call(self, expr: ast.Call, unit: SourceUnit) -> str | None:
        func = expr.func
        if isinstance(func, ast.Name):
            if func.id in CONSTRUCTORS:
                return func.id
            if func.id in BUILTIN_RETURNS:
                return BUILTIN_RETURNS[func.id]
            if func.id in class_names(unit):
                return func.id
            return None
        if isinstance(func, ast.Attribute):
            receiver = self._name(func.value, unit)
            if receiver == "str" and func.attr in STR_METHODS:
                return STR_METHODS[func.attr]
        return None
