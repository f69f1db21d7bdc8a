"""Tests for union splitting and the literal type oracle."""

import ast

import pytest

from typeflow.frontend.parse import SourceUnit
from typeflow.frontend.type_inference import (
    LiteralTypeOracle,
    annotation_text,
    descriptor_labels,
    split_union_types,
)
from typeflow.oracle import NamedType, UnionType, union_of


# ============================================================
# split_union_types
# ============================================================


@pytest.mark.parametrize(
    "text,expected",
    [
        ("int", ["int"]),
        ("int | str", ["int", "str"]),
        ("int|str", ["int", "str"]),
        ("  int  |  None ", ["int", "None"]),
        ("list[int | str] | None", ["list[int | str]", "None"]),
        ("dict[str, tuple[int | None, str]] | bytes", ["dict[str, tuple[int | None, str]]", "bytes"]),
        ("Callable[[int], str | None] | None", ["Callable[[int], str | None]", "None"]),
        ("", []),
        ("int | | str", ["int", "str"]),
    ],
)
def test_split_union_types(text, expected):
    assert split_union_types(text) == expected


def test_split_union_types_truncates():
    assert split_union_types("A | B | C", 2) == ["A", "B"]
    assert split_union_types("A | B | C", 1) == ["A"]
    assert split_union_types("A | B", 2) == ["A", "B"]
    assert split_union_types("A | B | C", None) == ["A", "B", "C"]


def test_descriptor_labels():
    three = UnionType((NamedType("int"), NamedType("str"), NamedType("bytes")))
    assert three.name == "int | str | bytes"
    assert descriptor_labels(three, 2) == ["int", "str"]
    assert descriptor_labels(three, None) == ["int", "str", "bytes"]
    assert descriptor_labels(NamedType("list[int | str]"), 2) == ["list[int | str]"]


def test_union_of():
    assert union_of([]) is None
    assert union_of(["int", "int"]) == NamedType("int")
    assert union_of(["int", "str", "int"]) == UnionType((NamedType("int"), NamedType("str")))


def test_annotation_text():
    unit = SourceUnit.from_source('def f(a: "int | None", b: list[str]): pass\n')
    func = unit.tree.body[0]
    assert annotation_text(func.args.args[0].annotation, unit) == "int | None"
    assert annotation_text(func.args.args[1].annotation, unit) == "list[str]"


# ============================================================
# LiteralTypeOracle
# ============================================================


def _type_of(expr_source: str, prelude: str = "") -> str | None:
    unit = SourceUnit.from_source(prelude + "_ = " + expr_source + "\n")
    assign = unit.tree.body[-1]
    assert isinstance(assign, ast.Assign)
    descriptor = LiteralTypeOracle().type_of(assign.value, unit)
    if descriptor is None:
        return None
    return descriptor.name


@pytest.mark.parametrize(
    "expr,expected",
    [
        ("1", "int"),
        ("1.5", "float"),
        ("2j", "complex"),
        ("True", "bool"),
        ("None", "None"),
        ("'s'", "str"),
        ("b'x'", "bytes"),
        ("f'{1}'", "str"),
        ("...", "ellipsis"),
        ("[]", "list"),
        ("[1, 2]", "list[int]"),
        ("[1, 's']", "list[int | str]"),
        ("[x]", "list"),
        ("{1, 2}", "set[int]"),
        ("()", "tuple"),
        ("(1, 's')", "tuple[int, str]"),
        ("(1, x)", "tuple"),
        ("{}", "dict"),
        ("{'a': 1}", "dict[str, int]"),
        ("{**other}", "dict"),
        ("[i for i in x]", "list"),
        ("{i for i in x}", "set"),
        ("{i: i for i in x}", "dict"),
        ("(i for i in x)", "Generator"),
        ("lambda: 1", "Callable"),
        ("a < b", "bool"),
        ("not a", "bool"),
        ("-1", "int"),
        ("-x", None),
        ("1 + 2", "int"),
        ("1 + 2.0", "float"),
        ("1 / 2", "float"),
        ("True + True", "int"),
        ("'a' + 'b'", "str"),
        ("'%d' % 1", "str"),
        ("'ab' * 2", "str"),
        ("[1] * 2", "list[int]"),
        ("[1] + ['s']", "list"),
        ("'a' + 1", None),
        ("x + 1", None),
        ("1 or 's'", "int | str"),
        ("1 or x", None),
        ("1 if c else None", "int | None"),
        ("len(x)", "int"),
        ("str(1)", "str"),
        ("sorted(x)", "list"),
        ("'a,b'.split(',')", "list[str]"),
        ("'a'.upper()", "str"),
        ("x.upper()", None),
        ("unknown()", None),
        ("x", None),
        ("x.attr", None),
        ("x[0]", None),
    ],
)
def test_literal_oracle(expr, expected):
    assert _type_of(expr) == expected


def test_literal_oracle_same_unit_class():
    assert _type_of("Point()", prelude="class Point:\n    pass\n") == "Point"
