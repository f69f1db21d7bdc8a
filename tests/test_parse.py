"""Tests for SourceUnit positions, navigation and anchor classification."""

import ast

import pytest

from typeflow.expression import (
    NoContainingFile,
    NoElementAtOffset,
    NoEnclosingScope,
    NotAVariableLikeElement,
)
from typeflow.frontend.anchor import Anchor, classify, locate
from typeflow.frontend.parse import ParseError, SourceUnit, parse


def _unit(source: str) -> SourceUnit:
    return SourceUnit.from_source(source)


# ============================================================
# positions
# ============================================================


def test_offset_of_line_and_column():
    unit = _unit("a = 1\nbb = 2\n")
    assert unit.offset_of(1, 0) == 0
    assert unit.offset_of(2, 0) == 6
    assert unit.offset_of(2, 3) == 9
    assert unit.offset_of(0, 0) == -1
    assert unit.offset_of(9, 0) == -1


def test_line_of_offset():
    unit = _unit("a = 1\nbb = 2\n")
    assert unit.line_of(0) == 0
    assert unit.line_of(5) == 0
    assert unit.line_of(6) == 1
    assert unit.line_of(-1) == -1


def test_span_counts_characters_not_bytes():
    unit = _unit('s = "héllo"; t = s\n')
    t = [n for n in ast.walk(unit.tree) if isinstance(n, ast.Name) and n.id == "t"][0]
    assert unit.span(t) == (13, 14)
    assert unit.node_at(13) is t


def test_parse_error_location():
    with pytest.raises(ParseError) as info:
        parse("x = (\n")
    assert info.value.lineno == 1
    assert info.value.msg != ""


# ============================================================
# node_at
# ============================================================


def test_node_at_picks_innermost():
    unit = _unit("total = price * count\n")
    node = unit.node_at(unit.offset_of(1, 16))
    assert isinstance(node, ast.Name)
    assert node.id == "count"


def test_node_at_outside_source():
    unit = _unit("x = 1\n")
    assert unit.node_at(-1) is None
    assert unit.node_at(100) is None


def test_node_at_whitespace_between_statements():
    unit = _unit("x = 1\n\ny = 2\n")
    assert unit.node_at(6) is None


def test_node_at_parameter():
    unit = _unit("def f(a, b: int):\n    pass\n")
    node = unit.node_at(unit.offset_of(1, 9))
    assert isinstance(node, ast.arg)
    assert node.arg == "b"


def test_node_at_decorator():
    unit = _unit("@wraps\ndef f():\n    pass\n")
    node = unit.node_at(1)
    assert isinstance(node, ast.Name)
    assert node.id == "wraps"


def test_text_of_node():
    unit = _unit("value = obj.attr.name\n")
    node = unit.node_at(unit.offset_of(1, 18))
    assert isinstance(node, ast.Attribute)
    assert unit.text(node) == "obj.attr.name"


# ============================================================
# classification
# ============================================================


def test_classify_parameter():
    unit = _unit("def f(a):\n    return a\n")
    target = locate(Anchor(unit, unit.offset_of(1, 6)))
    assert target.kind == "parameter"
    assert target.param is target.node


def test_classify_parameter_usage():
    unit = _unit("def f(a):\n    return a\n")
    target = locate(Anchor.at(unit, 2, 11))
    assert target.kind == "parameter-usage"
    assert isinstance(target.node, ast.Name)
    assert target.param is not None and target.param.arg == "a"


def test_classify_store_of_parameter_name_is_variable():
    unit = _unit("def f(a):\n    a = 1\n")
    target = locate(Anchor.at(unit, 2, 4))
    assert target.kind == "variable"


def test_classify_module_variable():
    unit = _unit("x = 1\n")
    target = locate(Anchor(unit, 0))
    assert target.kind == "variable"
    assert target.param is None


def test_locate_without_unit():
    with pytest.raises(NoContainingFile):
        locate(Anchor(None, 0))


def test_locate_without_element():
    unit = _unit("x = 1\n")
    with pytest.raises(NoElementAtOffset):
        locate(Anchor(unit, 50))


def test_locate_non_variable():
    unit = _unit("x = 1\n")
    with pytest.raises(NotAVariableLikeElement):
        locate(Anchor(unit, 4))


def test_classify_detached_node():
    unit = _unit("x = 1\n")
    with pytest.raises(NoEnclosingScope):
        classify(ast.Name(id="y", ctx=ast.Load()), unit)


def test_classify_call_anchor_uses_callee():
    unit = _unit("run(1)\n")
    target = locate(Anchor(unit, 5))
    assert target.kind == "call"
    assert isinstance(target.node, ast.Name)
    assert target.node.id == "run"


def test_classify_call_of_call_is_not_variable_like():
    unit = _unit("make()()\n")
    with pytest.raises(NotAVariableLikeElement):
        locate(Anchor(unit, 7))
