"""Anchor location and classification.

An anchor is a (source unit, character offset) pair, typically the caret
position in an editor. locate() turns it into the syntax node the query is
about and says which resolution strategy applies.
"""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass
from typing import Literal

from ..expression import (
    NoContainingFile,
    NoElementAtOffset,
    NoEnclosingScope,
    NotAVariableLikeElement,
)
from .ast_compat import enclosing_scope, is_variable
from .parse import SourceUnit
from .signatures import param_for_usage

logger = logging.getLogger(__name__)

AnchorKind = Literal["parameter", "parameter-usage", "variable", "call"]
"""Resolution strategy for an anchor.

| Kind            | Node                                   | Strategy                  |
|-----------------|----------------------------------------|---------------------------|
| parameter       | ast.arg                                | annotation or call sites  |
| parameter-usage | ast.Name load matching a parameter     | same as its parameter     |
| variable        | ast.Name / ast.Attribute               | assignment scanning       |
| call            | ast.Call of a name or attribute        | callee as a variable      |
"""


@dataclass(frozen=True)
class Anchor:
    unit: SourceUnit | None
    offset: int

    @classmethod
    def at(cls, unit: SourceUnit, lineno: int, col: int) -> Anchor:
        """Anchor for a 1-based line and 0-based character column."""
        return cls(unit, unit.offset_of(lineno, col))


@dataclass(frozen=True)
class Target:
    """A classified anchor."""

    unit: SourceUnit
    node: ast.AST
    kind: AnchorKind
    param: ast.arg | None = None


def locate(anchor: Anchor) -> Target:
    """Classify the node under the anchor. Raises ResolutionError."""
    unit = anchor.unit
    if unit is None:
        raise NoContainingFile("anchor has no source unit", anchor.offset)
    node = unit.node_at(anchor.offset)
    if node is None:
        raise NoElementAtOffset("no element at offset " + str(anchor.offset), anchor.offset)
    return classify(node, unit, anchor.offset)


def classify(node: ast.AST, unit: SourceUnit, offset: int = -1) -> Target:
    call: ast.Call | None = None
    if isinstance(node, ast.Call) and is_variable(node.func):
        call = node
        node = node.func
    if not isinstance(node, ast.arg) and not is_variable(node):
        raise NotAVariableLikeElement(
            type(node).__name__ + " is not a variable, attribute or parameter", offset
        )
    if not unit.contains(node) or enclosing_scope(node, unit) is None:
        raise NoEnclosingScope("no enclosing scope for " + type(node).__name__, offset)
    if isinstance(node, ast.arg):
        logger.debug("anchor %r is a parameter declaration", node.arg)
        return Target(unit, node, "parameter", param=node)
    if call is not None:
        logger.debug("anchor %r is a call", unit.text(call))
        return Target(unit, node, "call")
    if isinstance(node, ast.Name):
        param = param_for_usage(node, unit)
        if param is not None:
            logger.debug("anchor %r is a parameter usage", node.id)
            return Target(unit, node, "parameter-usage", param=param)
    logger.debug("anchor %r is a variable", unit.text(node))
    return Target(unit, node, "variable")
