"""Static type-flow inference for Python source.

    unit = SourceUnit.from_source(source)
    anchor = Anchor.at(unit, lineno, col)
    FlatTypeResolver().resolve(anchor)        # [ExpressionData, ...]
    GraphTypeResolver().resolve_graph(anchor)  # TypeGraph | None
"""

from .backend import TreeNode, TypeSummary, build_tree, collect_types, graph_message, highlight_lines
from .expression import (
    ExpressionData,
    NoContainingFile,
    NoElementAtOffset,
    NoEnclosingScope,
    NotAVariableLikeElement,
    ResolutionError,
    TypeGraph,
)
from .frontend import Anchor, LiteralTypeOracle, ParseError, SourceUnit, parse, split_union_types
from .middleend import FlatTypeResolver, GraphTypeResolver
from .options import DEFAULT_OPTIONS, ResolverOptions
from .oracle import NamedType, TypeOracle, UnionType

__all__ = [
    "Anchor",
    "DEFAULT_OPTIONS",
    "ExpressionData",
    "FlatTypeResolver",
    "GraphTypeResolver",
    "LiteralTypeOracle",
    "NamedType",
    "NoContainingFile",
    "NoElementAtOffset",
    "NoEnclosingScope",
    "NotAVariableLikeElement",
    "ParseError",
    "ResolutionError",
    "ResolverOptions",
    "SourceUnit",
    "TreeNode",
    "TypeGraph",
    "TypeOracle",
    "TypeSummary",
    "UnionType",
    "build_tree",
    "collect_types",
    "graph_message",
    "highlight_lines",
    "parse",
    "split_union_types",
]
