"""Result records shared by the resolvers and renderers.

Architecture:
    SourceUnit + Anchor -> Frontend (classification) -> Middleend (resolution)
    -> [ExpressionData / TypeGraph] -> Backend (trees, summaries, text)

Everything here is created fresh per query and discarded once the caller
has consumed it.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass


@dataclass(frozen=True, eq=False)
class ExpressionData:
    """A resolved type label tied to the expression it was discovered at.

    Invariants:
    - line >= -1 (zero-based, -1 = node has no position)
    - equality and hashing are by identity; two records with the same label
      are still distinct map keys
    - same_entry() is the (line, type_label) comparison used to suppress
      duplicate children
    """

    line: int
    type_label: str
    node: ast.AST | None

    @classmethod
    def of(cls, node: ast.AST | None, type_label: str) -> ExpressionData:
        lineno = getattr(node, "lineno", None)
        line = lineno - 1 if lineno is not None else -1
        return cls(line=line, type_label=type_label, node=node)

    def same_entry(self, other: ExpressionData) -> bool:
        return self.line == other.line and self.type_label == other.type_label

    def __repr__(self) -> str:
        return "ExpressionData(" + self.type_label + ", line=" + str(self.line) + ")"


@dataclass
class TypeGraph:
    """Dependency map plus the designated root of one graph query.

    Children lists keep discovery order. The root is the first node pushed
    during the query and is fixed for its lifetime.
    """

    dependencies: dict[ExpressionData, list[ExpressionData]]
    root: ExpressionData

    def children(self, data: ExpressionData) -> list[ExpressionData]:
        return self.dependencies.get(data, [])

    def is_empty(self) -> bool:
        return len(self.dependencies) == 0


# ============================================================
# ERRORS
#
# Anchor location failures. All are local and recoverable: resolvers catch
# them and answer with an empty (flat) or absent (graph) result.
# ============================================================


class ResolutionError(Exception):
    """Base for anchor location failures."""

    def __init__(self, msg: str, offset: int = -1):
        self.msg: str = msg
        self.offset: int = offset
        super().__init__(msg)


class NoContainingFile(ResolutionError):
    """The anchor is not attached to a source unit."""


class NoElementAtOffset(ResolutionError):
    """No syntax node covers the anchor offset."""


class NotAVariableLikeElement(ResolutionError):
    """The node at the offset is not a name, attribute or parameter."""


class NoEnclosingScope(ResolutionError):
    """The node has no scope-owning ancestor."""
