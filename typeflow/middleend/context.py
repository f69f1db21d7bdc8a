"""Per-query resolution state."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..expression import ExpressionData
from ..frontend.parse import SourceUnit


@dataclass
class Query:
    """Everything one resolution request mutates.

    A Query is created at the start of resolve()/resolve_graph() and dropped
    when it returns, so resolver instances stay stateless and reentrant.

    visited: cycle guard. Keys are labels: a name's text for assignment
        scans, "<callee>()" for return scans, "param:<function>.<name>" for
        parameter resolution, so a parameter and an argument variable of the
        same name are expanded separately. A visited key contributes nothing
        further.
    results: flat discoveries in order.
    stack, dependencies, root: graph bookkeeping (unused in flat mode).
    """

    unit: SourceUnit
    visited: set[str] = field(default_factory=set)
    results: list[ExpressionData] = field(default_factory=list)
    stack: list[ExpressionData] = field(default_factory=list)
    dependencies: dict[ExpressionData, list[ExpressionData]] = field(default_factory=dict)
    root: ExpressionData | None = None

    def mark(self, key: str) -> bool:
        """Record key as visited. False if it already was."""
        if key in self.visited:
            return False
        self.visited.add(key)
        return True

    def top(self) -> ExpressionData | None:
        if len(self.stack) == 0:
            return None
        return self.stack[-1]

    def find_key(self, type_label: str) -> ExpressionData | None:
        for key in self.dependencies:
            if key.type_label == type_label:
                return key
        return None

    def is_absent(self, key: ExpressionData, data: ExpressionData) -> bool:
        for child in self.dependencies[key]:
            if child is data or child.same_entry(data):
                return False
        return True
