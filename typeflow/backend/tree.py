"""Display data derived from a TypeGraph.

A dependency map can hold cycles and repeated labels. Everything here walks
it from the root and expands each label at most once, so a label that comes
back deeper in the map is shown but not expanded again.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..expression import ExpressionData, TypeGraph

_OCCURRENCES_RE = re.compile(r"\s*\(\d+ occurrences?\)$")


@dataclass
class TreeNode:
    """One row of the display tree: a label and where it was seen."""

    type_label: str
    count: int = 1
    lines: list[int] = field(default_factory=list)
    children: list[TreeNode] = field(default_factory=list)

    def display(self) -> str:
        if self.count > 1:
            return self.type_label + " (" + str(self.count) + " occurrences)"
        return self.type_label


def _group_by_label(entries: list[ExpressionData]) -> dict[str, list[ExpressionData]]:
    groups: dict[str, list[ExpressionData]] = {}
    for data in entries:
        if data.type_label not in groups:
            groups[data.type_label] = []
        groups[data.type_label].append(data)
    return groups


def _build(parent: TreeNode, data: ExpressionData, graph: TypeGraph, expanded: set[str]) -> None:
    if data.type_label in expanded:
        return
    expanded.add(data.type_label)
    for label, group in _group_by_label(graph.children(data)).items():
        node = TreeNode(label, len(group), [d.line for d in group])
        parent.children.append(node)
        representative = group[0]
        if representative in graph.dependencies:
            _build(node, representative, graph, expanded)


def build_tree(graph: TypeGraph) -> TreeNode:
    """Display tree rooted at the graph root, children grouped by label in
    discovery order."""
    root = TreeNode(graph.root.type_label, 1, [graph.root.line])
    _build(root, graph.root, graph, set())
    return root


def _collect(data: ExpressionData, graph: TypeGraph, expanded: set[str], result: list[ExpressionData]) -> None:
    if data.type_label in expanded:
        return
    expanded.add(data.type_label)
    children = graph.children(data)
    result.extend(children)
    for child in children:
        if child in graph.dependencies:
            _collect(child, graph, expanded, result)


def collect_types(graph: TypeGraph) -> list[ExpressionData]:
    """Every entry reachable from the root, parents' children first."""
    result: list[ExpressionData] = []
    _collect(graph.root, graph, set(), result)
    return result


def normalize_label(label: str) -> str:
    """Strip a display label back to its type label."""
    return _OCCURRENCES_RE.sub("", label.strip())


def highlight_lines(entries: list[ExpressionData], label: str) -> list[int]:
    """Zero-based lines to mark for label, in first-seen order."""
    wanted = normalize_label(label)
    lines: list[int] = []
    for data in entries:
        if data.type_label.strip() != wanted or data.line < 0:
            continue
        if data.line not in lines:
            lines.append(data.line)
    return lines
