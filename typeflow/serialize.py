"""Serialization of query results to JSON-compatible dicts."""

from __future__ import annotations

from .backend.summary import TypeSummary, graph_message
from .backend.tree import TreeNode
from .expression import ExpressionData, TypeGraph


def expression_to_dict(data: ExpressionData) -> dict[str, object]:
    return {"type": data.type_label, "line": data.line}


def flat_to_dict(entries: list[ExpressionData]) -> dict[str, object]:
    summary = TypeSummary.from_entries(entries)
    return {
        "types": [expression_to_dict(d) for d in entries],
        "summary": {
            "message": summary.message(),
            "counts": dict(summary.counts),
            "lines": {label: list(lines) for label, lines in summary.lines.items()},
        },
    }


def graph_to_dict(graph: TypeGraph | None) -> dict[str, object]:
    """Nodes numbered in first-seen order (root first), edges by number.

    Two entries with the same label are distinct nodes.
    """
    if graph is None:
        return {"root": None, "message": "", "nodes": [], "edges": []}
    ids: dict[ExpressionData, int] = {}
    nodes: list[object] = []

    def node_id(data: ExpressionData) -> int:
        if data not in ids:
            ids[data] = len(ids)
            node = expression_to_dict(data)
            node["id"] = ids[data]
            nodes.append(node)
        return ids[data]

    node_id(graph.root)
    edges: list[object] = []
    for key, children in graph.dependencies.items():
        source = node_id(key)
        for child in children:
            edges.append({"from": source, "to": node_id(child)})
    return {
        "root": ids[graph.root],
        "message": graph_message(graph),
        "nodes": nodes,
        "edges": edges,
    }


def tree_to_dict(node: TreeNode) -> dict[str, object]:
    return {
        "type": node.type_label,
        "count": node.count,
        "lines": list(node.lines),
        "children": [tree_to_dict(c) for c in node.children],
    }
