"""Backend package - display trees, summaries and text output."""

from .summary import TypeSummary, graph_message
from .text import render_flat, render_graph, render_tree
from .tree import TreeNode, build_tree, collect_types, highlight_lines, normalize_label

__all__ = [
    "TreeNode",
    "TypeSummary",
    "build_tree",
    "collect_types",
    "graph_message",
    "highlight_lines",
    "normalize_label",
    "render_flat",
    "render_graph",
    "render_tree",
]
