"""Plain-text rendering for the command line.

Lines shown here are 1-based, as an editor shows them; "?" marks an entry
without a position.
"""

from __future__ import annotations

from ..expression import ExpressionData, TypeGraph
from .summary import TypeSummary, graph_message
from .tree import TreeNode

NO_TYPES: str = "No types found"


class Emitter:
    """Line accumulator with indentation tracking."""

    def __init__(self, indent_str: str = "  ") -> None:
        self.indent: int = 0
        self.lines: list[str] = []
        self._indent_str = indent_str

    def line(self, text: str = "") -> None:
        if text:
            self.lines.append(self._indent_str * self.indent + text)
        else:
            self.lines.append("")

    def output(self) -> str:
        return "\n".join(self.lines)


def _line_text(line: int) -> str:
    if line < 0:
        return "?"
    return str(line + 1)


def _entry_text(data: ExpressionData) -> str:
    return data.type_label + " (line " + _line_text(data.line) + ")"


def render_flat(entries: list[ExpressionData]) -> str:
    """Summary line followed by one row per discovered type."""
    if len(entries) == 0:
        return NO_TYPES
    e = Emitter()
    e.line(TypeSummary.from_entries(entries).message())
    e.indent += 1
    for data in entries:
        e.line(_entry_text(data))
    return e.output()


def _render_node(e: Emitter, node: TreeNode) -> None:
    e.line(node.display())
    e.indent += 1
    for child in node.children:
        _render_node(e, child)
    e.indent -= 1


def render_tree(tree: TreeNode | None) -> str:
    if tree is None:
        return NO_TYPES
    e = Emitter()
    _render_node(e, tree)
    return e.output()


def render_graph(graph: TypeGraph | None) -> str:
    """Status line, then each dependency-map key with its children."""
    if graph is None:
        return NO_TYPES
    e = Emitter()
    e.line(graph_message(graph))
    for key, children in graph.dependencies.items():
        marker = " [root]" if key is graph.root else ""
        e.line(_entry_text(key) + marker)
        e.indent += 1
        for child in children:
            e.line("-> " + _entry_text(child))
        e.indent -= 1
    return e.output()
