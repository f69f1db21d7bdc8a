"""Status-line summaries of a query result."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..expression import ExpressionData, TypeGraph

WARNING_THRESHOLD: int = 3
DISPLAY_LIMIT: int = 2


@dataclass
class TypeSummary:
    """Occurrence counts and lines per type label (labels stripped)."""

    counts: dict[str, int] = field(default_factory=dict)
    lines: dict[str, list[int]] = field(default_factory=dict)

    @classmethod
    def from_entries(cls, entries: list[ExpressionData]) -> TypeSummary:
        summary = cls()
        for data in entries:
            label = data.type_label.strip()
            summary.counts[label] = summary.counts.get(label, 0) + 1
            if label not in summary.lines:
                summary.lines[label] = []
            summary.lines[label].append(data.line)
        return summary

    def is_empty(self) -> bool:
        return len(self.counts) == 0

    def message(self, warn_at: int = WARNING_THRESHOLD, limit: int = DISPLAY_LIMIT) -> str:
        """One-line status text.

        Empty when there are no types, a warning with the count once warn_at
        distinct labels are present, otherwise up to limit labels with their
        counts.
        """
        if self.is_empty():
            return ""
        if len(self.counts) >= warn_at:
            return "⚠️ Types: " + str(len(self.counts))
        shown: list[str] = []
        for label, count in self.counts.items():
            if len(shown) >= limit:
                break
            shown.append(label + " (" + str(count) + ")")
        message = "Types: " + ", ".join(shown)
        if len(self.counts) > limit:
            message += " (+" + str(len(self.counts) - limit) + " more)"
        return message

    def items(self) -> list[str]:
        return [label + " (" + str(count) + " occurrences)" for label, count in self.counts.items()]


def graph_message(graph: TypeGraph | None) -> str:
    """Status text for a graph query: direct children of the root and
    distinct labels anywhere in the map."""
    if graph is None:
        return ""
    direct = len(graph.children(graph.root))
    if direct == 0:
        return graph.root.type_label + ": No types found"
    labels: set[str] = set()
    for children in graph.dependencies.values():
        for child in children:
            labels.add(child.type_label)
    return graph.root.type_label + ": " + str(direct) + " direct / " + str(len(labels)) + " total types"
