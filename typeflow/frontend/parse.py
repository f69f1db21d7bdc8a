"""Parse Python source into a navigable SourceUnit.

The tree itself is the standard library ast tree. SourceUnit adds what the
resolvers need on top of it: parent links, character offsets for every
positioned node, and lookup of the innermost node under an offset.
"""

from __future__ import annotations

import ast


class ParseError(Exception):
    """Parse error with location info."""

    def __init__(self, msg: str, lineno: int, col: int):
        self.msg: str = msg
        self.lineno: int = lineno
        self.col: int = col
        super().__init__(msg)


class SourceUnit:
    """One parsed source file.

    Offsets are character offsets into `source`. Lines are 1-based as in
    ast; columns passed to offset_of() are 0-based character columns.
    """

    def __init__(self, source: str, tree: ast.Module, path: str = "<input>") -> None:
        self.source: str = source
        self.tree: ast.Module = tree
        self.path: str = path
        self._lines: list[str] = source.splitlines(keepends=True)
        self._line_starts: list[int] = []
        start = 0
        for line in self._lines:
            self._line_starts.append(start)
            start += len(line)
        self._parents: dict[ast.AST, ast.AST] = {}
        for node in ast.walk(tree):
            for child in ast.iter_child_nodes(node):
                self._parents[child] = node

    @classmethod
    def from_source(cls, source: str, path: str = "<input>") -> SourceUnit:
        try:
            tree = ast.parse(source, filename=path)
        except SyntaxError as e:
            raise ParseError(e.msg, e.lineno or 0, e.offset or 0) from e
        return cls(source, tree, path)

    def __len__(self) -> int:
        return len(self.source)

    # --- positions ---

    def offset_of(self, lineno: int, col: int) -> int:
        """Character offset for a 1-based line and 0-based character column."""
        if lineno < 1 or lineno > len(self._line_starts):
            return -1
        return self._line_starts[lineno - 1] + col

    def line_of(self, offset: int) -> int:
        """Zero-based line containing offset, -1 when out of range."""
        if offset < 0 or offset > len(self.source):
            return -1
        lo = 0
        hi = len(self._line_starts) - 1
        while lo < hi:
            mid = (lo + hi + 1) // 2
            if self._line_starts[mid] <= offset:
                lo = mid
            else:
                hi = mid - 1
        return lo

    def _char_offset(self, lineno: int, byte_col: int) -> int:
        # ast columns count utf-8 bytes
        line = self._lines[lineno - 1] if lineno - 1 < len(self._lines) else ""
        prefix = line.encode("utf-8")[:byte_col].decode("utf-8", errors="ignore")
        return self._line_starts[lineno - 1] + len(prefix) if self._line_starts else len(prefix)

    def span(self, node: ast.AST) -> tuple[int, int] | None:
        """Character span [start, end) of a positioned node."""
        lineno = getattr(node, "lineno", None)
        end_lineno = getattr(node, "end_lineno", None)
        if lineno is None or end_lineno is None:
            return None
        start = self._char_offset(lineno, node.col_offset)
        end = self._char_offset(end_lineno, node.end_col_offset)
        return (start, end)

    # --- navigation ---

    def parent(self, node: ast.AST) -> ast.AST | None:
        return self._parents.get(node)

    def contains(self, node: ast.AST) -> bool:
        return node is self.tree or node in self._parents

    def node_at(self, offset: int) -> ast.AST | None:
        """Innermost positioned node covering offset, or None."""
        if offset < 0 or offset >= len(self.source):
            return None
        # decorators sit outside their def's span, so scan every node rather
        # than descending from the module
        found: ast.AST | None = None
        found_width = -1
        for node in ast.walk(self.tree):
            node_span = self.span(node)
            if node_span is None:
                continue
            start, end = node_span
            if not start <= offset < end:
                continue
            width = end - start
            if found is None or width <= found_width:
                found = node
                found_width = width
        return found

    def text(self, node: ast.AST) -> str:
        segment = ast.get_source_segment(self.source, node)
        if segment is not None:
            return segment
        return ast.unparse(node)


def parse(source: str, path: str = "<input>") -> SourceUnit:
    return SourceUnit.from_source(source, path)
