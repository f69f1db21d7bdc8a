"""Graph type resolution: the flat walk, recorded as a dependency map.

The graph resolver runs exactly the flat resolver's scans. It only hooks the
points where a name, parameter or call starts and finishes resolving, and
where a batch of types is discovered:

    enter   push onto the resolution stack; edge from the previous top
    emit    commit the batch under the current top
    leave   pop (the root frame stays until the query ends)

Edges are filed under the existing key whose label matches the parent's
label, so a label is a single node of the map even when several expressions
carry it.
"""

from __future__ import annotations

import ast
import logging

from ..expression import ExpressionData, TypeGraph
from ..frontend.anchor import Anchor
from .context import Query
from .flat import FlatTypeResolver

logger = logging.getLogger(__name__)


class GraphTypeResolver(FlatTypeResolver):
    """Resolves an anchor to a dependency map rooted at the anchor."""

    def resolve_graph(self, anchor: Anchor) -> TypeGraph | None:
        """Dependency map and root for anchor; None when the anchor cannot be
        resolved."""
        query = self._run(anchor)
        if query is None or query.root is None:
            return None
        return TypeGraph(dependencies=query.dependencies, root=query.root)

    def _push(self, query: Query, data: ExpressionData) -> None:
        parent = query.top()
        if parent is not None:
            self._commit(query, parent, [data])
        if query.root is None:
            query.root = data
        query.stack.append(data)

    def _leave(self, query: Query) -> None:
        data = query.stack[-1]
        if isinstance(data.node, ast.arg) and query.find_key(data.type_label) is None:
            # parameter with nothing behind it: keep it as a leaf entry
            query.dependencies[data] = []
        if len(query.stack) > 1:
            query.stack.pop()

    def _emit(self, query: Query, batch: list[ExpressionData]) -> None:
        super()._emit(query, batch)
        parent = query.top()
        if parent is not None and len(batch) > 0:
            self._commit(query, parent, batch)

    def _commit(self, query: Query, parent: ExpressionData, batch: list[ExpressionData]) -> None:
        """File batch under the key labelled like parent.

        A brand-new key receives only the first entry of the batch unless
        commit_all_children is set; an existing key receives every entry that
        is not already among its children.
        """
        key = query.find_key(parent.type_label)
        for data in batch:
            if key is None:
                query.dependencies[parent] = [data]
                key = parent
                if not self.options.commit_all_children:
                    if len(batch) > 1:
                        logger.debug(
                            "new key %r keeps 1 of %d entries", parent.type_label, len(batch)
                        )
                    return
            elif query.is_absent(key, data):
                query.dependencies[key].append(data)
