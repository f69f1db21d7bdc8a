"""Flat type resolution: every type a name may hold, as one list.

Resolution is call-site sensitive and flow insensitive. Starting from the
anchor it follows three relationships through the whole source unit:

    assignment scan   x = <expr>           -> types of <expr>
    return scan       foo(...)             -> types of foo's return values
    call-site scan    def f(p) / f(<arg>)  -> types of <arg> at p's position

Leaf expressions are typed by the oracle. Each name, call and parameter is
expanded at most once per query (see Query.visited), which keeps mutually
referencing assignments such as `a = b; b = a` finite.
"""

from __future__ import annotations

import ast
import logging

from ..expression import ExpressionData, ResolutionError
from ..frontend.anchor import Anchor, Target, locate
from ..frontend.ast_compat import is_callee, is_variable, node_text, walk
from ..frontend.signatures import (
    FunctionNode,
    callee_name,
    function_of_param,
    param_index,
    resolve_callee,
)
from ..frontend.type_inference import (
    LiteralTypeOracle,
    annotation_text,
    descriptor_labels,
    split_union_types,
)
from ..options import DEFAULT_OPTIONS, ResolverOptions
from ..oracle import TypeOracle
from .context import Query
from .returns import function_returns, is_conditionally_reachable

logger = logging.getLogger(__name__)


class FlatTypeResolver:
    """Resolves an anchor to the flat list of types it may hold."""

    def __init__(self, oracle: TypeOracle | None = None, options: ResolverOptions | None = None) -> None:
        self.oracle: TypeOracle = oracle if oracle is not None else LiteralTypeOracle()
        self.options: ResolverOptions = options if options is not None else DEFAULT_OPTIONS

    def resolve(self, anchor: Anchor) -> list[ExpressionData]:
        """Possible types at anchor; empty when the anchor cannot be resolved."""
        query = self._run(anchor)
        if query is None:
            return []
        return query.results

    def _run(self, anchor: Anchor) -> Query | None:
        try:
            target = locate(anchor)
        except ResolutionError as e:
            logger.debug("%s: %s", type(e).__name__, e.msg)
            return None
        query = Query(target.unit)
        self._dispatch(target, query)
        return query

    def _dispatch(self, target: Target, query: Query) -> None:
        if target.kind in ("parameter", "parameter-usage"):
            assert target.param is not None
            self._resolve_parameter(target.param, query)
        else:
            self._scan_assignments(target.node, query)

    # --- hooks (the graph resolver records structure here) ---

    def _enter(self, query: Query, node: ast.AST, type_label: str, key: str) -> bool:
        """Begin resolving a name, parameter or call. False if key was
        already expanded in this query."""
        if not query.mark(key):
            logger.debug("skipping %r: already expanded", key)
            return False
        self._push(query, ExpressionData.of(node, type_label))
        return True

    def _push(self, query: Query, data: ExpressionData) -> None:
        pass

    def _leave(self, query: Query) -> None:
        pass

    def _emit(self, query: Query, batch: list[ExpressionData]) -> None:
        query.results.extend(batch)

    # --- parameters ---

    def _resolve_parameter(self, param: ast.arg, query: Query) -> None:
        func = function_of_param(param, query.unit)
        if not self._enter(query, param, param.arg, _param_key(param, func)):
            return
        if param.annotation is not None:
            text = annotation_text(param.annotation, query.unit)
            self._emit(query, [ExpressionData.of(param, t) for t in self._split(text)])
        else:
            if func is not None:
                self._scan_call_sites(func, param_index(func, param), query)
        self._leave(query)

    def _scan_call_sites(self, func: FunctionNode, index: int, query: Query) -> None:
        """Evaluate the index-th positional argument of every call to func.

        Calls are matched by bare callee name; keyword arguments and defaults
        are not considered.
        """
        logger.debug("scanning calls of %s() for argument %d", func.name, index)
        for node in walk(query.unit.tree):
            if not isinstance(node, ast.Call) or callee_name(node) != func.name:
                continue
            if index >= len(node.args):
                continue
            self._evaluate(node.args[index], query)

    # --- assignments ---

    def _scan_assignments(self, name: ast.AST, query: Query) -> None:
        unit = query.unit
        text = node_text(name, unit)
        type_label = text + "()" if is_callee(name, unit) else text
        if not self._enter(query, name, type_label, text):
            return
        logger.debug("scanning assignments to %r", text)
        for node in walk(unit.tree):
            if isinstance(node, ast.Assign):
                for target in node.targets:
                    self._match_target(target, node.value, text, query)
            elif isinstance(node, (ast.AnnAssign, ast.NamedExpr)):
                if node.value is not None:
                    self._match_target(node.target, node.value, text, query)
            elif isinstance(node, ast.Call) and unit.text(node.func) == text:
                # a call of the name is assigned its return types
                self._evaluate_call(node, query, push=False)
        self._leave(query)

    def _match_target(self, target: ast.expr, value: ast.expr, text: str, query: Query) -> None:
        if not isinstance(target, (ast.Tuple, ast.List)):
            if node_text(target, query.unit) == text:
                self._evaluate(value, query)
            return
        if isinstance(value, (ast.Tuple, ast.List)):
            if not _shapes_match(target, value):
                return
            for t, v in zip(target.elts, value.elts):
                self._match_target(t, v, text, query)
            return
        # x, y = make_pair(): every matching name gets the whole value
        for name in _flatten_targets(target):
            if node_text(name, query.unit) == text:
                self._evaluate(value, query)

    # --- evaluation ---

    def _evaluate(self, expr: ast.expr, query: Query) -> None:
        if is_variable(expr):
            self._scan_assignments(expr, query)
        elif isinstance(expr, ast.Call):
            self._evaluate_call(expr, query)
        else:
            self._evaluate_leaf(expr, query)

    def _evaluate_call(self, call: ast.Call, query: Query, push: bool = True) -> None:
        func = resolve_callee(call, query.unit)
        if func is None:
            self._evaluate_leaf(call, query)
            return
        self._scan_returns(call, func, query, push)

    def _evaluate_leaf(self, expr: ast.expr, query: Query) -> None:
        descriptor = self.oracle.type_of(expr, query.unit)
        if descriptor is None:
            if isinstance(expr, ast.Call):
                fallback = query.unit.text(expr.func) + "()"
                self._emit(query, [ExpressionData.of(expr, fallback)])
            return
        labels = descriptor_labels(descriptor, self.options.max_union_parts)
        self._emit(query, [ExpressionData.of(expr, t) for t in labels])

    # --- returns ---

    def _scan_returns(self, call: ast.Call, func: FunctionNode, query: Query, push: bool) -> None:
        unit = query.unit
        key = unit.text(call.func) + "()"
        if push:
            if not self._enter(query, call, key, key):
                return
        elif not query.mark(key):
            logger.debug("skipping %r: already expanded", key)
            return
        logger.debug("scanning returns of %s() for call at line %d", func.name, call.lineno)
        if func.returns is not None:
            text = annotation_text(func.returns, unit)
            self._emit(query, [ExpressionData.of(call, t) for t in self._split(text)])
        none_added = False
        for ret in function_returns(func):
            if not none_added and is_conditionally_reachable(ret, func, unit):
                # the function may fall off the end of the branch
                none_added = True
                self._emit(query, [ExpressionData.of(call, "None")])
            if ret.value is None:
                if not none_added:
                    none_added = True
                    self._emit(query, [ExpressionData.of(call, "None")])
                continue
            self._evaluate(ret.value, query)
        if push:
            self._leave(query)

    def _split(self, text: str) -> list[str]:
        return split_union_types(text, self.options.max_union_parts)


def _param_key(param: ast.arg, func: FunctionNode | None) -> str:
    """Guard key for a parameter frame; never equal to a variable's text."""
    if func is None:
        return "param:" + param.arg
    return "param:" + func.name + "." + param.arg


def _shapes_match(target: ast.expr, value: ast.expr) -> bool:
    """Destructuring pairs positionally only when every level has equal
    length."""
    if not isinstance(target, (ast.Tuple, ast.List)) or not isinstance(value, (ast.Tuple, ast.List)):
        return True
    if len(target.elts) != len(value.elts):
        return False
    return all(_shapes_match(t, v) for t, v in zip(target.elts, value.elts))


def _flatten_targets(target: ast.expr) -> list[ast.expr]:
    if isinstance(target, (ast.Tuple, ast.List)):
        names: list[ast.expr] = []
        for elt in target.elts:
            names.extend(_flatten_targets(elt))
        return names
    if isinstance(target, ast.Starred):
        return _flatten_targets(target.value)
    return [target]
