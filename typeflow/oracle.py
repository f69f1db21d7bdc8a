"""Type oracle interface.

The resolvers never compute the type of a leaf expression themselves; they
ask an oracle. The oracle answers with a single named type, a union of named
types, or None when it has nothing to say.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .frontend.parse import SourceUnit


@dataclass(frozen=True)
class NamedType:
    name: str


@dataclass(frozen=True)
class UnionType:
    members: tuple[NamedType, ...]

    @property
    def name(self) -> str:
        return " | ".join(m.name for m in self.members)


TypeDescriptor = NamedType | UnionType


class TypeOracle(Protocol):
    def type_of(self, expr: ast.expr, unit: SourceUnit) -> TypeDescriptor | None: ...


def union_of(names: list[str]) -> TypeDescriptor | None:
    """Build a descriptor from member names, dropping repeats."""
    unique: list[str] = []
    for name in names:
        if name not in unique:
            unique.append(name)
    if len(unique) == 0:
        return None
    if len(unique) == 1:
        return NamedType(unique[0])
    return UnionType(tuple(NamedType(n) for n in unique))
