"""Resolver configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolverOptions:
    """Knobs shared by the flat and graph resolvers.

    max_union_parts: parts kept when splitting union text such as
        "A | B | C". The default keeps two, so the third member is dropped.
        None keeps every member.
    commit_all_children: when a batch of discoveries lands under a brand-new
        dependency-map key, only its first entry is recorded unless this is
        set.
    """

    max_union_parts: int | None = 2
    commit_all_children: bool = False


DEFAULT_OPTIONS = ResolverOptions()
