"""Resolution passes (read-only over the source unit)."""

from .context import Query
from .flat import FlatTypeResolver
from .graph import GraphTypeResolver

__all__ = [
    "FlatTypeResolver",
    "GraphTypeResolver",
    "Query",
]
