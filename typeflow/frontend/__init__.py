"""Frontend package - source units, anchors, signatures and the literal oracle."""

from .anchor import Anchor, Target, classify, locate
from .parse import ParseError, SourceUnit, parse
from .type_inference import LiteralTypeOracle, split_union_types

__all__ = [
    "Anchor",
    "LiteralTypeOracle",
    "ParseError",
    "SourceUnit",
    "Target",
    "classify",
    "locate",
    "parse",
    "split_union_types",
]
