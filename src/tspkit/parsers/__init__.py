"""Parsers for the TSPLIB file format."""

from .tsplib import TsplibParser, parse_stream, parse_text, read_instance
from .edge_weights import LAYOUT_TRAVERSALS, read_edge_weights
from .tokens import TokenScanner

__all__ = [
    "TsplibParser",
    "parse_stream",
    "parse_text",
    "read_instance",
    "LAYOUT_TRAVERSALS",
    "read_edge_weights",
    "TokenScanner",
]
