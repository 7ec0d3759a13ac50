"""HTML directory listing parsers."""

from .dialects import Dialect, PARSERS, build_entry, parse_listing, sniff_dialect
from .dom import parse_anchor_listing

__all__ = [
    "Dialect",
    "PARSERS",
    "build_entry",
    "parse_listing",
    "sniff_dialect",
    "parse_anchor_listing",
]
