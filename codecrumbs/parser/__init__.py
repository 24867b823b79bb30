"""Comment scanning and marker parsing."""

from .marker import FieldOutcome, MarkerParse, parse_marker
from .scanner import CommentScanner, DEFAULT_MARKER, DuplicateMarkerError, collect_crumbs

__all__ = [
    "CommentScanner",
    "DEFAULT_MARKER",
    "DuplicateMarkerError",
    "FieldOutcome",
    "MarkerParse",
    "collect_crumbs",
    "parse_marker",
]
