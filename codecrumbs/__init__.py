"""Collect codecrumbs from source comments and assemble them into trails."""

from .assembler import TrailAssembler, regroup_crumbs
from .languages import LanguageDefinition, LanguageRegistry, default_registry
from .models import Crumb, GroupedCrumbs
from .parser import CommentScanner, DuplicateMarkerError, parse_marker

__version__ = "0.1.0"

__all__ = [
    "CommentScanner",
    "Crumb",
    "DuplicateMarkerError",
    "GroupedCrumbs",
    "LanguageDefinition",
    "LanguageRegistry",
    "TrailAssembler",
    "default_registry",
    "parse_marker",
    "regroup_crumbs",
]
