"""
Bundle Insight - Bundle Size Treemaps and Package Specifier Resolution

Turns bundled asset paths and byte sizes into collapsed, weighted treemap
groups, and reduces module specifiers to the packages they import.
"""

__version__ = "0.1.0"

from .specifiers import PackageSpecifier, canonical_identifier, parse_all, parse_specifier
from .visualization import Bundle, FileEntry, Group, aggregate, build_target_reports

__all__ = [
    "parse_all",  # Specifier -> package identifier
    "parse_specifier",
    "canonical_identifier",
    "PackageSpecifier",
    "aggregate",  # File paths -> treemap groups
    "FileEntry",
    "Group",
    "Bundle",
    "build_target_reports",
]
