"""Visualization layer: treemap groups and per-target bundle data."""

from .report import (
    Asset,
    Bundle,
    build_bundle_data,
    build_target_reports,
    bundle_node,
    group_bundles_by_target,
    load_manifest,
    reports_enabled,
)
from .treemap import FileEntry, Group, aggregate, iter_leaves, total_weight

__all__ = [
    "Asset",
    "Bundle",
    "FileEntry",
    "Group",
    "aggregate",
    "build_bundle_data",
    "build_target_reports",
    "bundle_node",
    "group_bundles_by_target",
    "iter_leaves",
    "load_manifest",
    "reports_enabled",
    "total_weight",
]
