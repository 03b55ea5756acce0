"""Assemble per-target bundle data for the treemap report.

Each bundle becomes a root cell labelled with the bundle name and weighted
by the bundle's own size; its assets are aggregated into groups under it.
Bundles are reported per build target, one payload per target::

    {
        "groups": [
            {"label": "index.js", "weight": 2048, "groups": [...]},
            ...
        ]
    }

Rendering the payload and writing it anywhere is up to the caller.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from ..config import InsightConfig
from ..exceptions import AssetPathError, ManifestError, UnnamedBundleError
from ..logging_config import get_logger
from .treemap import FileEntry, aggregate

logger = get_logger(__name__)

# Reports are produced only when this is set (or reports_enabled is on)
REPORT_ENV_VAR = "BUNDLE_INSIGHT_ANALYZER"


@dataclass(frozen=True)
class Asset:
    """A bundled source file and its size in bytes."""

    file_path: str
    size: int


@dataclass(frozen=True)
class Bundle:
    """An output bundle: its name, build target, total size and assets."""

    name: Optional[str]
    target: str
    size: int
    assets: Tuple[Asset, ...] = ()


def reports_enabled(config: InsightConfig) -> bool:
    return config.reports_enabled or os.environ.get(REPORT_ENV_VAR) is not None


def group_bundles_by_target(bundles: Iterable[Bundle]) -> Dict[str, List[Bundle]]:
    """Group bundles by target name, targets in first-seen order."""
    by_target: Dict[str, List[Bundle]] = {}
    for bundle in bundles:
        by_target.setdefault(bundle.target, []).append(bundle)
    return by_target


def bundle_node(
    bundle: Bundle,
    project_root: Union[str, os.PathLike],
    sep: str = os.sep,
) -> Dict[str, Any]:
    """Root treemap cell for one bundle.

    The weight is the bundle's reported size, not the sum of its asset
    groups.

    Raises:
        UnnamedBundleError: If the bundle has no name
        AssetPathError: If an asset path has an empty segment, or a file
            and a directory share a path
    """
    if not bundle.name:
        raise UnnamedBundleError(bundle.target)

    entries = [
        FileEntry.from_path(asset.file_path, asset.size, root=project_root, sep=sep)
        for asset in bundle.assets
    ]
    _check_asset_paths(bundle.name, entries, sep)
    return {
        "label": bundle.name,
        "weight": bundle.size,
        "groups": [group.to_dict() for group in aggregate(entries, sep)],
    }


def _check_asset_paths(bundle: str, entries: List[FileEntry], sep: str) -> None:
    files = set()
    directories = set()
    for entry in entries:
        path = sep.join(entry.relative_path)
        if not all(entry.relative_path):
            raise AssetPathError(bundle, path, "empty path segment")
        parents = {entry.relative_path[:i] for i in range(1, len(entry.relative_path))}
        if entry.relative_path in directories:
            raise AssetPathError(bundle, path, "file path is also a directory")
        clash = parents & files
        if clash:
            raise AssetPathError(bundle, path, f"{sep.join(min(clash))} is already a file")
        files.add(entry.relative_path)
        directories |= parents


def build_bundle_data(
    bundles: Iterable[Bundle],
    project_root: Union[str, os.PathLike],
    sep: str = os.sep,
) -> Dict[str, Any]:
    return {"groups": [bundle_node(bundle, project_root, sep) for bundle in bundles]}


def build_target_reports(
    bundles: Iterable[Bundle],
    project_root: Union[str, os.PathLike],
    sep: str = os.sep,
) -> Dict[str, Dict[str, Any]]:
    """Bundle data for every target, keyed by target name."""
    reports = {}
    for target, target_bundles in group_bundles_by_target(bundles).items():
        logger.debug("Building report for target %s (%d bundles)", target, len(target_bundles))
        reports[target] = build_bundle_data(target_bundles, project_root, sep)
    return reports


def load_manifest(path: Path) -> List[Bundle]:
    """Read bundles from a JSON manifest.

    The manifest is either ``{"bundles": [...]}`` or a bare list, each
    bundle shaped as::

        {"name": "index.js", "target": "default", "size": 2048,
         "assets": [{"path": "/project/src/index.js", "size": 1024}]}

    ``target`` defaults to ``"default"``.

    Raises:
        ManifestError: If the file is unreadable or malformed
    """
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise ManifestError(path, f"cannot read file: {e}")
    except json.JSONDecodeError as e:
        raise ManifestError(path, f"invalid JSON: {e}")

    if isinstance(raw, dict):
        raw = raw.get("bundles")
    if not isinstance(raw, list):
        raise ManifestError(path, "expected a list of bundles or an object with 'bundles'")

    bundles = [_parse_bundle(path, index, item) for index, item in enumerate(raw)]
    logger.info("Loaded %d bundles from %s", len(bundles), path)
    return bundles


def _parse_bundle(path: Path, index: int, item: Any) -> Bundle:
    entry = f"bundles[{index}]"
    if not isinstance(item, dict):
        raise ManifestError(path, "bundle must be an object", entry)

    name = item.get("name")
    if name is not None and not isinstance(name, str):
        raise ManifestError(path, "'name' must be a string", entry)

    target = item.get("target", "default")
    if not isinstance(target, str):
        raise ManifestError(path, "'target' must be a string", entry)

    size = _parse_size(path, item.get("size"), entry)

    raw_assets = item.get("assets", [])
    if not isinstance(raw_assets, list):
        raise ManifestError(path, "'assets' must be a list", entry)

    assets = []
    for asset_index, raw_asset in enumerate(raw_assets):
        asset_entry = f"{entry}.assets[{asset_index}]"
        asset_path = raw_asset.get("path") if isinstance(raw_asset, dict) else None
        if not isinstance(asset_path, str) or not asset_path:
            raise ManifestError(
                path, "asset must be an object with a non-empty 'path' string", asset_entry
            )
        assets.append(
            Asset(
                file_path=asset_path,
                size=_parse_size(path, raw_asset.get("size"), asset_entry),
            )
        )

    return Bundle(name=name, target=target, size=size, assets=tuple(assets))


def _parse_size(path: Path, value: Any, entry: str) -> int:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ManifestError(path, f"'size' must be a non-negative integer, got {value!r}", entry)
    return value
