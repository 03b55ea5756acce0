"""Build weighted treemap groups from flat file paths.

The output is designed for a FoamTree-style treemap: every group carries a
``label`` and a ``weight`` (byte size), and directories carry their
``groups``.  Directories that hold a single entry are folded into their
child so a chain like ``a/b/c/file.js`` renders as one labelled cell::

    [
        {
            "label": "src",
            "weight": 150,
            "groups": [
                {"label": "index.js", "weight": 100},
                {"label": "util/format.js", "weight": 50}
            ]
        }
    ]
"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    """One file and its size, addressed by relative path segments."""

    relative_path: Tuple[str, ...]
    weight: int

    @classmethod
    def from_path(
        cls,
        path: Union[str, os.PathLike],
        weight: int,
        root: Optional[Union[str, os.PathLike]] = None,
        sep: str = os.sep,
    ) -> FileEntry:
        """Make ``path`` relative to ``root`` (if given) and split it on ``sep``."""
        relative = os.fspath(path)
        if root is not None:
            relative = os.path.relpath(relative, os.fspath(root))
        return cls(tuple(relative.split(sep)), weight)

    @property
    def basename(self) -> str:
        return self.relative_path[-1]


@dataclass(frozen=True)
class Group:
    """A weighted treemap node.  Leaves have ``children`` set to None."""

    label: str
    weight: int
    children: Optional[Tuple[Group, ...]] = None

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serialisable form, nested under ``groups``."""
        data: Dict[str, Any] = {"label": self.label, "weight": self.weight}
        if self.children is not None:
            data["groups"] = [child.to_dict() for child in self.children]
        return data


# Directory node: segment -> subdirectory or file entry, in insertion order
_DirMap = Dict[str, Union["_DirMap", FileEntry]]


def _dir_map() -> _DirMap:
    return defaultdict(_dir_map)


def _check_entry(entry: FileEntry) -> None:
    assert len(entry.relative_path) > 0, "file entry has no path segments"
    assert all(entry.relative_path), f"empty path segment in {entry.relative_path!r}"
    # bool is an int subclass
    weight_ok = isinstance(entry.weight, int) and not isinstance(entry.weight, bool)
    assert weight_ok and entry.weight >= 0, (
        f"weight of {entry.relative_path!r} must be a non-negative integer, got {entry.weight!r}"
    )


def build_dir_map(entries: Iterable[FileEntry]) -> _DirMap:
    """Nest entries into a segment-keyed tree.

    A later entry with the same path replaces the earlier one but keeps its
    position among its siblings.
    """
    root = _dir_map()
    for entry in entries:
        _check_entry(entry)
        node = root
        for directory in entry.relative_path[:-1]:
            node = node[directory]
            assert isinstance(node, dict), (
                f"{directory!r} in {entry.relative_path!r} is already a file"
            )
        existing = node.get(entry.basename)
        assert not isinstance(existing, dict), (
            f"{entry.basename!r} in {entry.relative_path!r} is already a directory"
        )
        node[entry.basename] = entry
    return root


def generate_groups(dir_map: _DirMap, sep: str = os.sep) -> list[Group]:
    """Convert a directory map to groups, collapsing single-child directories."""
    groups: list[Group] = []

    for name, contents in dir_map.items():
        if isinstance(contents, FileEntry):
            groups.append(Group(label=contents.basename, weight=contents.weight))
            continue

        children = generate_groups(contents, sep)
        if len(children) == 1:
            only = children[0]
            groups.append(dataclasses.replace(only, label=f"{name}{sep}{only.label}"))
        else:
            groups.append(
                Group(
                    label=name,
                    weight=sum(child.weight for child in children),
                    children=tuple(children),
                )
            )

    return groups


def aggregate(entries: Sequence[FileEntry], sep: str = os.sep) -> list[Group]:
    """Build the top-level treemap groups for a set of files.

    Parameters
    ----------
    entries:
        Files with their relative path segments and byte sizes.
    sep:
        Separator used to join the labels of collapsed directories.

    Returns
    -------
    list[Group]
        Top-level groups in the order their names were first seen.
    """
    groups = generate_groups(build_dir_map(entries), sep)
    logger.debug("Aggregated %d files into %d top-level groups", len(entries), len(groups))
    return groups


def iter_leaves(groups: Iterable[Group]) -> Iterator[Group]:
    """Yield every leaf group, depth first."""
    for group in groups:
        if group.children is None:
            yield group
        else:
            yield from iter_leaves(group.children)


def total_weight(groups: Iterable[Group]) -> int:
    return sum(group.weight for group in groups)
