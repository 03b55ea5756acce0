"""Module specifier validation.

Reduces the string used in an ``import``/``require`` statement to the
canonical identifier of the package it points into::

    @parcel/transformer-posthtml/package.json  ->  @parcel/transformer-posthtml
    @org/some-package@v1.0.0-alpha.1           ->  @org/some-package@v1.0.0-alpha.1
    lodash/something/index.js                  ->  lodash
    ./somewhere.js                             ->  ""

Local paths (relative, absolute or home-relative) have no package identity
and map to the empty string. Nothing here raises on string input.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")
_WINDOWS_ABSOLUTE = re.compile(r"^(?:[A-Za-z]:[\\/]|\\\\)")
_RELATIVE_PREFIXES = ("./", "../", ".\\", "..\\")


@dataclass(frozen=True)
class PackageSpecifier:
    """The parts of a package specifier.

    ``subpath`` is kept for inspection only, it never appears in
    :attr:`identifier`.
    """

    name: str
    scope: Optional[str] = None
    version: Optional[str] = None
    subpath: str = ""

    @property
    def identifier(self) -> str:
        """Canonical ``[@scope/]name[@version]`` form."""
        ident = f"{self.scope}/{self.name}" if self.scope else self.name
        if self.version:
            ident = f"{ident}@{self.version}"
        return ident


def is_local_path(specifier: str) -> bool:
    """True for relative, absolute and home-relative filesystem paths."""
    if specifier in (".", "..") or specifier.startswith(_RELATIVE_PREFIXES):
        return True
    if specifier.startswith("~"):
        return True
    return os.path.isabs(specifier) or bool(_WINDOWS_ABSOLUTE.match(specifier))


def _ambiguous(specifier: str) -> None:
    # "@scope@1.0/name", "pkg@1.0@beta": no rule says which "@" wins
    logger.warning("Ambiguous specifier %r: multiple '@' before the first '/'", specifier)
    return None


def parse_specifier(specifier: str) -> Optional[PackageSpecifier]:
    """Split a specifier into scope, name, version and subpath.

    Returns None when the specifier is a local path or has no package-like
    structure.
    """
    if not specifier or _WHITESPACE.match(specifier) or is_local_path(specifier):
        return None

    text = _WHITESPACE.split(specifier, maxsplit=1)[0]

    scope = None
    rest = text
    if text.startswith("@"):
        slash = text.find("/")
        if slash <= 1:
            return None
        scope = text[:slash]
        if "@" in scope[1:]:
            return _ambiguous(specifier)
        rest = text[slash + 1 :]

    if rest.split("/", 1)[0].count("@") > 1:
        return _ambiguous(specifier)

    end = len(rest)
    for i, ch in enumerate(rest):
        if ch in "/@":
            end = i
            break
    name = rest[:end]
    if not name or name[0] in ".~":
        return None

    remainder = rest[end:]
    version = None
    if remainder.startswith("@"):
        slash = remainder.find("/")
        if slash == -1:
            slash = len(remainder)
        version = remainder[1:slash]
        if not version:
            return None
        remainder = remainder[slash:]

    return PackageSpecifier(name=name, scope=scope, version=version, subpath=remainder)


def canonical_identifier(specifier: str) -> str:
    """Canonical package identifier for one specifier, or ``""``."""
    parsed = parse_specifier(specifier)
    if parsed is None:
        logger.debug("No package identity for specifier %r", specifier)
        return ""
    return parsed.identifier


def parse_all(specifiers: Iterable[str]) -> list[str]:
    """Map each specifier to its canonical package identifier.

    The result has one entry per input, in input order; local paths and
    unparsable specifiers yield ``""``.
    """
    return [canonical_identifier(s) for s in specifiers]
