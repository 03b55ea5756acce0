"""Report-related exceptions: bundle manifests, bundle data assembly."""

from pathlib import Path
from typing import Optional

from .base import BundleInsightError


class ReportError(BundleInsightError):
    """Base class for errors raised while assembling bundle report data."""

    pass


class UnnamedBundleError(ReportError):
    """Raised when a bundle without a name is asked to label a treemap root."""

    def __init__(self, target: str):
        super().__init__(
            "Bundle has no name and cannot label a report root",
            details={"target": target},
        )
        self.target = target


class ManifestError(ReportError):
    """Raised when a bundle manifest cannot be read or has the wrong shape."""

    def __init__(self, path: Path, reason: str, entry: Optional[str] = None):
        details = {"path": str(path), "reason": reason}
        if entry is not None:
            details["entry"] = entry

        super().__init__(f"Invalid bundle manifest: {path}", details=details)
        self.path = path
        self.reason = reason
        self.entry = entry


class AssetPathError(ReportError):
    """Raised when asset paths in a bundle cannot form a directory tree."""

    def __init__(self, bundle: str, path: str, reason: str):
        super().__init__(
            f"Invalid asset path in bundle {bundle}: {path}",
            details={"bundle": bundle, "path": path, "reason": reason},
        )
        self.bundle = bundle
        self.path = path
        self.reason = reason
