"""Exception hierarchy for Bundle Insight."""

from .base import BundleInsightError
from .config import (
    ConfigFileError,
    ConfigurationError,
    InvalidConfigError,
)
from .report import (
    AssetPathError,
    ManifestError,
    ReportError,
    UnnamedBundleError,
)

__all__ = [
    "BundleInsightError",
    "ConfigurationError",
    "ConfigFileError",
    "InvalidConfigError",
    "ReportError",
    "AssetPathError",
    "ManifestError",
    "UnnamedBundleError",
]
