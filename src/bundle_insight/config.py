"""Configuration loading and management for Bundle Insight.

Only the orchestration layer (bundle report assembly and the CLI) reads
configuration. The specifier parser and the treemap aggregator take every
input as an argument. Configuration sources are merged in priority order:
    1. Defaults (defined in InsightConfig)
    2. Global config (~/.bundle-insight.toml)
    3. Project config (./bundle-insight.toml)
    4. Explicit config file
    5. Environment variables (BUNDLE_INSIGHT_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, json_indent=4)
    >>> config.verbosity
    'verbose'
    >>> config.json_indent
    4
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigFileError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "BUNDLE_INSIGHT_"

_VERBOSITY_LEVELS = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class InsightConfig:
    """Configuration for bundle report assembly.

    Attributes:
        project_root: Directory asset paths are made relative to
            (None = current working directory)
        path_separator: Separator used to split relative asset paths and to
            join collapsed treemap labels
        reports_enabled: Produce bundle reports without the
            BUNDLE_INSIGHT_ANALYZER environment gate
        json_indent: Indentation of JSON printed by the CLI
        verbosity: Logging verbosity level
    """

    project_root: Optional[str] = None
    path_separator: str = os.sep
    reports_enabled: bool = False
    json_indent: int = 2
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.path_separator:
            raise InvalidConfigError("path_separator", self.path_separator, "must not be empty")
        if self.json_indent < 0:
            raise InvalidConfigError("json_indent", self.json_indent, "must be non-negative")
        if self.verbosity not in _VERBOSITY_LEVELS:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(_VERBOSITY_LEVELS)}"
            )

    @property
    def root_path(self) -> Path:
        """Project root as a resolved path."""
        return Path(self.project_root or os.getcwd()).resolve()


def load_config(config_file: Optional[Path] = None, **overrides) -> InsightConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower-priority
            values.

    Returns:
        Validated InsightConfig instance

    Raises:
        ConfigFileError: If a config file is invalid or missing
        InvalidConfigError: If a merged value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".bundle-insight.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "bundle-insight.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    # Verbosity boolean flags become the string field
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(merged) - set(InsightConfig.__dataclass_fields__))
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "unknown configuration key")

    return InsightConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from BUNDLE_INSIGHT_* environment variables.

    Supported environment variables:
        BUNDLE_INSIGHT_PROJECT_ROOT: str
        BUNDLE_INSIGHT_PATH_SEPARATOR: str
        BUNDLE_INSIGHT_REPORTS_ENABLED: bool (true/false/1/0)
        BUNDLE_INSIGHT_JSON_INDENT: int
        BUNDLE_INSIGHT_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any BUNDLE_INSIGHT_* vars found.
    """
    type_hints = get_type_hints(InsightConfig)

    result: dict[str, Any] = {}

    for field_name in InsightConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigFileError: If TOML support is missing or parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigFileError(
                path, "TOML support requires Python 3.11+ or the 'tomli' package"
            )

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e))
