"""Configuration loading and management for archmap.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalyzerConfig)
    2. Global config (~/.archmap.toml)
    3. Project config (./archmap.toml)
    4. Explicit config file
    5. Environment variables (ARCHMAP_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> config = load_config(max_depth=4)
    >>> config.max_depth
    4
    >>> config.thresholds.hot_file_limit
    8
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple, get_type_hints

from .exceptions import ArchmapError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

DEFAULT_EXCLUDE_PATHS: Tuple[str, ...] = (
    "node_modules",
    ".next",
    ".git",
    "build",
    "dist",
    "out",
)

DEFAULT_ALLOWED_EXTENSIONS: Tuple[str, ...] = (
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    ".json",
    ".md",
    ".yml",
    ".yaml",
    ".css",
    ".scss",
)

# Files whose name contains one of these are analyzed regardless of extension
DEFAULT_NAME_MARKERS: Tuple[str, ...] = ("config", "package")

# Suffixes tried, in order, when resolving an import spec to a scanned file
DEFAULT_RESOLVE_EXTENSIONS: Tuple[str, ...] = (
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    ".mjs",
    ".cjs",
    ".json",
)


@dataclass(frozen=True)
class MetricThresholds:
    """Thresholds behind health, complexity and level selection.

    Attributes:
        Health ladder (category/vertex averages, evaluated top-down):
            health_monitor_imports: mean imports above this => Monitor
            health_monitor_size: mean bytes above this => Monitor
            health_good_imports: mean imports above this => Good
            health_good_size: mean bytes above this => Good

        Complexity (file count per vertex):
            complexity_high_files: more files than this => High
            complexity_medium_files: more files than this => Medium

        Per-file load buckets (global stats):
            load_monitor_imports: at or above => monitor bucket
            load_refactor_imports: at or above => refactor bucket

        Level 1:
            critical_category_min_files: category needs more files than this
            category_evidence_limit: files listed as evidence per vertex

        Level 2:
            hot_file_min_imports: imports above this make a file "hot"
            hot_file_min_exports: exports above this make a file "hot"
            hot_file_limit: number of hot files kept
            hot_file_dependency_limit: imports shown as vertex dependencies
            hot_file_critical_imports: imports above this => Critical importance
            hot_file_monitor_imports: imports above this => Monitor health

        Insights:
            critical_coupling: afferent coupling above this flags a component
    """

    health_monitor_imports: float = 15
    health_monitor_size: float = 5000
    health_good_imports: float = 10
    health_good_size: float = 3000

    complexity_high_files: int = 20
    complexity_medium_files: int = 10

    load_monitor_imports: int = 10
    load_refactor_imports: int = 20

    critical_category_min_files: int = 5
    category_evidence_limit: int = 10

    hot_file_min_imports: int = 5
    hot_file_min_exports: int = 3
    hot_file_limit: int = 8
    hot_file_dependency_limit: int = 3
    hot_file_critical_imports: int = 10
    hot_file_monitor_imports: int = 15

    critical_coupling: int = 15

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        if self.health_good_imports > self.health_monitor_imports:
            raise ValueError("health_good_imports must not exceed health_monitor_imports")
        if self.health_good_size > self.health_monitor_size:
            raise ValueError("health_good_size must not exceed health_monitor_size")
        if self.complexity_medium_files > self.complexity_high_files:
            raise ValueError("complexity_medium_files must not exceed complexity_high_files")
        if self.load_monitor_imports > self.load_refactor_imports:
            raise ValueError("load_monitor_imports must not exceed load_refactor_imports")

        for field_name in (
            "category_evidence_limit",
            "hot_file_limit",
            "hot_file_dependency_limit",
        ):
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name} must be non-negative")


DEFAULT_THRESHOLDS = MetricThresholds()


@dataclass(frozen=True)
class AnalyzerConfig:
    """Configuration for one analyzer instance.

    Attributes:
        File filtering:
            exclude_paths: directory-name prefixes that are never descended
            max_depth: recursion bound, the root is depth 0
            allowed_extensions: suffixes analyzed as source/text
            name_markers: name fragments that force analysis of any file
            max_file_size_mb: larger files are skipped

        Import resolution:
            alias_prefixes: non-relative prefixes kept as local imports
            alias_roots: alias prefix -> root-relative directory it maps to
            resolve_extensions: suffixes tried when resolving imports

        Performance tuning:
            workers: file-read threads per directory (None = auto-detect)
            timeout_seconds: abort the scan after this long (None = never)

        Security:
            follow_symlinks: descend into / read through symbolic links

        Output control:
            detect_cycles: run cycle detection over the import graph
            verbosity: logging verbosity level
    """

    exclude_paths: Tuple[str, ...] = DEFAULT_EXCLUDE_PATHS
    max_depth: int = 10
    allowed_extensions: Tuple[str, ...] = DEFAULT_ALLOWED_EXTENSIONS
    name_markers: Tuple[str, ...] = DEFAULT_NAME_MARKERS
    max_file_size_mb: float = 10.0

    alias_prefixes: Tuple[str, ...] = ("@/",)
    alias_roots: Dict[str, str] = field(default_factory=lambda: {"@/": "src/"})
    resolve_extensions: Tuple[str, ...] = DEFAULT_RESOLVE_EXTENSIONS

    workers: Optional[int] = None
    timeout_seconds: Optional[float] = None

    follow_symlinks: bool = False

    detect_cycles: bool = True
    verbosity: Verbosity = "normal"

    thresholds: MetricThresholds = field(default_factory=MetricThresholds)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_depth < 0:
            raise ValueError("max_depth must be non-negative")
        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if any(not prefix for prefix in self.exclude_paths):
            raise ValueError("exclude_paths must not contain empty prefixes")
        for alias in self.alias_roots:
            if alias not in self.alias_prefixes:
                raise ValueError(f"alias_roots key {alias!r} is not in alias_prefixes")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of: quiet, normal, verbose")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)

    @property
    def effective_workers(self) -> int:
        """Resolve the worker count, auto-detecting from CPU cores."""
        if self.workers is not None:
            return self.workers
        return min(8, os.cpu_count() or 1)


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalyzerConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored so unset CLI options keep the file values

    Returns:
        Validated AnalyzerConfig instance

    Raises:
        ArchmapError: If a config file is invalid or missing
        InvalidConfigError: If an ARCHMAP_* variable or the [thresholds] table is invalid

    Example:
        >>> config = load_config(config_file=Path("custom.toml"))
    """
    merged: dict = {}

    global_config = Path.home() / ".archmap.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise ArchmapError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "archmap.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise ArchmapError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ArchmapError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise ArchmapError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    thresholds_dict = merged.pop("thresholds", None)
    if thresholds_dict is not None:
        if isinstance(thresholds_dict, dict):
            try:
                merged["thresholds"] = MetricThresholds(**thresholds_dict)
            except (TypeError, ValueError) as e:
                raise InvalidConfigError("thresholds", thresholds_dict, str(e))
        elif isinstance(thresholds_dict, MetricThresholds):
            merged["thresholds"] = thresholds_dict

    # TOML arrays arrive as lists
    for field_name in _tuple_fields():
        if isinstance(merged.get(field_name), list):
            merged[field_name] = tuple(merged[field_name])

    try:
        return AnalyzerConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ArchmapError(f"Invalid configuration: {e}")


def _tuple_fields() -> list[str]:
    type_hints = get_type_hints(AnalyzerConfig)
    return [
        f.name for f in fields(AnalyzerConfig) if getattr(type_hints[f.name], "__origin__", None) is tuple
    ]


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from ARCHMAP_* environment variables.

    Supported environment variables:
        ARCHMAP_MAX_DEPTH: int
        ARCHMAP_MAX_FILE_SIZE_MB: float
        ARCHMAP_WORKERS: int
        ARCHMAP_TIMEOUT_SECONDS: float
        ARCHMAP_FOLLOW_SYMLINKS: bool (true/false/1/0)
        ARCHMAP_DETECT_CYCLES: bool
        ARCHMAP_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any ARCHMAP_* vars found.
    """
    type_hints = get_type_hints(AnalyzerConfig)

    result: dict[str, Any] = {}

    for field_name in AnalyzerConfig.__dataclass_fields__:
        env_key = f"ARCHMAP_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Args:
        value: Raw string from environment
        type_hint: Type annotation from dataclass

    Returns:
        Parsed value or None if the type is not settable from the environment

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

    # Tuples, dicts and nested thresholds only come from TOML
    if origin in (tuple, dict) or type_hint is MetricThresholds:
        return None

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

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ArchmapError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ArchmapError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
