"""Configuration loading and management for docugit-analyzer.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig / CategoryPatterns)
    2. Global config (~/.docugit-analyzer.toml)
    3. Project config (./docugit-analyzer.toml)
    4. Explicit config file
    5. Environment variables (DOCUGIT_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> config = load_config(workers=4)
    >>> config.workers
    4
    >>> config.patterns.framework_patterns[:2]
    ('next', 'react')
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

PatternPairs = Tuple[Tuple[str, str], ...]


def _as_str_tuple(value: Any, key: str) -> tuple[str, ...]:
    if isinstance(value, str) or not hasattr(value, "__iter__"):
        raise InvalidConfigError(key, value, "expected a list of strings")
    items = tuple(value)
    if not all(isinstance(item, str) and item for item in items):
        raise InvalidConfigError(key, value, "entries must be non-empty strings")
    return items


def _as_pairs(value: Any, key: str) -> PatternPairs:
    if isinstance(value, Mapping):
        pairs = tuple((str(k), str(v)) for k, v in value.items())
    else:
        try:
            pairs = tuple((str(k), str(v)) for k, v in value)
        except (TypeError, ValueError):
            raise InvalidConfigError(key, value, "expected a table or list of [pattern, label] pairs")
    if not all(k and v for k, v in pairs):
        raise InvalidConfigError(key, value, "patterns and labels must be non-empty")
    return pairs


@dataclass(frozen=True)
class CategoryPatterns:
    """Static pattern data consumed by the aggregator and detectors.

    Injected rather than read from module globals so tests and callers can
    substitute their own lists.

    Attributes:
        framework_patterns: Substrings marking a dependency as a framework
        ui_patterns: Substrings marking a dependency as a UI library
        database_patterns: Substrings marking a dependency as a database/ORM
        technology_patterns: (substring, label) pairs for the technology list
        base_component_names: Superclass names that make a class a component
        route_entry_names: File stems that mark an API route file
        api_segment: Path segment that every API route file contains
    """

    framework_patterns: tuple[str, ...] = (
        "next",
        "react",
        "vue",
        "angular",
        "svelte",
        "express",
        "fastify",
        "nest",
    )
    ui_patterns: tuple[str, ...] = (
        "@radix-ui",
        "@headlessui",
        "@mui",
        "antd",
        "chakra-ui",
        "tailwindcss",
        "bootstrap",
    )
    database_patterns: tuple[str, ...] = (
        "prisma",
        "mongoose",
        "sequelize",
        "typeorm",
        "@supabase",
        "mongodb",
        "mysql",
        "postgres",
        "redis",
    )
    technology_patterns: PatternPairs = (
        ("react", "React"),
        ("next", "Next.js"),
        ("tailwind", "Tailwind CSS"),
    )
    base_component_names: tuple[str, ...] = (
        "Component",
        "PureComponent",
        "React.Component",
        "React.PureComponent",
    )
    route_entry_names: tuple[str, ...] = ("route",)
    api_segment: str = "/api/"

    def __post_init__(self) -> None:
        """Normalize list-like inputs (e.g. from TOML) and validate."""
        for name in (
            "framework_patterns",
            "ui_patterns",
            "database_patterns",
            "base_component_names",
            "route_entry_names",
        ):
            object.__setattr__(self, name, _as_str_tuple(getattr(self, name), name))
        object.__setattr__(
            self,
            "technology_patterns",
            _as_pairs(self.technology_patterns, "technology_patterns"),
        )
        if not self.api_segment.startswith("/") or not self.api_segment.endswith("/"):
            raise InvalidConfigError(
                "api_segment", self.api_segment, "must start and end with '/'"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CategoryPatterns:
        """Build from a ``[patterns]`` TOML table."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidConfigError("patterns", ", ".join(unknown), "unknown pattern keys")
        return cls(**dict(data))


DEFAULT_PATTERNS = CategoryPatterns()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for analysis execution.

    Attributes:
        Performance tuning:
            workers: Parallel parse workers (None = min(cpu_count, 8))
            parallel_threshold: Batches smaller than this are parsed sequentially
            parse_timeout_seconds: Per-file watchdog; slower files are skipped

        File filtering (local repository walks):
            max_file_size_kb: Files larger than this are not parsed
            max_files: Maximum number of source files handed to the parser
            exclude_dirs: Directory names never descended into

        Heuristics:
            patterns: Dependency categorization and convention detector data
    """

    workers: Optional[int] = None
    parallel_threshold: int = 10
    parse_timeout_seconds: float = 10.0

    max_file_size_kb: float = 512.0
    max_files: int = 100
    exclude_dirs: tuple[str, ...] = (
        "node_modules",
        ".git",
        ".next",
        "dist",
        "build",
        "coverage",
        ".cache",
        ".vercel",
        ".turbo",
        "__pycache__",
        ".pytest_cache",
        "vendor",
        "target",
    )

    patterns: CategoryPatterns = field(default_factory=CategoryPatterns)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.parallel_threshold < 1:
            raise InvalidConfigError(
                "parallel_threshold", self.parallel_threshold, "must be at least 1"
            )
        if self.parse_timeout_seconds <= 0:
            raise InvalidConfigError(
                "parse_timeout_seconds", self.parse_timeout_seconds, "must be positive"
            )
        if self.max_file_size_kb <= 0:
            raise InvalidConfigError("max_file_size_kb", self.max_file_size_kb, "must be positive")
        if self.max_files < 1:
            raise InvalidConfigError("max_files", self.max_files, "must be at least 1")
        object.__setattr__(self, "exclude_dirs", _as_str_tuple(self.exclude_dirs, "exclude_dirs"))

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_kb * 1024)

    @property
    def effective_workers(self) -> int:
        """Worker count with the auto-detect default applied."""
        return self.workers or min(os.cpu_count() or 4, 8)


DEFAULT_CONFIG = AnalysisConfig()


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored so unset CLI options keep lower-priority values

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is missing or malformed
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".docugit-analyzer.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "docugit-analyzer.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    patterns = merged.pop("patterns", None)
    if isinstance(patterns, Mapping):
        merged["patterns"] = CategoryPatterns.from_mapping(patterns)
    elif isinstance(patterns, CategoryPatterns):
        merged["patterns"] = patterns
    elif patterns is not None:
        raise InvalidConfigError("patterns", patterns, "expected a table")

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from DOCUGIT_* environment variables.

    Supported environment variables:
        DOCUGIT_WORKERS: int
        DOCUGIT_PARALLEL_THRESHOLD: int
        DOCUGIT_PARSE_TIMEOUT_SECONDS: float
        DOCUGIT_MAX_FILE_SIZE_KB: float
        DOCUGIT_MAX_FILES: int
    """
    type_hints = get_type_hints(AnalysisConfig)
    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"DOCUGIT_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        args = getattr(type_hint, "__args__", ())
        if type(None) in args:
            type_hint = next(t for t in args if t is not type(None))

        try:
            if type_hint is int:
                result[field_name] = int(env_value)
            elif type_hint is float:
                result[field_name] = float(env_value)
        except ValueError:
            raise InvalidConfigError(env_key, env_value, f"expected {type_hint.__name__}")

    return result


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If the file cannot be parsed
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
