"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    max_files: Optional[int] = None,
) -> AnalysisConfig:
    """Build configuration from CLI options; unset options keep file/env values."""
    return load_config(config_file=config, workers=workers, max_files=max_files)
