"""
Logging setup for docugit-analyzer.

Every module asks for ``get_logger(__name__)``; the CLI calls
``setup_logging`` once. Log records go to stderr through rich, so the JSON
report on stdout stays machine-readable:

    WARNING  Skipping src/broken.ts: syntax error at line 3, column 9
    INFO     Extraction complete: 41 parsed, 1 failed, 2 skipped
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "docugit_analyzer"
FILE_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _level_for(verbose: bool, quiet: bool) -> int:
    # quiet wins when both flags are given
    if quiet:
        return logging.ERROR
    return logging.DEBUG if verbose else logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Install the rich stderr handler (and optionally a plain file handler).

    Args:
        verbose: Log per-file DEBUG details, with source paths and locals in tracebacks
        quiet: Only log errors
        log_file: Also append plain-text records to this file

    Returns:
        The ``docugit_analyzer`` package logger
    """
    level = _level_for(verbose, quiet)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # file paths such as app/[id]/route.ts must not be read as markup
            markup=False,
            show_path=verbose,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    # force=True so repeated CLI invocations in one process replace old handlers
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(level)
    return package_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger namespaced under ``docugit_analyzer``.

    ``get_logger(__name__)`` inside the package returns the module logger
    unchanged; any other name is nested under the package logger.
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
