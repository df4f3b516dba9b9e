"""Report formatters: how an AnalysisResult is shown or written."""

from enum import Enum
from typing import Type

from .base import BaseFormatter
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter

FORMATTERS: dict[str, Type[BaseFormatter]] = {
    "rich": RichFormatter,
    "json": JsonFormatter,
}


class OutputFormat(str, Enum):
    """Values of the CLI ``--format`` option; one per registered formatter."""

    RICH = "rich"
    JSON = "json"


def available_formats() -> list[str]:
    """Names accepted by ``get_formatter`` (and the CLI ``--format`` option)."""
    return list(FORMATTERS)


def get_formatter(name: str) -> BaseFormatter:
    """Instantiate the formatter registered under ``name``.

    Raises:
        ValueError: If no formatter has that name
    """
    try:
        formatter_cls = FORMATTERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown format {name!r}; expected one of: {', '.join(available_formats())}"
        ) from None
    return formatter_cls()


__all__ = [
    "BaseFormatter",
    "JsonFormatter",
    "RichFormatter",
    "FORMATTERS",
    "OutputFormat",
    "available_formats",
    "get_formatter",
]
