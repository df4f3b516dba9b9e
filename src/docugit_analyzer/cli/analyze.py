"""Analyze command: scan a local checkout and print the analysis."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..analysis.models import AnalysisResult
from ..api import analyze_path
from ..exceptions import DocugitAnalyzerError
from ..formatters import (
    BaseFormatter,
    JsonFormatter,
    OutputFormat,
    RichFormatter,
    get_formatter,
)
from ..logging_config import setup_logging
from . import app
from ._common import console, resolve_config


def _write_report(formatter: BaseFormatter, result: AnalysisResult, output: Path) -> None:
    try:
        if isinstance(formatter, JsonFormatter):
            output.write_text(formatter.format(result) + "\n", encoding="utf-8")
        else:
            with output.open("w", encoding="utf-8") as fh:
                RichFormatter(Console(file=fh, width=120, color_system=None)).render(result)
    except OSError as e:
        console.print(f"[red]Error:[/red] cannot write {output}: {e}")
        raise typer.Exit(1)
    console.print(f"[green]Wrote analysis to[/green] {output}")


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Repository root to analyze (default: current directory)",
        file_okay=False,
        dir_okay=True,
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.RICH,
        "--format",
        "-f",
        help="Output format",
        case_sensitive=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to a file instead of the terminal",
        dir_okay=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        dir_okay=False,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel parse workers (default: auto-detect)",
        min=1,
        max=32,
    ),
    max_files: Optional[int] = typer.Option(
        None,
        "--max-files",
        help="Maximum number of source files to analyze",
        min=1,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """
    Analyze a JavaScript/TypeScript repository.

    Extracts functions, classes, imports and exports, computes cyclomatic
    complexity, detects React components and Next.js API routes, and
    categorizes package.json dependencies.

    [bold cyan]Examples:[/bold cyan]

      docugit-analyzer analyze

      docugit-analyzer analyze ./my-app --format json --output analysis.json

      docugit-analyzer analyze ./my-app --workers 4 --verbose
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(config=config, workers=workers, max_files=max_files)
        result = analyze_path(path, settings)

        formatter = get_formatter(output_format.value)
        if output is None:
            formatter.render(result)
        else:
            _write_report(formatter, result, output)

    except DocugitAnalyzerError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)


@app.command()
def version():
    """Show version and exit."""
    from .. import __version__

    console.print(f"[bold cyan]docugit-analyzer[/bold cyan] version [green]{__version__}[/green]")
