"""Rich terminal formatter for docugit-analyzer."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..analysis.models import AnalysisResult
from .base import BaseFormatter

console = Console()


def _complexity_label(value: float) -> str:
    if value >= 20:
        return "[red bold]very high[/red bold]"
    elif value >= 10:
        return "[red]high[/red]"
    elif value >= 5:
        return "[yellow]moderate[/yellow]"
    else:
        return "[green]low[/green]"


def _or_dash(value: Optional[str]) -> str:
    return escape(value) if value else "[dim]-[/dim]"


class RichFormatter(BaseFormatter):
    """Summary panel, dependency table, component and endpoint tables."""

    def __init__(self, output: Optional[Console] = None) -> None:
        self.console = output or console

    def render(self, result: AnalysisResult) -> None:
        self._print_summary(result)
        self._print_dependencies(result)
        self._print_components(result)
        self._print_endpoints(result)
        self._print_failures(result)

    def format(self, result: AnalysisResult) -> str:
        # Rich output goes directly to console; return empty string
        self.render(result)
        return ""

    # -- private helpers --

    def _print_summary(self, result: AnalysisResult) -> None:
        m = result.metrics
        arch = result.architecture
        languages = ", ".join(
            f"{lang} ({count})" for lang, count in sorted(m.language_breakdown.items())
        )
        summary_text = (
            f"Parsed [bold]{m.total_files}[/bold] files "
            f"([cyan]{escape(languages) or 'none'}[/cyan])  |  "
            f"[bold]{m.total_lines}[/bold] lines  |  "
            f"[bold]{m.total_functions}[/bold] functions, "
            f"[bold]{m.total_classes}[/bold] classes\n"
            f"[yellow]{m.total_components}[/yellow] components  |  "
            f"[yellow]{m.total_api_endpoints}[/yellow] API endpoints  |  "
            f"Avg complexity: [blue]{m.average_complexity:.2f}[/blue] "
            f"({_complexity_label(m.average_complexity)})\n"
            f"Architecture: [bold]{escape(arch.type)}[/bold] "
            f"(framework {escape(arch.framework)}, {escape(arch.language)})"
        )
        if result.technologies:
            summary_text += f"\nTechnologies: [cyan]{escape(', '.join(result.technologies))}[/cyan]"
        self.console.print(Panel(summary_text, title="[bold cyan]Summary[/bold cyan]", expand=False))
        self.console.print()

    def _print_dependencies(self, result: AnalysisResult) -> None:
        deps = result.dependencies
        if not deps.total_count:
            self.console.print("[dim]No package.json dependencies found.[/dim]")
            self.console.print()
            return

        cat = deps.categorization
        table = Table(title=f"Dependencies ({deps.total_count})", expand=False)
        table.add_column("Category", style="bold")
        table.add_column("Packages", style="white")
        for label, names in (
            ("Frameworks", cat.frameworks),
            ("UI libraries", cat.ui_libraries),
            ("Databases", cat.databases),
        ):
            table.add_row(label, escape(", ".join(names)) if names else "[dim]-[/dim]")

        arch = result.architecture
        table.add_row("Database", _or_dash(arch.database))
        table.add_row("Authentication", _or_dash(arch.authentication))
        table.add_row("Styling", _or_dash(arch.styling))
        table.add_row("Testing", _or_dash(arch.testing))

        self.console.print(table)
        self.console.print()

    def _print_components(self, result: AnalysisResult) -> None:
        if not result.components:
            return

        table = Table(title=f"Components ({len(result.components)})", expand=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("Name", style="yellow")
        table.add_column("Kind", justify="center", width=12)
        table.add_column("File", style="white", ratio=2)
        for i, component in enumerate(result.components, 1):
            table.add_row(
                str(i),
                escape(component.name),
                component.kind.value,
                escape(component.source_file),
            )
        self.console.print(table)
        self.console.print()

    def _print_endpoints(self, result: AnalysisResult) -> None:
        if not result.api_endpoints:
            return

        table = Table(title=f"API Endpoints ({len(result.api_endpoints)})", expand=True)
        table.add_column("Method", style="bold green", width=8)
        table.add_column("Route", style="cyan")
        table.add_column("File", style="white", ratio=2)
        table.add_column("Line", justify="right", width=6)
        for endpoint in result.api_endpoints:
            table.add_row(
                endpoint.http_method.value,
                escape(endpoint.route_path),
                escape(endpoint.source_file),
                str(endpoint.line_number),
            )
        self.console.print(table)
        self.console.print()

    def _print_failures(self, result: AnalysisResult) -> None:
        if not result.failed_files:
            return

        self.console.print(f"[yellow]{len(result.failed_files)} files could not be parsed:[/yellow]")
        for failure in result.failed_files:
            self.console.print(
                f"  [red]-[/red] {escape(failure.path)} [dim]({escape(failure.reason)})[/dim]"
            )
        self.console.print()
