"""Rich terminal formatter for Refactor First."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..models import CalculationResult, ReportContext
from .base import BaseFormatter, table_rows


class RichFormatter(BaseFormatter):
    """Summary panel followed by the God class table."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, result: CalculationResult, context: ReportContext) -> None:
        if not result.found:
            self.console.print(
                f"[green bold]Congratulations![/green bold] {escape(context.project_name)} "
                f"has no God classes! ({result.scanned} classes scanned)"
            )
            return

        self._print_summary(result, context)
        self.console.print(self._build_table(result, context))

        if result.skipped:
            self.console.print(
                f"[yellow]{len(result.skipped)} candidate(s) skipped "
                "because their files have no commit history:[/yellow]"
            )
            for error in result.skipped:
                self.console.print(f"  [dim]{escape(error.class_name)}[/dim] ({escape(error.path)})")

    def format(self, result: CalculationResult, context: ReportContext) -> str:
        with self.console.capture() as capture:
            self.render(result, context)
        return capture.get()

    def _print_summary(self, result: CalculationResult, context: ReportContext) -> None:
        self.console.print(
            Panel(
                f"[bold]{len(result.disharmonies)}[/bold] God class candidates ranked "
                f"out of {result.scanned} classes scanned.\n"
                "Classes at the top are the cheapest fixes on the busiest files.",
                title=f"[bold cyan]God Class Report for {escape(context.project_name)}[/bold cyan]",
                expand=False,
            )
        )

    def _build_table(self, result: CalculationResult, context: ReportContext) -> Table:
        headings, rows = table_rows(result, context)
        table = Table(show_header=True, header_style="bold")
        for heading in headings:
            justify = "left" if heading in ("Class", "Full Path") else "right"
            table.add_column(heading, justify=justify)
        for row in rows:
            table.add_row(*(escape(cell) for cell in row))
        return table
