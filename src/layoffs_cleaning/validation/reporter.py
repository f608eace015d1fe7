"""
Console reporter for schema validation results.

Renders the source/output validation outcome with Rich.
"""

from typing import ClassVar

from rich.console import Console
from rich.table import Table

from layoffs_cleaning.validation.core import ValidationResult


class ConsoleReporter:
    """Formats and displays validation results to the console."""

    STATUS_MARKUP: ClassVar[dict[bool | None, str]] = {
        True: "[green]Pass[/green]",
        False: "[red]Fail[/red]",
        None: "[yellow]Missing[/yellow]",
    }

    def __init__(self, console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_results(self, results: list[ValidationResult]) -> None:
        """
        Print a results table followed by any error details.

        Args:
            results: List of validation results to display.
        """
        table = Table(title="Layoffs Schema Validation", show_header=True)
        table.add_column("Dataset", style="cyan", no_wrap=True)
        table.add_column("Schema", style="blue")
        table.add_column("Status", justify="center")
        table.add_column("Rows", justify="right")
        table.add_column("File", style="dim")

        for result in results:
            table.add_row(
                result.dataset_name,
                result.schema_name or "-",
                self.STATUS_MARKUP[result.schema_valid],
                "-" if result.row_count is None else str(result.row_count),
                str(result.file_path),
            )

        self.console.print(table)

        n_failed = sum(1 for r in results if r.schema_valid is False)
        if n_failed:
            self.console.print(f"\n[bold red]{n_failed} dataset(s) failed[/bold red]")
        else:
            self.console.print("\n[bold green]All present datasets valid[/bold green]")

        for result in results:
            if result.schema_valid is False and result.error_message:
                self.console.print(f"\n[bold]{result.dataset_name}[/bold]:")
                for line in result.error_message.splitlines():
                    self.console.print(f"  {line}", markup=False)
