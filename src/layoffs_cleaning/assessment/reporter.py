"""
Reporter for assessment results.

Formats invariant check results for console output using Rich.
"""

from typing import ClassVar

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from layoffs_cleaning.assessment.core import AssessmentResult, CheckResult, CheckStatus


class AssessmentReporter:
    """Displays assessment results with Rich."""

    STATUS_STYLES: ClassVar[dict[CheckStatus, tuple[str, str]]] = {
        CheckStatus.PASS: ("PASS", "green"),
        CheckStatus.FAIL: ("FAIL", "red"),
        CheckStatus.SKIP: ("SKIP", "dim"),
    }

    def __init__(self, console: Console | None = None) -> None:
        """
        Initialize reporter.

        Args:
            console: Rich console for output. Creates new if not provided.
        """
        self.console = console or Console()

    def print_results(self, result: AssessmentResult) -> None:
        """
        Print the checks table, the verdict and samples of offending rows.

        Args:
            result: AssessmentResult to display.
        """
        label, style = self.STATUS_STYLES[result.overall_status]

        table = Table(title=f"Cleaned Table Checks: {result.cleaned_path}")
        table.add_column("Check", style="cyan", min_width=25)
        table.add_column("Status", justify="center")
        table.add_column("Result", min_width=40)
        table.add_column("Violations", justify="right")

        for check in result.checks:
            check_label, check_style = self.STATUS_STYLES[check.status]
            table.add_row(
                check.name,
                Text(check_label, style=check_style),
                check.message,
                str(check.n_failed) if check.n_checked else "-",
            )

        self.console.print()
        self.console.print(table)
        self.console.print(
            Panel(
                Text.assemble(
                    ("Overall: ", "bold"),
                    (label, style),
                    f"  ({result.n_passed} passed, {result.n_failed} failed)",
                ),
                border_style=style,
            )
        )

        for check in result.checks:
            if check.status == CheckStatus.FAIL:
                self._print_failure(check)

    def _print_failure(self, check: CheckResult) -> None:
        """Print message, details and sample rows of a failed check."""
        self.console.print(f"\n[red]{check.name}[/red]: {check.message}")
        if check.details:
            self.console.print(f"  [dim]{check.details}[/dim]")

        if check.sample_failures is None or check.sample_failures.empty:
            return

        sample = Table(show_header=True, header_style="bold dim", box=None)
        for col in check.sample_failures.columns:
            sample.add_column(str(col), overflow="fold")
        for row in check.sample_failures.itertuples(index=False):
            sample.add_row(*[str(v) for v in row])
        self.console.print(sample)
