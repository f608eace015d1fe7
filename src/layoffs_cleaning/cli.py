"""Command-line interface for the layoffs cleaning pipeline."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from layoffs_cleaning.config.settings import CleaningConfig

app = typer.Typer(
    name="layoffs-cleaning",
    help="Batch cleaner for the layoffs-2022 dataset.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]


def _load(config: Path) -> "CleaningConfig":
    """Load configuration and set up logging from it."""
    from layoffs_cleaning.config.loader import load_config
    from layoffs_cleaning.utils.logging import configure_from_config

    console.print(f"[blue]Loading configuration from {config}[/blue]")
    cleaning_config = load_config(config)
    configure_from_config(cleaning_config.logging)
    return cleaning_config


@app.command()
def clean(
    config: ConfigOption,
    source: Annotated[
        Path | None,
        typer.Option(
            "--input",
            "-i",
            help="Raw layoffs CSV. Overrides data.source from the config.",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path for the cleaned CSV.",
        ),
    ] = None,
) -> None:
    """Run the cleaning pipeline and save the cleaned table."""
    from layoffs_cleaning.cleaning import run_cleaning
    from layoffs_cleaning.errors import CleaningError
    from layoffs_cleaning.schemas import SCHEMA_ERRORS
    from layoffs_cleaning.validation.core import format_schema_error

    cleaning_config = _load(config)
    target = output or cleaning_config.output_path

    console.print(f"[blue]Cleaning project {cleaning_config.project}[/blue]")
    console.print(f"[dim]Output: {target}[/dim]")

    try:
        result = run_cleaning(cleaning_config, source_path=source, output_path=target)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    except CleaningError as e:
        console.print(f"[red]Cleaning failed: {e}[/red]")
        console.print(
            "[dim]The source file is unchanged; fix the record and rerun.[/dim]"
        )
        raise typer.Exit(code=1) from e
    except SCHEMA_ERRORS as e:
        console.print("[red]Schema validation failed:[/red]")
        for line in format_schema_error(e).splitlines():
            console.print(f"  {line}", markup=False, style="red")
        console.print(
            "[dim]The source file is unchanged; fix the record and rerun.[/dim]"
        )
        raise typer.Exit(code=1) from e

    table = Table(title="Cleaning Steps")
    table.add_column("Step", style="cyan")
    table.add_column("Rows in", justify="right")
    table.add_column("Rows out", justify="right")
    table.add_column("Removed", justify="right", style="yellow")

    for step in result.steps:
        table.add_row(
            step.name,
            str(step.rows_before),
            str(step.rows_after),
            str(step.rows_removed) if step.rows_removed else "-",
        )

    console.print()
    console.print(table)
    console.print(
        f"\n[green]{result.n_cleaned} of {result.n_source} rows kept "
        f"({result.n_removed} removed)[/green]"
    )
    if result.output_path:
        console.print(f"[green]Saved to: {result.output_path}[/green]")


@app.command()
def validate(
    config: ConfigOption,
    source: Annotated[
        Path | None,
        typer.Option("--input", "-i", help="Raw layoffs CSV to validate."),
    ] = None,
) -> None:
    """Validate the source (and existing output) against the schemas."""
    from layoffs_cleaning.validation import ConsoleReporter, ValidationRunner

    cleaning_config = _load(config)
    console.print("[blue]Running schema validation...[/blue]")

    runner = ValidationRunner(cleaning_config, source_path=source)
    results = runner.run()

    ConsoleReporter(console).print_results(results)

    if any(r.schema_valid is not True for r in results):
        raise typer.Exit(code=1)


@app.command()
def assess(
    config: ConfigOption,
    cleaned: Annotated[
        Path | None,
        typer.Option(
            "--cleaned",
            help="Cleaned CSV to assess. Defaults to the configured output.",
        ),
    ] = None,
) -> None:
    """Check a cleaned CSV against every output invariant."""
    from layoffs_cleaning.assessment import (
        AssessmentReporter,
        AssessmentRunner,
        CheckStatus,
    )

    cleaning_config = _load(config)

    result = AssessmentRunner(cleaning_config, cleaned_path=cleaned).run()
    AssessmentReporter(console).print_results(result)

    if result.overall_status == CheckStatus.FAIL:
        raise typer.Exit(code=1)


@app.command()
def version() -> None:
    """Show version information."""
    from layoffs_cleaning import __version__

    console.print(f"layoffs-cleaning version {__version__}")


if __name__ == "__main__":
    app()
