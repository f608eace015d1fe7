"""
Core validation logic for data files.

Validates the raw source and, when present, the cleaned output against
their registered Pandera schemas.
"""

from dataclasses import dataclass
from pathlib import Path

import pandas as pd
import pandera.pandas as pa

from layoffs_cleaning.config.settings import CleaningConfig
from layoffs_cleaning.errors import CleaningError
from layoffs_cleaning.ingestion.layoffs import load_cleaned, load_layoffs
from layoffs_cleaning.schemas.layoffs import SCHEMA_ERRORS
from layoffs_cleaning.schemas.registry import DataRole, SchemaRegistry
from layoffs_cleaning.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of validating a single dataset."""

    dataset_name: str
    schema_name: str | None
    file_path: Path
    exists: bool
    schema_valid: bool | None
    row_count: int | None
    error_message: str | None


DATASET_SCHEMA_MAP: dict[str, str] = {
    role.value: SchemaRegistry.for_role(role).name for role in DataRole
}


def format_schema_error(
    error: pa.errors.SchemaError | pa.errors.SchemaErrors,
    max_cases: int = 5,
) -> str:
    """
    Format a pandera failure for operators.

    Lazy errors list the column, check, row index and value of the first
    failures. A single SchemaError is headed by pandera's own first line,
    which names the column and check, followed by the failing rows.

    Args:
        error: Pandera SchemaError or SchemaErrors.
        max_cases: Number of failure cases to show.

    Returns:
        Multi-line message.
    """
    failures = getattr(error, "failure_cases", None)
    if not isinstance(failures, pd.DataFrame):
        return str(error).split("\n")[0][:200]

    n_failures = len(failures)
    columns = [
        c for c in ("column", "check", "index", "failure_case")
        if c in failures.columns
    ]
    shown = (failures[columns] if columns else failures).head(max_cases)

    if isinstance(error, pa.errors.SchemaErrors):
        header = f"{n_failures} validation error(s)"
    else:
        header = str(error).split("\n")[0].rstrip(":")
    if n_failures > max_cases:
        header += f" (showing first {max_cases} of {n_failures})"
    return f"{header}:\n{shown.to_string(index=False)}"


class ValidationRunner:
    """
    Runs validation for the configured datasets.

    The source file is always checked; the cleaned output only if it
    has already been written.
    """

    def __init__(
        self,
        config: CleaningConfig,
        source_path: Path | None = None,
        output_path: Path | None = None,
    ) -> None:
        """
        Initialize validation runner.

        Args:
            config: Cleaning configuration containing data paths.
            source_path: Optional override for the source file.
            output_path: Optional override for the cleaned file.
        """
        self.config = config
        self.paths: dict[str, Path] = {
            "source": source_path or config.source_path,
            "output": output_path or config.output_path,
        }

    def run(self) -> list[ValidationResult]:
        """
        Run validation for all datasets.

        Returns:
            List of validation results, one per dataset.
        """
        results = [self._validate_dataset("source")]
        if self.paths["output"].exists():
            results.append(self._validate_dataset("output"))
        return results

    def _load(self, dataset: str) -> pd.DataFrame:
        """Load a dataset without schema validation."""
        path = self.paths[dataset]
        if dataset == "source":
            return load_layoffs(self.config, path, validate=False)
        return load_cleaned(self.config, path)

    def _validate_dataset(self, dataset: str) -> ValidationResult:
        """
        Validate a single dataset.

        Args:
            dataset: Key of DATASET_SCHEMA_MAP.

        Returns:
            ValidationResult for the dataset.
        """
        file_path = self.paths[dataset]
        schema_name = DATASET_SCHEMA_MAP[dataset]

        if not file_path.exists():
            log.warning("Data file not found", dataset=dataset, path=str(file_path))
            return ValidationResult(
                dataset_name=dataset,
                schema_name=schema_name,
                file_path=file_path,
                exists=False,
                schema_valid=None,
                row_count=None,
                error_message="File not found",
            )

        df: pd.DataFrame | None = None
        try:
            df = self._load(dataset)
            SchemaRegistry.validate(df, schema_name, lazy=True)

            log.info(
                "Validation passed",
                dataset=dataset,
                schema=schema_name,
                rows=len(df),
            )
            return ValidationResult(
                dataset_name=dataset,
                schema_name=schema_name,
                file_path=file_path,
                exists=True,
                schema_valid=True,
                row_count=len(df),
                error_message=None,
            )

        except SCHEMA_ERRORS as e:
            error_msg = format_schema_error(e)
            log.error(
                "Schema validation failed",
                dataset=dataset,
                schema=schema_name,
                error=error_msg,
            )
            return ValidationResult(
                dataset_name=dataset,
                schema_name=schema_name,
                file_path=file_path,
                exists=True,
                schema_valid=False,
                row_count=len(df) if df is not None else None,
                error_message=error_msg,
            )

        except CleaningError as e:
            # column mismatch or unparseable values
            error_msg = f"{type(e).__name__}: {e!s}"
            log.error("Validation error", dataset=dataset, error=error_msg)
            return ValidationResult(
                dataset_name=dataset,
                schema_name=schema_name,
                file_path=file_path,
                exists=True,
                schema_valid=False,
                row_count=None,
                error_message=error_msg,
            )

