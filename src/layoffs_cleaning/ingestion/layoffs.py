"""
Layoffs CSV ingestion.

Reads the layoffs-2022 export, maps headers to record attributes and
parses numeric columns. Dates stay as text for the cleaning run.
"""

from pathlib import Path

import pandas as pd

from layoffs_cleaning.config.settings import CleaningConfig
from layoffs_cleaning.errors import ValueParseError
from layoffs_cleaning.ingestion.base import DataLoader
from layoffs_cleaning.normalization.columns import (
    normalize_columns,
    validate_required_columns,
)
from layoffs_cleaning.normalization.temporal import normalize_event_dates
from layoffs_cleaning.schemas.layoffs import (
    BUSINESS_COLUMNS,
    DECIMAL_COLUMNS,
    INTEGER_COLUMNS,
    CleanLayoffSchema,
    RawLayoffSchema,
)
from layoffs_cleaning.utils.logging import get_logger

log = get_logger(__name__)


def read_layoffs_csv(path: Path, null_tokens: list[str]) -> pd.DataFrame:
    """
    Read a layoffs CSV with every column as text.

    Empty cells stay empty strings; only the configured null tokens
    become nulls, so blank industries can be told apart downstream.

    Args:
        path: CSV file.
        null_tokens: Literal values meaning null.

    Returns:
        DataFrame with canonical column names.
    """
    try:
        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            na_values=null_tokens,
            encoding="utf-8",
        )
    except UnicodeDecodeError:
        log.warning("UTF-8 decode failed, retrying with Latin-1", path=str(path))
        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            na_values=null_tokens,
            encoding="latin-1",
        )
    return normalize_columns(df)


def parse_numeric_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Parse integer and decimal columns from text.

    Blank cells become null. Anything else that is not a number
    raises, naming the first offending row.

    Args:
        df: DataFrame with text columns.

    Returns:
        Copy with Int64 and float64 measure columns.

    Raises:
        ValueParseError: On a non-numeric value.
    """
    df = df.copy()
    for col in INTEGER_COLUMNS + DECIMAL_COLUMNS:
        raw = df[col]
        text = raw.where(raw.isna(), raw.astype(str).str.strip())
        text = text.mask(text == "")
        parsed = pd.to_numeric(text, errors="coerce")

        failed = text.notna() & parsed.isna()
        if col in INTEGER_COLUMNS:
            failed |= parsed.notna() & (parsed % 1 != 0)
        if failed.any():
            row = failed.idxmax()
            raise ValueParseError(
                row=row,
                column=col,
                value=raw.loc[row],
                company=df.loc[row, "company"],
                expected="an integer" if col in INTEGER_COLUMNS else "a number",
            )

        if col in INTEGER_COLUMNS:
            df[col] = parsed.astype("Int64")
        else:
            df[col] = parsed.astype("float64")
    return df


class LayoffSourceLoader(DataLoader[RawLayoffSchema]):
    """Loader for the raw layoffs CSV."""

    schema = RawLayoffSchema
    label = "Layoffs source file"

    def __init__(self, config: CleaningConfig, path: Path | None = None) -> None:
        super().__init__(config, path or config.source_path)

    def _load_raw(self) -> pd.DataFrame:
        """Read the export, keep the record columns and parse measures."""
        df = read_layoffs_csv(self.path, self.config.normalization.null_tokens)
        validate_required_columns(df, BUSINESS_COLUMNS)
        return parse_numeric_columns(df[BUSINESS_COLUMNS])


class CleanedLayoffLoader(DataLoader[CleanLayoffSchema]):
    """
    Loader for a cleaned CSV written by a previous run.

    Extra columns are kept so that a leftover helper column can be
    reported by validation instead of silently dropped.
    """

    schema = CleanLayoffSchema
    label = "Cleaned file"

    def __init__(self, config: CleaningConfig, path: Path | None = None) -> None:
        super().__init__(config, path or config.output_path)

    def _load_raw(self) -> pd.DataFrame:
        """Read the cleaned CSV back into measures and datetimes."""
        df = read_layoffs_csv(self.path, self.config.normalization.null_tokens)
        validate_required_columns(df, BUSINESS_COLUMNS, allow_extra=True)
        df = parse_numeric_columns(df)
        # empty cells in a written CSV are nulls, not blanks
        for col in df.columns.difference(INTEGER_COLUMNS + DECIMAL_COLUMNS):
            df[col] = df[col].mask(df[col] == "")
        return normalize_event_dates(df, self.config.normalization.date_formats)


def load_layoffs(
    config: CleaningConfig,
    path: Path | None = None,
    *,
    validate: bool = True,
) -> pd.DataFrame:
    """
    Convenience function to load the raw layoffs table.

    Args:
        config: Cleaning configuration.
        path: Optional override for the configured source file.
        validate: Whether to validate against RawLayoffSchema.

    Returns:
        DataFrame with one row per source record.
    """
    return LayoffSourceLoader(config, path).load(validate=validate)


def load_cleaned(config: CleaningConfig, path: Path | None = None) -> pd.DataFrame:
    """
    Load a previously written cleaned CSV without validating it.

    Skipping validation lets validation and assessment inspect a
    broken file themselves.
    """
    return CleanedLayoffLoader(config, path).load(validate=False)
