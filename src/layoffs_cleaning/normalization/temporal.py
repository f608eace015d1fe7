"""
Date normalization for layoff events.

Parses textual dates into datetime values and fails loudly on
anything that does not match a configured format.
"""

import pandas as pd

from layoffs_cleaning.errors import DateParseError
from layoffs_cleaning.utils.logging import get_logger

log = get_logger(__name__)


def parse_dates(
    values: pd.Series,
    formats: list[str],
) -> pd.Series:
    """
    Parse text values trying each format in order.

    The first format that matches a value wins. Values that match no
    format come back as NaT.

    Args:
        values: Series of date strings (nulls allowed).
        formats: strptime formats.

    Returns:
        datetime64 Series aligned with the input.
    """
    text = values.where(values.isna(), values.astype(str).str.strip())
    text = text.mask(text == "")
    parsed = pd.Series(pd.NaT, index=values.index, dtype="datetime64[ns]")
    for fmt in formats:
        pending = parsed.isna() & text.notna()
        if not pending.any():
            break
        parsed.loc[pending] = pd.to_datetime(
            text[pending], format=fmt, errors="coerce"
        )
    return parsed


def normalize_event_dates(
    df: pd.DataFrame,
    formats: list[str],
    date_column: str = "event_date",
    id_column: str = "company",
) -> pd.DataFrame:
    """
    Convert the date column from text to datetime.

    Columns that are already datetime pass through unchanged, which
    keeps the step idempotent. Nulls and blank cells become NaT.

    Args:
        df: DataFrame with date column.
        formats: strptime formats tried in order.
        date_column: Name of date column.
        id_column: Column quoted in errors to identify the record.

    Returns:
        Copy of the DataFrame with a datetime64 date column.

    Raises:
        DateParseError: On the first non-null value matching no format.
    """
    if pd.api.types.is_datetime64_any_dtype(df[date_column]):
        log.debug("Date column already parsed", column=date_column)
        return df.copy()

    df = df.copy()
    raw = df[date_column]
    parsed = parse_dates(raw, formats)

    blank = raw.isna() | (raw.astype(str).str.strip() == "")
    failed = ~blank & parsed.isna()
    if failed.any():
        row = failed.idxmax()
        log.error(
            "Date parsing failed",
            column=date_column,
            n_failed=int(failed.sum()),
            first_row=row,
            value=raw.loc[row],
        )
        raise DateParseError(
            row=row,
            column=date_column,
            value=raw.loc[row],
            company=df.loc[row, id_column] if id_column in df.columns else None,
            expected=" or ".join(formats),
        )

    df[date_column] = parsed
    log.info(
        "Parsed dates",
        column=date_column,
        n_parsed=int(parsed.notna().sum()),
        n_null=int(parsed.isna().sum()),
    )
    return df
