"""
Duplicate detection by row rank.

Rows are ranked within groups of identical business attributes; every
row after the first in its group is a duplicate.
"""

import pandas as pd

from layoffs_cleaning.schemas.layoffs import BUSINESS_COLUMNS, ROW_NUMBER_COLUMN
from layoffs_cleaning.utils.logging import get_logger

log = get_logger(__name__)


def assign_row_numbers(
    df: pd.DataFrame,
    columns: list[str] | None = None,
    rank_column: str = ROW_NUMBER_COLUMN,
) -> pd.DataFrame:
    """
    Number rows 1..n within each group of identical attribute values.

    Nulls compare equal to each other. Ties are broken by current row
    order, so the first occurrence keeps rank 1.

    Args:
        df: DataFrame to rank.
        columns: Partition columns (defaults to all business columns).
        rank_column: Name of the rank column to add.

    Returns:
        Copy of the DataFrame with the rank column.
    """
    columns = columns or BUSINESS_COLUMNS
    df = df.copy()
    if df.empty:
        df[rank_column] = pd.Series(dtype="int64")
        return df
    df[rank_column] = df.groupby(columns, dropna=False, sort=False).cumcount() + 1
    return df


def drop_ranked_duplicates(
    df: pd.DataFrame,
    rank_column: str = ROW_NUMBER_COLUMN,
) -> pd.DataFrame:
    """
    Keep only rows ranked first in their group.

    Args:
        df: DataFrame carrying a rank column.
        rank_column: Rank column name.

    Returns:
        Filtered DataFrame (source index preserved).
    """
    keep = df[rank_column] == 1
    n_dropped = int((~keep).sum())
    log.info("Removed duplicate rows", rows_before=len(df), n_dropped=n_dropped)
    return df[keep].copy()


def deduplicate(
    df: pd.DataFrame,
    columns: list[str] | None = None,
    rank_column: str = ROW_NUMBER_COLUMN,
) -> pd.DataFrame:
    """Rank rows and drop every duplicate, keeping the rank column."""
    return drop_ranked_duplicates(
        assign_row_numbers(df, columns, rank_column), rank_column
    )


def drop_helper_columns(
    df: pd.DataFrame,
    columns: list[str] | None = None,
) -> pd.DataFrame:
    """Remove transient helper columns that must not reach the output."""
    columns = columns or [ROW_NUMBER_COLUMN]
    present = [c for c in columns if c in df.columns]
    if present:
        log.debug("Dropping helper columns", columns=present)
    return df.drop(columns=present)
