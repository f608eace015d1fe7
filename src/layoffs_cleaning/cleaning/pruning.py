"""Removal of rows that carry no layoff measure."""

import pandas as pd

from layoffs_cleaning.schemas.layoffs import MEASURE_COLUMNS
from layoffs_cleaning.utils.logging import get_logger

log = get_logger(__name__)


def prune_uninformative_rows(
    df: pd.DataFrame,
    measure_columns: list[str] | None = None,
) -> pd.DataFrame:
    """
    Delete rows where every measure column is null.

    Other nulls (including funds_raised_millions) are kept as they are.

    Args:
        df: DataFrame to prune.
        measure_columns: Columns of which at least one must be set.

    Returns:
        Filtered copy of the DataFrame.
    """
    measure_columns = measure_columns or MEASURE_COLUMNS
    uninformative = df[measure_columns].isna().all(axis=1)

    log.info(
        "Pruned uninformative rows",
        rows_before=len(df),
        n_dropped=int(uninformative.sum()),
    )
    return df[~uninformative].copy()
