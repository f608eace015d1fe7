"""
Column name normalization.

Provides canonical column naming so source exports with slightly
different headers land on the same record attributes.
"""

import pandas as pd

from layoffs_cleaning.errors import SchemaMismatchError
from layoffs_cleaning.utils.logging import get_logger

log = get_logger(__name__)

# Maps source header variants (after lowercasing) to canonical names
COLUMN_MAPPING: dict[str, str] = {
    # Kaggle layoffs-2022 export
    "date": "event_date",
    # Spreadsheet re-exports
    "laid_off": "total_laid_off",
    "total laid off": "total_laid_off",
    "percentage": "percentage_laid_off",
    "percentage laid off": "percentage_laid_off",
    "funds_raised": "funds_raised_millions",
    "funds raised millions": "funds_raised_millions",
}


def normalize_columns(
    df: pd.DataFrame,
    mapping: dict[str, str] | None = None,
) -> pd.DataFrame:
    """
    Normalize column names to canonical form.

    Headers are stripped and lowercased before the mapping is applied.

    Args:
        df: DataFrame to normalize.
        mapping: Optional custom mapping (defaults to COLUMN_MAPPING).

    Returns:
        DataFrame with normalized column names.
    """
    mapping = mapping or COLUMN_MAPPING

    df = df.rename(columns=lambda c: str(c).strip().lower())
    rename_dict = {k: v for k, v in mapping.items() if k in df.columns}

    if rename_dict:
        log.debug("Normalizing columns", renamed=list(rename_dict.keys()))
        df = df.rename(columns=rename_dict)

    return df


def validate_required_columns(
    df: pd.DataFrame,
    required: list[str],
    *,
    allow_extra: bool = False,
) -> None:
    """
    Check that the frame carries exactly the required columns.

    Args:
        df: DataFrame to check.
        required: List of required column names.
        allow_extra: Whether columns beyond the required ones are accepted.

    Raises:
        SchemaMismatchError: If columns are missing or unexpected.
    """
    missing = [col for col in required if col not in df.columns]
    unexpected = [] if allow_extra else [c for c in df.columns if c not in required]

    if missing or unexpected:
        log.error("Column mismatch", missing=missing, unexpected=unexpected)
        raise SchemaMismatchError(missing=missing, unexpected=unexpected)
