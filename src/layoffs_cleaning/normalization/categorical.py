"""
Categorical field normalization.

Blank handling, industry back-filling from sibling rows of the same
company, synonym collapsing and trailing punctuation removal.
"""

import pandas as pd

from layoffs_cleaning.config.settings import FillPolicy
from layoffs_cleaning.errors import AmbiguousFillError
from layoffs_cleaning.utils.logging import get_logger

log = get_logger(__name__)


def trim_text(df: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    """
    Strip surrounding whitespace from text columns.

    Args:
        df: DataFrame to clean.
        columns: Text columns to trim. Missing columns are skipped.

    Returns:
        Copy of the DataFrame with trimmed values; nulls untouched.
    """
    df = df.copy()
    for col in columns:
        if col not in df.columns:
            continue
        mask = df[col].notna()
        df.loc[mask, col] = df.loc[mask, col].astype(str).str.strip()
    return df


def blank_to_null(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """
    Treat empty and whitespace-only strings as null.

    Args:
        df: DataFrame to clean.
        column: Column to normalize.

    Returns:
        Copy of the DataFrame.
    """
    df = df.copy()
    values = df[column]
    blank = values.notna() & (values.astype(str).str.strip() == "")
    if blank.any():
        df[column] = values.mask(blank)
        log.info("Converted blanks to null", column=column, n_blank=int(blank.sum()))
    return df


def build_fill_lookup(
    df: pd.DataFrame,
    key: str,
    column: str,
) -> dict[str, list[str]]:
    """
    Map each key to the sorted distinct non-null values of a column.

    Args:
        df: DataFrame to scan.
        key: Grouping column (e.g. company).
        column: Value column (e.g. industry).

    Returns:
        Dict of key -> sorted candidate values. Keys without any
        non-null value are omitted.
    """
    known = df.loc[df[key].notna() & df[column].notna(), [key, column]]
    return {
        name: sorted(set(values))
        for name, values in known.groupby(key, sort=True)[column]
    }


def fill_from_peers(
    df: pd.DataFrame,
    key: str,
    column: str,
    policy: FillPolicy = FillPolicy.SMALLEST,
) -> pd.DataFrame:
    """
    Fill nulls in a column from other rows sharing the same key.

    With several candidates the policy decides: SMALLEST takes the
    lexicographically smallest one, ERROR raises.

    Args:
        df: DataFrame to fill.
        key: Grouping column.
        column: Column with nulls to fill.
        policy: Multi-candidate rule.

    Returns:
        Copy of the DataFrame with filled values.

    Raises:
        AmbiguousFillError: Under FillPolicy.ERROR when a key to be
            filled has more than one candidate.
    """
    df = df.copy()
    lookup = build_fill_lookup(df, key, column)

    missing = df[column].isna() & df[key].isin(list(lookup))
    if not missing.any():
        log.info("No fillable nulls", column=column)
        return df

    if policy == FillPolicy.ERROR:
        for name in df.loc[missing, key].unique():
            if len(lookup[name]) > 1:
                raise AmbiguousFillError(name, lookup[name])

    picks = {name: candidates[0] for name, candidates in lookup.items()}
    df.loc[missing, column] = df.loc[missing, key].map(picks)

    n_ambiguous = sum(
        1 for name in df.loc[missing, key].unique() if len(lookup[name]) > 1
    )
    log.info(
        "Filled nulls from peer rows",
        column=column,
        key=key,
        n_filled=int(missing.sum()),
        n_ambiguous_keys=n_ambiguous,
    )
    return df


def apply_synonyms(
    df: pd.DataFrame,
    column: str,
    variant_lookup: dict[str, str],
) -> pd.DataFrame:
    """
    Replace variant spellings with their canonical value.

    Args:
        df: DataFrame to normalize.
        column: Categorical column.
        variant_lookup: Variant -> canonical mapping.

    Returns:
        Copy of the DataFrame.
    """
    df = df.copy()
    if not variant_lookup:
        return df

    hits = df[column].isin(list(variant_lookup))
    if hits.any():
        df.loc[hits, column] = df.loc[hits, column].map(variant_lookup)
        log.info(
            "Collapsed synonyms",
            column=column,
            n_replaced=int(hits.sum()),
            canonical=sorted(df.loc[hits, column].unique().tolist()),
        )
    return df


def strip_trailing(
    df: pd.DataFrame,
    column: str,
    chars: str = ".",
) -> pd.DataFrame:
    """
    Strip trailing characters (periods by default) from a text column.

    Args:
        df: DataFrame to normalize.
        column: Text column.
        chars: Set of characters to remove from the right end.

    Returns:
        Copy of the DataFrame.
    """
    df = df.copy()
    mask = df[column].notna()
    before = df.loc[mask, column].astype(str)
    after = before.str.rstrip(chars)
    # a value made only of strip characters becomes null
    after = after.mask(after == "")
    changed = before != after
    if changed.any():
        df.loc[mask, column] = after
        log.info(
            "Stripped trailing characters",
            column=column,
            chars=chars,
            n_changed=int(changed.sum()),
        )
    return df
