"""
Content fingerprints for tables, configs and files.

Cleaning runs log these so two runs can be compared: the same source
file and config must give the same output hash.
"""

import hashlib
import json
from pathlib import Path

import pandas as pd
from pydantic import BaseModel

CHUNK_SIZE = 1 << 16


def hash_dataframe(df: pd.DataFrame, columns: list[str] | None = None) -> str:
    """
    Hash a table's column names and values, ignoring its index.

    Two frames with the same rows in the same order hash equal even if
    filtering left them with different index labels.

    Args:
        df: DataFrame to hash.
        columns: Optional subset of columns to include.

    Returns:
        md5 hex digest.
    """
    if columns:
        df = df[columns]

    digest = hashlib.md5(repr((df.shape, list(map(str, df.columns)))).encode())
    if not df.empty:
        row_hashes = pd.util.hash_pandas_object(df, index=False)
        digest.update(row_hashes.to_numpy().tobytes())
    return digest.hexdigest()


def hash_config(config: BaseModel) -> str:
    """Short, key-order independent hash of a pydantic config."""
    payload = json.dumps(config.model_dump(mode="json"), sort_keys=True)
    return hashlib.md5(payload.encode()).hexdigest()[:12]


def hash_file_content(path: Path) -> str:
    """md5 of a file's bytes, read in chunks."""
    digest = hashlib.md5()
    with path.open("rb") as f:
        while chunk := f.read(CHUNK_SIZE):
            digest.update(chunk)
    return digest.hexdigest()
