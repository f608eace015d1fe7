"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pandas as pd
import pytest
import structlog

from layoffs_cleaning.config.settings import (
    CleaningConfig,
    DataPathsConfig,
    IndustryConfig,
)
from layoffs_cleaning.schemas.layoffs import BUSINESS_COLUMNS

CSV_HEADER = (
    "company,location,industry,total_laid_off,percentage_laid_off,"
    "date,stage,country,funds_raised_millions"
)


def make_raw(rows: list[tuple[Any, ...]]) -> pd.DataFrame:
    """Build a raw layoffs frame with the dtypes the loader produces."""
    df = pd.DataFrame(rows, columns=BUSINESS_COLUMNS, dtype=object)
    df["total_laid_off"] = pd.array(df["total_laid_off"].tolist(), dtype="Int64")
    for col in ["percentage_laid_off", "funds_raised_millions"]:
        df[col] = pd.to_numeric(df[col]).astype("float64")
    return df


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo logging configuration made by a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def raw_factory() -> Callable[[list[tuple[Any, ...]]], pd.DataFrame]:
    """Return the raw frame builder."""
    return make_raw


@pytest.fixture
def sample_raw() -> pd.DataFrame:
    """A small raw table exercising every cleaning step."""
    return make_raw(
        [
            # exact duplicates
            ("Acme", "NY", "CryptoCurrency", 100, None, "1/5/2022", "Seed", "United States.", 5.0),
            ("Acme", "NY", "CryptoCurrency", 100, None, "1/5/2022", "Seed", "United States.", 5.0),
            # blank industry, filled from the Airbnb row below
            ("Airbnb", "SF Bay Area", "", 30, None, "3/3/2023", "Post-IPO", "United States", 6400.0),
            ("Airbnb", "SF Bay Area", "Travel", 1900, 0.25, "5/5/2020", "Post-IPO", "United States", 5400.0),
            # null industry with no peer stays null
            ("Bally's Interactive", "Providence", None, None, 0.15, "1/18/2023", "Post-IPO", "United States", 946.0),
            # uninformative: both measures null
            ("Ghost", "Berlin", "Retail", None, None, "12/1/2022", "Series B", "Germany", None),
            # surrounding whitespace, synonym variant
            (" Coinbase ", "SF Bay Area", "Crypto Currency", 950, 0.2, "1/10/2023", "Post-IPO", "United States", 549.0),
            # null date is kept
            ("Blackbaud", "Charleston", "Other", 500, 0.14, None, "Post-IPO", "United States", None),
        ]
    )


@pytest.fixture
def cleaning_config(tmp_path: Path) -> CleaningConfig:
    """Configuration pointing at a temporary data root."""
    return CleaningConfig(
        project="test-layoffs",
        data_paths=DataPathsConfig(
            data_root=tmp_path,
            source=Path("layoffs.csv"),
            output=Path("out/layoffs_cleaned.csv"),
        ),
        industry=IndustryConfig(
            synonyms={"Crypto": ["Crypto Currency", "CryptoCurrency"]},
        ),
    )


@pytest.fixture
def sample_csv_text() -> str:
    """Raw CSV content in the Kaggle export layout."""
    return "\n".join(
        [
            CSV_HEADER,
            "Acme,NY,CryptoCurrency,100,NULL,1/5/2022,Seed,United States.,5",
            "Acme,NY,CryptoCurrency,100,NULL,1/5/2022,Seed,United States.,5",
            "Airbnb,SF Bay Area,,30,NULL,3/3/2023,Post-IPO,United States,6400",
            "Airbnb,SF Bay Area,Travel,1900,0.25,5/5/2020,Post-IPO,United States,5400",
            "Ghost,Berlin,Retail,NULL,NULL,12/1/2022,Series B,Germany,NULL",
            "Blackbaud,Charleston,Other,500,0.14,NULL,Post-IPO,United States,NULL",
            "",
        ]
    )


@pytest.fixture
def source_csv(cleaning_config: CleaningConfig, sample_csv_text: str) -> Path:
    """Write the sample CSV to the configured source path."""
    path = cleaning_config.source_path
    path.write_text(sample_csv_text, encoding="utf-8")
    return path
