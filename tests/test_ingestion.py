"""Tests for layoffs CSV ingestion."""

from pathlib import Path

import pandas as pd
import pytest

from layoffs_cleaning.cleaning import run_cleaning
from layoffs_cleaning.config.settings import CleaningConfig
from layoffs_cleaning.errors import SchemaMismatchError, ValueParseError
from layoffs_cleaning.ingestion import (
    CleanedLayoffLoader,
    LayoffSourceLoader,
    load_cleaned,
    load_layoffs,
)
from layoffs_cleaning.schemas.layoffs import BUSINESS_COLUMNS

CSV_HEADER = (
    "company,location,industry,total_laid_off,percentage_laid_off,"
    "date,stage,country,funds_raised_millions"
)


class TestLoadLayoffs:
    """Tests for the raw source loader."""

    def test_loads_and_types_columns(
        self, cleaning_config: CleaningConfig, source_csv: Path
    ) -> None:
        """Test that the sample CSV loads with canonical columns and dtypes."""
        df = load_layoffs(cleaning_config)

        assert list(df.columns) == BUSINESS_COLUMNS
        assert len(df) == 6
        assert str(df["total_laid_off"].dtype) == "Int64"
        assert df["percentage_laid_off"].dtype == "float64"
        assert df["event_date"].iloc[0] == "1/5/2022"

    def test_null_tokens_and_blanks(
        self, cleaning_config: CleaningConfig, source_csv: Path
    ) -> None:
        """Test that NULL tokens become nulls while blank text stays blank."""
        df = load_layoffs(cleaning_config)

        assert pd.isna(df.loc[0, "percentage_laid_off"])
        assert df.loc[2, "industry"] == ""
        assert pd.isna(df.loc[5, "event_date"])

    def test_source_is_not_modified(
        self, cleaning_config: CleaningConfig, source_csv: Path, sample_csv_text: str
    ) -> None:
        """Test that loading never writes to the source file."""
        load_layoffs(cleaning_config)
        assert source_csv.read_text(encoding="utf-8") == sample_csv_text

    def test_missing_file(self, cleaning_config: CleaningConfig) -> None:
        """Test that a missing source raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="not found"):
            LayoffSourceLoader(cleaning_config).load()

    def test_schema_mismatch(self, cleaning_config: CleaningConfig) -> None:
        """Test that a CSV with wrong columns raises SchemaMismatchError."""
        cleaning_config.source_path.write_text(
            "company,location,industry,notes\nAcme,NY,Retail,x\n", encoding="utf-8"
        )
        with pytest.raises(SchemaMismatchError) as exc_info:
            load_layoffs(cleaning_config)
        assert "event_date" in exc_info.value.missing
        assert exc_info.value.unexpected == ["notes"]

    def test_non_numeric_value(self, cleaning_config: CleaningConfig) -> None:
        """Test that text in a numeric column raises with the row."""
        cleaning_config.source_path.write_text(
            f"{CSV_HEADER}\nAcme,NY,Retail,lots,0.1,1/5/2022,Seed,USA,5\n",
            encoding="utf-8",
        )
        with pytest.raises(ValueParseError, match="lots") as exc_info:
            load_layoffs(cleaning_config)
        assert exc_info.value.row == 0
        assert exc_info.value.company == "Acme"

    def test_fractional_integer_rejected(self, cleaning_config: CleaningConfig) -> None:
        """Test that total_laid_off must be a whole number."""
        cleaning_config.source_path.write_text(
            f"{CSV_HEADER}\nAcme,NY,Retail,10.5,0.1,1/5/2022,Seed,USA,5\n",
            encoding="utf-8",
        )
        with pytest.raises(ValueParseError, match="integer"):
            load_layoffs(cleaning_config)

    def test_path_override(
        self, cleaning_config: CleaningConfig, tmp_path: Path, sample_csv_text: str
    ) -> None:
        """Test loading from an explicit path."""
        other = tmp_path / "other.csv"
        other.write_text(sample_csv_text, encoding="utf-8")
        assert len(load_layoffs(cleaning_config, other)) == 6


class TestLoadCleaned:
    """Tests for reading a cleaned CSV back."""

    def test_roundtrip_types(self, cleaning_config: CleaningConfig) -> None:
        """Test that a written cleaned CSV reads back with parsed dates."""
        path = cleaning_config.output_path
        path.parent.mkdir(parents=True)
        path.write_text(
            "company,location,industry,total_laid_off,percentage_laid_off,"
            "event_date,stage,country,funds_raised_millions\n"
            "Acme,NY,Crypto,100,,2022-01-05,Seed,United States,5.0\n"
            "Beta,,,,0.5,,Seed,Germany,\n",
            encoding="utf-8",
        )
        df = load_cleaned(cleaning_config)

        assert df.loc[0, "event_date"] == pd.Timestamp(2022, 1, 5)
        assert pd.isna(df.loc[1, "industry"])
        assert pd.isna(df.loc[1, "location"])
        assert pd.isna(df.loc[1, "total_laid_off"])

    def test_missing_cleaned_file(self, cleaning_config: CleaningConfig) -> None:
        """Test that a missing cleaned file raises."""
        with pytest.raises(FileNotFoundError):
            load_cleaned(cleaning_config)

    def test_cleaned_loader_validates(
        self, cleaning_config: CleaningConfig, source_csv: Path
    ) -> None:
        """Test that a written output loads and passes the clean schema."""
        run_cleaning(cleaning_config)
        df = CleanedLayoffLoader(cleaning_config).load()

        assert len(df) == 4
        assert pd.api.types.is_datetime64_any_dtype(df["event_date"])
