"""Tests for Pandera schema definitions."""

import pandas as pd
import pandera.pandas as pa
import pytest

from layoffs_cleaning.schemas import (
    BUSINESS_COLUMNS,
    SCHEMA_ERRORS,
    CleanLayoffSchema,
    RawLayoffSchema,
    SchemaRegistry,
)
from layoffs_cleaning.schemas.registry import DataRole


def _clean_frame(**overrides: list) -> pd.DataFrame:
    """Build a valid two-row cleaned frame, with optional column overrides."""
    data = {
        "company": ["Acme", "Airbnb"],
        "location": ["NY", "SF Bay Area"],
        "industry": ["Crypto", None],
        "total_laid_off": pd.array([100, None], dtype="Int64"),
        "percentage_laid_off": [None, 0.25],
        "event_date": pd.to_datetime(["2022-01-05", None]),
        "stage": ["Seed", "Post-IPO"],
        "country": ["United States", "United States"],
        "funds_raised_millions": [5.0, None],
    }
    data.update(overrides)
    df = pd.DataFrame(data)
    df["percentage_laid_off"] = df["percentage_laid_off"].astype("float64")
    df["funds_raised_millions"] = df["funds_raised_millions"].astype("float64")
    return df


class TestRawLayoffSchema:
    """Tests for RawLayoffSchema."""

    def test_valid_data(self, sample_raw: pd.DataFrame) -> None:
        """Test that loader-shaped raw data passes validation."""
        result = RawLayoffSchema.validate(sample_raw)
        assert len(result) == len(sample_raw)

    def test_extra_column_rejected(self, sample_raw: pd.DataFrame) -> None:
        """Test that strict mode rejects unknown columns."""
        df = sample_raw.assign(extra="x")
        with pytest.raises(SCHEMA_ERRORS):
            RawLayoffSchema.validate(df)

    def test_percentage_out_of_range(self, sample_raw: pd.DataFrame) -> None:
        """Test that percentages above 1 fail."""
        df = sample_raw.copy()
        df.loc[0, "percentage_laid_off"] = 1.5
        with pytest.raises(pa.errors.SchemaError):
            RawLayoffSchema.validate(df)


class TestCleanLayoffSchema:
    """Tests for CleanLayoffSchema invariants."""

    def test_valid_data(self) -> None:
        """Test that a clean frame passes."""
        result = CleanLayoffSchema.validate(_clean_frame())
        assert list(result.columns) == BUSINESS_COLUMNS

    def test_duplicate_rows_rejected(self) -> None:
        """Test that identical rows fail the uniqueness check."""
        df = _clean_frame()
        df = pd.concat([df, df.iloc[[0]]], ignore_index=True)
        with pytest.raises(pa.errors.SchemaError):
            CleanLayoffSchema.validate(df)

    def test_empty_industry_rejected(self) -> None:
        """Test that an empty-string industry fails."""
        with pytest.raises(pa.errors.SchemaError):
            CleanLayoffSchema.validate(_clean_frame(industry=["", None]))

    def test_trailing_period_rejected(self) -> None:
        """Test that a country ending in a period fails."""
        with pytest.raises(pa.errors.SchemaError):
            CleanLayoffSchema.validate(
                _clean_frame(country=["United States.", "United States"])
            )

    def test_text_date_rejected(self) -> None:
        """Test that dates still stored as text fail."""
        with pytest.raises(pa.errors.SchemaError):
            CleanLayoffSchema.validate(_clean_frame(event_date=["1/5/2022", None]))

    def test_missing_measures_rejected(self) -> None:
        """Test that a row without both measures fails."""
        df = _clean_frame(
            total_laid_off=pd.array([None, None], dtype="Int64"),
            percentage_laid_off=[None, 0.25],
        )
        with pytest.raises(pa.errors.SchemaError):
            CleanLayoffSchema.validate(df)

    def test_helper_column_rejected(self) -> None:
        """Test that the row_num helper column is not allowed."""
        df = _clean_frame().assign(row_num=1)
        with pytest.raises(SCHEMA_ERRORS):
            CleanLayoffSchema.validate(df)


class TestSchemaRegistry:
    """Tests for SchemaRegistry."""

    def test_get_schema(self) -> None:
        """Test retrieving schemas by name."""
        assert SchemaRegistry.get("raw_layoffs") is RawLayoffSchema
        assert SchemaRegistry.get("clean_layoffs") is CleanLayoffSchema

    def test_unknown_schema(self) -> None:
        """Test that unknown names raise KeyError."""
        with pytest.raises(KeyError, match="Unknown schema"):
            SchemaRegistry.get("nonexistent")

    def test_for_role(self) -> None:
        """Test looking schemas up by data role."""
        assert SchemaRegistry.for_role(DataRole.SOURCE).name == "raw_layoffs"
        assert SchemaRegistry.for_role("output").schema is CleanLayoffSchema

    def test_lazy_validation_collects_failures(self) -> None:
        """Test that lazy validation reports every failure."""
        df = _clean_frame().assign(country=["USA.", "Germany."])
        with pytest.raises(pa.errors.SchemaErrors) as excinfo:
            SchemaRegistry.validate(df, "clean_layoffs", lazy=True)
        assert len(excinfo.value.failure_cases) == 2

    def test_validate_through_registry(self) -> None:
        """Test validation via the registry."""
        result = SchemaRegistry.validate(_clean_frame(), "clean_layoffs")
        assert len(result) == 2
