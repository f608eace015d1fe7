"""
Pandera schemas for layoff records.

The raw schema guards the ingestion boundary; the clean schema encodes
every invariant the cleaned table must satisfy.
"""

import pandas as pd
import pandera.pandas as pa
from pandera.typing import DataFrame, Series

# Business attributes of a layoff record, in output order
BUSINESS_COLUMNS: list[str] = [
    "company",
    "location",
    "industry",
    "total_laid_off",
    "percentage_laid_off",
    "event_date",
    "stage",
    "country",
    "funds_raised_millions",
]

TEXT_COLUMNS: list[str] = ["company", "location", "industry", "stage", "country"]

INTEGER_COLUMNS: list[str] = ["total_laid_off"]

DECIMAL_COLUMNS: list[str] = ["percentage_laid_off", "funds_raised_millions"]

# Measured outcome fields; a row without either is uninformative
MEASURE_COLUMNS: list[str] = ["total_laid_off", "percentage_laid_off"]

# Transient duplicate rank, never part of the output
ROW_NUMBER_COLUMN = "row_num"

# strict-mode column violations surface as SchemaErrors even without lazy=True
SCHEMA_ERRORS = (pa.errors.SchemaError, pa.errors.SchemaErrors)


class RawLayoffSchema(pa.DataFrameModel):
    """
    Schema for layoff records as read from the source CSV.

    Numeric columns are already parsed; event_date is still text.
    """

    company: Series[str] = pa.Field(description="Company name")
    location: Series[str] = pa.Field(nullable=True, description="HQ location")
    industry: Series[str] = pa.Field(
        nullable=True, description="Industry, may be blank in the source"
    )
    total_laid_off: Series[pd.Int64Dtype] = pa.Field(
        nullable=True, ge=0, description="Number of employees laid off"
    )
    percentage_laid_off: Series[float] = pa.Field(
        nullable=True,
        ge=0.0,
        le=1.0,
        description="Share of workforce laid off (0-1)",
    )
    event_date: Series[str] = pa.Field(
        nullable=True, description="Layoff date as month/day/year text"
    )
    stage: Series[str] = pa.Field(nullable=True, description="Funding stage")
    country: Series[str] = pa.Field(nullable=True, description="Country name")
    funds_raised_millions: Series[float] = pa.Field(
        nullable=True, ge=0.0, description="Funds raised in millions USD"
    )

    class Config:
        """Schema configuration."""

        name = "RawLayoffSchema"
        strict = True
        coerce = False


class CleanLayoffSchema(pa.DataFrameModel):
    """
    Schema for the cleaned layoff table.

    Enforces uniqueness over all attributes, canonical blanks, countries
    without trailing periods, parsed dates and at least one measure per row.
    Strict mode rejects the transient row_num column.
    """

    company: Series[str] = pa.Field(str_length={"min_value": 1})
    location: Series[str] = pa.Field(nullable=True)
    industry: Series[str] = pa.Field(nullable=True, str_length={"min_value": 1})
    total_laid_off: Series[pd.Int64Dtype] = pa.Field(nullable=True, ge=0)
    percentage_laid_off: Series[float] = pa.Field(nullable=True, ge=0.0, le=1.0)
    event_date: Series[pa.DateTime] = pa.Field(nullable=True)
    stage: Series[str] = pa.Field(nullable=True)
    country: Series[str] = pa.Field(nullable=True)
    funds_raised_millions: Series[float] = pa.Field(nullable=True, ge=0.0)

    @pa.check("country", name="no_trailing_period")
    def country_has_no_trailing_period(cls, country: Series[str]) -> Series[bool]:
        """Country names never end with a period."""
        return ~country.str.endswith(".")

    @pa.dataframe_check(name="has_layoff_measure", ignore_na=False)
    def has_layoff_measure(cls, df: DataFrame) -> Series[bool]:
        """At least one of total_laid_off / percentage_laid_off is set."""
        return df["total_laid_off"].notna() | df["percentage_laid_off"].notna()

    class Config:
        """Schema configuration."""

        name = "CleanLayoffSchema"
        strict = True
        coerce = False
        unique = BUSINESS_COLUMNS
