"""Loading of raw and cleaned layoffs CSV files."""

from layoffs_cleaning.ingestion.layoffs import (
    CleanedLayoffLoader,
    LayoffSourceLoader,
    load_cleaned,
    load_layoffs,
)

__all__ = ["CleanedLayoffLoader", "LayoffSourceLoader", "load_cleaned", "load_layoffs"]
