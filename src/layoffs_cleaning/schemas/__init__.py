"""
Schema definitions using Pandera for data validation.

All data contracts are defined here to ensure explicit,
validated data structures throughout the pipeline.
"""

from layoffs_cleaning.schemas.layoffs import (
    BUSINESS_COLUMNS,
    ROW_NUMBER_COLUMN,
    SCHEMA_ERRORS,
    CleanLayoffSchema,
    RawLayoffSchema,
)
from layoffs_cleaning.schemas.registry import DataRole, SchemaRegistry

__all__ = [
    "BUSINESS_COLUMNS",
    "ROW_NUMBER_COLUMN",
    "SCHEMA_ERRORS",
    "CleanLayoffSchema",
    "DataRole",
    "RawLayoffSchema",
    "SchemaRegistry",
]
