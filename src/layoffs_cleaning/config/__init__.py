"""
Configuration management with typed Pydantic models.

Provides the externalized industry synonym table and
environment-aware configuration loading.
"""

from layoffs_cleaning.config.loader import load_config
from layoffs_cleaning.config.settings import (
    CleaningConfig,
    DataPathsConfig,
    FillPolicy,
    IndustryConfig,
    LoggingConfig,
    NormalizationConfig,
)

__all__ = [
    "CleaningConfig",
    "DataPathsConfig",
    "FillPolicy",
    "IndustryConfig",
    "LoggingConfig",
    "NormalizationConfig",
    "load_config",
]
