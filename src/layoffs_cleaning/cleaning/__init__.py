"""
Cleaning pipeline for layoff records.

Orchestrates snapshotting, deduplication, normalization and pruning.
"""

from layoffs_cleaning.cleaning.pipeline import (
    CleaningPipeline,
    CleaningResult,
    StepStats,
    clean_layoffs,
    run_cleaning,
)

__all__ = [
    "CleaningPipeline",
    "CleaningResult",
    "StepStats",
    "clean_layoffs",
    "run_cleaning",
]
