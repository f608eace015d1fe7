"""
Layoffs Cleaning: batch cleaner for the layoffs-2022 dataset.

This package snapshots the raw layoff records, removes duplicates,
normalizes categorical and date fields and prunes rows that carry
no layoff measure.
"""

from importlib.metadata import version

__version__ = version("layoffs-cleaning")

__all__ = ["__version__"]
