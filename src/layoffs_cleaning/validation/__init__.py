"""Data validation module."""

from layoffs_cleaning.validation.core import ValidationResult, ValidationRunner
from layoffs_cleaning.validation.reporter import ConsoleReporter

__all__ = ["ConsoleReporter", "ValidationResult", "ValidationRunner"]
