"""
Cleaned output assessment module.

Checks a cleaned layoffs CSV against every output invariant.
"""

from layoffs_cleaning.assessment.core import (
    AssessmentResult,
    AssessmentRunner,
    CheckResult,
    CheckStatus,
)
from layoffs_cleaning.assessment.reporter import AssessmentReporter

__all__ = [
    "AssessmentReporter",
    "AssessmentResult",
    "AssessmentRunner",
    "CheckResult",
    "CheckStatus",
]
