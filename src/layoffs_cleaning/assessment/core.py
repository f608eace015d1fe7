"""
Core assessment logic for the cleaned layoffs table.

Re-reads a cleaned CSV and checks every output invariant, including
that another cleaning pass would leave it unchanged.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import pandas as pd

from layoffs_cleaning.cleaning.pipeline import CleaningPipeline
from layoffs_cleaning.config.settings import CleaningConfig
from layoffs_cleaning.errors import CleaningError
from layoffs_cleaning.ingestion.layoffs import load_cleaned
from layoffs_cleaning.schemas.layoffs import (
    BUSINESS_COLUMNS,
    MEASURE_COLUMNS,
    ROW_NUMBER_COLUMN,
    SCHEMA_ERRORS,
)
from layoffs_cleaning.utils.hashing import hash_dataframe
from layoffs_cleaning.utils.logging import get_logger

log = get_logger(__name__)


class CheckStatus(Enum):
    """Status of an individual check."""

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


@dataclass
class CheckResult:
    """
    Result of a single assessment check.

    Attributes:
        name: Check name.
        status: Pass/fail/skip.
        message: Human-readable description.
        details: Optional additional details.
        n_checked: Number of rows checked.
        n_failed: Number of rows violating the invariant.
        sample_failures: Up to ten offending rows.
    """

    name: str
    status: CheckStatus
    message: str
    details: str | None = None
    n_checked: int = 0
    n_failed: int = 0
    sample_failures: pd.DataFrame | None = None

    @property
    def n_passed(self) -> int:
        """Rows satisfying the invariant."""
        return self.n_checked - self.n_failed


@dataclass
class AssessmentResult:
    """
    Result of a full assessment.

    Attributes:
        cleaned_path: Path to the cleaned CSV.
        checks: List of individual check results.
    """

    cleaned_path: Path
    checks: list[CheckResult] = field(default_factory=list)

    @property
    def overall_status(self) -> CheckStatus:
        """Determine overall status from individual checks."""
        if any(c.status == CheckStatus.FAIL for c in self.checks):
            return CheckStatus.FAIL
        if all(c.status == CheckStatus.SKIP for c in self.checks):
            return CheckStatus.SKIP
        return CheckStatus.PASS

    @property
    def n_passed(self) -> int:
        """Count checks that passed."""
        return sum(1 for c in self.checks if c.status == CheckStatus.PASS)

    @property
    def n_failed(self) -> int:
        """Count checks that failed."""
        return sum(1 for c in self.checks if c.status == CheckStatus.FAIL)


def _row_check(
    name: str,
    df: pd.DataFrame,
    violations: pd.Series,
    message: str,
    columns: list[str] | None = None,
) -> CheckResult:
    """Build a CheckResult from a boolean violation mask."""
    n_failed = int(violations.sum())
    sample = None
    if n_failed:
        sample = df.loc[violations, columns or BUSINESS_COLUMNS].head(10)
    return CheckResult(
        name=name,
        status=CheckStatus.FAIL if n_failed else CheckStatus.PASS,
        message=f"{message}: {len(df) - n_failed}/{len(df)} rows ok",
        n_checked=len(df),
        n_failed=n_failed,
        sample_failures=sample,
    )


class AssessmentRunner:
    """
    Runs invariant checks against a cleaned layoffs CSV.

    Every check is a hard invariant, so a single violating row fails it.
    """

    def __init__(
        self,
        config: CleaningConfig,
        cleaned_path: Path | None = None,
    ) -> None:
        """
        Initialize assessment runner.

        Args:
            config: Cleaning configuration.
            cleaned_path: Path to cleaned CSV. Defaults to the configured output.
        """
        self.config = config
        self.cleaned_path = cleaned_path or config.output_path

    def run(self) -> AssessmentResult:
        """
        Run full assessment suite.

        Returns:
            AssessmentResult with all check results.
        """
        log.info("Starting assessment", path=str(self.cleaned_path))
        result = AssessmentResult(cleaned_path=self.cleaned_path)

        if not self.cleaned_path.exists():
            result.checks.append(
                CheckResult(
                    name="output_exists",
                    status=CheckStatus.FAIL,
                    message=f"Cleaned file not found: {self.cleaned_path}",
                )
            )
            return result

        try:
            df = load_cleaned(self.config, self.cleaned_path)
        except CleaningError as e:
            # unparseable dates or numbers land here
            result.checks.append(
                CheckResult(
                    name="output_readable",
                    status=CheckStatus.FAIL,
                    message=f"Failed to read cleaned file: {e}",
                )
            )
            return result

        checks: list[Callable[[pd.DataFrame], CheckResult]] = [
            self.check_no_helper_column,
            self.check_no_duplicates,
            self.check_industry_not_blank,
            self.check_industry_canonical,
            self.check_country_suffix,
            self.check_dates_parsed,
            self.check_has_measure,
            self.check_idempotent,
        ]
        result.checks.extend(check(df) for check in checks)

        log.info(
            "Assessment complete",
            overall=result.overall_status.value,
            passed=result.n_passed,
            failed=result.n_failed,
        )
        return result

    def check_no_helper_column(self, df: pd.DataFrame) -> CheckResult:
        """The transient rank column must not be in the output."""
        present = ROW_NUMBER_COLUMN in df.columns
        return CheckResult(
            name="no_helper_column",
            status=CheckStatus.FAIL if present else CheckStatus.PASS,
            message=(
                f"'{ROW_NUMBER_COLUMN}' column present"
                if present
                else f"'{ROW_NUMBER_COLUMN}' column absent"
            ),
        )

    def check_no_duplicates(self, df: pd.DataFrame) -> CheckResult:
        """No two rows share all business attributes."""
        duplicated = df.duplicated(subset=BUSINESS_COLUMNS, keep="first")
        return _row_check("no_duplicates", df, duplicated, "Unique records")

    def check_industry_not_blank(self, df: pd.DataFrame) -> CheckResult:
        """Industry is null or a non-empty string."""
        industry = df["industry"]
        blank = industry.notna() & (industry.astype(str).str.strip() == "")
        return _row_check("industry_not_blank", df, blank, "Non-blank industry")

    def check_industry_canonical(self, df: pd.DataFrame) -> CheckResult:
        """No configured synonym variant survives."""
        lookup = self.config.industry.variant_lookup
        if not lookup:
            return CheckResult(
                name="industry_canonical",
                status=CheckStatus.SKIP,
                message="No industry synonyms configured",
            )
        variant = df["industry"].isin(list(lookup))
        return _row_check(
            "industry_canonical",
            df,
            variant,
            "Canonical industry names",
            columns=["company", "industry"],
        )

    def check_country_suffix(self, df: pd.DataFrame) -> CheckResult:
        """Country never ends with a configured strip character."""
        chars = tuple(self.config.normalization.country_strip_chars)
        country = df["country"]
        bad = country.notna() & country.astype(str).str.endswith(chars)
        return _row_check(
            "country_no_trailing_punctuation",
            df,
            bad,
            "Countries without trailing punctuation",
            columns=["company", "country"],
        )

    def check_dates_parsed(self, df: pd.DataFrame) -> CheckResult:
        """event_date holds datetime values, never strings."""
        is_datetime = pd.api.types.is_datetime64_any_dtype(df["event_date"])
        n_null = int(df["event_date"].isna().sum())
        return CheckResult(
            name="event_date_parsed",
            status=CheckStatus.PASS if is_datetime else CheckStatus.FAIL,
            message=f"event_date dtype {df['event_date'].dtype}",
            details=f"{n_null} null dates retained",
            n_checked=len(df),
            n_failed=0 if is_datetime else len(df),
        )

    def check_has_measure(self, df: pd.DataFrame) -> CheckResult:
        """Every row has total_laid_off or percentage_laid_off."""
        empty = df[MEASURE_COLUMNS].isna().all(axis=1)
        return _row_check(
            "has_layoff_measure",
            df,
            empty,
            "Rows with a layoff measure",
            columns=["company", *MEASURE_COLUMNS],
        )

    def check_idempotent(self, df: pd.DataFrame) -> CheckResult:
        """Cleaning the cleaned table again must not change it."""
        current = df[BUSINESS_COLUMNS]
        try:
            again = CleaningPipeline(self.config).transform(current).cleaned
        except (CleaningError, *SCHEMA_ERRORS) as e:
            return CheckResult(
                name="idempotent",
                status=CheckStatus.FAIL,
                message=f"Re-cleaning raised {type(e).__name__}: {e}",
            )

        same = hash_dataframe(again) == hash_dataframe(current)
        return CheckResult(
            name="idempotent",
            status=CheckStatus.PASS if same else CheckStatus.FAIL,
            message=(
                "Re-cleaning leaves the table unchanged"
                if same
                else f"Re-cleaning changed the table ({len(current)} -> {len(again)} rows)"
            ),
            n_checked=len(current),
            n_failed=0 if same else abs(len(current) - len(again)) or len(current),
        )
