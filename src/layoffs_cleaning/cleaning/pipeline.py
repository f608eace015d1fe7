"""
Cleaning pipeline implementation.

Runs the ordered cleaning steps over a snapshot of the raw layoffs
table and produces the cleaned table.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from layoffs_cleaning.cleaning.deduplication import deduplicate, drop_helper_columns
from layoffs_cleaning.cleaning.pruning import prune_uninformative_rows
from layoffs_cleaning.config.settings import CleaningConfig
from layoffs_cleaning.errors import CleaningError
from layoffs_cleaning.ingestion.layoffs import load_layoffs
from layoffs_cleaning.normalization.categorical import (
    apply_synonyms,
    blank_to_null,
    fill_from_peers,
    strip_trailing,
    trim_text,
)
from layoffs_cleaning.normalization.temporal import normalize_event_dates
from layoffs_cleaning.schemas.layoffs import (
    BUSINESS_COLUMNS,
    TEXT_COLUMNS,
    CleanLayoffSchema,
)
from layoffs_cleaning.utils.hashing import hash_config, hash_dataframe, hash_file_content
from layoffs_cleaning.utils.logging import get_logger, log_context

log = get_logger(__name__)

Step = Callable[[pd.DataFrame], pd.DataFrame]


@dataclass
class StepStats:
    """Row counts around one cleaning step."""

    name: str
    rows_before: int
    rows_after: int

    @property
    def rows_removed(self) -> int:
        """Number of rows the step removed."""
        return self.rows_before - self.rows_after


@dataclass
class CleaningResult:
    """
    Result of a cleaning run.

    Attributes:
        cleaned: Final cleaned DataFrame.
        n_source: Number of rows in the snapshot.
        steps: Row counts per step, in execution order.
        source_hash: Content hash of the snapshot.
        output_hash: Content hash of the cleaned table.
        output_path: Path where the table was saved (if any).
    """

    cleaned: pd.DataFrame
    n_source: int
    steps: list[StepStats] = field(default_factory=list)
    source_hash: str = ""
    output_hash: str = ""
    output_path: Path | None = None

    @property
    def n_cleaned(self) -> int:
        """Number of rows in the cleaned table."""
        return len(self.cleaned)

    @property
    def n_removed(self) -> int:
        """Total number of rows removed."""
        return self.n_source - self.n_cleaned


def snapshot(df: pd.DataFrame) -> pd.DataFrame:
    """Deep copy the raw table so cleaning never touches the original."""
    return df.copy(deep=True)


class CleaningPipeline:
    """
    Batch cleaner for layoff records.

    Step order matters: normalization assumes duplicates are gone and
    pruning assumes dates and measures are parsed.

    1. snapshot
    2. deduplicate (adds row_num)
    3. fill missing industry
    4. collapse industry synonyms
    5. strip trailing periods from country
    6. parse event dates
    7. prune rows without any layoff measure
    8. recheck duplicates created by normalization (optional)
    9. drop row_num
    """

    def __init__(self, config: CleaningConfig) -> None:
        """
        Initialize cleaning pipeline.

        Args:
            config: Cleaning configuration.
        """
        self.config = config

    def steps(self) -> list[tuple[str, Step]]:
        """Ordered (name, function) pairs applied by transform()."""
        industry = self.config.industry
        norm = self.config.normalization

        steps: list[tuple[str, Step]] = [
            ("snapshot", snapshot),
            ("deduplicate", deduplicate),
            ("fill_industry", self._fill_industry),
            (
                "normalize_industry",
                lambda df: apply_synonyms(df, "industry", industry.variant_lookup),
            ),
            (
                "normalize_country",
                lambda df: strip_trailing(df, "country", norm.country_strip_chars),
            ),
            (
                "normalize_dates",
                lambda df: normalize_event_dates(df, norm.date_formats),
            ),
            ("prune_uninformative", prune_uninformative_rows),
        ]
        if norm.recheck_duplicates:
            steps.append(("recheck_duplicates", deduplicate))
        steps.append(("drop_helper", drop_helper_columns))
        return steps

    def _fill_industry(self, df: pd.DataFrame) -> pd.DataFrame:
        """Trim text, blank industries to null, then fill from same company."""
        if self.config.normalization.trim_whitespace:
            df = trim_text(df, TEXT_COLUMNS)
        df = blank_to_null(df, "industry")
        return fill_from_peers(
            df, "company", "industry", policy=self.config.industry.fill_policy
        )

    def transform(self, raw: pd.DataFrame) -> CleaningResult:
        """
        Apply all cleaning steps to a raw table.

        Args:
            raw: Raw layoffs DataFrame. Never modified.

        Returns:
            CleaningResult with the cleaned table and step statistics.
        """
        result = CleaningResult(
            cleaned=raw,
            n_source=len(raw),
            source_hash=hash_dataframe(raw),
        )

        df = raw
        for name, step in self.steps():
            rows_before = len(df)
            with log_context(step=name):
                df = step(df)
            result.steps.append(StepStats(name, rows_before, len(df)))
            log.debug("Step finished", step=name, rows_before=rows_before, rows=len(df))

        df = df[BUSINESS_COLUMNS]
        result.cleaned = CleanLayoffSchema.validate(df)
        result.output_hash = hash_dataframe(result.cleaned)
        return result

    def run(
        self,
        source_path: Path | None = None,
        output_path: Path | None = None,
        *,
        save: bool = True,
    ) -> CleaningResult:
        """
        Load the source CSV, clean it, and optionally save the result.

        Args:
            source_path: Override for the configured source file.
            output_path: Override for the configured output file.
            save: Whether to write the cleaned CSV.

        Returns:
            CleaningResult with the cleaned table and statistics.

        Raises:
            CleaningError: If the output path is the source file, or a
                record cannot be parsed.
        """
        source = source_path or self.config.source_path
        target = output_path or self.config.output_path
        if save and target.resolve() == source.resolve():
            msg = f"Refusing to overwrite the source file {source}"
            raise CleaningError(msg)

        with log_context(project=self.config.project, source=str(source)):
            log.info("Starting cleaning run", config_hash=hash_config(self.config))

            raw = load_layoffs(self.config, source)
            log.info("Read source file", file_hash=hash_file_content(source))
            result = self.transform(raw)

            if save:
                save_cleaned(result.cleaned, target)
                result.output_path = target

            log.info(
                "Cleaning run complete",
                rows_source=result.n_source,
                rows_cleaned=result.n_cleaned,
                source_hash=result.source_hash,
                output_hash=result.output_hash,
            )
        return result


def save_cleaned(df: pd.DataFrame, path: Path) -> None:
    """Write the cleaned table as CSV with ISO dates."""
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False, date_format="%Y-%m-%d")
    log.info("Saved cleaned table", path=str(path), rows=len(df))


def run_cleaning(
    config: CleaningConfig,
    source_path: Path | None = None,
    output_path: Path | None = None,
    *,
    save: bool = True,
) -> CleaningResult:
    """
    Convenience function to run the cleaning pipeline.

    Args:
        config: Cleaning configuration.
        source_path: Override for the configured source file.
        output_path: Override for the configured output file.
        save: Whether to write the cleaned CSV.

    Returns:
        CleaningResult.
    """
    pipeline = CleaningPipeline(config)
    return pipeline.run(source_path, output_path, save=save)


def clean_layoffs(raw: pd.DataFrame, config: CleaningConfig) -> pd.DataFrame:
    """Clean an in-memory raw table and return only the cleaned frame."""
    return CleaningPipeline(config).transform(raw).cleaned
