"""
Typed configuration models using Pydantic.

All tunables of a cleaning run are defined here with explicit typing
and validation. No synonym lists or formats are hardcoded in the
processing code.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FillPolicy(str, Enum):
    """How to choose an industry when a company has several candidates."""

    SMALLEST = "smallest"  # lexicographically smallest candidate
    ERROR = "error"  # raise AmbiguousFillError


class DataPathsConfig(BaseModel):
    """Data file paths configuration.

    Paths are relative to data_root. Use resolve() to get full paths.
    """

    model_config = ConfigDict(frozen=True)

    data_root: Path = Field(
        default=Path("./data"), description="Root directory for all data files"
    )
    source: Path = Field(description="Raw layoffs CSV (never modified)")
    output: Path | None = Field(
        default=None, description="Destination for the cleaned CSV"
    )

    def resolve(self, path_attr: str) -> Path:
        """Resolve a relative path against data_root."""
        rel_path = getattr(self, path_attr)
        if rel_path is None:
            msg = f"Path '{path_attr}' is not configured"
            raise ValueError(msg)
        return self.data_root / rel_path


class IndustryConfig(BaseModel):
    """Industry fill and synonym configuration."""

    model_config = ConfigDict(frozen=True)

    synonyms: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Canonical industry name -> list of variant spellings",
    )
    fill_policy: FillPolicy = Field(
        default=FillPolicy.SMALLEST,
        description="Choice rule when a company has several known industries",
    )

    @field_validator("synonyms")
    @classmethod
    def validate_synonyms(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        """Ensure no variant maps to two different canonical names."""
        seen: dict[str, str] = {}
        for canonical, variants in v.items():
            for variant in variants:
                other = seen.get(variant)
                if other is not None and other != canonical:
                    msg = (
                        f"Variant {variant!r} maps to both {other!r} and {canonical!r}"
                    )
                    raise ValueError(msg)
                seen[variant] = canonical
        return v

    @property
    def variant_lookup(self) -> dict[str, str]:
        """Flat variant -> canonical mapping."""
        return {
            variant: canonical
            for canonical, variants in self.synonyms.items()
            for variant in variants
            if variant != canonical
        }


class NormalizationConfig(BaseModel):
    """Field normalization configuration."""

    model_config = ConfigDict(frozen=True)

    date_formats: list[str] = Field(
        default_factory=lambda: ["%m/%d/%Y", "%Y-%m-%d"],
        min_length=1,
        description="strptime formats tried in order for event_date",
    )
    country_strip_chars: str = Field(
        default=".",
        min_length=1,
        description="Trailing characters stripped from country names",
    )
    trim_whitespace: bool = Field(
        default=True, description="Strip surrounding whitespace from text columns"
    )
    recheck_duplicates: bool = Field(
        default=True,
        description="Drop rows that became identical after normalization",
    )
    null_tokens: list[str] = Field(
        default_factory=lambda: ["NULL"],
        description="Literal tokens in the source CSV that mean null",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure level is a standard logging level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return level


class CleaningConfig(BaseModel):
    """Complete cleaning run configuration."""

    model_config = ConfigDict(frozen=True)

    project: str = Field(description="Project identifier (e.g., 'layoffs-2022')")

    data_paths: DataPathsConfig
    industry: IndustryConfig = Field(default_factory=IndustryConfig)
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def source_path(self) -> Path:
        """Resolved path to the raw source CSV."""
        return self.data_paths.resolve("source")

    @property
    def output_path(self) -> Path:
        """Resolved path for the cleaned CSV.

        Defaults to ``<data_root>/<project>_cleaned.csv``.
        """
        if self.data_paths.output is None:
            return self.data_paths.data_root / f"{self.project}_cleaned.csv"
        return self.data_paths.resolve("output")
