"""
Base class for layoffs table loaders.

A loader owns one CSV path and one Pandera schema. Reading and typing
the columns is left to subclasses; the base handles the missing-file
check, run logging and optional schema validation.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar, Generic, TypeVar

import pandas as pd
import pandera.pandas as pa

from layoffs_cleaning.config.settings import CleaningConfig
from layoffs_cleaning.utils.logging import get_logger, log_context

log = get_logger(__name__)

T = TypeVar("T", bound=pa.DataFrameModel)


class DataLoader(ABC, Generic[T]):
    """Load a layoffs CSV and optionally validate it against a schema."""

    schema: ClassVar[type[pa.DataFrameModel]]
    label: ClassVar[str] = "Data file"

    def __init__(self, config: CleaningConfig, path: Path) -> None:
        """
        Initialize data loader.

        Args:
            config: Cleaning configuration (null tokens, date formats).
            path: CSV file to read.
        """
        self.config = config
        self.path = path

    @abstractmethod
    def _load_raw(self) -> pd.DataFrame:
        """Read the file at self.path into typed columns."""

    def load(self, *, validate: bool = True) -> pd.DataFrame:
        """
        Load the table and optionally validate it.

        Args:
            validate: Whether to validate against the loader's schema.

        Returns:
            Loaded DataFrame.

        Raises:
            FileNotFoundError: If the CSV does not exist.
            CleaningError: If a column or value cannot be read.
            pandera.errors.SchemaError: If validation fails.
            pandera.errors.SchemaErrors: If the column set breaks strict mode.
        """
        if not self.path.exists():
            msg = f"{self.label} not found: {self.path}"
            raise FileNotFoundError(msg)

        with log_context(loader=type(self).__name__, path=str(self.path)):
            df = self._load_raw()
            log.info("Loaded table", rows=len(df), columns=len(df.columns))

            if validate:
                df = self.schema.validate(df)
                log.info("Schema validation passed", schema=self.schema.__name__)

        return df
