"""
Registry of the layoff table schemas.

Each schema is registered under a name and the role of the table it
describes, so validation can look a schema up from the dataset it is
checking.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

import pandera.pandas as pa

from layoffs_cleaning.schemas.layoffs import CleanLayoffSchema, RawLayoffSchema

if TYPE_CHECKING:
    import pandas as pd


class DataRole(Enum):
    """Which end of the cleaning run a table sits at."""

    SOURCE = "source"
    OUTPUT = "output"


@dataclass(frozen=True)
class SchemaInfo:
    """A registered schema and what it describes."""

    name: str
    schema: type[pa.DataFrameModel]
    role: DataRole
    description: str


class SchemaRegistry:
    """Lookup of layoff schemas by name or by data role."""

    _schemas: ClassVar[dict[str, SchemaInfo]] = {
        info.name: info
        for info in (
            SchemaInfo(
                name="raw_layoffs",
                schema=RawLayoffSchema,
                role=DataRole.SOURCE,
                description="Layoff records as imported from the layoffs-2022 CSV",
            ),
            SchemaInfo(
                name="clean_layoffs",
                schema=CleanLayoffSchema,
                role=DataRole.OUTPUT,
                description="Deduplicated, normalized layoff records",
            ),
        )
    }

    @classmethod
    def get(cls, name: str) -> type[pa.DataFrameModel]:
        """
        Get a schema class by name.

        Raises:
            KeyError: If no schema is registered under the name.
        """
        return cls.get_info(name).schema

    @classmethod
    def get_info(cls, name: str) -> SchemaInfo:
        """Get the full registration for a schema name."""
        try:
            return cls._schemas[name]
        except KeyError:
            available = ", ".join(cls._schemas)
            msg = f"Unknown schema '{name}'. Available: {available}"
            raise KeyError(msg) from None

    @classmethod
    def for_role(cls, role: DataRole | str) -> SchemaInfo:
        """Get the schema registered for a data role ("source" or "output")."""
        role = DataRole(role)
        for info in cls._schemas.values():
            if info.role is role:
                return info
        msg = f"No schema registered for role '{role.value}'"
        raise KeyError(msg)

    @classmethod
    def validate(
        cls,
        df: "pd.DataFrame",
        schema_name: str,
        *,
        lazy: bool = False,
    ) -> "pd.DataFrame":
        """
        Validate a DataFrame against a registered schema.

        Args:
            df: DataFrame to validate.
            schema_name: Name of schema to validate against.
            lazy: Collect every failure instead of stopping at the first.

        Returns:
            Validated DataFrame.

        Raises:
            pandera.errors.SchemaError: First failure, when not lazy.
            pandera.errors.SchemaErrors: All failures when lazy, and
                column set violations under strict mode.
        """
        return cls.get(schema_name).validate(df, lazy=lazy)
