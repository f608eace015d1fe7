"""
Error types raised by the cleaning run.

All errors derive from ValueError and carry enough context to find
the offending record in the source file.
"""

from collections.abc import Iterable
from typing import Any


class CleaningError(ValueError):
    """Base class for all cleaning failures."""


class SchemaMismatchError(CleaningError):
    """Source columns do not match the expected layoff record attributes."""

    def __init__(
        self,
        missing: Iterable[str] = (),
        unexpected: Iterable[str] = (),
    ) -> None:
        self.missing = sorted(missing)
        self.unexpected = sorted(unexpected)
        parts = []
        if self.missing:
            parts.append(f"missing columns: {self.missing}")
        if self.unexpected:
            parts.append(f"unexpected columns: {self.unexpected}")
        super().__init__("Source schema mismatch (" + "; ".join(parts) + ")")


class RecordParseError(CleaningError):
    """A single field value could not be parsed into its target type."""

    kind = "value"

    def __init__(
        self,
        row: Any,
        column: str,
        value: Any,
        company: Any = None,
        expected: str | None = None,
    ) -> None:
        self.row = row
        self.column = column
        self.value = value
        self.company = company
        msg = f"Cannot parse {self.kind} {value!r} in column '{column}' at row {row}"
        if company is not None:
            msg += f" (company={company!r})"
        if expected:
            msg += f"; expected {expected}"
        super().__init__(msg)


class DateParseError(RecordParseError):
    """Date text did not match any configured format."""

    kind = "date"


class ValueParseError(RecordParseError):
    """Numeric column held a non-numeric value."""

    kind = "number"


class AmbiguousFillError(CleaningError):
    """A company has more than one candidate industry to fill from."""

    def __init__(self, company: str, candidates: Iterable[str]) -> None:
        self.company = company
        self.candidates = sorted(candidates)
        msg = (
            f"Company {company!r} has {len(self.candidates)} candidate industries "
            f"{self.candidates}; set industry.fill_policy to 'smallest' to pick one"
        )
        super().__init__(msg)
