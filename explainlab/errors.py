"""Error taxonomy for the recoding and explanation workflows."""
from __future__ import annotations

from typing import Iterable

__all__ = [
    "ExplainLabError",
    "SchemaMismatch",
    "InsufficientData",
    "UnmappedCategory",
]


class ExplainLabError(Exception):
    """Base class for errors raised by explainlab itself."""


class SchemaMismatch(ExplainLabError, ValueError):
    """Input table does not carry the expected columns or dtypes."""

    def __init__(
        self,
        message: str,
        missing: Iterable[str] = (),
        unexpected: Iterable[str] = (),
    ) -> None:
        super().__init__(message)
        self.missing = sorted(missing)
        self.unexpected = sorted(unexpected)


class InsufficientData(ExplainLabError, ValueError):
    """Not enough rows to compute a statistic or fill a partition."""


class UnmappedCategory(ExplainLabError, ValueError):
    """A categorical value has no entry in its recoding table."""

    def __init__(self, column: str, values: Iterable[str]) -> None:
        self.column = column
        self.values = sorted(set(values))
        super().__init__(f"Unmapped values in column '{column}': {self.values}")
