"""Exceptions raised by the workout analysis pipeline."""

from typing import Optional


class WorkoutAnalysisError(Exception):
    """Base class for pipeline errors."""


class LoadError(WorkoutAnalysisError):
    """The export could not be read or its table structure is unusable.

    Nothing from a failed load is published.
    """


class RowParseError(WorkoutAnalysisError, ValueError):
    """A single row of the export is malformed."""

    def __init__(self, message: str, row_number: Optional[int] = None):
        super().__init__(message)
        self.row_number = row_number

    def __str__(self) -> str:
        base = super().__str__()
        if self.row_number is None:
            return base
        return f"Row {self.row_number}: {base}"


class LoadCancelled(WorkoutAnalysisError):
    """A load was superseded or cancelled before its result was published."""
