"""Typed domain objects for parsed workouts and derived summaries."""

from .types import (
    AnalysisResult,
    CategoryReport,
    CategoryStats,
    ParseResult,
    RejectedRow,
    SeriesPoint,
    WorkoutRecord,
)

__all__ = [
    "AnalysisResult",
    "CategoryReport",
    "CategoryStats",
    "ParseResult",
    "RejectedRow",
    "SeriesPoint",
    "WorkoutRecord",
]
