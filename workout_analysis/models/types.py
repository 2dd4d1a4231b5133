from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class WorkoutRecord:
    date: date
    duration_minutes: int
    category: str
    calories: Optional[float] = None
    avg_heart_rate: Optional[float] = None
    max_heart_rate: Optional[float] = None
    duration_text: str = ""
    row_number: int = 0  # 1-based data row in the source export


@dataclass(frozen=True)
class RejectedRow:
    row_number: int
    reason: str
    raw: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ParseResult:
    records: List[WorkoutRecord] = field(default_factory=list)
    rejected: List[RejectedRow] = field(default_factory=list)
    total_rows: int = 0
    ignored_rows: int = 0  # well-formed rows outside the configured categories


@dataclass(frozen=True)
class CategoryStats:
    """Summary for one category.

    ``avg_calories`` is averaged over sessions that report calories.
    ``max_heart_rate`` treats a missing value as 0.
    """

    session_count: int = 0
    total_duration_minutes: int = 0
    avg_calories: int = 0
    max_heart_rate: float = 0.0

    @classmethod
    def empty(cls) -> "CategoryStats":
        return cls()


@dataclass(frozen=True)
class SeriesPoint:
    date: date
    date_label: str
    calories: Optional[float]
    duration_minutes: int
    avg_heart_rate: Optional[float] = None
    max_heart_rate: Optional[float] = None


@dataclass
class CategoryReport:
    category: str
    stats: CategoryStats = field(default_factory=CategoryStats.empty)
    series: List[SeriesPoint] = field(default_factory=list)


@dataclass
class AnalysisResult:
    reports: Dict[str, CategoryReport] = field(default_factory=dict)
    records: List[WorkoutRecord] = field(default_factory=list)
    rejected: List[RejectedRow] = field(default_factory=list)
    total_rows: int = 0
    loaded_at: Optional[datetime] = None

    @classmethod
    def empty(cls, categories) -> "AnalysisResult":
        """Zero-state result shown before the first successful load."""
        return cls(reports={c: CategoryReport(category=c) for c in categories})

    @property
    def categories(self) -> List[str]:
        return list(self.reports.keys())
