from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

import pandas as pd

from ..config import get_config
from ..models.types import SeriesPoint, WorkoutRecord

SERIES_COLUMNS = ["date", "date_label", "calories", "duration_minutes", "avg_heart_rate", "max_heart_rate"]


def format_date_label(day: date, fmt: Optional[str] = None) -> str:
    """Axis label for a session date, "Mar 1" unless a strftime format is given."""
    fmt = fmt or get_config().settings.date_label_format
    if fmt:
        return day.strftime(fmt)
    # strftime has no portable unpadded day
    return f"{day:%b} {day.day}"


def build_series(records: Sequence[WorkoutRecord], date_label_format: Optional[str] = None) -> List[SeriesPoint]:
    """One chart point per session.

    Expects records already filtered to a category and sorted by date, as the
    parser returns them; no reordering happens here.
    """
    fmt = date_label_format or get_config().settings.date_label_format
    return [
        SeriesPoint(
            date=r.date,
            date_label=format_date_label(r.date, fmt),
            calories=r.calories,
            duration_minutes=r.duration_minutes,
            avg_heart_rate=r.avg_heart_rate,
            max_heart_rate=r.max_heart_rate,
        )
        for r in records
    ]


def series_to_frame(points: Sequence[SeriesPoint]) -> pd.DataFrame:
    """Series as a DataFrame for plotting libraries; missing values become NaN."""
    rows = [
        {
            "date": p.date,
            "date_label": p.date_label,
            "calories": p.calories,
            "duration_minutes": p.duration_minutes,
            "avg_heart_rate": p.avg_heart_rate,
            "max_heart_rate": p.max_heart_rate,
        }
        for p in points
    ]
    df = pd.DataFrame(rows, columns=SERIES_COLUMNS)
    if df.empty:
        return df
    df["date"] = pd.to_datetime(df["date"])
    for col in ("calories", "avg_heart_rate", "max_heart_rate"):
        df[col] = pd.to_numeric(df[col], errors="coerce")
    return df
