from __future__ import annotations

import math
from typing import Dict, Iterable, Sequence

import numpy as np
import pandas as pd

from ..aggregation.filters import split_by_category
from ..models.types import CategoryStats, WorkoutRecord


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, 3.5 -> 4)."""
    return int(np.floor(value + 0.5))


def compute_category_stats(records: Sequence[WorkoutRecord]) -> CategoryStats:
    """Session count, total minutes, average calories and peak heart rate.

    Average calories only counts sessions that report calories. Sessions
    without a max heart rate count as 0 for the peak.
    """
    if not records:
        return CategoryStats.empty()

    durations = pd.Series([r.duration_minutes for r in records], dtype="int64")
    calories = pd.Series([r.calories for r in records], dtype="float64").dropna()
    max_hr = pd.Series([r.max_heart_rate for r in records], dtype="float64").fillna(0.0)

    avg_calories = 0
    if not calories.empty:
        # fsum keeps the mean independent of record order
        avg_calories = round_half_up(math.fsum(calories) / len(calories))

    return CategoryStats(
        session_count=len(records),
        total_duration_minutes=int(durations.sum()),
        avg_calories=avg_calories,
        max_heart_rate=float(max_hr.max()),
    )


def compute_all_stats(records: Sequence[WorkoutRecord], categories: Iterable[str]) -> Dict[str, CategoryStats]:
    return {c: compute_category_stats(rs) for c, rs in split_by_category(records, categories).items()}
