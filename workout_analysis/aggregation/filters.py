from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from ..models.types import WorkoutRecord


def filter_by_category(records: Iterable[WorkoutRecord], category: str) -> List[WorkoutRecord]:
    """Records of one category, in their original relative order."""
    return [r for r in records if r.category == category]


def split_by_category(records: Sequence[WorkoutRecord], categories: Iterable[str]) -> Dict[str, List[WorkoutRecord]]:
    """One filtered list per category, keyed in the order the categories are given."""
    return {c: filter_by_category(records, c) for c in categories}
