"""
Display formatting and report output.

This module handles:
- Duration, heart rate and calorie display strings
- Printing the per-category text report
- Building a JSON-serializable view of an analysis result
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from .models.types import AnalysisResult, CategoryReport, CategoryStats


def format_duration(minutes: int) -> str:
    """Whole minutes as "Hh Mm", e.g. 125 -> "2h 5m"."""
    if minutes < 0:
        raise ValueError(f"Duration must be non-negative, got {minutes}")
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m"


def _format_number(value: Optional[float]) -> str:
    if value is None:
        return "-"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def format_heart_rate(bpm: Optional[float]) -> str:
    return f"{_format_number(bpm)}bpm"


def format_calories(kcal: Optional[float]) -> str:
    return f"{_format_number(kcal)}kcal"


def export_filename(day: Optional[date] = None) -> str:
    """Filename hint handed to the image exporter."""
    day = day or date.today()
    return f"workout-analysis-{day.isoformat()}.png"


def stats_to_dict(stats: CategoryStats) -> Dict[str, Any]:
    return {
        "sessionCount": stats.session_count,
        "totalDurationMinutes": stats.total_duration_minutes,
        "totalDuration": format_duration(stats.total_duration_minutes),
        "avgCalories": stats.avg_calories,
        "maxHeartRate": stats.max_heart_rate,
    }


def report_to_dict(report: CategoryReport) -> Dict[str, Any]:
    return {
        "category": report.category,
        "stats": stats_to_dict(report.stats),
        "series": [
            {
                "date": p.date.isoformat(),
                "dateLabel": p.date_label,
                "calories": p.calories,
                "durationMinutes": p.duration_minutes,
                "avgHeartRate": p.avg_heart_rate,
                "maxHeartRate": p.max_heart_rate,
            }
            for p in report.series
        ],
    }


def result_to_dict(result: AnalysisResult, day: Optional[date] = None) -> Dict[str, Any]:
    """JSON-ready structure for a presentation layer."""
    return {
        "metadata": {
            "loaded_at": result.loaded_at.isoformat() if result.loaded_at else None,
            "total_rows": result.total_rows,
            "records": len(result.records),
            "rejected_rows": len(result.rejected),
            "export_filename": export_filename(day),
        },
        "categories": [report_to_dict(r) for r in result.reports.values()],
        "rejected": [{"row": r.row_number, "reason": r.reason} for r in result.rejected],
    }


def print_category_report(report: CategoryReport) -> None:
    """Print one category's stats block and calorie series."""
    stats = report.stats
    print("\n" + "=" * 60)
    print(report.category.upper())
    print("=" * 60)
    print(f"  Total Duration:  {format_duration(stats.total_duration_minutes)}")
    print(f"  Max Heart Rate:  {format_heart_rate(stats.max_heart_rate)}")
    print(f"  Total Sessions:  {stats.session_count}")
    print(f"  Avg Calories:    {format_calories(stats.avg_calories)}")

    if not report.series:
        print("\n  No sessions.")
        return
    print("\n  Calories by session:")
    for p in report.series:
        print(f"    {p.date_label:<8} {format_calories(p.calories):>10}  {format_duration(p.duration_minutes)}")


def print_rejected_rows(result: AnalysisResult) -> None:
    if not result.rejected:
        print("\nNo rows were rejected.")
        return
    print(f"\nSkipped {len(result.rejected)} malformed row(s):")
    for r in result.rejected:
        print(f"  - {r.reason}")
