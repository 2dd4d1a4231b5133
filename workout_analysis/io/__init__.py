"""Reading workout exports into typed records."""

from .csv_loader import (
    parse_duration,
    parse_optional_number,
    parse_start_date,
    parse_workout_csv,
    read_export_text,
)

__all__ = [
    "parse_duration",
    "parse_optional_number",
    "parse_start_date",
    "parse_workout_csv",
    "read_export_text",
]
