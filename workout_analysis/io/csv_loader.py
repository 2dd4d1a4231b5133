"""CSV workout export loading.

Turns the raw text of a workout export into typed ``WorkoutRecord`` objects.
Rows are matched to fields by header name. Malformed rows are either
collected as ``RejectedRow`` entries (default) or abort the load when
strict parsing is enabled.
"""

from __future__ import annotations

import io
import logging
import math
import re
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import pandas as pd

from ..config import ColumnMapping, get_config
from ..errors import LoadError, RowParseError
from ..models.types import ParseResult, RejectedRow, WorkoutRecord

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"^(\d+):(\d{1,2})$", re.ASCII)
# A year, or day and month joined by "-", "/" or "."; "12:30" alone is a time
_DATE_PART_RE = re.compile(r"\d{4}|\d{1,2}[-/.]\d{1,2}", re.ASCII)
_OVERLONG_ROW = "\x00overlong-row"


def read_export_text(path: Union[str, Path], encoding: Optional[str] = None) -> str:
    """Read a local export file. ``utf-8-sig`` drops a leading BOM."""
    encoding = encoding or get_config().settings.encoding
    p = Path(path)
    try:
        return p.read_text(encoding=encoding)
    except FileNotFoundError as e:
        raise LoadError(f"Workout export not found: {p}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Could not read workout export {p}: {e}") from e


def parse_duration(text: str) -> int:
    """Convert "H:MM" / "HH:MM" to whole minutes."""
    m = _DURATION_RE.match(text.strip())
    if not m:
        raise RowParseError(f"Invalid duration '{text}', expected H:MM")
    hours = int(m.group(1))
    minutes = int(m.group(2))
    if minutes >= 60:
        raise RowParseError(f"Invalid duration '{text}', minutes must be below 60")
    return hours * 60 + minutes


def parse_start_date(text: str) -> date:
    """Calendar date of a start timestamp, in the timestamp's own wall-clock time."""
    if not text.strip():
        raise RowParseError("Missing start timestamp")
    if not _DATE_PART_RE.search(text):
        raise RowParseError(f"Invalid start timestamp '{text}', no date part")
    try:
        ts = pd.to_datetime(text.strip())
    except (ValueError, TypeError, OverflowError) as e:
        raise RowParseError(f"Invalid start timestamp '{text}': {e}") from e
    if pd.isna(ts):
        raise RowParseError(f"Invalid start timestamp '{text}'")
    return ts.date()


def parse_optional_number(text: str, field_name: str) -> Optional[float]:
    """Empty cells are absent values; anything else must be a non-negative number."""
    value = text.strip()
    if not value:
        return None
    try:
        number = float(value)
    except ValueError as e:
        raise RowParseError(f"Invalid {field_name} '{text}'") from e
    if math.isnan(number):
        return None
    if math.isinf(number) or number < 0:
        raise RowParseError(f"Invalid {field_name} '{text}', expected a non-negative number")
    return number


def _read_table(text: str, columns: ColumnMapping) -> Tuple[pd.DataFrame, List[List[str]]]:
    """Header-named table of string cells plus the raw fields of overlong rows.

    An overlong row (more cells than the header) stays in the table as a
    placeholder so later rows keep their source row numbers.
    """
    if not text or not text.strip():
        raise LoadError("Workout export is empty")

    overlong: List[List[str]] = []

    def keep_overlong(fields: List[str]) -> List[str]:
        overlong.append(fields)
        return [_OVERLONG_ROW]

    try:
        # header=None so the header row fixes the width and wider rows reach keep_overlong
        raw = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=keep_overlong,
        )
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise LoadError(f"Could not parse workout export: {e}") from e

    header = [_cell_text(c).lstrip("\ufeff").strip() for c in raw.iloc[0]]
    df = raw.iloc[1:].reset_index(drop=True)
    df.columns = header
    missing = [c for c in columns.required if c not in header]
    if missing:
        raise LoadError(
            f"Workout export is missing required columns: {', '.join(missing)}. "
            f"Found: {', '.join(header)}"
        )
    return df, overlong


def _cell_text(value) -> str:
    # Short rows leave trailing cells as NaN or None even with keep_default_na=False
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value)


def _cell(row: Dict[str, str], name: str) -> str:
    return _cell_text(row.get(name))


def _row_to_record(row: Dict[str, str], row_number: int, columns: ColumnMapping) -> WorkoutRecord:
    duration_text = _cell(row, columns.duration).strip()
    try:
        return WorkoutRecord(
            date=parse_start_date(_cell(row, columns.start)),
            duration_minutes=parse_duration(duration_text),
            category=_cell(row, columns.category).strip(),
            calories=parse_optional_number(_cell(row, columns.calories), "active energy"),
            avg_heart_rate=parse_optional_number(_cell(row, columns.avg_heart_rate), "average heart rate"),
            max_heart_rate=parse_optional_number(_cell(row, columns.max_heart_rate), "max heart rate"),
            duration_text=duration_text,
            row_number=row_number,
        )
    except RowParseError as e:
        e.row_number = row_number
        raise


def _overlong_row(fields: List[str], header: List[str], row_number: int) -> Tuple[Dict[str, str], RowParseError]:
    raw: Dict[str, str] = dict(zip(header, fields))
    raw["extra"] = ",".join(fields[len(header):])
    error = RowParseError(
        f"Expected {len(header)} fields, found {len(fields)}",
        row_number=row_number,
    )
    return raw, error


def parse_workout_csv(
    text: str,
    categories: Optional[Iterable[str]] = None,
    strict: Optional[bool] = None,
    columns: Optional[ColumnMapping] = None,
) -> ParseResult:
    """Parse export text into date-ordered records for the configured categories.

    Rows of other categories are dropped. Ties on date keep source order.
    A single category name may be passed as a plain string.
    """
    cfg = get_config()
    columns = columns or cfg.columns
    if categories is None:
        categories = cfg.settings.categories
    elif isinstance(categories, str):
        categories = (categories,)
    wanted = set(categories)
    strict = cfg.settings.strict if strict is None else strict

    df, overlong = _read_table(text, columns)
    header = list(df.columns)
    first_column = header[0]

    records: List[WorkoutRecord] = []
    rejected: List[RejectedRow] = []
    ignored = 0
    for row_number, row in enumerate(df.to_dict(orient="records"), start=1):
        if _cell(row, first_column) == _OVERLONG_ROW:
            raw, error = _overlong_row(overlong.pop(0), header, row_number)
            if raw.get(columns.category, "").strip() not in wanted:
                ignored += 1
                continue
        else:
            raw, error = row, None
            if _cell(row, columns.category).strip() not in wanted:
                ignored += 1
                continue
            try:
                records.append(_row_to_record(row, row_number, columns))
            except RowParseError as e:
                error = e
        if error is None:
            continue
        if strict:
            raise LoadError(f"Malformed workout row: {error}") from error
        logger.warning("Skipping malformed workout row: %s", error)
        rejected.append(RejectedRow(row_number=row_number, reason=str(error), raw=dict(raw)))

    records = sorted(records, key=lambda r: r.date)
    logger.info(
        "Parsed %d workout rows: %d kept, %d rejected, %d in other categories",
        len(df), len(records), len(rejected), ignored,
    )
    return ParseResult(records=records, rejected=rejected, total_rows=len(df), ignored_rows=ignored)
