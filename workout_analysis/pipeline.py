"""
Pipeline orchestration for workout analysis.
Runs parse -> filter -> aggregate/series and publishes results all-or-nothing.
"""
from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Union

from .aggregation.filters import split_by_category
from .aggregation.trends import build_series
from .config import AnalysisConfig, get_config
from .errors import LoadCancelled, LoadError, WorkoutAnalysisError
from .io.csv_loader import parse_workout_csv, read_export_text
from .metrics.compute import compute_category_stats
from .models.types import AnalysisResult, CategoryReport

logger = logging.getLogger(__name__)

Source = Union[str, Path, Callable[[], str]]


def run_pipeline(text: str, config: Optional[AnalysisConfig] = None) -> AnalysisResult:
    """Build a complete ``AnalysisResult`` from export text.

    Raises ``LoadError`` when the table cannot be used; nothing partial is returned.
    """
    config = config or get_config()
    categories = config.settings.categories

    parsed = parse_workout_csv(
        text,
        categories=categories,
        strict=config.settings.strict,
        columns=config.columns,
    )

    reports = {}
    for category, records in split_by_category(parsed.records, categories).items():
        reports[category] = CategoryReport(
            category=category,
            stats=compute_category_stats(records),
            series=build_series(records, config.settings.date_label_format),
        )

    return AnalysisResult(
        reports=reports,
        records=parsed.records,
        rejected=parsed.rejected,
        total_rows=parsed.total_rows,
        loaded_at=datetime.now(timezone.utc),
    )


class WorkoutAnalysis:
    """
    Owner of the currently published analysis result.

    Loads are serialized; a load only replaces the published result after
    every stage has finished. Failed or cancelled loads leave it untouched.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or get_config()
        self._result = AnalysisResult.empty(self.config.settings.categories)
        self._load_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._generation = 0

    @property
    def result(self) -> AnalysisResult:
        with self._state_lock:
            return self._result

    def replace(self, result: AnalysisResult) -> None:
        """Publish ``result`` in place of the current one."""
        with self._state_lock:
            self._result = result

    def cancel(self) -> None:
        """Discard the outcome of any load that is still running."""
        with self._state_lock:
            self._generation += 1
        logger.info("Pending workout load cancelled")

    def _read(self, source: Source) -> str:
        if not callable(source):
            return read_export_text(source, self.config.settings.encoding)
        try:
            text = source()
        except WorkoutAnalysisError:
            raise
        except Exception as e:
            raise LoadError(f"Could not load workout export: {e}") from e
        if not isinstance(text, str):
            raise LoadError(f"Workout export loader returned {type(text).__name__}, expected text")
        return text

    def load(self, source: Source) -> AnalysisResult:
        """
        Load an export and publish its analysis.

        Args:
            source: Path to a CSV export, or a callable returning its text

        Returns:
            The newly published AnalysisResult
        """
        with self._state_lock:
            self._generation += 1
            generation = self._generation

        with self._load_lock:
            logger.info("Loading workout export (load #%d)", generation)
            text = self._read(source)
            result = run_pipeline(text, self.config)

            with self._state_lock:
                if generation != self._generation:
                    logger.info("Discarding superseded workout load #%d", generation)
                    raise LoadCancelled(f"Load #{generation} was superseded")
                self._result = result

        logger.info(
            "Published workout analysis: %d records, %d rejected rows",
            len(result.records), len(result.rejected),
        )
        return result
