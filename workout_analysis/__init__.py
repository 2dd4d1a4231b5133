"""Workout export analysis.

Modules:
- io: Reading CSV workout exports into typed records
- models: Typed domain objects
- aggregation: Category filtering and chart series
- metrics: Per-category statistics
- pipeline: Load orchestration and the published result
- reporting: Display formatting and JSON output
- cli: Command line interface
"""

from .config import get_config, reset_config
from .errors import LoadCancelled, LoadError, RowParseError, WorkoutAnalysisError
from .pipeline import WorkoutAnalysis, run_pipeline

__version__ = "1.0.0"

__all__ = [
    "io",
    "models",
    "aggregation",
    "metrics",
    "pipeline",
    "reporting",
    "cli",
    "WorkoutAnalysis",
    "run_pipeline",
    "get_config",
    "reset_config",
    "LoadError",
    "LoadCancelled",
    "RowParseError",
    "WorkoutAnalysisError",
]
