"""
Configuration module for the workout analysis pipeline.
Column names of the export and the categories to analyse live here.
"""
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

DEFAULT_CATEGORIES: Tuple[str, ...] = ("Squash", "Hiking")


@dataclass
class ColumnMapping:
    """Header names in the workout export."""
    category: str = "Workout Type"
    start: str = "Start"
    duration: str = "Duration"  # "H:MM"
    calories: str = "Active Energy (kcal)"
    avg_heart_rate: str = "Avg. Heart Rate (bpm)"
    max_heart_rate: str = "Max. Heart Rate (bpm)"

    @property
    def required(self) -> Tuple[str, ...]:
        return (self.category, self.start, self.duration)


@dataclass
class AnalysisSettings:
    """Pipeline behaviour."""
    categories: Tuple[str, ...] = DEFAULT_CATEGORIES
    strict: bool = False  # fail the whole load on the first malformed row
    date_label_format: Optional[str] = None  # strftime format; None gives "Mar 1"
    encoding: str = "utf-8-sig"


class AnalysisConfig:
    """Main configuration class for the workout analysis pipeline."""

    def __init__(self):
        self.columns = ColumnMapping()
        self.settings = AnalysisSettings()
        self._user_inputs: Dict[str, Any] = {}

    def set_categories(self, *categories: str) -> None:
        """Replace the configured categories, keeping the given order."""
        cleaned = tuple(c.strip() for c in categories if c and c.strip())
        if not cleaned:
            raise ValueError("At least one category must be configured")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError(f"Duplicate categories: {', '.join(cleaned)}")
        self.settings.categories = cleaned
        self._user_inputs['categories'] = cleaned

    def update_columns(self, **kwargs):
        """Override export column names."""
        for key, value in kwargs.items():
            if not hasattr(self.columns, key):
                raise ValueError(f"Unknown column setting: {key}")
            setattr(self.columns, key, value)
            self._user_inputs[f'column_{key}'] = value

    def update_settings(self, **kwargs):
        """Update pipeline settings dynamically."""
        for key, value in kwargs.items():
            if key == 'categories':
                self.set_categories(*value)
                continue
            if not hasattr(self.settings, key):
                raise ValueError(f"Unknown analysis setting: {key}")
            setattr(self.settings, key, value)
            self._user_inputs[f'settings_{key}'] = value

    def get_summary(self) -> Dict[str, Any]:
        """Get configuration summary."""
        return {
            'columns': {f.name: getattr(self.columns, f.name) for f in fields(self.columns)},
            'settings': {f.name: getattr(self.settings, f.name) for f in fields(self.settings)},
            'user_inputs': dict(self._user_inputs),
        }


# Global configuration instance
config = AnalysisConfig()


def get_config() -> AnalysisConfig:
    """Get the global configuration instance."""
    return config


def reset_config() -> AnalysisConfig:
    """Reset configuration to defaults."""
    global config
    config = AnalysisConfig()
    return config
