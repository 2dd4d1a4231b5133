"""Category selection and chart series."""

from .filters import filter_by_category, split_by_category
from .trends import build_series, format_date_label, series_to_frame

__all__ = [
    "filter_by_category",
    "split_by_category",
    "build_series",
    "format_date_label",
    "series_to_frame",
]
