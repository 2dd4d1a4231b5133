"""Per-category workout statistics."""

from .compute import compute_all_stats, compute_category_stats, round_half_up

__all__ = ["compute_all_stats", "compute_category_stats", "round_half_up"]
