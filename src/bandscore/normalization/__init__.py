"""Adaptive band-power normalization: per-band scores and cross-band relative power."""

from .band_set import BandSet, relative_powers
from .statistic import BandStatistic, clamp01, percentile

__all__ = [
    "BandSet",
    "BandStatistic",
    "clamp01",
    "percentile",
    "relative_powers",
]
