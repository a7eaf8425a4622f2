# ==================================================================================================
#                    Core: per-band percentile clamp normalization
# ==================================================================================================
# > Adaptive score normalization.
# > Each absolute band-power sample is placed within the distribution of previously recorded
# > samples for the same band. The lower and upper limits of the dynamic range are taken as
# > nearest-rank percentiles (cutoff and 1 - cutoff) of the sorted history, and the sample is
# > mapped linearly onto that range and clamped to [0, 1]. When the range collapses to a single
# > value (first sample, constant signal), a fixed fallback score is reported instead.

import logging
import math
from collections import deque
from typing import Deque, Optional, Sequence, Tuple

from bandscore.bands import Band
from bandscore.constants import HISTORY_MODE_ROLLING
from bandscore.settings import NormalizationSettings

logger = logging.getLogger(__name__)


# ==================================================================================================
# Helpers
# ==================================================================================================

def percentile(sorted_values: Sequence[float], fraction: float) -> float:
    """
    Nearest-rank percentile of an ascending sequence, without interpolation.

    The index is ``floor(fraction * (n - 1))``; a single-element sequence
    always yields its only value.

    Parameters
    ----------
    sorted_values
        Values sorted in ascending order.
    fraction
        Percentile as a fraction in [0, 1].

    Returns
    -------
    float
        Selected value.

    Usage example
    -------------
        percentile([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], 0.2)  # -> 2
    """
    if not sorted_values:
        raise ValueError("percentile() of an empty sequence")
    index = math.floor(fraction * (len(sorted_values) - 1))
    return sorted_values[index]


def clamp01(value: float) -> float:
    """Clamp a value onto [0, 1]. NaN has no position on the interval and is rejected."""
    if math.isnan(value):
        raise ValueError("clamp01() of NaN")
    return min(1.0, max(0.0, value))


# ==================================================================================================
# Core logic
# ==================================================================================================

class BandStatistic:
    """
    Rolling statistics and normalized score for one band.

    The percentile history is bounded to ``history_size``. In the default
    ``"frozen"`` mode it keeps the first samples ever seen and stops growing
    once full; in ``"rolling"`` mode it keeps the most recent ones. The recent
    window is always a FIFO of the last ``window_size`` samples and only feeds
    the display curve, never the score.

    Parameters
    ----------
    band
        Band this statistic belongs to.
    settings
        Normalization parameters. Defaults to ``NormalizationSettings()``.

    Usage example
    -------------
        stat = BandStatistic(Band.ALPHA)
        for sample in (0.4, 0.9, 0.6):
            score = stat.record(sample)
    """

    def __init__(self, band: Band, settings: Optional[NormalizationSettings] = None) -> None:
        self._band = band
        self._settings = settings if settings is not None else NormalizationSettings()

        self._absolute_power = 0.0
        self._relative_power = 0.0
        self._score = 0.0

        if self._settings.history_mode == HISTORY_MODE_ROLLING:
            self._history: Deque[float] = deque(maxlen=self._settings.history_size)
        else:
            self._history = deque()
        self._recent_window: Deque[float] = deque(maxlen=self._settings.window_size)

    # ----------------------------------------------------------------------------------------------
    # Read-only state
    # ----------------------------------------------------------------------------------------------

    @property
    def band(self) -> Band:
        """Band identifier."""
        return self._band

    @property
    def cutoff(self) -> float:
        """Percentile cutoff used for the dynamic range."""
        return self._settings.cutoff

    @property
    def absolute_power(self) -> float:
        return self._absolute_power

    @property
    def relative_power(self) -> float:
        return self._relative_power

    @property
    def score(self) -> float:
        return self._score

    @property
    def history(self) -> Tuple[float, ...]:
        """Samples used for percentile estimation, in arrival order."""
        return tuple(self._history)

    @property
    def recent_window(self) -> Tuple[float, ...]:
        """Most recent samples, oldest first."""
        return tuple(self._recent_window)

    def current_absolute_power(self) -> float:
        """Return the last recorded sample, or 0.0 before any sample."""
        return self._absolute_power

    # ----------------------------------------------------------------------------------------------
    # Updates
    # ----------------------------------------------------------------------------------------------

    def record(self, sample: float) -> float:
        """
        Record one absolute power sample and return its normalized score.

        Parameters
        ----------
        sample
            Raw absolute band power.

        Returns
        -------
        float
            Score in [0, 1].

        Raises
        ------
        ValueError
            If the sample is NaN or infinite.
        """
        sample = float(sample)
        if not math.isfinite(sample):
            raise ValueError(f"{self._band.value}: absolute power must be finite, got: {sample}")

        # Frozen history stops growing at capacity; a rolling deque evicts by itself.
        if self._history.maxlen is not None or len(self._history) < self._settings.history_size:
            self._history.append(sample)
        self._recent_window.append(sample)

        self._absolute_power = sample
        self._score = self._compute_score(sample)
        return self._score

    def limits(self) -> Tuple[float, float]:
        """
        Current (lower, upper) percentile limits over the history.

        Returns ``(0.0, 0.0)`` while the history is empty.
        """
        if not self._history:
            return 0.0, 0.0
        sorted_history = sorted(self._history)
        lower = percentile(sorted_history, self._settings.cutoff)
        upper = percentile(sorted_history, 1.0 - self._settings.cutoff)
        return lower, upper

    def _set_relative_power(self, value: float) -> None:
        # Written only by the owning BandSet during its relative-power pass.
        self._relative_power = float(value)

    def _compute_score(self, sample: float) -> float:
        lower, upper = self.limits()
        if upper == lower:
            logger.debug(
                "%s: degenerate range at %.6g (%d samples), score=%.3f",
                self._band.value,
                lower,
                len(self._history),
                self._settings.degenerate_score,
            )
            return self._settings.degenerate_score
        # Halving both terms keeps the span finite for limits near +/-float max.
        return clamp01((0.5 * sample - 0.5 * lower) / (0.5 * upper - 0.5 * lower))

    def __repr__(self) -> str:
        return (
            f"<BandStatistic(band={self._band.value}, absolute={self._absolute_power:.4f}, "
            f"relative={self._relative_power:.4f}, score={self._score:.4f})>"
        )
