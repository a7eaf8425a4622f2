# ==================================================================================================
#                               Recent-window curves
# ==================================================================================================
#
# Data behind the per-band inspector curve: the recent sliding window of
# absolute powers as (x, y) points, plus the label and colour each band is
# drawn with. Rendering itself is left to the host UI.

from typing import Dict, Tuple

import numpy as np

from bandscore.bands import Band
from bandscore.normalization.statistic import BandStatistic

BAND_LABELS: Dict[Band, str] = {
    Band.DELTA: "δ Delta",
    Band.THETA: "θ Theta",
    Band.ALPHA: "α Alpha",
    Band.BETA: "β Beta",
    Band.GAMMA: "γ Gamma",
}

BAND_COLORS: Dict[Band, str] = {
    Band.DELTA: "red",
    Band.THETA: "magenta",
    Band.ALPHA: "cyan",
    Band.BETA: "green",
    Band.GAMMA: "yellow",
}


def window_curve(statistic: BandStatistic) -> Tuple[np.ndarray, np.ndarray]:
    """
    Return the recent window of a band as curve points.

    Parameters
    ----------
    statistic
        Band statistic to read.

    Returns
    -------
    x : np.ndarray
        Sample positions ``1..n`` (int).
    y : np.ndarray
        Absolute powers, oldest first (float).

    Usage example
    -------------
        x, y = window_curve(listener.band(Band.ALPHA))
    """
    y = np.asarray(statistic.recent_window, dtype=float)
    x = np.arange(1, y.size + 1)
    return x, y
