# ==================================================================================================
#                                   Bands
# ==================================================================================================
#
# Closed enumeration of the five EEG bands reported by the headband. Members are
# used only as lookup keys; the declaration order is the canonical band order
# used for iteration, tables and relative-power vectors.

from enum import Enum
from typing import Tuple

from bandscore.constants import (
    ALPHA_BAND_HZ,
    BETA_BAND_HZ,
    DELTA_BAND_HZ,
    GAMMA_BAND_HZ,
    THETA_BAND_HZ,
)
from bandscore.errors import UnknownBandError


class Band(Enum):
    """
    EEG frequency band identifier.

    Usage example
    -------------
        band = Band.parse("Alpha")
        low_hz, high_hz = band.frequency_range_hz
    """

    DELTA = "delta"
    THETA = "theta"
    ALPHA = "alpha"
    BETA = "beta"
    GAMMA = "gamma"

    @classmethod
    def parse(cls, text: str) -> "Band":
        """
        Resolve a band from its name, case-insensitively.

        Parameters
        ----------
        text
            Band name such as "alpha", "Alpha" or " ALPHA ".

        Returns
        -------
        Band
            Matching band.

        Raises
        ------
        UnknownBandError
            If the text does not name one of the five bands.
        """
        if isinstance(text, cls):
            return text
        key = str(text).strip().lower()
        try:
            return cls(key)
        except ValueError:
            raise UnknownBandError(text) from None

    @property
    def frequency_range_hz(self) -> Tuple[float, float]:
        """Nominal (low, high) frequency range of the band in Hz."""
        return _FREQUENCY_RANGES_HZ[self]


_FREQUENCY_RANGES_HZ = {
    Band.DELTA: DELTA_BAND_HZ,
    Band.THETA: THETA_BAND_HZ,
    Band.ALPHA: ALPHA_BAND_HZ,
    Band.BETA: BETA_BAND_HZ,
    Band.GAMMA: GAMMA_BAND_HZ,
}
