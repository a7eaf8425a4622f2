# ==================================================================================================
#                       Core: band collection and relative power
# ==================================================================================================
# > Relative band power.
# > Absolute band powers are reported on a base-10 logarithmic scale. Relative power for each
# > band was obtained by converting every band back to the linear power domain (10 ** x) and
# > dividing by the sum over all five bands, giving proportions that sum to one. The pass reads
# > whatever absolute power each band currently holds; bands are not synchronized with each other.

import logging
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

import numpy as np

from bandscore.bands import Band
from bandscore.constants import DEFAULT_MAX_EXPONENT
from bandscore.normalization.statistic import BandStatistic
from bandscore.settings import NormalizationSettings

logger = logging.getLogger(__name__)

BandKey = Union[Band, str]


# ==================================================================================================
# Helpers
# ==================================================================================================

def relative_powers(
    absolute: Mapping[Band, float],
    *,
    max_exponent: float = DEFAULT_MAX_EXPONENT,
) -> Dict[Band, float]:
    """
    Convert log-domain absolute powers into linear-domain proportions.

    Finite powers are shifted by their maximum before computing ``10 ** x``,
    so the largest term is exactly 1, nothing overflows and the proportions are
    exact for any finite input. Non-finite powers saturate: ``+inf`` becomes
    ``max_exponent``, ``-inf`` and ``nan`` become ``-max_exponent``. The result
    therefore never contains ``inf`` or ``nan`` and always sums to one.

    Parameters
    ----------
    absolute
        Absolute power per band.
    max_exponent
        Value substituted for non-finite powers (negated for ``-inf`` and ``nan``).

    Returns
    -------
    dict[Band, float]
        Relative power per band, in the iteration order of ``absolute``.

    Usage example
    -------------
        relative_powers({band: 0.0 for band in Band})  # every band -> 0.2
    """
    bands = list(absolute)
    exponents = np.array([absolute[band] for band in bands], dtype=float)

    if not np.isfinite(exponents).all():
        logger.debug("Saturating non-finite band powers to +/-%g: %s", max_exponent, exponents.tolist())
        exponents = np.nan_to_num(exponents, nan=-max_exponent, posinf=max_exponent, neginf=-max_exponent)

    linear = np.power(10.0, exponents - exponents.max())
    proportions = linear / linear.sum()
    return {band: float(value) for band, value in zip(bands, proportions)}


# ==================================================================================================
# Core logic
# ==================================================================================================

class BandSet:
    """
    Fixed collection of one BandStatistic per band.

    The five entries are created at construction, in canonical band order, and
    are never added to or removed from.

    Parameters
    ----------
    settings
        Normalization parameters shared by every band.

    Usage example
    -------------
        band_set = BandSet()
        band_set.record(Band.ALPHA, 0.8)
        band_set.record("beta", 0.3)
        band_set.recompute_relative_powers()
        print(band_set.get(Band.ALPHA).relative_power)
    """

    def __init__(self, settings: Optional[NormalizationSettings] = None) -> None:
        self._settings = settings if settings is not None else NormalizationSettings()
        self._statistics: Dict[Band, BandStatistic] = {
            band: BandStatistic(band, self._settings) for band in Band
        }

    @property
    def settings(self) -> NormalizationSettings:
        return self._settings

    def get(self, band: BandKey) -> BandStatistic:
        """
        Look up the statistic of a band.

        Parameters
        ----------
        band
            Band member or band name.

        Raises
        ------
        UnknownBandError
            If ``band`` does not identify one of the five bands.
        """
        if not isinstance(band, Band):
            band = Band.parse(band)
        return self._statistics[band]

    def record(self, band: BandKey, sample: float) -> float:
        """Record a sample on one band and return its score."""
        return self.get(band).record(sample)

    def recompute_relative_powers(self) -> Dict[Band, float]:
        """
        Recompute relative power for all five bands from their latest absolute powers.

        Calling this twice without an intervening ``record`` yields identical values.

        Returns
        -------
        dict[Band, float]
            Relative power per band.
        """
        absolute = {band: stat.absolute_power for band, stat in self._statistics.items()}
        relative = relative_powers(absolute, max_exponent=self._settings.max_exponent)
        for band, value in relative.items():
            self._statistics[band]._set_relative_power(value)
        return relative

    def snapshot(self) -> Dict[Band, Dict[str, float]]:
        """Current absolute power, relative power and score of every band."""
        return {
            band: {
                "absolute_power": stat.absolute_power,
                "relative_power": stat.relative_power,
                "score": stat.score,
            }
            for band, stat in self._statistics.items()
        }

    def __iter__(self) -> Iterator[Tuple[Band, BandStatistic]]:
        return iter(self._statistics.items())

    def __len__(self) -> int:
        return len(self._statistics)
