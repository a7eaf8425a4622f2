# ==================================================================================================
#                       Headband listener (engine boundary)
# ==================================================================================================
#
# Boundary between a transport that decodes headband messages and the
# normalization engine.
#
# Responsibilities
# ----------------
# - route decoded `(address, values)` messages to the matching handler
# - average the per-channel absolute powers and record them on the band
# - keep the headband-attached flag and the accelerometer vector verbatim
# - expose an explicit cycle boundary (`advance_cycle`) for the host
#
# Network reception is not done here; a transport calls `dispatch(...)` or the
# typed `on_*` handlers directly. Everything runs on the caller's thread.

import logging
from typing import Callable, Dict, Optional, Sequence, Tuple

import numpy as np

from bandscore.bands import Band
from bandscore.constants import (
    ABSOLUTE_POWER_ADDRESS_TEMPLATE,
    ACCELEROMETER_ADDRESS,
    HEADBAND_STATUS_ADDRESS,
)
from bandscore.normalization.band_set import BandKey, BandSet
from bandscore.normalization.statistic import BandStatistic
from bandscore.settings import NormalizationSettings

logger = logging.getLogger(__name__)


class HeadbandListener:
    """
    Receive headband messages and expose per-band scores and relative powers.

    Relative powers are recomputed by ``advance_cycle()`` only while the
    headband reports that it is touching the forehead.

    Parameters
    ----------
    settings
        Normalization parameters for the underlying BandSet.

    Usage example
    -------------
        listener = HeadbandListener()
        listener.dispatch("/muse/elements/touching_forehead", [1])
        listener.dispatch("/muse/elements/alpha_absolute", [0.8, 0.7, 0.9, 0.6])
        listener.advance_cycle()
        print(listener.score(Band.ALPHA), listener.relative_power(Band.ALPHA))
    """

    def __init__(self, settings: Optional[NormalizationSettings] = None) -> None:
        self._bands = BandSet(settings)
        self._headband_attached = False
        self._accelerometer: Tuple[float, float, float] = (0.0, 0.0, 0.0)

        self._routes: Dict[str, Callable[[Sequence[float]], object]] = {
            HEADBAND_STATUS_ADDRESS: lambda values: self.on_headband_status(_first(values)),
            ACCELEROMETER_ADDRESS: self.on_accelerometer,
        }
        for band in Band:
            address = ABSOLUTE_POWER_ADDRESS_TEMPLATE.format(band=band.value)
            self._routes[address] = lambda values, band=band: self.on_sample(band, values)

    # ----------------------------------------------------------------------------------------------
    # Inbound
    # ----------------------------------------------------------------------------------------------

    def dispatch(self, address: str, values: Sequence[float]) -> bool:
        """
        Route one decoded message to its handler.

        Parameters
        ----------
        address
            Message address, e.g. ``"/muse/elements/alpha_absolute"``.
        values
            Message payload.

        Returns
        -------
        bool
            True if the address was handled, False if it is not one we listen to.
        """
        handler = self._routes.get(address)
        if handler is None:
            logger.debug("Ignoring message for unhandled address %s", address)
            return False
        handler(values)
        return True

    def on_sample(self, band: BandKey, values: Sequence[float]) -> float:
        """
        Average a multi-channel absolute power message and record it on a band.

        Non-finite channels (NaN for dropped sensor contact, +/-inf for saturated
        readings) are left out of the mean.

        Returns
        -------
        float
            The band's new score.
        """
        channels = np.asarray(values, dtype=float).ravel()
        channels = channels[np.isfinite(channels)]
        if channels.size == 0:
            raise ValueError(f"Absolute power message for {band!s} carries no finite channel values")
        # Divide before summing so channels near float max cannot overflow the mean.
        return self._bands.record(band, float(np.sum(channels / channels.size)))

    def on_headband_status(self, flag: float) -> None:
        """Store whether the headband is touching the forehead (flag == 1)."""
        attached = int(flag) == 1
        if attached != self._headband_attached:
            logger.info("Headband %s", "attached" if attached else "detached")
        self._headband_attached = attached

    def on_accelerometer(self, values: Sequence[float]) -> None:
        """Store the accelerometer vector as-is."""
        if len(values) != 3:
            raise ValueError(f"Accelerometer message must carry 3 values, got: {len(values)}")
        x, y, z = (float(v) for v in values)
        self._accelerometer = (x, y, z)

    # ----------------------------------------------------------------------------------------------
    # Cycle boundary
    # ----------------------------------------------------------------------------------------------

    def advance_cycle(self) -> bool:
        """
        Close the current update cycle.

        Returns
        -------
        bool
            True if relative powers were recomputed (headband attached).
        """
        if not self._headband_attached:
            return False
        self._bands.recompute_relative_powers()
        return True

    # ----------------------------------------------------------------------------------------------
    # Outbound
    # ----------------------------------------------------------------------------------------------

    @property
    def bands(self) -> BandSet:
        return self._bands

    def band(self, band: BandKey) -> BandStatistic:
        """Return the statistic of one band."""
        return self._bands.get(band)

    def score(self, band: BandKey) -> float:
        """Latest normalized score of a band."""
        return self._bands.get(band).score

    def relative_power(self, band: BandKey) -> float:
        """Latest relative power of a band."""
        return self._bands.get(band).relative_power

    def absolute_power(self, band: BandKey) -> float:
        """Latest absolute power of a band."""
        return self._bands.get(band).current_absolute_power()

    def headband_attached(self) -> bool:
        return self._headband_attached

    def accelerometer(self) -> Tuple[float, float, float]:
        return self._accelerometer


def _first(values: Sequence[float]) -> float:
    if len(values) == 0:
        raise ValueError("Headband status message carries no value")
    return values[0]
