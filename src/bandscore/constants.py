# ==================================================================================================
#                                   Constants
# ==================================================================================================
#
# Canonical EEG frequency band boundaries, normalization defaults and the
# message addresses emitted by the headband stream. Defining them once here
# prevents accidental drift between the engine, the listener and the CLI.

from typing import Final, Tuple

# 1-4 Hz: slow-wave activity, dominant in deep sleep.
DELTA_BAND_HZ: Final[Tuple[float, float]] = (1.0, 4.0)
# 4-8 Hz: often associated with drowsiness and memory processes.
THETA_BAND_HZ: Final[Tuple[float, float]] = (4.0, 8.0)
# 7.5-13 Hz: classic alpha rhythm, relaxed wakefulness.
ALPHA_BAND_HZ: Final[Tuple[float, float]] = (7.5, 13.0)
# 13-30 Hz: beta activity, often linked to active concentration.
BETA_BAND_HZ: Final[Tuple[float, float]] = (13.0, 30.0)
# 30-44 Hz: gamma activity.
GAMMA_BAND_HZ: Final[Tuple[float, float]] = (30.0, 44.0)

# Normalization defaults.
DEFAULT_HISTORY_SIZE: Final[int] = 1000
DEFAULT_WINDOW_SIZE: Final[int] = 100
DEFAULT_CUTOFF: Final[float] = 0.2
DEFAULT_DEGENERATE_SCORE: Final[float] = 0.5
# Substituted for +/-inf (and -nan) band powers in the relative-power pass.
DEFAULT_MAX_EXPONENT: Final[float] = 300.0

HISTORY_MODE_FROZEN: Final[str] = "frozen"
HISTORY_MODE_ROLLING: Final[str] = "rolling"
HISTORY_MODES: Final[Tuple[str, ...]] = (HISTORY_MODE_FROZEN, HISTORY_MODE_ROLLING)

# Headband message addresses.
ABSOLUTE_POWER_ADDRESS_TEMPLATE: Final[str] = "/muse/elements/{band}_absolute"
HEADBAND_STATUS_ADDRESS: Final[str] = "/muse/elements/touching_forehead"
ACCELEROMETER_ADDRESS: Final[str] = "/muse/acc"
