# ==================================================================================================
#                               Normalization settings
# ==================================================================================================
#
# This module converts the loosely typed `normalization` config section into
# an explicit, validated `NormalizationSettings` container. Values are checked
# once here so the engine can rely on them without re-validating per sample.

from dataclasses import dataclass
from typing import Any, Mapping

from bandscore.config import ProjectConfig
from bandscore.constants import (
    DEFAULT_CUTOFF,
    DEFAULT_DEGENERATE_SCORE,
    DEFAULT_HISTORY_SIZE,
    DEFAULT_MAX_EXPONENT,
    DEFAULT_WINDOW_SIZE,
    HISTORY_MODE_FROZEN,
    HISTORY_MODES,
)

# ==================================================================================================
#                                   TYPES
# ==================================================================================================

@dataclass(frozen=True, slots=True)
class NormalizationSettings:
    """
    Parameters shared by every band statistic.

    Parameters
    ----------
    history_size
        Capacity H of the percentile history.
    window_size
        Capacity W of the recent sliding window.
    cutoff
        Percentile fraction used for the dynamic range, ``0 <= cutoff < 0.5``.
    history_mode
        ``"frozen"`` keeps the first H samples forever; ``"rolling"`` keeps the
        last H samples.
    degenerate_score
        Score returned when the percentile range collapses to a single value.
    max_exponent
        Value substituted for non-finite absolute powers (``+inf`` -> ``max_exponent``,
        ``-inf`` and ``nan`` -> ``-max_exponent``) in the relative-power pass.

    Usage example
    -------------
        cfg = load_project_config(Path("config/config.yaml"))
        settings = NormalizationSettings.from_config(cfg)
        band_set = BandSet(settings)
    """

    history_size: int = DEFAULT_HISTORY_SIZE
    window_size: int = DEFAULT_WINDOW_SIZE
    cutoff: float = DEFAULT_CUTOFF
    history_mode: str = HISTORY_MODE_FROZEN
    degenerate_score: float = DEFAULT_DEGENERATE_SCORE
    max_exponent: float = DEFAULT_MAX_EXPONENT

    def __post_init__(self) -> None:
        if self.history_size < 1:
            raise ValueError(f"history_size must be a positive integer, got: {self.history_size}")
        if self.window_size < 1:
            raise ValueError(f"window_size must be a positive integer, got: {self.window_size}")
        if not 0.0 <= self.cutoff < 0.5:
            raise ValueError(f"cutoff must satisfy 0 <= cutoff < 0.5, got: {self.cutoff}")
        if self.history_mode not in HISTORY_MODES:
            raise ValueError(f"history_mode must be one of {HISTORY_MODES}, got: {self.history_mode!r}")
        if not 0.0 <= self.degenerate_score <= 1.0:
            raise ValueError(f"degenerate_score must lie in [0, 1], got: {self.degenerate_score}")
        if not 0.0 < self.max_exponent <= 300.0:
            raise ValueError(f"max_exponent must lie in (0, 300], got: {self.max_exponent}")

    @staticmethod
    def from_config(cfg: ProjectConfig) -> "NormalizationSettings":
        """
        Construct NormalizationSettings from config.

        The ``normalization`` section is optional; missing keys keep their
        defaults.

        Parameters
        ----------
        cfg
            Project configuration.

        Returns
        -------
        NormalizationSettings
            Validated settings.
        """
        section: Any = cfg.raw.get("normalization", None)
        if section is None:
            return NormalizationSettings()
        if not isinstance(section, Mapping):
            raise ValueError("Config entry 'normalization' must be a mapping")

        unknown = sorted(set(section) - set(NormalizationSettings.__dataclass_fields__))
        if unknown:
            raise ValueError(f"Unknown normalization settings: {unknown}")

        # Cast explicitly so quoted YAML scalars behave like bare ones.
        defaults = NormalizationSettings()
        return NormalizationSettings(
            history_size=int(section.get("history_size", defaults.history_size)),
            window_size=int(section.get("window_size", defaults.window_size)),
            cutoff=float(section.get("cutoff", defaults.cutoff)),
            history_mode=str(section.get("history_mode", defaults.history_mode)).strip().lower(),
            degenerate_score=float(section.get("degenerate_score", defaults.degenerate_score)),
            max_exponent=float(section.get("max_exponent", defaults.max_exponent)),
        )
