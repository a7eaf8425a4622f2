# ==================================================================================================
#                         Core: recording replay (library)
# ==================================================================================================
# > Offline replay of recorded headband messages.
# > A recording is a table of decoded messages, one row per message, grouped into update frames.
# > Frames are replayed in ascending order: every message of a frame is routed through the
# > headband listener in file order, then the frame is closed with an explicit cycle boundary.
# > After each frame the absolute power, relative power and score of all five bands are
# > emitted, producing a long-format table (one row per frame and band) saved as TSV.

import logging
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from bandscore.config import ProjectConfig
from bandscore.listener import HeadbandListener
from bandscore.settings import NormalizationSettings

logger = logging.getLogger(__name__)

# ==================================================================================================
# Constants
# ==================================================================================================

FRAME_COLUMN: str = "frame"
ADDRESS_COLUMN: str = "address"
VALUE_COLUMN_PREFIX: str = "value_"

OUTPUT_COLUMNS: tuple[str, ...] = (
    "frame",
    "band",
    "absolute_power",
    "relative_power",
    "score",
    "headband_attached",
)


# ==================================================================================================
# Helpers
# ==================================================================================================

def _value_columns(recording: pd.DataFrame) -> list[str]:
    """Payload columns in table order."""
    return [col for col in recording.columns if str(col).startswith(VALUE_COLUMN_PREFIX)]


def _validate_recording(recording: pd.DataFrame) -> None:
    """Fail early with a clear error on malformed recordings."""
    missing = [col for col in (FRAME_COLUMN, ADDRESS_COLUMN) if col not in recording.columns]
    if missing or not _value_columns(recording):
        raise ValueError(
            f"Recording must contain columns '{FRAME_COLUMN}', '{ADDRESS_COLUMN}' and at least one "
            f"'{VALUE_COLUMN_PREFIX}*' column. Got columns: {list(recording.columns)}"
        )


def _row_values(row: np.ndarray) -> list[float]:
    """Drop trailing/empty payload cells (NaN) from one message row."""
    return [float(v) for v in row if not np.isnan(v)]


def load_recording(recording_path: Path) -> pd.DataFrame:
    """
    Load a recorded message table.

    Parameters
    ----------
    recording_path
        CSV or TSV file (separator chosen by suffix).

    Returns
    -------
    pandas.DataFrame
        Recording table.

    DataFrame format example
    ------------------------
    | frame | address                           | value_0 | value_1 | value_2 | value_3 |
    |-------|-----------------------------------|---------|---------|---------|---------|
    | 0     | /muse/elements/touching_forehead  | 1       |         |         |         |
    | 0     | /muse/elements/alpha_absolute     | 0.81    | 0.77    | 0.92    | 0.64    |
    | 1     | /muse/acc                         | 0.01    | -0.02   | 0.98    |         |

    Usage example
    -------------
        recording = load_recording(Path("recordings/s01.tsv"))
    """
    sep = "\t" if recording_path.suffix.lower() == ".tsv" else ","
    recording = pd.read_csv(recording_path, sep=sep)
    _validate_recording(recording)
    return recording


# ==================================================================================================
# Core logic
# ==================================================================================================

def replay_recording(
    recording: pd.DataFrame,
    settings: Optional[NormalizationSettings] = None,
) -> pd.DataFrame:
    """
    Replay a recording through a fresh HeadbandListener.

    Parameters
    ----------
    recording
        Message table (see `load_recording`).
    settings
        Normalization parameters. Defaults to ``NormalizationSettings()``.

    Returns
    -------
    pandas.DataFrame
        One row per frame and band with columns ``OUTPUT_COLUMNS``.

    Usage example
    -------------
        scores = replay_recording(load_recording(Path("s01.tsv")))
        alpha = scores.loc[scores["band"] == "alpha", "score"]
    """
    _validate_recording(recording)

    listener = HeadbandListener(settings)
    value_cols = _value_columns(recording)
    rows: list[dict[str, object]] = []
    unhandled = 0

    # Stable sort keeps messages of a frame in file order.
    ordered = recording.sort_values(FRAME_COLUMN, kind="mergesort")
    for frame, frame_messages in ordered.groupby(FRAME_COLUMN, sort=True):
        addresses = frame_messages[ADDRESS_COLUMN].astype(str).to_numpy()
        payloads = frame_messages[value_cols].to_numpy(dtype=float)

        for address, payload in zip(addresses, payloads):
            if not listener.dispatch(address, _row_values(payload)):
                unhandled += 1

        listener.advance_cycle()

        for band, stat in listener.bands:
            rows.append(
                {
                    "frame": frame,
                    "band": band.value,
                    "absolute_power": stat.absolute_power,
                    "relative_power": stat.relative_power,
                    "score": stat.score,
                    "headband_attached": listener.headband_attached(),
                }
            )

    if unhandled:
        logger.info("Skipped %d messages with unhandled addresses", unhandled)

    return pd.DataFrame(rows, columns=list(OUTPUT_COLUMNS))


def replay_file_to_file(
    *,
    input_path: Path,
    output_path: Path,
    config: ProjectConfig,
) -> Path:
    """
    Replay a recording file and save the per-frame band table as TSV.

    Parameters
    ----------
    input_path
        Recording CSV/TSV.
    output_path
        Output TSV.
    config
        Project configuration; its ``normalization`` section configures the engine.

    Returns
    -------
    Path
        ``output_path``, for convenience.

    Usage example
    -------------
        cfg = load_project_config(Path("config/config.yaml"))
        replay_file_to_file(
            input_path=Path("recordings/s01.tsv"),
            output_path=Path("derived/s01_scores.tsv"),
            config=cfg,
        )
    """
    settings = NormalizationSettings.from_config(config)
    recording = load_recording(input_path)

    scores = replay_recording(recording, settings)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    scores.to_csv(output_path, sep="\t", index=False)
    logger.info("Replayed %s (%d frames) -> %s", input_path, scores["frame"].nunique(), output_path)
    return output_path
