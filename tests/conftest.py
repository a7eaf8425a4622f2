"""Shared pytest fixtures for the bandscore test suite.

Fixtures build small, deterministic engines and recordings so unit tests stay
fast and easy to read.
"""

from pathlib import Path
import sys
from typing import Any

import pandas as pd
import pytest

# Ensure `import bandscore` resolves to the in-repo source tree during tests.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from bandscore.listener import HeadbandListener  # noqa: E402
from bandscore.settings import NormalizationSettings  # noqa: E402


@pytest.fixture
def small_settings() -> NormalizationSettings:
    """Settings with tiny buffers so capacity behaviour is cheap to reach."""
    return NormalizationSettings(history_size=5, window_size=3)


@pytest.fixture
def listener() -> HeadbandListener:
    """Listener with default settings."""
    return HeadbandListener()


@pytest.fixture
def sample_config_dict() -> dict[str, Any]:
    """Small config payload with a normalization section."""
    return {
        "normalization": {
            "history_size": 50,
            "window_size": 10,
            "cutoff": 0.1,
            "history_mode": "rolling",
        },
    }


@pytest.fixture
def sample_recording() -> pd.DataFrame:
    """Two-frame recording: headband attached, all bands at zero, then alpha rises."""
    rows = [{"frame": 0, "address": "/muse/elements/touching_forehead", "value_0": 1.0}]
    for band in ("delta", "theta", "alpha", "beta", "gamma"):
        rows.append(
            {
                "frame": 0,
                "address": f"/muse/elements/{band}_absolute",
                "value_0": 0.0,
                "value_1": 0.0,
                "value_2": 0.0,
                "value_3": 0.0,
            }
        )
    rows.append(
        {
            "frame": 1,
            "address": "/muse/elements/alpha_absolute",
            "value_0": 1.0,
            "value_1": 1.0,
            "value_2": 1.0,
            "value_3": 1.0,
        }
    )
    rows.append({"frame": 1, "address": "/muse/acc", "value_0": 0.1, "value_1": 0.2, "value_2": 0.9})
    rows.append({"frame": 1, "address": "/muse/elements/blink", "value_0": 1.0})
    return pd.DataFrame(rows, columns=["frame", "address", "value_0", "value_1", "value_2", "value_3"])
