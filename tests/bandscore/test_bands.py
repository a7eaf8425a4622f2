"""Tests for the Band enumeration."""

import pytest

from bandscore.bands import Band
from bandscore.errors import UnknownBandError


def test_band_has_five_members_in_canonical_order() -> None:
    """Iteration order is delta, theta, alpha, beta, gamma."""
    assert [b.value for b in Band] == ["delta", "theta", "alpha", "beta", "gamma"]


@pytest.mark.parametrize("text", ["alpha", "Alpha", " ALPHA "])
def test_parse_is_case_insensitive(text: str) -> None:
    """Names are matched regardless of case and padding."""
    assert Band.parse(text) is Band.ALPHA


def test_parse_rejects_unknown_names() -> None:
    """Unknown names raise instead of defaulting."""
    with pytest.raises(UnknownBandError, match="mu"):
        Band.parse("mu")


def test_frequency_ranges_are_increasing() -> None:
    """Every band range has low < high and bands start in ascending order."""
    ranges = [b.frequency_range_hz for b in Band]

    assert all(low < high for low, high in ranges)
    assert [low for low, _ in ranges] == sorted(low for low, _ in ranges)
