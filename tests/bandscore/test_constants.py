"""Sanity checks for normalization defaults and message addresses."""

from bandscore import constants as c


def test_normalization_defaults() -> None:
    """Defaults match the documented engine behaviour."""
    assert c.DEFAULT_HISTORY_SIZE == 1000
    assert c.DEFAULT_WINDOW_SIZE == 100
    assert c.DEFAULT_CUTOFF == 0.2
    assert 0.0 <= c.DEFAULT_DEGENERATE_SCORE <= 1.0
    assert c.HISTORY_MODE_FROZEN in c.HISTORY_MODES


def test_absolute_power_address_template() -> None:
    """Band addresses are derived from the band name."""
    assert c.ABSOLUTE_POWER_ADDRESS_TEMPLATE.format(band="alpha") == "/muse/elements/alpha_absolute"
