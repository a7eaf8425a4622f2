"""Tests for configuration loading behavior.

These tests guard the single config ingestion boundary used by both CLI and
library layers.
"""

from pathlib import Path

import pytest

from bandscore.config import ProjectConfig, load_project_config

CONFIG_EXAMPLE = Path(__file__).resolve().parents[2] / "config" / "config.yaml"


def test_load_project_config_returns_project_config(tmp_path: Path) -> None:
    """A valid YAML mapping should be returned as `ProjectConfig.raw`."""
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("normalization:\n  cutoff: 0.25\n", encoding="utf-8")

    cfg = load_project_config(cfg_path)

    assert isinstance(cfg, ProjectConfig)
    assert cfg.raw["normalization"]["cutoff"] == 0.25


def test_load_project_config_rejects_non_mapping_top_level(tmp_path: Path) -> None:
    """Top-level YAML must be a mapping, not a list/scalar."""
    cfg_path = tmp_path / "bad.yaml"
    cfg_path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Config must be a mapping"):
        load_project_config(cfg_path)


def test_shipped_example_config_loads() -> None:
    """The example config in the repository stays in sync with the loader."""
    cfg = load_project_config(CONFIG_EXAMPLE)

    assert cfg.raw["normalization"]["history_mode"] == "frozen"
