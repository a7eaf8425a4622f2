# ==================================================================================================
#                               Config loading
# ==================================================================================================
#
# Single entry point for reading project configuration from disk.
#
# The YAML file carries the normalization parameters (history and window
# sizes, percentile cutoff, history mode, fallback values). This module only
# loads and packages the raw mapping; interpreting the values is the job of
# `bandscore.settings`.

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml


# ==================================================================================================
#                                   TYPES
# ==================================================================================================

@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """
    Parsed project configuration.

    Parameters
    ----------
    raw
        Raw config dictionary loaded from YAML.

    Usage example
    -------------
        cfg = load_project_config(Path("config/config.yaml"))
        cutoff = cfg.raw["normalization"]["cutoff"]
    """

    raw: Dict[str, Any]


# ==================================================================================================
#                                       IO
# ==================================================================================================

def load_project_config(config_path: Path) -> ProjectConfig:
    """
    Load YAML config into a ProjectConfig object.

    Parameters
    ----------
    config_path
        Path to YAML config file.

    Returns
    -------
    ProjectConfig
        Loaded configuration.

    Usage example
    -------------
        cfg = load_project_config(Path("config/config.yaml"))
    """
    with config_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, Mapping):
        raise ValueError(f"Config must be a mapping at top-level, got: {type(data)}")

    return ProjectConfig(raw=dict(data))
