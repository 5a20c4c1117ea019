from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration of the host application and
loading of optional JSON configuration files. Review data itself is never
persisted; only the run settings live here.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from reviewtree.domain.constants import DUPLICATES_ACCUMULATE

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_SOURCE_TIMEOUT = 30


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.
    This dictionary drives the behavior of the Pipeline and the CLI.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Record source
        "input_path": "",
        "source_url": "",
        "source_timeout": DEFAULT_SOURCE_TIMEOUT,

        # Assembly
        "duplicate_policy": DUPLICATES_ACCUMULATE,

        # Output
        "export_path": "",
        "print_tree": True,
        "expand_all": False,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a configuration file and merge it over the defaults.

    Unknown keys are kept so the validator can report them; a missing or
    corrupted file falls back to defaults.

    Args:
        path: Optional path to a JSON object file.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    config = get_default_config()
    if not path:
        return config

    if not os.path.exists(path):
        logger.warning(f"Config file not found: {path}. Using defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config '{path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file '{path}'. Using defaults.")
        return config

    config.update(data)
    logger.debug(f"Configuration loaded from {path}")
    return config
