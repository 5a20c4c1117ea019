from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for raw change batches and run configuration.
"""

import os
import sys
from typing import Any, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def raw_batch() -> List[Dict[str, Any]]:
    """
    Return a realistic raw batch as delivered by a scraper.

    Layout after compression:
      docs/                      (reviewed)
        guide.md
        intro.md
      README.md
      src/app                    (src -> app chain collapsed)
        core/
          engine.py
          models.py
        main.py
      tests/unit                 (tests -> unit chain collapsed)
        test_engine.py
    """
    return [
        {"path": "src/app/core/engine.py", "magnitude": "1,200", "reviewed": False},
        {"path": "src/app/core/models.py", "magnitude": 30, "reviewed": True},
        {"path": "src/app/main.py", "magnitude": "12", "reviewed": True},
        {"path": "docs/intro.md", "magnitude": 4, "reviewed": True},
        {"path": "docs/guide.md", "magnitude": 6, "reviewed": True},
        {"path": "README.md", "magnitude": 2, "reviewed": False},
        {"path": "tests/unit/test_engine.py", "magnitude": 80, "reviewed": False},
    ]


@pytest.fixture
def default_config() -> Dict[str, Any]:
    """Return a complete, valid run configuration."""
    return {
        "input_path": "",
        "source_url": "",
        "source_timeout": 30,
        "duplicate_policy": "accumulate",
        "export_path": "",
        "print_tree": True,
        "expand_all": False,
    }
