from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization and artifact persistence utilities used by
the export layer and the file-based record source.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str = "") -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path ('' if both inputs are empty).
    """
    p = (path or "").strip() or fallback
    if not p:
        return ""
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# PERSISTENCE API
# -----------------------------------------------------------------------------

def write_bytes(path: str, payload: bytes) -> str:
    """
    Write a binary artifact, creating parent directories as needed.

    The payload is written to a sibling temporary file first and then
    moved into place, so readers never observe a half-written artifact.

    Args:
        path: Target file path.
        payload: Exact bytes to persist.

    Returns:
        str: Absolute path of the written file.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    final_path = normalize_path(path)
    parent = os.path.dirname(final_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    tmp_path = f"{final_path}.tmp"
    try:
        with open(tmp_path, "wb") as f:
            f.write(payload)
        os.replace(tmp_path, final_path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
    return final_path
