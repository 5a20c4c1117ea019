from __future__ import annotations

"""
Change Record Data Model.

The validated input unit of the pipeline: one file's change magnitude
and reviewed status, produced by the normalizer and folded into the
tree by the assembler.
"""

from dataclasses import dataclass
from typing import Tuple

from reviewtree.domain.constants import PATH_SEPARATOR


@dataclass(frozen=True)
class ChangeRecord:
    """
    Immutable per-file change record.

    Attributes:
        path: '/'-separated file path without empty segments and without
              leading or trailing separators.
        magnitude: Change volume of the file (may be zero or negative).
        reviewed: Whether the file has been marked as reviewed.
    """
    path: str
    magnitude: int
    reviewed: bool = False

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("ChangeRecord.path must not be empty.")
        if any(not seg for seg in self.path.split(PATH_SEPARATOR)):
            raise ValueError(f"ChangeRecord.path has empty segments: '{self.path}'.")

    @property
    def segments(self) -> Tuple[str, ...]:
        return tuple(self.path.split(PATH_SEPARATOR))
