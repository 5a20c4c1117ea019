from __future__ import annotations

"""
Projection View Models.

Read-only rows produced by the ordered projector for the display
surface and the flat export, plus the aggregate review progress.
"""

from dataclasses import dataclass
from typing import NamedTuple


class DisplayRow(NamedTuple):
    """One pre-order entry of the display view."""
    depth: int
    key: str
    magnitude: int
    reviewed: bool
    is_directory: bool
    expanded: bool


class ExportRow(NamedTuple):
    """One file leaf of the flat export view."""
    origin_path: str
    magnitude: int
    reviewed: bool


@dataclass(frozen=True)
class Progress:
    """
    Aggregate review progress over all file leaves.

    Attributes:
        reviewed_magnitude: Sum of magnitudes of reviewed files.
        total_magnitude: Sum of magnitudes of all files.
        percentage: reviewed/total * 100 rounded to two decimals (0.0 if total is 0).
    """
    reviewed_magnitude: int = 0
    total_magnitude: int = 0
    percentage: float = 0.0

    @property
    def label(self) -> str:
        return f"{self.percentage:.2f}%"
