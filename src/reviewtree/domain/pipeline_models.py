from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the core data structures and factory functions used to communicate
execution results between the pipeline engine and interface layers (CLI or
an embedding display surface).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from reviewtree.domain.constants import NO_DATA_MESSAGE
from reviewtree.domain.tree_models import Tree
from reviewtree.domain.view_models import DisplayRow, ExportRow, Progress

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PipelineResult:
    """
    Unified result object of a complete pipeline execution.

    A run without any input batch is not an error: it yields ``ok=True``
    with ``has_data=False`` so the display surface can show an empty state
    and disable export, distinct from an empty-but-valid tree.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure or missing data.
        has_data: False when the source delivered no batch at all.
        tree: The compressed, review-annotated tree.
        display_rows: Sorted pre-order display view.
        export_rows: Sorted file leaves for the flat export.
        progress: Aggregate review progress.
        summary: Technical execution summary and statistics.
    """
    ok: bool
    error: str
    has_data: bool

    tree: Tree = field(default_factory=dict)
    display_rows: List[DisplayRow] = field(default_factory=list)
    export_rows: List[ExportRow] = field(default_factory=list)
    progress: Progress = field(default_factory=Progress)

    summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def can_export(self) -> bool:
        return self.ok and self.has_data

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_no_data_result(
        reason: str = NO_DATA_MESSAGE,
        summary_extra: Optional[Dict[str, Any]] = None
) -> PipelineResult:
    """
    Create the explicit 'no data' result for an empty or absent batch.

    Args:
        reason: Human readable explanation for the empty state.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        PipelineResult: An immutable result without data.
    """
    return PipelineResult(
        ok=True,
        error=reason,
        has_data=False,
        summary=summary_extra or {},
    )


def create_success_result(
        tree: Tree,
        display_rows: List[DisplayRow],
        export_rows: List[ExportRow],
        progress: Progress,
        summary_extra: Optional[Dict[str, Any]] = None
) -> PipelineResult:
    """
    Create a successful pipeline result instance.

    Args:
        tree: Final compressed and annotated tree.
        display_rows: Materialized display view.
        export_rows: Materialized export view.
        progress: Review progress value.
        summary_extra: Final execution metrics.

    Returns:
        PipelineResult: An immutable success result object.
    """
    return PipelineResult(
        ok=True,
        error="",
        has_data=True,
        tree=tree,
        display_rows=display_rows,
        export_rows=export_rows,
        progress=progress,
        summary=summary_extra or {},
    )
