from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates the full transformation of one review snapshot:
1. Validates the run configuration.
2. Obtains one complete batch from the injected record source.
3. Normalizes raw entries into ChangeRecords (malformed ones are dropped).
4. Assembles, compresses and annotates the directory tree.
5. Projects the display view, export rows and review progress.

Every stage is a pure function of its input; each run rebuilds the tree
from scratch and shares no state with other runs.
"""

import logging
from concurrent.futures import Future, TimeoutError as FutureTimeoutError
from typing import Any, Dict, Iterable, List, Optional

from reviewtree.core.pipeline.stages.assembler import assemble
from reviewtree.core.pipeline.stages.compressor import compress
from reviewtree.core.pipeline.stages.normalizer import normalize_records
from reviewtree.core.pipeline.stages.projector import (
    compute_progress,
    export_rows,
    iter_display_rows,
)
from reviewtree.core.pipeline.stages.propagator import propagate_reviewed
from reviewtree.core.pipeline.stages.validator import validate_config
from reviewtree.domain.errors import RecordSourceError
from reviewtree.domain.pipeline_models import (
    PipelineResult,
    create_no_data_result,
    create_success_result,
)
from reviewtree.domain.records import ChangeRecord
from reviewtree.domain.tree_models import DirectoryNode, Tree
from reviewtree.infra.sources import RecordSource, as_entry_list

logger = logging.getLogger(__name__)


def build_tree(records: Iterable[ChangeRecord]) -> Tree:
    """
    Run the structural stages: assemble, compress, propagate.

    Args:
        records: Validated change records.

    Returns:
        Tree: The compressed tree with directory review flags computed.
    """
    return propagate_reviewed(compress(assemble(records)))


def run_pipeline(
        source: RecordSource,
        config: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Execute the full pipeline for one snapshot delivered by a record source.

    An absent or empty batch yields the explicit 'no data' result. Record
    source failures are logged and reported the same way. Internal
    invariant violations (TreeInvariantError) are not caught.

    Args:
        source: Zero-argument callable returning a batch or a Future of one.
        config: Optional run configuration (raw or partial).

    Returns:
        PipelineResult: Object containing the tree, its views and a summary.
    """
    logger.info("Pipeline execution started.")

    # -------------------------------------------------------------------------
    # 1) Config Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config if config is not None else {}, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    # -------------------------------------------------------------------------
    # 2) Batch Acquisition
    # -------------------------------------------------------------------------
    try:
        entries = _fetch_batch(source, timeout=cfg["source_timeout"])
    except RecordSourceError as e:
        logger.error(f"Record source failure: {e}")
        return create_no_data_result(str(e), summary_extra={"source_error": True})

    if not entries:
        logger.info("Record source delivered no entries.")
        return create_no_data_result()

    # -------------------------------------------------------------------------
    # 3) Normalization
    # -------------------------------------------------------------------------
    report = normalize_records(entries, duplicate_policy=cfg["duplicate_policy"])

    # -------------------------------------------------------------------------
    # 4) Tree Construction & Projection
    # -------------------------------------------------------------------------
    tree = build_tree(report.records)
    display = list(iter_display_rows(tree))
    rows = export_rows(tree)
    progress = compute_progress(tree)

    summary = {
        "entries": len(entries),
        "accepted": len(report.records),
        "rejected": report.rejected,
        "duplicates": list(report.duplicates),
        "files": len(rows),
        "directories": _count_directories(tree),
        "progress": progress.label,
    }
    logger.info(
        f"Pipeline finished: {summary['files']} files, {summary['directories']} directories, "
        f"{progress.label} reviewed."
    )

    return create_success_result(tree, display, rows, progress, summary_extra=summary)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _fetch_batch(source: RecordSource, timeout: float) -> Optional[List[Any]]:
    """Invoke the source, waiting on a Future result if one is returned."""
    try:
        batch = source()
    except RecordSourceError:
        raise
    except Exception as e:
        raise RecordSourceError(f"Record source raised {type(e).__name__}: {e}") from e

    if isinstance(batch, Future):
        try:
            batch = batch.result(timeout=timeout)
        except FutureTimeoutError as e:
            batch.cancel()
            raise RecordSourceError(f"Record source did not answer within {timeout}s.") from e
        except RecordSourceError:
            raise
        except Exception as e:
            raise RecordSourceError(f"Record source future failed with {type(e).__name__}: {e}") from e

    if batch is None:
        return None
    return as_entry_list(batch)


def _count_directories(tree: Tree) -> int:
    count = 0
    for node in tree.values():
        if isinstance(node, DirectoryNode):
            count += 1 + _count_directories(node.children)
    return count
