from __future__ import annotations

"""
Ordered Projection Stage.

Produces the read-only views of the final tree: the lazy pre-order display
view, the flat export rows and the aggregate review progress. Sibling keys
are sorted explicitly at every level so that output never depends on the
order in which records arrived.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator, List

from reviewtree.domain.tree_models import DirectoryNode, FileNode, Tree, iter_tree_files
from reviewtree.domain.view_models import DisplayRow, ExportRow, Progress

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def iter_display_rows(tree: Tree, depth: int = 0) -> Iterator[DisplayRow]:
    """
    Yield the display view in sorted pre-order (directory before children).

    Directories carry the presentation hint 'expanded unless fully
    reviewed'; files are never expanded.

    Args:
        tree: Final (compressed and annotated) tree.
        depth: Depth assigned to the entries of this mapping.

    Yields:
        DisplayRow: One row per node.
    """
    for key in sorted(tree):
        node = tree[key]
        if isinstance(node, DirectoryNode):
            yield DisplayRow(
                depth=depth,
                key=key,
                magnitude=node.magnitude,
                reviewed=node.reviewed,
                is_directory=True,
                expanded=not node.reviewed,
            )
            yield from iter_display_rows(node.children, depth + 1)
        else:
            yield DisplayRow(
                depth=depth,
                key=key,
                magnitude=node.magnitude,
                reviewed=node.reviewed,
                is_directory=False,
                expanded=False,
            )


def export_rows(tree: Tree) -> List[ExportRow]:
    """
    Flatten the tree to one row per file leaf, in display order.

    Args:
        tree: Final tree.

    Returns:
        List[ExportRow]: (origin_path, magnitude, reviewed) rows.
    """
    return [_to_export_row(f) for f in iter_tree_files(tree)]


def compute_progress(tree: Tree) -> Progress:
    """
    Compute reviewed/total magnitude over all file leaves.

    Args:
        tree: Final tree.

    Returns:
        Progress: Raw counts plus a percentage rounded half-up to two decimals.
    """
    reviewed_total = 0
    total = 0
    for leaf in iter_tree_files(tree):
        total += leaf.magnitude
        if leaf.reviewed:
            reviewed_total += leaf.magnitude

    percentage = _percentage(reviewed_total, total)
    return Progress(
        reviewed_magnitude=reviewed_total,
        total_magnitude=total,
        percentage=percentage,
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _to_export_row(leaf: FileNode) -> ExportRow:
    return ExportRow(origin_path=leaf.origin_path, magnitude=leaf.magnitude, reviewed=leaf.reviewed)


def _percentage(part: int, total: int) -> float:
    """Exact reviewed share in percent, rounded half away from zero to 0.01."""
    if not total:
        return 0.0
    share = Decimal(part) * 100 / Decimal(total)
    return float(share.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
