from __future__ import annotations

"""
Tree Assembly Stage.

Folds the flat, validated record list into a raw hierarchical tree keyed
by path segment. Every intermediate directory accumulates a running sum of
the magnitudes of the files beneath it; the terminal node of each record
takes the record's own magnitude and review flag.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

from reviewtree.domain.errors import TreeInvariantError
from reviewtree.domain.records import ChangeRecord
from reviewtree.domain.tree_models import DirectoryNode, FileNode, Tree, TreeNode

logger = logging.getLogger(__name__)


@dataclass
class _Accumulator:
    """Mutable work node; becomes a FileNode or DirectoryNode when frozen."""
    magnitude: int = 0
    reviewed: bool = False
    origin_path: Optional[str] = None
    children: Dict[str, "_Accumulator"] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def assemble(records: Iterable[ChangeRecord]) -> Tree:
    """
    Build the raw (uncompressed) tree from a sequence of records.

    A repeated path overwrites the earlier file node while its ancestors
    keep the magnitude of every occurrence; this is logged, not corrected.
    Directory nodes leave this stage with reviewed=False.

    Args:
        records: Validated change records, in any order.

    Returns:
        Tree: Mapping of root segment to node.
    """
    root: Dict[str, _Accumulator] = {}
    count = 0

    for record in records:
        count += 1
        segments = record.segments
        last = len(segments) - 1
        current = root

        for depth, segment in enumerate(segments):
            node = current.get(segment)
            if node is None:
                node = _Accumulator()
                current[segment] = node

            node.magnitude += record.magnitude

            if depth == last:
                if node.origin_path is not None:
                    logger.warning(
                        f"Path '{record.path}' assembled again; ancestor magnitudes now count it twice."
                    )
                node.magnitude = record.magnitude
                node.origin_path = record.path
                node.reviewed = record.reviewed

            current = node.children

    logger.debug(f"Assembled {count} records into {len(root)} root entries.")
    return {key: _freeze(node)[0] for key, node in root.items()}

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _freeze(node: _Accumulator) -> Tuple[TreeNode, bool]:
    """
    Convert a work node into the tagged tree representation.

    Returns the node and whether a shadowed file record was dropped at or
    below it, in which case the running sums on that branch are stale and
    directory magnitudes are recomputed from the children.
    """
    if not node.children:
        if node.origin_path is None:
            raise TreeInvariantError("Leaf node without an originating record.")
        leaf = FileNode(
            magnitude=node.magnitude,
            reviewed=node.reviewed,
            origin_path=node.origin_path,
        )
        return leaf, False

    children: Dict[str, TreeNode] = {}
    stale = False
    for key, child in node.children.items():
        children[key], child_stale = _freeze(child)
        stale = stale or child_stale

    if node.origin_path is not None:
        # The same path is both a file and a directory prefix
        logger.warning(
            f"File record '{node.origin_path}' is shadowed by a directory of the same path; "
            f"record dropped."
        )
        stale = True

    magnitude = node.magnitude
    if stale:
        magnitude = sum(child.magnitude for child in children.values())

    return DirectoryNode(magnitude=magnitude, reviewed=False, children=children), stale
