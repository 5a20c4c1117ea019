from __future__ import annotations

"""
Path Compression Stage.

Rewrites the raw tree so that chains of directories which each contain
exactly one further directory collapse into a single '/'-joined key
(e.g. 'src' -> 'internal' -> 'util' becomes 'src/internal/util'). A
directory holding exactly one file is never merged with that file.
Aggregates computed at assembly are carried through unchanged.
"""

import logging
from dataclasses import replace
from typing import Tuple

from reviewtree.domain.constants import PATH_SEPARATOR
from reviewtree.domain.errors import TreeInvariantError
from reviewtree.domain.tree_models import DirectoryNode, FileNode, Tree, TreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def compress(tree: Tree) -> Tree:
    """
    Return a compressed copy of the tree; the input is left untouched.

    Sibling keys are visited in ascending order and each merged entry is
    re-checked before its children are compressed, so a whole chain
    collapses in one pass.

    Args:
        tree: Raw tree as produced by the assembler.

    Returns:
        Tree: New tree with single-child directory chains merged.

    Raises:
        TreeInvariantError: If a directory node without children is found.
    """
    entries = [_compress_entry(key, tree[key]) for key in sorted(tree)]
    return {key: node for key, node in sorted(entries, key=lambda kv: kv[0])}

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _compress_entry(key: str, node: TreeNode) -> Tuple[str, TreeNode]:
    if isinstance(node, FileNode):
        return key, replace(node)

    _require_children(key, node)

    while len(node.children) == 1:
        child_key, child = next(iter(node.children.items()))
        if isinstance(child, FileNode):
            break
        _require_children(f"{key}{PATH_SEPARATOR}{child_key}", child)
        logger.debug(f"Merging '{key}' with its only subdirectory '{child_key}'.")
        key = f"{key}{PATH_SEPARATOR}{child_key}"
        node = child

    return key, DirectoryNode(
        magnitude=node.magnitude,
        reviewed=node.reviewed,
        children=compress(node.children),
    )


def _require_children(key: str, node: DirectoryNode) -> None:
    if not node.children:
        raise TreeInvariantError(f"Directory node '{key}' has no children.")
