from __future__ import annotations

"""
Change Tree Structure Data Models.

Provides the recursive type definitions used by the pipeline stages to
represent the aggregated, review-aware directory hierarchy. A node is
either a FileNode (leaf) or a DirectoryNode (at least one child); the
node key is the mapping key under which its parent stores it.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Union

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class FileNode:
    """
    Represents a leaf entry (file) in the change tree.

    Attributes:
        magnitude: The file's own change magnitude.
        reviewed: Review flag copied from the source record.
        origin_path: Original full file path of the record.
    """
    magnitude: int
    reviewed: bool
    origin_path: str

    @property
    def is_directory(self) -> bool:
        return False


@dataclass
class DirectoryNode:
    """
    Represents a directory (possibly a compressed chain of directories).

    Attributes:
        magnitude: Sum of the magnitudes of every file beneath it.
        reviewed: True iff every child is reviewed (set by propagation).
        children: Mapping of child key to node.
    """
    magnitude: int = 0
    reviewed: bool = False
    children: Dict[str, "TreeNode"] = field(default_factory=dict)

    @property
    def is_directory(self) -> bool:
        return True


TreeNode = Union[FileNode, DirectoryNode]
Tree = Dict[str, TreeNode]

# -----------------------------------------------------------------------------
# TRAVERSAL HELPERS
# -----------------------------------------------------------------------------

def iter_file_nodes(node: TreeNode) -> Iterator[FileNode]:
    """Yield every file leaf under (and including) the given node, keys sorted."""
    if isinstance(node, FileNode):
        yield node
        return
    for key in sorted(node.children):
        yield from iter_file_nodes(node.children[key])


def iter_tree_files(tree: Tree) -> Iterator[FileNode]:
    """Yield every file leaf of a whole tree mapping, keys sorted."""
    for key in sorted(tree):
        yield from iter_file_nodes(tree[key])
