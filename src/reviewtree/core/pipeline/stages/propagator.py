from __future__ import annotations

"""
Reviewed-State Propagation Stage.

Walks the compressed tree bottom-up and marks a directory as reviewed
only when every one of its children is reviewed.
"""

from dataclasses import replace

from reviewtree.domain.tree_models import DirectoryNode, FileNode, Tree, TreeNode


def propagate_reviewed(tree: Tree) -> Tree:
    """
    Return a copy of the tree with directory review flags computed.

    File flags are copied as assembled. A directory without children is
    never considered reviewed.

    Args:
        tree: Compressed tree.

    Returns:
        Tree: Annotated copy; the input is left untouched.
    """
    return {key: _propagate(tree[key]) for key in sorted(tree)}


def _propagate(node: TreeNode) -> TreeNode:
    if isinstance(node, FileNode):
        return replace(node)

    children = propagate_reviewed(node.children)
    reviewed = bool(children) and all(child.reviewed for child in children.values())
    return DirectoryNode(magnitude=node.magnitude, reviewed=reviewed, children=children)
