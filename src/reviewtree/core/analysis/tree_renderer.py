from __future__ import annotations

"""
Tree Renderer.

Converts the display view of the final change tree into a visual ASCII
representation. Handles connector indentation, magnitude formatting and the
'expanded unless fully reviewed' presentation hint carried by each row.
"""

from typing import Dict, Iterable, List, Sequence

from reviewtree.core.pipeline.stages.projector import iter_display_rows
from reviewtree.domain.tree_models import Tree
from reviewtree.domain.view_models import DisplayRow

REVIEWED_MARK = "[x]"
PENDING_MARK = "[ ]"
COLLAPSED_SUFFIX = " …"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree_structure(
        rows: Iterable[DisplayRow],
        lines: List[str],
        expand_all: bool = False,
) -> None:
    """
    Transform pre-order display rows into a list of strings.

    Uses standard ASCII connectors (├──, └──) and derives indentation from
    each row's depth. Directories whose row is not expanded are shown
    collapsed unless expand_all is set.

    Args:
        rows: Display view in sorted pre-order.
        lines: Accumulator list for output strings.
        expand_all: Render the children of collapsed directories too.
    """
    rows = list(rows)
    last_flags = _last_sibling_flags(rows)

    # Per depth: indentation contributed by the ancestor at that depth
    branches: List[str] = []
    hidden_below = None

    for row, is_last in zip(rows, last_flags):
        if hidden_below is not None:
            if row.depth > hidden_below:
                continue
            hidden_below = None

        del branches[row.depth:]
        connector = "└── " if is_last else "├── "
        label = format_label(row)

        collapsed = row.is_directory and not (expand_all or row.expanded)
        if collapsed:
            label += COLLAPSED_SUFFIX
            hidden_below = row.depth

        lines.append(f"{''.join(branches)}{connector}{label}")
        branches.append("    " if is_last else "│   ")


def render_display_rows(rows: Iterable[DisplayRow], expand_all: bool = False) -> List[str]:
    """Render a display view and return its lines."""
    lines: List[str] = []
    render_tree_structure(rows, lines, expand_all=expand_all)
    return lines


def render_tree(tree: Tree, expand_all: bool = False) -> List[str]:
    """Render a whole tree through its display view."""
    return render_display_rows(iter_display_rows(tree), expand_all=expand_all)


def format_label(row: DisplayRow) -> str:
    """
    Build the text label of a display row.

    Directories get a trailing '/', magnitudes use thousands separators.
    """
    mark = REVIEWED_MARK if row.reviewed else PENDING_MARK
    name = f"{row.key}/" if row.is_directory else row.key
    return f"{mark} {name} ({row.magnitude:,})"

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _last_sibling_flags(rows: Sequence[DisplayRow]) -> List[bool]:
    """Flag each row that has no later sibling, scanning the pre-order backwards."""
    flags = [False] * len(rows)
    sibling_follows: Dict[int, bool] = {}

    for index in range(len(rows) - 1, -1, -1):
        depth = rows[index].depth
        flags[index] = not sibling_follows.get(depth, False)
        sibling_follows[depth] = True
        for deeper in [d for d in sibling_follows if d > depth]:
            del sibling_follows[deeper]

    return flags
