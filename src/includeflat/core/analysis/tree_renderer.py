from __future__ import annotations

"""
Include Tree Renderer.

Converts the recursive IncludeNode model collected during expansion into
an ASCII representation. Children keep their encounter order, so reading
the tree top to bottom follows the layout of the flattened output.
"""

from typing import List, Optional

from includeflat.domain.models import IncludeKind, IncludeNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_include_tree(root: Optional[IncludeNode]) -> List[str]:
    """
    Render a whole include tree, root first.

    Args:
        root: Root node of the run (None yields no lines).

    Returns:
        List[str]: One string per visited file.
    """
    if root is None:
        return []
    lines = [root.path]
    render_tree_structure(root, lines)
    return lines


def render_tree_structure(node: IncludeNode, lines: List[str], prefix: str = "") -> None:
    """
    Recursively append the children of a node to the accumulator.

    Uses standard ASCII connectors (├──, └──) and manages indentation
    levels for nested includes.

    Args:
        node: Current node whose children are rendered.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    total = len(node.children)

    for i, child in enumerate(node.children):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        lines.append(f"{prefix}{connector}{_label(child)}")
        new_prefix = prefix + ("    " if is_last else "│   ")
        render_tree_structure(child, lines, prefix=new_prefix)


def _label(node: IncludeNode) -> str:
    """Format a node as '<path> (line N, "local"|<global>)'."""
    if node.kind is IncludeKind.GLOBAL:
        form = "<global>"
    else:
        form = '"local"'
    return f"{node.path} (line {node.line}, {form})"
