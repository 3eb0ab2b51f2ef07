"""
Renderer protocol for the search tree, and a plain-text renderer.
"""

import sys
from typing import Dict, List, Optional, Protocol, TextIO, runtime_checkable


@runtime_checkable
class TreeRenderer(Protocol):
    """
    Protocol defining the interface between the engine and a tree renderer.

    The engine calls clean() when a new search starts and draw() after every
    step with a snapshot of the whole tree.
    """

    def draw(self, root: Dict) -> None:
        """
        Draw the search tree.

        Args:
            root: Snapshot of the root node. Every node is a dict with
                ``name``, ``children`` (0 or 2 nodes, or a single terminal),
                ``formula`` (printable snapshot or None) and ``sat_path``.
        """
        ...

    def clean(self) -> None:
        """Discard whatever was drawn for the previous search."""
        ...


def render_text(root: Dict, show_formulas: bool = False) -> str:
    """
    Render a tree snapshot as indented text.

    Nodes on the satisfying path are marked with ``*``.
    """
    lines: List[str] = []
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        marker = "*" if node.get("sat_path") else " "
        lines.append(f"{marker} {'  ' * depth}{node['name']}")
        if show_formulas and node.get("formula"):
            pad = "  " * (depth + 2)
            for clause in node["formula"].splitlines():
                lines.append(f"  {pad}| {clause}")
        for child in reversed(node["children"]):
            stack.append((child, depth + 1))
    return "\n".join(lines)


class TextRenderer:
    """Writes the tree as indented text to a stream on every draw()."""

    def __init__(self, stream: Optional[TextIO] = None, show_formulas: bool = False):
        self.stream = stream or sys.stdout
        self.show_formulas = show_formulas
        self.frames = 0

    def draw(self, root: Dict) -> None:
        self.frames += 1
        self.stream.write(f"--- step {self.frames} ---\n")
        self.stream.write(render_text(root, self.show_formulas) + "\n")

    def clean(self) -> None:
        self.frames = 0
