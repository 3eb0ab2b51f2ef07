"""
Search tree recording every DPLL decision and terminal outcome.

Nodes live in an arena (``SearchTree.nodes``) and refer to each other by
index. Each node stores its parent's index, so upward walks (backtracking,
satisfying-path marking) are O(depth) without reference cycles.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

ROOT = "Root"
SAT = "SAT"
UNSAT = "UNSAT"
TERMINALS = (SAT, UNSAT)


@dataclass
class SearchTreeNode:
    """
    A single node of the search tree.

    Attributes:
        name: Display label: the literal as text, SAT, UNSAT or Root.
        literal: The literal this node assigns, None for root and terminals.
        parent: Index of the parent node, None for the root.
        children: Indices of the children: none, exactly two (the positive
            and negative branch of one literal) or a single terminal.
        formula: Printable snapshot of the simplified formula at this node.
        sat_path: True if the node lies on the path to the SAT terminal.
    """
    name: str
    literal: Optional[int] = None
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    formula: Optional[str] = None
    sat_path: bool = False

    @property
    def is_terminal(self) -> bool:
        return self.name in TERMINALS


class SearchTree:
    """Arena of search tree nodes. Node 0 is the root."""

    def __init__(self, formula: Optional[str] = None):
        self.nodes: List[SearchTreeNode] = [SearchTreeNode(name=ROOT, formula=formula)]
        # Childless non-terminal nodes; the root is resolved iff this is 0
        self.open_leaves = 1

    @property
    def root(self) -> int:
        return 0

    def __getitem__(self, index: int) -> SearchTreeNode:
        return self.nodes[index]

    def __len__(self) -> int:
        return len(self.nodes)

    def add_child(
        self,
        parent: int,
        name: str,
        literal: Optional[int] = None,
        formula: Optional[str] = None,
    ) -> int:
        """Append a child to ``parent`` and return the new node's index."""
        index = len(self.nodes)
        child = SearchTreeNode(name=name, literal=literal, parent=parent, formula=formula)
        self.nodes.append(child)
        parent_node = self.nodes[parent]
        if not parent_node.children and not parent_node.is_terminal:
            self.open_leaves -= 1
        if not child.is_terminal:
            self.open_leaves += 1
        parent_node.children.append(index)
        return index

    def add_branch(self, parent: int, literal: int,
                   formulas=(None, None)) -> List[int]:
        """Attach the ``literal`` and ``-literal`` children, in that order."""
        return [
            self.add_child(parent, str(lit), literal=lit, formula=snapshot)
            for lit, snapshot in zip((literal, -literal), formulas)
        ]

    def add_terminal(self, parent: int, name: str, formula: Optional[str] = None) -> int:
        return self.add_child(parent, name, formula=formula)

    def ancestors(self, index: int) -> Iterator[int]:
        """Yield ``index`` and then each ancestor up to the root."""
        current: Optional[int] = index
        while current is not None:
            yield current
            current = self.nodes[current].parent

    def path_literals(self, index: int) -> List[int]:
        """Literals decided on the way from the root down to ``index``."""
        literals = [
            self.nodes[i].literal for i in self.ancestors(index)
            if self.nodes[i].literal is not None
        ]
        literals.reverse()
        return literals

    def is_resolved(self, index: Optional[int] = None) -> bool:
        """
        Check whether the subtree under ``index`` is fully explored.

        A node is resolved if its only child is a terminal, or if it has two
        children that are both resolved. A childless node is unresolved.
        """
        stack = [self.root if index is None else index]
        while stack:
            node = self.nodes[stack.pop()]
            children = node.children
            if len(children) == 1 and self.nodes[children[0]].is_terminal:
                continue
            if len(children) != 2:
                return False
            stack.extend(reversed(children))
        return True

    @property
    def fully_explored(self) -> bool:
        """True once every branch ends in a terminal."""
        return self.open_leaves == 0

    def find_terminal(self, name: str) -> Optional[int]:
        """Index of the first node labelled ``name``, or None."""
        for index, node in enumerate(self.nodes):
            if node.name == name:
                return index
        return None

    def mark_sat_path(self, index: int) -> None:
        """Flag every node from ``index`` up to the root as on the SAT path."""
        for i in self.ancestors(index):
            self.nodes[i].sat_path = True

    def leaves(self) -> List[int]:
        return [i for i, node in enumerate(self.nodes) if not node.children]

    def snapshot(self, index: Optional[int] = None) -> Dict:
        """
        Nested dict view of the subtree, as handed to renderers.

        Each node becomes ``{"name", "children", "formula", "sat_path"}``.
        """
        start = self.root if index is None else index
        views: Dict[int, Dict] = {}
        # Pre-order with an explicit stack; children lists are filled in as
        # their views are created.
        stack = [start]
        while stack:
            i = stack.pop()
            node = self.nodes[i]
            view = {
                "name": node.name,
                "children": [],
                "formula": node.formula,
                "sat_path": node.sat_path,
            }
            views[i] = view
            if i != start:
                views[node.parent]["children"].append(view)
            stack.extend(reversed(node.children))
        return views[start]
