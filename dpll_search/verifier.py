"""
Independent checks for search results.

Brute-force enumeration decides small formulas without the engine, and
TreeVerifier checks that a finished search tree is well formed.
"""

from itertools import product
from typing import Iterable, List, Optional, Sequence

from .formula import variables_of
from .tree import SAT, SearchTree


def clause_satisfied(clause: Sequence[int], literals) -> bool:
    return any(lit in literals for lit in clause)


def check_assignment(formula: Iterable[Sequence[int]], literals: Iterable[int]) -> bool:
    """True if every clause contains at least one of the true literals."""
    true_lits = set(literals)
    if any(-lit in true_lits for lit in true_lits):
        return False
    return all(clause_satisfied(clause, true_lits) for clause in formula)


def brute_force_solve(formula: Sequence[Sequence[int]]) -> Optional[List[int]]:
    """
    Decide satisfiability by enumerating the truth table.

    Returns:
        A satisfying list of literals (one per variable), or None.
    """
    variables = variables_of(formula)
    for values in product((True, False), repeat=len(variables)):
        literals = [var if value else -var for var, value in zip(variables, values)]
        if check_assignment(formula, literals):
            return literals
    return None


class TreeVerifier:
    """
    Verifies the structural invariants of a search tree.

    Every node has no children, a single terminal child, or exactly two
    children labelled with complementary literals. Terminals are leaves,
    parent indices match the children lists, and the satisfying path (if
    any) runs from the root to a SAT terminal.
    """

    def __init__(self, tree: SearchTree):
        self.tree = tree
        self.errors: List[str] = []

    def verify(self) -> bool:
        self.errors = []
        for index in range(len(self.tree)):
            self._verify_node(index)
        self._verify_sat_path()
        self._verify_open_leaves()
        return not self.errors

    def _verify_open_leaves(self) -> None:
        tree = self.tree
        open_leaves = [i for i in tree.leaves() if not tree[i].is_terminal]
        if len(open_leaves) != tree.open_leaves:
            self.errors.append(
                f"open leaf count is {tree.open_leaves}, tree has {len(open_leaves)}"
            )
        if tree.is_resolved() != tree.fully_explored:
            self.errors.append("open leaf count disagrees with the resolved check")

    def _verify_node(self, index: int) -> None:
        node = self.tree[index]
        for child in node.children:
            if self.tree[child].parent != index:
                self.errors.append(f"node {child}: parent is not {index}")

        if node.is_terminal:
            if node.children:
                self.errors.append(f"node {index}: terminal {node.name} has children")
            return

        children = [self.tree[c] for c in node.children]
        if len(children) == 1:
            if not children[0].is_terminal:
                self.errors.append(f"node {index}: single child is not a terminal")
        elif len(children) == 2:
            pos, neg = children
            if pos.literal is None or neg.literal != -pos.literal:
                self.errors.append(
                    f"node {index}: children {pos.name}, {neg.name} are not complementary"
                )
        elif children:
            self.errors.append(f"node {index}: {len(children)} children")

    def _verify_sat_path(self) -> None:
        marked = [i for i, node in enumerate(self.tree.nodes) if node.sat_path]
        if not marked:
            return
        sat = self.tree.find_terminal(SAT)
        if sat is None or not self.tree[sat].sat_path:
            self.errors.append("sat_path is set but reaches no SAT terminal")
            return
        if sorted(self.tree.ancestors(sat)) != marked:
            self.errors.append("sat_path does not match the path from SAT to the root")


def verify_engine(engine) -> bool:
    """
    Verify a finished DPLLEngine against brute force.

    Checks the tree invariants, that the outcome agrees with truth-table
    enumeration and, for SAT, that the solution satisfies the original
    formula.
    """
    if not engine.finished or not TreeVerifier(engine.tree).verify():
        return False
    formula = engine.formula
    if engine.initial_assignment:
        # Fix the assumed literals by adding them as unit clauses.
        formula = formula + tuple((lit,) for lit in engine.initial_assignment)
    expected_sat = brute_force_solve(formula) is not None
    if engine.is_sat != expected_sat:
        return False
    if engine.is_sat:
        return check_assignment(formula, engine.solution.literals())
    return True
