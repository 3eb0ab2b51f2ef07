"""
Formula simplification under an assignment.
"""

from typing import Optional, Sequence

from .assignment import Assignment
from .formula import Clause, Formula


def simplify_clause(clause: Sequence[int], assignment: Assignment) -> Optional[Clause]:
    """
    Apply an assignment to a clause.

    Returns None if some literal is true (the clause is satisfied and drops
    out of the formula). Otherwise returns the clause without its false
    literals; an empty clause means every literal is false.
    """
    remaining = []
    for lit in clause:
        if lit in assignment:
            return None
        if -lit not in assignment:
            remaining.append(lit)
    return tuple(remaining)


def apply_assignment(formula: Sequence[Sequence[int]], assignment: Assignment) -> Formula:
    """Simplify every clause, dropping the satisfied ones."""
    simplified = []
    for clause in formula:
        new_clause = simplify_clause(clause, assignment)
        if new_clause is not None:
            simplified.append(new_clause)
    return tuple(simplified)
