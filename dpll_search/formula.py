"""
CNF formula types, validation and random formula generation.
"""

import random
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import InvalidLiteralError

Literal = int
Clause = Tuple[int, ...]
Formula = Tuple[Clause, ...]


# Empirically determined clause counts for balanced (phase transition) 3-SAT
BALANCED_CLAUSE_COUNTS = {
    3: 19, 4: 24, 5: 28, 6: 33, 7: 37, 8: 41, 9: 45, 10: 50,
    11: 54, 12: 58, 13: 63, 14: 67, 15: 71, 16: 76, 17: 79,
    18: 83, 19: 87, 20: 92
}


def check_literal(literal) -> int:
    """Return the literal unchanged, or raise InvalidLiteralError."""
    # bool is an int subclass but True/False are not literals
    if isinstance(literal, bool) or not isinstance(literal, int):
        raise InvalidLiteralError(literal, "literals must be integers")
    if literal == 0:
        raise InvalidLiteralError(literal, "0 does not name a variable")
    return literal


def to_formula(clauses: Iterable[Sequence[int]]) -> Formula:
    """
    Validate clauses and freeze them into a formula.

    Clause order, literal order and duplicate literals are preserved.
    """
    return tuple(
        tuple(check_literal(lit) for lit in clause)
        for clause in clauses
    )


def variables_of(formula: Iterable[Sequence[int]]) -> List[int]:
    """Variable ids appearing in the formula, in ascending order."""
    return sorted({abs(lit) for clause in formula for lit in clause})


def generate_random_formula(
    n_vars: int,
    clause_length: int = 3,
    variance: float = 0.1,
    n_clauses: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[List[int]]:
    """
    Generate a random k-SAT formula near the phase transition.

    Args:
        n_vars: Number of variables, numbered 1..n_vars.
        clause_length: Literals per clause, capped at n_vars.
        variance: Relative standard deviation in clause count (e.g., 0.1 = +/-10%).
        n_clauses: Fixed number of clauses. If None, uses phase transition estimate.
        rng: Random source; an unseeded generator is used if omitted.

    Returns:
        List of clauses, each clause a list of literals over distinct variables.
    """
    rng = rng or random.Random()
    if n_clauses is None:
        base = BALANCED_CLAUSE_COUNTS.get(n_vars, int(n_vars * 4.26))
        delta = int(base * variance)
        n_clauses = rng.randint(max(base - delta, 0), base + delta)

    clause_length = min(clause_length, n_vars)
    var_range = range(1, n_vars + 1)

    clauses = []
    for _ in range(n_clauses):
        clause_vars = rng.sample(list(var_range), clause_length)
        clause = [var if rng.random() < 0.5 else -var for var in clause_vars]
        clauses.append(clause)

    return clauses
