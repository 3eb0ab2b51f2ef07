"""
Printable forms of literals, formulas and solutions.

When a variable-name table is given, literals are rendered with the names
used in the clause text (``-name`` for negations); otherwise as integers.
"""

from typing import Iterable, Mapping, Optional, Sequence

UNSATISFIABLE = "UNSATISFIABLE"
SATISFIABLE = "SATISFIABLE"


def fmt_lit(lit: int, names: Optional[Mapping[int, str]] = None) -> str:
    """Format literal: -2 -> '-2', or '-b' with names {2: 'b'}"""
    if names is None:
        return str(lit)
    name = names[abs(lit)]
    return f"-{name}" if lit < 0 else name


def fmt_clause(clause: Sequence[int], names: Optional[Mapping[int, str]] = None) -> str:
    """Format clause: (1, -2, 3) -> '1 -2 3'"""
    return ' '.join(fmt_lit(lit, names) for lit in clause)


def format_formula(
    formula: Iterable[Sequence[int]],
    names: Optional[Mapping[int, str]] = None,
    separator: str = "\n",
) -> str:
    """One clause per line (or per ``separator``); empty formula -> ''."""
    return separator.join(fmt_clause(clause, names) for clause in formula)


def format_solution(
    literals: Optional[Iterable[int]],
    names: Optional[Mapping[int, str]] = None,
) -> str:
    """
    Printable result of a search.

    Args:
        literals: The satisfying literals, or None if the formula is
            unsatisfiable.
        names: Variable id -> name table from the clause parser.

    Returns:
        'UNSATISFIABLE', or 'SATISFIABLE' followed on the next line by the
        true literals in variable order, space-separated.
    """
    if literals is None:
        return UNSATISFIABLE
    body = ' '.join(fmt_lit(lit, names) for lit in sorted(literals, key=abs))
    if not body:
        return SATISFIABLE
    return f"{SATISFIABLE}\n{body}"
