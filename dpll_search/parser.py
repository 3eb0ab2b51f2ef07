"""
Parser for the clause-text input format.

One clause per line, literals separated by whitespace. A leading '-'
negates a literal; anything else is an opaque variable name. Names are
numbered 1, 2, ... in order of first occurrence, left to right and top to
bottom.

    a b
    -a c
    -b -c
"""

import logging
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)


class VariableNames:
    """Bidirectional mapping between variable names and integer ids."""

    def __init__(self):
        self.id_to_name: Dict[int, str] = {}
        self.name_to_id: Dict[str, int] = {}

    def id_for(self, name: str) -> int:
        """Return the id for ``name``, allocating the next one if new."""
        if name not in self.name_to_id:
            var = len(self.name_to_id) + 1
            self.name_to_id[name] = var
            self.id_to_name[var] = name
        return self.name_to_id[name]

    def __getitem__(self, var: int) -> str:
        return self.id_to_name[var]

    def __contains__(self, var: int) -> bool:
        return var in self.id_to_name

    def __len__(self) -> int:
        return len(self.id_to_name)

    def __repr__(self) -> str:
        return f"VariableNames({self.id_to_name})"


def parse_literal(token: str, names: VariableNames) -> int:
    """
    Parse a single token into a signed literal.

    Returns 0 for a token that names no variable (e.g. a bare '-').
    """
    negated = token.startswith("-")
    name = token[1:] if negated else token
    if not name:
        return 0
    var = names.id_for(name)
    return -var if negated else var


def parse_clauses(text: str) -> Tuple[List[List[int]], VariableNames]:
    """
    Parse clause text into a formula.

    Args:
        text: Newline-separated clauses.

    Returns:
        Tuple of (clauses, names) where names maps ids back to the variable
        names used in the text. Blank lines, empty tokens and lines without
        any literal are skipped.
    """
    names = VariableNames()
    clauses = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        clause = []
        for token in line.split():
            lit = parse_literal(token, names)
            if lit:
                clause.append(lit)
        if clause:
            clauses.append(clause)
        elif line.strip():
            logger.debug("Skipping line %d without literals: %r", line_no, line)
    return clauses, names
