"""
Assignment of truth values, stored as the set of literals that are true.
"""

from typing import Iterable, Iterator, List, Optional

from .errors import ConflictingAssignmentError
from .formula import check_literal


class Assignment:
    """
    A set of literals considered true.

    A literal and its negation are never both members. Variables that do not
    appear (in either polarity) are unassigned.
    """

    def __init__(self, literals: Optional[Iterable[int]] = None):
        self._true = set()
        for lit in literals or ():
            self.add(lit)

    def add(self, literal: int) -> None:
        """
        Make a literal true.

        Raises:
            ConflictingAssignmentError: If the negation is already true.
        """
        check_literal(literal)
        if -literal in self._true:
            raise ConflictingAssignmentError(literal)
        self._true.add(literal)

    def copy(self) -> "Assignment":
        new = Assignment()
        new._true = set(self._true)
        return new

    def literals(self) -> List[int]:
        """True literals ordered by variable id."""
        return sorted(self._true, key=abs)

    def __contains__(self, literal: int) -> bool:
        return literal in self._true

    def __iter__(self) -> Iterator[int]:
        return iter(self.literals())

    def __len__(self) -> int:
        return len(self._true)

    def __eq__(self, other) -> bool:
        if isinstance(other, Assignment):
            return self._true == other._true
        return NotImplemented

    def __repr__(self) -> str:
        return f"Assignment({self.literals()})"
