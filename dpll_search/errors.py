"""
Custom exceptions for the DPLL search engine.
"""


class InvalidLiteralError(Exception):
    """Raised when a literal is zero or not an integer."""

    def __init__(self, literal, reason: str = ""):
        self.literal = literal
        self.reason = reason
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Invalid literal: {repr(self.literal)}"
        if self.reason:
            msg += f"\n  Reason: {self.reason}"
        return msg


class ConflictingAssignmentError(Exception):
    """Raised when an assignment would contain a literal and its negation."""

    def __init__(self, literal: int):
        self.literal = literal
        super().__init__(
            f"Cannot assign {literal}: its negation {-literal} is already assigned"
        )


class BacktrackError(Exception):
    """Raised when backtracking walks above the root of the search tree."""

    def __init__(self, node: int):
        self.node = node
        super().__init__(
            f"Backtracking from node {node} ran past the root; "
            "termination must be checked before backtracking"
        )


class EngineStateError(Exception):
    """Raised when the engine is driven in a state that does not allow it."""

    def __init__(self, message: str):
        super().__init__(message)


class StepLimitExceeded(Exception):
    """Raised when a run does not finish within its step budget."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Search did not finish within {limit} steps")
