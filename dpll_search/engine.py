"""
Stepwise DPLL search engine.

The search is exposed as a resumable process. Every call to
``DPLLEngine.step()`` performs exactly one unit of work (a SAT/UNSAT
detection, a unit propagation or a branch, preceded by a chronological
backtrack when the previous step hit a conflict) and records it in an
explicit search tree:

    engine = DPLLEngine()
    engine.start([[1, 2], [-1, 2], [1, -2]])
    while engine.step() is Outcome.OPEN:
        pass
    engine.solution  # Assignment([1, 2])

Unit propagation and branching both attach the positive and the negative
child of the chosen literal. For a unit clause the negative child gets an
immediate UNSAT terminal, since forcing the complement empties that clause.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Sequence

from .assignment import Assignment
from .config import SolverConfig
from .errors import BacktrackError, EngineStateError, StepLimitExceeded
from .format import format_formula, format_solution
from .formula import Formula, to_formula
from .render import TreeRenderer
from .simplify import apply_assignment
from .tree import SAT, UNSAT, SearchTree

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """Observable result of a step."""
    OPEN = "open"
    FINISHED_SAT = "sat"
    FINISHED_UNSAT = "unsat"


@dataclass(frozen=True)
class ExecutionState:
    """
    The suspended point of the search between two steps.

    Attributes:
        formula: Formula simplified under ``assignment``.
        assignment: Literals true on the path to ``cursor``.
        cursor: Index of the tree node the next step works on.
        last_literal: The literal most recently branched on or propagated.
        conflict: True if the cursor just received an UNSAT terminal, so the
            next step has to backtrack first.
    """
    formula: Formula
    assignment: Assignment
    cursor: int
    last_literal: Optional[int] = None
    conflict: bool = False


class DPLLEngine:
    """
    DPLL search that can be advanced one decision at a time.

    The engine maintains:
    - formula: the pristine input formula, never modified during a search
    - tree: the search tree explored so far
    - state: the current ExecutionState
    - outcome: the finished outcome, set once per search (None while open)
    - solution: the satisfying assignment once the outcome is FINISHED_SAT
    """

    def __init__(
        self,
        config: Optional[SolverConfig] = None,
        renderer: Optional[TreeRenderer] = None,
    ):
        self.config = config or SolverConfig()
        self.renderer = renderer

        self.formula: Formula = ()
        self.initial_assignment = Assignment()
        self.tree: Optional[SearchTree] = None
        self.state: Optional[ExecutionState] = None
        self.outcome: Optional[Outcome] = None
        self.solution: Optional[Assignment] = None
        self.steps = 0
        self._sat_node: Optional[int] = None

    # ------------------------------------------------------------------
    # Public driver
    # ------------------------------------------------------------------

    def start(
        self,
        formula: Iterable[Sequence[int]],
        assignment: Optional[Iterable[int]] = None,
    ) -> None:
        """
        Reset the engine and prepare a search over ``formula``.

        Args:
            formula: CNF clauses as sequences of nonzero integers.
            assignment: Literals assumed true before the search starts.

        Raises:
            InvalidLiteralError: If a clause contains 0 or a non-integer.
            ConflictingAssignmentError: If ``assignment`` holds a literal and
                its negation.
        """
        pristine = to_formula(formula)
        initial = Assignment(assignment)

        self.formula = pristine
        self.initial_assignment = initial
        self.tree = SearchTree(formula=self._snapshot(self.formula))
        self.state = ExecutionState(
            formula=self.formula,
            assignment=self.initial_assignment.copy(),
            cursor=self.tree.root,
        )
        self.outcome = None
        self.solution = None
        self.steps = 0
        self._sat_node = None

        logger.debug(
            "Starting search: %d clauses, %d initial literals",
            len(self.formula), len(self.initial_assignment),
        )
        if self.renderer is not None:
            self.renderer.clean()

    def step(self) -> Outcome:
        """
        Advance the search by one decision.

        Returns:
            Outcome.OPEN while the search continues, otherwise the finished
            outcome. Once finished, further calls return the same outcome
            without touching the tree.
        """
        if self.state is None:
            raise EngineStateError("No search started; call start() or solve() first")

        if self._has_finished():
            return self.outcome

        state = self.state
        if state.conflict:
            state = self._backtrack(state)
        self.state = self._branch(state)
        self.steps += 1

        finished = self._has_finished()
        self._update_renderer()
        return self.outcome if finished else Outcome.OPEN

    def run(self, max_steps: Optional[int] = None) -> Outcome:
        """
        Step until the search finishes.

        Raises:
            StepLimitExceeded: If ``max_steps`` steps did not finish it.
        """
        if max_steps is None:
            max_steps = self.config.max_steps
        taken = 0
        outcome = self.step()
        while outcome is Outcome.OPEN:
            taken += 1
            if max_steps is not None and taken >= max_steps:
                raise StepLimitExceeded(max_steps)
            outcome = self.step()

        logger.info(
            "Search finished: %s after %d steps, %d tree nodes",
            outcome.name, self.steps, len(self.tree),
        )
        return outcome

    def solve(
        self,
        formula: Iterable[Sequence[int]],
        assignment: Optional[Iterable[int]] = None,
    ) -> Outcome:
        """
        Start a search and, unless configured step by step, run it.

        In step-by-step mode this returns Outcome.OPEN and the caller drives
        the search with step().
        """
        self.start(formula, assignment)
        if self.config.step_by_step:
            return Outcome.OPEN
        return self.run()

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    @property
    def is_sat(self) -> bool:
        return self.outcome is Outcome.FINISHED_SAT

    def printable_solution(self, names=None) -> str:
        """'UNSATISFIABLE' or 'SATISFIABLE' plus the satisfying literals."""
        if not self.finished:
            raise EngineStateError("Search has not finished")
        literals = self.solution.literals() if self.is_sat else None
        return format_solution(literals, names)

    # ------------------------------------------------------------------
    # Branch step
    # ------------------------------------------------------------------

    def _branch(self, state: ExecutionState) -> ExecutionState:
        """Perform exactly one DPLL action at the cursor."""
        tree = self.tree
        assignment = state.assignment
        formula = apply_assignment(state.formula, assignment)
        cursor = state.cursor

        if not formula:
            sat_node = tree.add_terminal(cursor, SAT, self._snapshot(formula))
            logger.debug("SAT at node %d with %s", cursor, assignment)
            self._sat_node = sat_node
            self.solution = assignment.copy()
            return replace(state, formula=formula, conflict=False)

        if any(len(clause) == 0 for clause in formula):
            tree.add_terminal(cursor, UNSAT, self._snapshot(formula))
            logger.debug("Conflict at node %d", cursor)
            return replace(state, formula=formula, conflict=True)

        unit = next((clause[0] for clause in formula if len(clause) == 1), None)
        literal = unit if unit is not None else formula[0][0]

        new_assignment = assignment.copy()
        new_assignment.add(literal)
        new_formula = apply_assignment(formula, new_assignment)

        complement = assignment.copy()
        complement.add(-literal)
        positive, negative = tree.add_branch(
            cursor, literal,
            formulas=(
                self._snapshot(new_formula),
                self._snapshot(apply_assignment(formula, complement)),
            ),
        )

        if unit is not None:
            tree.add_terminal(negative, UNSAT)
            logger.debug("Unit propagation: %d", literal)
        else:
            logger.debug("Branching on %d", literal)

        return ExecutionState(
            formula=new_formula,
            assignment=new_assignment,
            cursor=positive,
            last_literal=literal,
        )

    # ------------------------------------------------------------------
    # Backtracking
    # ------------------------------------------------------------------

    def _backtrack(self, state: ExecutionState) -> ExecutionState:
        """
        Move the cursor to the nearest unexplored sibling, chronologically.

        Walks up from the cursor's parent until some node has a child that
        is neither a terminal nor explored. The assignment is rebuilt from
        the initial assignment plus the literals on the path down to that
        child, and the formula is recomputed from the pristine formula.

        Raises:
            BacktrackError: If no unexplored node exists above the cursor.
        """
        tree = self.tree
        node = tree[state.cursor].parent
        while node is not None:
            for child in tree[node].children:
                candidate = tree[child]
                if not candidate.is_terminal and not candidate.children:
                    return self._resume_at(child)
            node = tree[node].parent
        raise BacktrackError(state.cursor)

    def _resume_at(self, index: int) -> ExecutionState:
        literal = self.tree[index].literal
        assignment = self.initial_assignment.copy()
        for lit in self.tree.path_literals(index):
            assignment.add(lit)
        logger.debug("Backtracking to %d (node %d)", literal, index)
        return ExecutionState(
            formula=apply_assignment(self.formula, assignment),
            assignment=assignment,
            cursor=index,
            last_literal=literal,
        )

    # ------------------------------------------------------------------
    # Termination
    # ------------------------------------------------------------------

    def _has_finished(self) -> bool:
        """
        Check whether the search is over, caching the outcome the first time.

        The search is over once a SAT terminal exists or every branch of
        the tree ends in a terminal.
        """
        if self.outcome is not None:
            return True
        if self._sat_node is not None:
            self.outcome = Outcome.FINISHED_SAT
            self.tree.mark_sat_path(self._sat_node)
            return True
        if self.tree.fully_explored:
            self.outcome = Outcome.FINISHED_UNSAT
            return True
        return False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _snapshot(self, formula: Formula) -> Optional[str]:
        if not self.config.snapshot_formulas:
            return None
        return format_formula(formula, separator=self.config.formula_separator)

    def _update_renderer(self) -> None:
        if self.renderer is None:
            return
        self.renderer.draw(self.tree.snapshot())
