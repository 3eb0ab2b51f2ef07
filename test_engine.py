#!/usr/bin/env python3
"""
Tests for the stepwise DPLL engine.

Covers:
1. The branch step actions (SAT, conflict, unit propagation, branching)
2. Chronological backtracking and state restoration
3. Termination and satisfying-path marking
4. Soundness and completeness against brute-force enumeration
"""

import random
import sys
from itertools import combinations

import pytest

from dpll_search import (
    Assignment,
    BacktrackError,
    ConflictingAssignmentError,
    DPLLEngine,
    EngineStateError,
    InvalidLiteralError,
    Outcome,
    SolverConfig,
    StepLimitExceeded,
    TreeRenderer,
    TreeVerifier,
    apply_assignment,
    brute_force_solve,
    check_assignment,
    cross_check,
    generate_random_formula,
    parse_clauses,
    verify_engine,
)


def run_to_end(clauses, assignment=None):
    engine = DPLLEngine()
    engine.start(clauses, assignment)
    engine.run()
    return engine


def names_of(engine, indices):
    return [engine.tree[i].name for i in indices]


# ----------------------------------------------------------------------
# Concrete scenarios
# ----------------------------------------------------------------------

def test_single_unit_clause():
    """{(x)} is SAT with x = true."""
    engine = DPLLEngine()
    engine.start([[1]])

    assert engine.step() is Outcome.OPEN
    root = engine.tree[engine.tree.root]
    assert names_of(engine, root.children) == ["1", "-1"]
    negative = engine.tree[root.children[1]]
    assert names_of(engine, negative.children) == ["UNSAT"]

    assert engine.step() is Outcome.FINISHED_SAT
    assert engine.solution == Assignment([1])
    assert engine.steps == 2
    print("  {(x)}: PASS")


def test_contradictory_units():
    """{(x), (-x)} is UNSAT."""
    engine = run_to_end([[1], [-1]])
    assert engine.outcome is Outcome.FINISHED_UNSAT
    assert engine.solution is None
    assert engine.printable_solution() == "UNSATISFIABLE"
    print("  {(x), (-x)}: PASS")


def test_sat_with_y_true():
    """{(x,y), (-x,y), (x,-y)} is SAT and every valid model has y = true."""
    clauses = [[1, 2], [-1, 2], [1, -2]]
    engine = run_to_end(clauses)

    assert engine.is_sat
    assert 2 in engine.solution
    assert check_assignment(clauses, engine.solution.literals())
    assert engine.steps == 3
    print("  {(x,y), (-x,y), (x,-y)}: PASS")


def test_empty_formula():
    """No clauses: SAT with the empty assignment in a single step."""
    engine = DPLLEngine()
    engine.start([])
    assert engine.step() is Outcome.FINISHED_SAT
    assert len(engine.solution) == 0
    assert engine.printable_solution() == "SATISFIABLE"
    root = engine.tree[engine.tree.root]
    assert names_of(engine, root.children) == ["SAT"]
    assert root.sat_path
    print("  Empty formula: PASS")


def test_both_subtrees_visited_before_unsat():
    """{(x,y), (-x), (-y)}: UNSAT only once both root subtrees are resolved."""
    engine = DPLLEngine()
    engine.start([[1, 2], [-1], [-2]])

    outcomes = []
    while not outcomes or outcomes[-1] is Outcome.OPEN:
        outcomes.append(engine.step())
        if outcomes[-1] is Outcome.OPEN:
            assert not engine.tree.is_resolved()

    assert outcomes[-1] is Outcome.FINISHED_UNSAT
    tree = engine.tree
    children = tree[tree.root].children
    assert len(children) == 2
    assert all(tree.is_resolved(child) for child in children)
    assert all(tree[child].children for child in children)
    print("  {(x,y), (-x), (-y)}: PASS")


# ----------------------------------------------------------------------
# Branch step
# ----------------------------------------------------------------------

def test_branch_on_first_literal_of_first_clause():
    engine = DPLLEngine()
    engine.start([[-3, 1], [2, 3], [1, 2]])
    assert engine.step() is Outcome.OPEN

    tree = engine.tree
    positive, negative = tree[tree.root].children
    assert tree[positive].literal == -3
    assert tree[negative].literal == 3
    # The negative branch stays unexplored for backtracking
    assert tree[negative].children == []
    assert engine.state.cursor == positive
    assert engine.state.last_literal == -3
    assert engine.state.assignment == Assignment([-3])
    assert engine.state.formula == ((2,), (1, 2))


def test_unit_clause_has_priority_over_branching():
    engine = DPLLEngine()
    engine.start([[1, 2], [3, 4], [-2]])
    engine.step()

    tree = engine.tree
    positive, negative = tree[tree.root].children
    assert tree[positive].literal == -2
    assert names_of(engine, tree[negative].children) == ["UNSAT"]


def test_empty_clause_has_priority_over_units():
    engine = DPLLEngine()
    engine.start([[1], []])
    assert engine.step() is Outcome.FINISHED_UNSAT
    assert names_of(engine, engine.tree[0].children) == ["UNSAT"]


def test_children_carry_formula_snapshots():
    engine = DPLLEngine()
    engine.start([[1, 2], [-1, 3]])
    engine.step()

    tree = engine.tree
    assert tree[tree.root].formula == "1 2\n-1 3"
    positive, negative = tree[tree.root].children
    assert tree[positive].formula == "3"
    assert tree[negative].formula == "2"


def test_snapshots_can_be_disabled():
    engine = DPLLEngine(SolverConfig(snapshot_formulas=False))
    engine.solve([[1, 2], [-1, 3]])
    assert all(node.formula is None for node in engine.tree.nodes)


def test_state_is_replaced_each_step():
    engine = DPLLEngine()
    engine.start([[1, 2], [-1, 2]])
    before = engine.state
    before_assignment = before.assignment.copy()
    engine.step()
    assert engine.state is not before
    assert before.assignment == before_assignment


# ----------------------------------------------------------------------
# Backtracking
# ----------------------------------------------------------------------

def test_backtrack_restores_pristine_formula():
    """(x,y) (x,-y) (-x,z) (-x,-z): both branches of x conflict."""
    clauses = [[1, 2], [1, -2], [-1, 3], [-1, -3]]
    engine = DPLLEngine()
    engine.start(clauses)

    for _ in range(3):
        assert engine.step() is Outcome.OPEN
    assert engine.state.conflict

    restored = engine._backtrack(engine.state)
    assert engine.tree[restored.cursor].literal == -1
    assert restored.assignment == Assignment([-1])
    assert restored.formula == apply_assignment(engine.formula, Assignment([-1]))
    assert restored.formula == ((2,), (-2,))
    assert not restored.conflict

    assert engine.step() is Outcome.OPEN
    assert engine.step() is Outcome.FINISHED_UNSAT
    assert engine.steps == 5
    assert TreeVerifier(engine.tree).verify()


def test_backtrack_keeps_earlier_decisions():
    """Decisions above the exhausted branch survive, whatever their ids."""
    clauses = [[3, 1], [-3, 1, 2], [-1, 4], [-1, -4]]
    engine = DPLLEngine()
    engine.start(clauses)

    for _ in range(4):
        assert engine.step() is Outcome.OPEN
    assert engine.state.conflict

    restored = engine._backtrack(engine.state)
    assert engine.tree[restored.cursor].literal == -1
    assert restored.assignment == Assignment([3, -1])
    assert restored.formula == ((2,),)

    assert engine.step() is Outcome.OPEN
    assert engine.step() is Outcome.FINISHED_SAT
    assert engine.solution == Assignment([3, -1, 2])
    assert check_assignment(clauses, engine.solution.literals())


def test_backtrack_above_root_is_fatal():
    engine = DPLLEngine()
    engine.start([[1]])
    with pytest.raises(BacktrackError):
        engine._backtrack(engine.state)


# ----------------------------------------------------------------------
# Termination and the satisfying path
# ----------------------------------------------------------------------

def test_finished_outcome_is_cached():
    engine = run_to_end([[1, 2], [-1]])
    size = len(engine.tree)
    steps = engine.steps
    assert engine.step() is Outcome.FINISHED_SAT
    assert engine.step() is Outcome.FINISHED_SAT
    assert len(engine.tree) == size
    assert engine.steps == steps


def test_sat_path_marks_root_to_sat():
    engine = run_to_end([[1, 2], [-1, 2], [1, -2]])
    tree = engine.tree
    sat = tree.find_terminal("SAT")
    path = set(tree.ancestors(sat))
    for index, node in enumerate(tree.nodes):
        assert node.sat_path == (index in path)
    assert TreeVerifier(tree).verify()


def test_no_sat_path_when_unsat():
    engine = run_to_end([[1], [-1]])
    assert not any(node.sat_path for node in engine.tree.nodes)


def test_termination_monotonicity():
    """Open while an unexplored leaf remains; UNSAT only on a terminal frontier."""
    rng = random.Random(3)
    for _ in range(60):
        clauses = generate_random_formula(rng.randint(2, 6), rng=rng)
        engine = DPLLEngine()
        engine.start(clauses)
        outcome = Outcome.OPEN
        while outcome is Outcome.OPEN:
            outcome = engine.step()
            tree = engine.tree
            open_leaves = [i for i in tree.leaves() if not tree[i].is_terminal]
            assert tree.open_leaves == len(open_leaves)
            assert tree.fully_explored == tree.is_resolved()
            if outcome is Outcome.OPEN:
                assert open_leaves
            elif outcome is Outcome.FINISHED_UNSAT:
                assert not open_leaves
                assert tree.is_resolved()


def test_long_implication_chain_finishes():
    """A chain of unit propagations ends SAT with every branch closed."""
    n = 1500
    clauses = [[1]] + [[-i, i + 1] for i in range(1, n)]
    engine = DPLLEngine(SolverConfig(snapshot_formulas=False))
    engine.start(clauses)
    assert engine.run() is Outcome.FINISHED_SAT
    assert engine.steps == n + 1
    assert engine.solution.literals() == list(range(1, n + 1))

    tree = engine.tree
    assert tree.open_leaves == 0 and tree.fully_explored
    assert tree.is_resolved()
    assert TreeVerifier(tree).verify()


# ----------------------------------------------------------------------
# Driver, configuration and renderer
# ----------------------------------------------------------------------

def test_step_by_step_solve():
    engine = DPLLEngine(SolverConfig(step_by_step=True))
    assert engine.solve([[1, 2], [-1, 2], [1, -2]]) is Outcome.OPEN
    assert engine.steps == 0
    assert not engine.finished
    assert engine.run() is Outcome.FINISHED_SAT


def test_initial_assignment():
    engine = DPLLEngine()
    assert engine.solve([[1, 2]], assignment=[-1]) is Outcome.FINISHED_SAT
    assert engine.solution == Assignment([-1, 2])
    assert verify_engine(engine)

    assert engine.solve([[1]], assignment=[-1]) is Outcome.FINISHED_UNSAT
    assert verify_engine(engine)


def test_new_solve_resets_engine():
    engine = DPLLEngine()
    engine.solve([[1], [-1]])
    assert engine.outcome is Outcome.FINISHED_UNSAT
    engine.solve([[1]])
    assert engine.outcome is Outcome.FINISHED_SAT
    assert len(engine.tree) == 5


def test_step_limit():
    engine = DPLLEngine()
    engine.start([[1, 2], [1, -2], [-1, 3], [-1, -3]])
    with pytest.raises(StepLimitExceeded):
        engine.run(max_steps=2)
    assert engine.steps == 2
    assert engine.run() is Outcome.FINISHED_UNSAT

    engine = DPLLEngine(SolverConfig(max_steps=1))
    with pytest.raises(StepLimitExceeded):
        engine.solve([[1, 2], [-1, 2]])


def test_engine_errors():
    engine = DPLLEngine()
    with pytest.raises(EngineStateError):
        engine.step()
    with pytest.raises(InvalidLiteralError):
        engine.start([[1, 0]])
    with pytest.raises(InvalidLiteralError):
        engine.start([[1, "2"]])
    with pytest.raises(ConflictingAssignmentError):
        engine.start([[1]], assignment=[2, -2])

    engine.start([[1, 2]])
    with pytest.raises(EngineStateError):
        engine.printable_solution()


class RecordingRenderer:
    def __init__(self):
        self.frames = []
        self.cleaned = 0

    def draw(self, root):
        self.frames.append(root)

    def clean(self):
        self.cleaned += 1


def test_renderer_notified_every_step():
    renderer = RecordingRenderer()
    assert isinstance(renderer, TreeRenderer)

    engine = DPLLEngine(renderer=renderer)
    engine.solve([[1, 2], [-1, 2], [1, -2]])
    assert renderer.cleaned == 1
    assert len(renderer.frames) == engine.steps

    final = renderer.frames[-1]
    assert final["name"] == "Root"
    assert final["sat_path"]
    assert [c["name"] for c in final["children"]] == ["1", "-1"]
    assert final["children"][0]["sat_path"]
    assert not final["children"][1]["sat_path"]


def test_printable_solution_uses_names():
    clauses, names = parse_clauses("x y\n-x y\nx -y\n")
    engine = DPLLEngine()
    engine.solve(clauses)
    assert engine.printable_solution(names) == "SATISFIABLE\nx y"

    clauses, names = parse_clauses("a\n-a b\n-b -c\n")
    engine.solve(clauses)
    assert engine.printable_solution(names) == "SATISFIABLE\na b -c"


# ----------------------------------------------------------------------
# Soundness and completeness
# ----------------------------------------------------------------------

def all_clauses_over(variables):
    """Every nonempty clause using each variable at most once."""
    clauses = []
    for signs in range(3 ** len(variables)):
        clause = []
        for var in variables:
            choice = signs % 3
            signs //= 3
            if choice == 1:
                clause.append(var)
            elif choice == 2:
                clause.append(-var)
        if clause:
            clauses.append(clause)
    return clauses


def test_exhaustive_two_variable_formulas():
    """Every formula of up to three clauses over two variables."""
    candidates = all_clauses_over([1, 2])
    checked = 0
    for size in range(4):
        for clauses in combinations(candidates, size):
            engine = run_to_end(list(clauses))
            assert engine.is_sat == (brute_force_solve(list(clauses)) is not None)
            assert verify_engine(engine)
            checked += 1
    assert checked == 93
    print(f"  Exhaustive 2-variable formulas ({checked}): PASS")


def test_random_formulas_against_brute_force():
    rng = random.Random(11)
    for i in range(150):
        n_vars = 2 + (i % 7)
        clauses = generate_random_formula(
            n_vars,
            clause_length=rng.randint(1, 3),
            n_clauses=rng.randint(0, 4 * n_vars),
            rng=rng,
        )
        engine = run_to_end(clauses)
        expected = brute_force_solve(clauses)
        assert engine.is_sat == (expected is not None), clauses
        if engine.is_sat:
            assert check_assignment(clauses, engine.solution.literals()), clauses
        assert TreeVerifier(engine.tree).verify(), clauses


def test_cross_check_harness():
    results = cross_check(40, var_min=3, var_max=7, seed=5, progress=False)
    assert results["formulas"] == 40
    assert results["sat"] + results["unsat"] == 40
    assert results["failures"] == []
    assert results["steps"] > 0


def run_tests(tests) -> int:
    """Run each test, reporting any exception as a failure. Returns the failure count."""
    failed = 0
    for test in tests:
        try:
            test()
        except Exception as e:
            failed += 1
            print(f"  FAIL: {test.__name__}: {e}")
    return failed


def test_runner_counts_errors_as_failures():
    def passes():
        pass

    def fails():
        assert False

    def errors():
        raise ValueError("boom")

    assert run_tests([passes]) == 0
    assert run_tests([passes, fails, errors]) == 2


def main():
    """Run all tests."""
    print("=" * 50)
    print("DPLL Engine Tests")
    print("=" * 50)

    tests = [
        value for name, value in sorted(globals().items())
        if name.startswith("test_") and callable(value)
    ]
    failed = run_tests(tests)

    print("\n" + "=" * 50)
    if failed == 0:
        print("ALL TESTS PASSED")
    else:
        print(f"{failed} TESTS FAILED")
    print("=" * 50)

    return 0 if failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
