"""
Cross-checking the engine against brute force on random formulas.
"""

import logging
import random
from typing import Dict, Optional

from tqdm import tqdm

from .config import SolverConfig
from .engine import DPLLEngine
from .formula import generate_random_formula
from .verifier import verify_engine

logger = logging.getLogger(__name__)


def cross_check(
    n_formulas: int,
    var_min: int,
    var_max: int,
    clause_length: int = 3,
    seed: Optional[int] = None,
    config: Optional[SolverConfig] = None,
    progress: bool = True,
) -> Dict:
    """
    Solve random formulas and verify every result.

    Args:
        n_formulas: Number of formulas to generate.
        var_min: Minimum number of variables.
        var_max: Maximum number of variables (keep small, brute force is
            exponential).
        clause_length: Literals per clause.
        seed: Seed for the formula generator.
        config: Solver configuration; step_by_step is ignored.
        progress: Show a tqdm progress bar.

    Returns:
        Dictionary with counts and the failing formulas.
    """
    rng = random.Random(seed)
    engine = DPLLEngine(config=config)

    sat_count = 0
    unsat_count = 0
    total_steps = 0
    failures = []

    for _ in tqdm(range(n_formulas), desc="Checking formulas", disable=not progress):
        n_vars = rng.randint(var_min, var_max)
        clauses = generate_random_formula(n_vars, clause_length=clause_length, rng=rng)

        engine.start(clauses)
        engine.run()
        total_steps += engine.steps

        if engine.is_sat:
            sat_count += 1
        else:
            unsat_count += 1

        if not verify_engine(engine):
            failures.append(clauses)
            logger.warning("Verification failed for %s", clauses)

    logger.info(
        "Checked %d formulas: %d SAT, %d UNSAT, %d failures",
        n_formulas, sat_count, unsat_count, len(failures),
    )
    return {
        "formulas": n_formulas,
        "sat": sat_count,
        "unsat": unsat_count,
        "steps": total_steps,
        "failures": failures,
    }
