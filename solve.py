#!/usr/bin/env python3
"""
Solve a formula written in clause text.

Usage:
    python solve.py formula.txt             # Print SATISFIABLE/UNSATISFIABLE
    python solve.py formula.txt --tree      # Also print the search tree
    python solve.py - --step                # Read stdin, log every step
"""

import argparse
import logging
import sys

from dpll_search import (
    DPLLEngine,
    Outcome,
    StepLimitExceeded,
    TextRenderer,
    load_config,
    parse_clauses,
    render_text,
)

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Solve a CNF formula with stepwise DPLL")
    parser.add_argument(
        "infile",
        help="Clause text file, one clause per line ('-' for stdin)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML solver config (e.g. configs/default.yaml)"
    )
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Print the final search tree"
    )
    parser.add_argument(
        "--step",
        action="store_true",
        help="Advance one step at a time, drawing the tree after each step"
    )
    parser.add_argument(
        "--formulas",
        action="store_true",
        help="Show the simplified formula under each tree node"
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Give up after this many steps"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every decision"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if args.infile == "-":
        text = sys.stdin.read()
    else:
        with open(args.infile) as f:
            text = f.read()

    clauses, names = parse_clauses(text)
    logger.info("Parsed %d clauses over %d variables", len(clauses), len(names))

    overrides = []
    if args.max_steps is not None:
        overrides.append(f"max_steps={args.max_steps}")
    config = load_config(args.config, overrides)

    renderer = TextRenderer(show_formulas=args.formulas) if args.step else None
    engine = DPLLEngine(config=config, renderer=renderer)
    engine.start(clauses)

    try:
        if args.step:
            outcome = run_stepwise(engine, config.max_steps)
        else:
            outcome = engine.run()
    except StepLimitExceeded as e:
        logger.error("%s", e)
        return 2

    if args.tree and not args.step:
        print(render_text(engine.tree.snapshot(), show_formulas=args.formulas))

    print(engine.printable_solution(names))
    return 0 if outcome is Outcome.FINISHED_SAT else 1


def run_stepwise(engine: DPLLEngine, max_steps=None) -> Outcome:
    """Drive the engine one step at a time, logging each outcome."""
    outcome = Outcome.OPEN
    while outcome is Outcome.OPEN:
        if max_steps is not None and engine.steps >= max_steps:
            raise StepLimitExceeded(max_steps)
        outcome = engine.step()
        state = engine.state
        logger.info(
            "Step %d: %s (last literal %s, %d assigned)",
            engine.steps, outcome.name, state.last_literal, len(state.assignment),
        )
    return outcome


if __name__ == "__main__":
    sys.exit(main())
