"""
Cross-check the DPLL engine against brute-force enumeration.

Usage:
    python check.py
    python check.py check.n_formulas=1000 formula.var_max=12
    python check.py solver.snapshot_formulas=false check.seed=7
"""

import logging
import sys

import hydra
from omegaconf import DictConfig, OmegaConf

from dpll_search import cross_check, from_dict_config

logger = logging.getLogger(__name__)


@hydra.main(version_base=None, config_path="configs", config_name="default")
def main(cfg: DictConfig):
    # Ensure logging shows on console (Hydra can redirect it)
    logging.basicConfig(level=cfg.logging.level, format="%(levelname)s: %(message)s", force=True)

    print("=" * 60)
    print("DPLL cross-check")
    print("=" * 60)
    print(OmegaConf.to_yaml(cfg))
    print("=" * 60)

    solver_config = from_dict_config(cfg.solver)
    results = cross_check(
        n_formulas=cfg.check.n_formulas,
        var_min=cfg.formula.var_min,
        var_max=cfg.formula.var_max,
        clause_length=cfg.formula.clause_length,
        seed=cfg.check.seed,
        config=solver_config,
        progress=cfg.check.progress,
    )

    print(f"  Formulas: {results['formulas']}")
    print(f"  SAT: {results['sat']}, UNSAT: {results['unsat']}")
    print(f"  Steps: {results['steps']} "
          f"({results['steps'] / max(results['formulas'], 1):.1f} per formula)")
    print(f"  Failures: {len(results['failures'])}")

    for clauses in results["failures"][:5]:
        logger.error("Failing formula: %s", clauses)

    if results["failures"]:
        sys.exit(1)


if __name__ == "__main__":
    main()
