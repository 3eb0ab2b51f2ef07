"""
Solver configuration.

The schema is a dataclass; values are loaded through OmegaConf so YAML files
and dotlist overrides (``["solver.step_by_step=true"]``) are type-checked
against it.
"""

from dataclasses import dataclass
from typing import List, Optional

from omegaconf import DictConfig, OmegaConf


@dataclass
class SolverConfig:
    """
    Attributes:
        step_by_step: If True, solve() only starts the search and the caller
            advances it with step(). Otherwise solve() runs to completion.
        snapshot_formulas: Store a printable formula snapshot on every node.
        formula_separator: Separator between clauses in snapshots.
        max_steps: Step budget for solve()/run(); None means unbounded.
    """
    step_by_step: bool = False
    snapshot_formulas: bool = True
    formula_separator: str = "\n"
    max_steps: Optional[int] = None


def load_config(
    path: Optional[str] = None,
    overrides: Optional[List[str]] = None,
) -> SolverConfig:
    """
    Build a SolverConfig from an optional YAML file and dotlist overrides.

    The YAML file may hold the solver keys at top level or under a
    ``solver`` section (the layout used by ``configs/default.yaml``).
    """
    cfg = OmegaConf.structured(SolverConfig)
    if path is not None:
        loaded = OmegaConf.load(path)
        if "solver" in loaded:
            loaded = loaded.solver
        cfg = OmegaConf.merge(cfg, loaded)
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(overrides))
    return OmegaConf.to_object(cfg)


def from_dict_config(cfg: DictConfig) -> SolverConfig:
    """Validate a hydra/OmegaConf section against the SolverConfig schema."""
    merged = OmegaConf.merge(OmegaConf.structured(SolverConfig), cfg)
    return OmegaConf.to_object(merged)
