"""
DPLL Search Package

This package provides a DPLL satisfiability engine that exposes its search
as a resumable, step-by-step process with an explicit search tree, plus
tools for parsing clause text, printing results and cross-checking the
engine against brute force.
"""

from .engine import DPLLEngine, ExecutionState, Outcome
from .assignment import Assignment
from .simplify import simplify_clause, apply_assignment
from .tree import SearchTree, SearchTreeNode, SAT, UNSAT, ROOT
from .formula import to_formula, check_literal, variables_of, generate_random_formula
from .parser import parse_clauses, parse_literal, VariableNames
from .format import fmt_lit, fmt_clause, format_formula, format_solution
from .render import TreeRenderer, TextRenderer, render_text
from .config import SolverConfig, load_config, from_dict_config
from .verifier import (
    TreeVerifier, brute_force_solve, check_assignment, verify_engine
)
from .batch import cross_check
from .errors import (
    InvalidLiteralError, ConflictingAssignmentError, BacktrackError,
    EngineStateError, StepLimitExceeded
)

__all__ = [
    # Engine
    'DPLLEngine',
    'ExecutionState',
    'Outcome',

    # Model
    'Assignment',
    'simplify_clause',
    'apply_assignment',
    'SearchTree',
    'SearchTreeNode',
    'SAT',
    'UNSAT',
    'ROOT',

    # Formulas
    'to_formula',
    'check_literal',
    'variables_of',
    'generate_random_formula',

    # Input and output
    'parse_clauses',
    'parse_literal',
    'VariableNames',
    'fmt_lit',
    'fmt_clause',
    'format_formula',
    'format_solution',

    # Rendering
    'TreeRenderer',
    'TextRenderer',
    'render_text',

    # Configuration
    'SolverConfig',
    'load_config',
    'from_dict_config',

    # Verification
    'TreeVerifier',
    'brute_force_solve',
    'check_assignment',
    'verify_engine',
    'cross_check',

    # Errors
    'InvalidLiteralError',
    'ConflictingAssignmentError',
    'BacktrackError',
    'EngineStateError',
    'StepLimitExceeded',
]
