"""
Krylov wrappers: a uniform linear-solve interface over SciPy's Krylov methods

A LinearCache holds the system Au = b together with a solver workspace that
is allocated lazily on the first solve and reused until the system changes.
Named constructors select the method; the orchestrator picks the matching
workspace, normalises preconditioners and assembles the option set.

Features:
- Closed registry of 16 methods (CG, MINRES, GMRES, BiCGStab, LSMR, CRAIGMR, ...)
- Workspace reuse across repeated solves
- Left/right preconditioning applied by division (ILU, Jacobi, factorizations)
- Residual history and return codes instead of exceptions for non-convergence

Example
-------
>>> import numpy as np
>>> import krylov_wrappers as kw
>>> A = np.diag([4.0, 9.0, 16.0])
>>> cache = kw.init(A, np.array([4.0, 9.0, 16.0]), kw.krylov_cg())
>>> sol = cache.solve()
"""

import logging

from .algorithms import (
    AlgorithmConfig,
    default_alias_A,
    default_alias_b,
    krylov,
    krylov_bicgstab,
    krylov_cg,
    krylov_craigmr,
    krylov_gmres,
    krylov_lsmr,
    krylov_minres,
)
from .cache import LinearCache, OperatorAssumptions, init, linsolve
from .config import KrylovConfig, config
from .convergence import LinearSolution, ReturnCode
from .exceptions import (
    EmptyHistory,
    KrylovWrapperError,
    UnsupportedAlgorithm,
    UnsupportedPreconditioner,
)
from .factory import build_workspace
from .preconditioners import IDENTITY, ilu, is_identity, jacobi
from .registry import AlgorithmDescriptor, AlgorithmRegistry, resolve
from .solver import solve
from .utils import load_matrix_market, poisson_2d

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    # Configuration facade
    "AlgorithmConfig",
    "krylov",
    "krylov_cg",
    "krylov_minres",
    "krylov_gmres",
    "krylov_bicgstab",
    "krylov_lsmr",
    "krylov_craigmr",
    "default_alias_A",
    "default_alias_b",
    # Registry and workspaces
    "AlgorithmDescriptor",
    "AlgorithmRegistry",
    "resolve",
    "build_workspace",
    # Solving
    "LinearCache",
    "OperatorAssumptions",
    "init",
    "linsolve",
    "solve",
    "LinearSolution",
    "ReturnCode",
    # Preconditioners
    "IDENTITY",
    "is_identity",
    "jacobi",
    "ilu",
    # Errors
    "KrylovWrapperError",
    "UnsupportedAlgorithm",
    "EmptyHistory",
    "UnsupportedPreconditioner",
    # Configuration and utilities
    "KrylovConfig",
    "config",
    "load_matrix_market",
    "poisson_2d",
]
