"""
Linear-system cache: the system data plus the cached solver workspace.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from .algorithms import (
    AlgorithmConfig,
    default_alias_A,
    default_alias_b,
    krylov_gmres,
)
from .config import config
from .convergence import LinearSolution
from .factory import build_workspace
from .preconditioners import IDENTITY
from .solver import solve

logger = logging.getLogger(__name__)


@dataclass
class OperatorAssumptions:
    """Structural hints about A. Most methods ignore them."""
    issquare: Optional[bool] = None


def default_tol(dtype: Any) -> float:
    """sqrt(eps) of the real type underlying dtype."""
    dtype = np.dtype(dtype)
    if not np.issubdtype(dtype, np.inexact):
        dtype = np.dtype(config.DEFAULT_DTYPE)
    return float(np.sqrt(np.finfo(dtype).eps))


def working_dtype(A: Any, b: Any) -> np.dtype:
    """Floating-point dtype the system Au = b is solved in."""
    return np.result_type(getattr(A, "dtype", config.DEFAULT_DTYPE),
                          np.asarray(b).dtype, config.DEFAULT_DTYPE)


def check_solution_buffer(u: Any, dtype: Any) -> None:
    """
    Check that u can hold a solution of the given dtype without loss.

    Raises
    ------
    TypeError
        If u is not a floating-point array, or its dtype cannot safely
        hold values of ``dtype``
    """
    if not isinstance(u, np.ndarray):
        raise TypeError(f"u must be a numpy.ndarray, got {type(u).__name__}")
    if not np.issubdtype(u.dtype, np.inexact) or not np.can_cast(dtype, u.dtype):
        raise TypeError(
            f"u of dtype {u.dtype} cannot hold a solution of dtype {np.dtype(dtype)}"
        )


class LinearCache:
    """
    Holds a linear system Au = b and the workspace used to solve it.

    Assigning a new ``A``, or a ``b`` of a different length, marks the cache
    stale so the next solve allocates a fresh workspace.

    Attributes
    ----------
    b, u : numpy.ndarray
        Right-hand side and solution buffer
    Pl, Pr : Any
        Left and right preconditioners, ``IDENTITY`` for none
    abstol, reltol : float
        Absolute and relative tolerances
    maxiters : int
        Iteration limit
    verbose : bool
        Log every iteration at DEBUG level
    alg : AlgorithmConfig
        Method this cache solves with
    isfresh : bool
        The cached workspace must be rebuilt before the next solve
    cacheval : KrylovWorkspace or None
        The cached workspace
    """

    def __init__(self,
                 A: Any,
                 b: Any,
                 u: Any,
                 alg: AlgorithmConfig,
                 Pl: Any = IDENTITY,
                 Pr: Any = IDENTITY,
                 abstol: float = 1e-8,
                 reltol: float = 1e-8,
                 maxiters: int = 0,
                 verbose: bool = False,
                 assumptions: Optional[OperatorAssumptions] = None,
                 cacheval: Any = None,
                 isfresh: bool = True):
        self._A = A
        self._b = b
        self._u = u
        self.alg = alg
        self.Pl = Pl
        self.Pr = Pr
        self.abstol = abstol
        self.reltol = reltol
        self.maxiters = maxiters
        self.verbose = verbose
        self.assumptions = assumptions or OperatorAssumptions()
        self.cacheval = cacheval
        self.isfresh = isfresh

    @property
    def A(self):
        return self._A

    @A.setter
    def A(self, value):
        self._A = value
        self.reset()

    @property
    def b(self):
        return self._b

    @b.setter
    def b(self, value):
        if np.shape(value) != np.shape(self._b):
            self.reset()
        self._b = value

    @property
    def u(self):
        return self._u

    @u.setter
    def u(self, value):
        check_solution_buffer(value, working_dtype(self._A, self._b))
        self._u = value
        if self.cacheval is not None:
            self.cacheval.x = value

    def reset(self):
        """Mark the cached workspace stale."""
        if not self.isfresh:
            logger.debug("Linear cache for %s marked stale", self.alg.algorithm)
        self.isfresh = True

    def solve(self) -> LinearSolution:
        return solve(self, self.alg)

    def __repr__(self):
        return (f"LinearCache(alg={self.alg.algorithm!r}, shape={tuple(self._A.shape)}, "
                f"isfresh={self.isfresh})")


def init(A: Any,
         b: Any,
         alg: Optional[AlgorithmConfig] = None,
         *,
         u: Any = None,
         Pl: Any = IDENTITY,
         Pr: Any = IDENTITY,
         abstol: Optional[float] = None,
         reltol: Optional[float] = None,
         maxiters: Optional[int] = None,
         verbose: bool = False,
         alias_A: Optional[bool] = None,
         alias_b: Optional[bool] = None,
         assumptions: Optional[OperatorAssumptions] = None) -> LinearCache:
    """
    Create a LinearCache holding a placeholder workspace.

    Parameters
    ----------
    A : sparse matrix, ndarray or LinearOperator
        System matrix
    b : array-like
        Right-hand side
    alg : AlgorithmConfig, optional
        Method to solve with. Default is GMRES.
    u : numpy.ndarray, optional
        Solution buffer, zeros when omitted
    Pl, Pr : Any
        Left and right preconditioners
    abstol, reltol : float, optional
        Tolerances, sqrt(eps) of the working dtype when omitted
    maxiters : int, optional
        Iteration limit, ``len(b)`` when omitted
    verbose : bool
        Log every iteration at DEBUG level
    alias_A, alias_b : bool, optional
        Keep the caller's A / b instead of copying them. Defaults to the
        algorithm's aliasing policy.
    assumptions : OperatorAssumptions, optional
        Structural hints about A

    Returns
    -------
    cache : LinearCache

    Raises
    ------
    UnsupportedAlgorithm
        If ``alg.algorithm`` is not registered
    TypeError
        If ``u`` cannot hold the solution without loss of precision
    """
    if alg is None:
        alg = krylov_gmres()
    if alias_A is None:
        alias_A = default_alias_A(alg, A, b)
    if alias_b is None:
        alias_b = default_alias_b(alg, A, b)

    if not alias_A:
        A = A.copy()
    b = np.asarray(b) if alias_b else np.array(b, copy=True)

    dtype = working_dtype(A, b)
    if u is None:
        u = np.zeros(A.shape[1], dtype=dtype)
    else:
        check_solution_buffer(u, dtype)
    if abstol is None:
        abstol = default_tol(dtype)
    if reltol is None:
        reltol = default_tol(dtype)
    if maxiters is None:
        maxiters = b.shape[0]
    if assumptions is None:
        assumptions = OperatorAssumptions(issquare=A.shape[0] == A.shape[1])

    cacheval = build_workspace(alg, A, b, u, placeholder=True)
    return LinearCache(A, b, u, alg, Pl=Pl, Pr=Pr, abstol=abstol, reltol=reltol,
                       maxiters=maxiters, verbose=verbose, assumptions=assumptions,
                       cacheval=cacheval, isfresh=True)


def linsolve(A: Any,
             b: Any,
             alg: Optional[AlgorithmConfig] = None,
             **kwargs) -> LinearSolution:
    """
    One-shot solve of Au = b.

    Examples
    --------
    >>> import numpy as np
    >>> from krylov_wrappers import linsolve, krylov_cg
    >>> A = np.diag([4.0, 9.0, 16.0])
    >>> sol = linsolve(A, np.array([4.0, 9.0, 16.0]), krylov_cg())
    >>> sol.converged
    True
    """
    return init(A, b, alg, **kwargs).solve()
