"""
Base workspace interface for Krylov solver bindings.

A workspace owns the mutable state of one solver: the solution buffer ``x``,
a residual buffer ``r`` and the statistics of the last solve. It is sized
once for an (m, n) system and reused for every later solve of that shape.
"""

import logging
import time
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np
import scipy.sparse as sp
import scipy.sparse.linalg as spla
from scipy.sparse.linalg import LinearOperator

from ..config import config
from ..preconditioners import IDENTITY, as_operator

logger = logging.getLogger(__name__)

SPARSE = "sparse"
DENSE = "dense"
OPERATOR = "operator"

CONVERGED = "solution good enough given atol and rtol"
MAXITERS = "maximum number of iterations exceeded"
BREAKDOWN = "breakdown or illegal input"


def representation_kind(A: Any) -> str:
    """Classify A as ``"sparse"``, ``"dense"`` or ``"operator"``."""
    if sp.issparse(A):
        return SPARSE
    if isinstance(A, np.ndarray):
        return DENSE
    return OPERATOR


def adjoint(A: Any) -> Any:
    """Conjugate transpose of a matrix or linear operator."""
    if sp.issparse(A) or isinstance(A, np.ndarray):
        return A.conj().T
    return spla.aslinearoperator(A).H


def status_from_info(info: int) -> tuple[bool, str]:
    """Translate SciPy's integer ``info`` into (solved, status)."""
    if info == 0:
        return True, CONVERGED
    if info > 0:
        return False, MAXITERS
    return False, BREAKDOWN


@dataclass
class SolverStats:
    """
    Statistics of the last solve.

    Attributes
    ----------
    niter : int
        Number of iterations performed
    solved : bool
        Whether the stopping criterion was met
    status : str
        Human-readable reason for termination
    residuals : list of float
        Residual norms, starting with the initial residual
    window_residuals : collections.deque
        The last ``window`` residual norms (windowed methods only)
    timer : float
        Time taken by the last solve (seconds)
    """
    niter: int = 0
    solved: bool = False
    status: str = "unknown"
    residuals: list = field(default_factory=list)
    window_residuals: deque = field(default_factory=lambda: deque(maxlen=0))
    timer: float = 0.0

    def reset(self, window: Optional[int] = None):
        self.niter = 0
        self.solved = False
        self.status = "unknown"
        self.residuals = []
        self.window_residuals = deque(maxlen=window or 0)
        self.timer = 0.0


class ResidualMonitor:
    """
    Per-iteration callback that records the residual ||rhs - op z||.

    Passed as ``callback`` to the SciPy routines. Routines that only report a
    relative residual estimate use :meth:`estimate` instead.
    """

    def __init__(self, workspace: "KrylovWorkspace", op: Any, rhs: np.ndarray,
                 history: bool = True, verbose: int = 0):
        self.workspace = workspace
        self.op = op
        self.rhs = rhs
        self.rhs_norm = float(np.linalg.norm(rhs))
        self.history = history
        self.verbose = verbose

    def __call__(self, z, count: bool = True):
        r = self.workspace.r
        np.subtract(self.rhs, self.op @ np.ravel(z), out=r)
        self.record(np.linalg.norm(r), count=count)

    def estimate(self, relative_norm: float):
        self.record(relative_norm * self.rhs_norm)

    def record(self, rnorm: float, count: bool = True):
        stats = self.workspace.stats
        if count:
            stats.niter += 1
        if self.history:
            stats.residuals.append(float(rnorm))
            stats.window_residuals.append(float(rnorm))
        if self.verbose:
            logger.debug("%s iteration %d: residual %.6e",
                         self.workspace.algorithm, stats.niter, rnorm)


class KrylovWorkspace(ABC):
    """
    Abstract base class for solver workspaces.

    Each subclass binds one Krylov method to a SciPy routine. Subclasses
    implement :meth:`_run`; the base class handles sizing, preconditioner
    conversion, right preconditioning, warm starts and history.

    Parameters
    ----------
    A : sparse matrix, ndarray or LinearOperator
        System matrix the workspace is sized for
    b : array-like
        Right-hand side the workspace is sized for
    """

    algorithm: str = ""
    window: Optional[int] = None

    def __init__(self, A: Any, b: Any):
        b = np.asarray(b)
        self.shape = tuple(int(k) for k in A.shape)
        m, n = self.shape
        self.kind = representation_kind(A)
        self.dtype = np.result_type(getattr(A, "dtype", config.DEFAULT_DTYPE),
                                    b.dtype, config.DEFAULT_DTYPE)
        self.x = np.zeros(n, dtype=self.dtype)
        self.r = np.zeros(m, dtype=self.dtype)
        self.stats = SolverStats()

    def __repr__(self):
        return f"{type(self).__name__}(shape={self.shape}, kind={self.kind!r})"

    def solve(self,
              A: Any,
              b: Any,
              x0: Any = None,
              *,
              M: Any = IDENTITY,
              N: Any = IDENTITY,
              atol: float = 0.0,
              rtol: float = 1e-8,
              itmax: int = 0,
              verbose: int = 0,
              ldiv: bool = True,
              history: bool = True,
              **kwargs) -> "KrylovWorkspace":
        """
        Solve Ax = b, writing the solution into ``self.x`` in place.

        Parameters
        ----------
        A : sparse matrix, ndarray or LinearOperator
            System matrix, of the shape the workspace was sized for
        b : array-like
            Right-hand side
        x0 : array-like, optional
            Initial guess. The solve starts from zero when omitted.
        M, N : Any
            Left and right preconditioners, ``IDENTITY`` for none
        atol, rtol : float
            Absolute and relative tolerances
        itmax : int
            Iteration limit, 0 for ``2 * max(m, n)``
        verbose : int
            Log every iteration at DEBUG level when positive
        ldiv : bool
            Apply preconditioners by division rather than multiplication
        history : bool
            Record the residual of every iteration in ``stats.residuals``
        **kwargs
            Extra keyword arguments forwarded to the SciPy routine

        Returns
        -------
        self : KrylovWorkspace
        """
        if tuple(A.shape) != self.shape:
            raise ValueError(
                f"{type(self).__name__} was sized for a {self.shape} system, "
                f"got {tuple(A.shape)}"
            )
        m, n = self.shape
        b = np.asarray(b)
        if itmax <= 0:
            itmax = 2 * max(m, n)

        self.stats.reset(self.window)
        t0 = time.perf_counter()

        Ml = as_operator(M, m, ldiv=ldiv, dtype=self.dtype)
        Nr = as_operator(N, n, ldiv=ldiv, dtype=self.dtype)

        # Solve for the correction z of x0, through A N when right preconditioned
        if x0 is None:
            rhs = b
        else:
            x0 = np.asarray(x0)
            rhs = b - A @ x0
        op = A if Nr is None else spla.aslinearoperator(A) @ Nr

        monitor = ResidualMonitor(self, op, rhs, history=history, verbose=verbose)
        monitor.record(monitor.rhs_norm, count=False)

        z, solved, status = self._run(op, rhs, Ml, monitor,
                                      atol=atol, rtol=rtol, itmax=itmax, **kwargs)

        if Nr is not None:
            z = Nr @ z
        if x0 is not None:
            z = x0 + z
        self.x[...] = z

        self.stats.solved = solved
        self.stats.status = status
        self.stats.timer = time.perf_counter() - t0
        if verbose:
            logger.debug("%s finished after %d iterations: %s",
                         self.algorithm, self.stats.niter, status)
        return self

    @abstractmethod
    def _run(self,
             A: Any,
             b: np.ndarray,
             M: Optional[LinearOperator],
             monitor: ResidualMonitor,
             *,
             atol: float,
             rtol: float,
             itmax: int,
             **kwargs) -> tuple[np.ndarray, bool, str]:
        """Run the SciPy routine and return (solution, solved, status)."""
        pass

    def _reject_preconditioner(self, M):
        if M is not None:
            raise ValueError(f"{self.algorithm} does not take a left preconditioner")


class RestartedWorkspace(KrylovWorkspace):
    """Workspace of a method that keeps ``memory`` basis vectors."""

    def __init__(self, A: Any, b: Any, memory: int):
        super().__init__(A, b)
        if memory < 1:
            raise ValueError(f"memory must be positive, got {memory}")
        self.memory = int(memory)

    def __repr__(self):
        return (f"{type(self).__name__}(shape={self.shape}, kind={self.kind!r}, "
                f"memory={self.memory})")


class WindowedWorkspace(KrylovWorkspace):
    """
    Workspace of a method that tracks a sliding window of residuals.

    ``window`` only bounds ``stats.window_residuals``, the last ``window``
    residual norms of a solve. It does not change when the solve stops:
    the SciPy routines have no windowed stopping rule, so convergence is
    decided by ``atol`` and ``rtol`` alone.
    """

    def __init__(self, A: Any, b: Any, window: Optional[int] = None):
        super().__init__(A, b)
        self.window = int(window) if window else config.DEFAULT_WINDOW
        self.stats.reset(self.window)


def normal_operator(A: Any, AH: Any, shape: tuple, dtype: Any) -> LinearOperator:
    """The Hermitian operator v -> A (AH v)."""
    def matvec(v):
        return A @ (AH @ np.ravel(v))

    return LinearOperator(shape, matvec=matvec, rmatvec=matvec, dtype=dtype)


def relative_tolerance(atol: float, rtol: float, b: np.ndarray) -> float:
    """Fold an absolute tolerance into a relative one for routines lacking atol."""
    bnorm = np.linalg.norm(b)
    if atol > 0 and bnorm > 0:
        return max(rtol, atol / bnorm)
    return rtol
