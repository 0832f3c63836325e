"""
Solution objects returned by the solve orchestrator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ReturnCode(str, Enum):
    """Terminal status of a solve."""
    SUCCESS = "Success"
    MAXITERS = "MaxIters"
    FAILURE = "Failure"

    @classmethod
    def from_stats(cls, stats, itmax: int) -> "ReturnCode":
        if stats.solved:
            return cls.SUCCESS
        if itmax > 0 and stats.niter >= itmax:
            return cls.MAXITERS
        return cls.FAILURE


@dataclass
class LinearSolution:
    """
    Result of solving a linear system.

    Attributes
    ----------
    u : numpy.ndarray
        Solution vector, the same object as the cache's ``u``
    resid : float
        Final residual norm ||b - Au||
    iters : int
        Number of iterations performed
    retcode : ReturnCode
        Whether the solve converged
    alg : AlgorithmConfig
        Configuration the solve ran with
    residuals : tuple of float
        Residual history, starting with the initial residual
    solve_time : float
        Time taken for the solve (seconds)
    setup_time : float
        Time taken to allocate the workspace (seconds), 0 when it was reused
    reason : str
        Human-readable reason for termination
    """
    u: Any
    resid: float
    iters: int
    retcode: ReturnCode
    alg: Any = None
    residuals: tuple = field(default_factory=tuple)
    solve_time: float = 0.0
    setup_time: float = 0.0
    reason: str = ""

    @property
    def converged(self) -> bool:
        return self.retcode is ReturnCode.SUCCESS

    def __str__(self):
        status = "Converged" if self.converged else "Not converged"
        return (
            f"{status} in {self.iters} iterations ({self.retcode.value})\n"
            f"  Residual norm: {self.resid:.2e}\n"
            f"  Solve time: {self.solve_time:.4f}s"
        )

    def to_dict(self):
        """Convert to a plain dictionary."""
        return {
            "converged": self.converged,
            "niter": self.iters,
            "residual_norm": self.resid,
            "retcode": self.retcode.value,
            "time": self.solve_time,
            "setup_time": self.setup_time,
            "reason": self.reason,
        }
