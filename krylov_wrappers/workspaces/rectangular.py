"""
Workspaces for least-squares and least-norm problems.

``lsqr`` and ``lsmr`` call SciPy directly. The normal-equation methods run a
square SciPy routine on A^H A (least squares) or A A^H (least norm).
"""

import numpy as np
import scipy.sparse.linalg as spla

from .base import (
    CONVERGED,
    MAXITERS,
    KrylovWorkspace,
    WindowedWorkspace,
    adjoint,
    normal_operator,
    relative_tolerance,
    status_from_info,
)

# istop codes shared by lsqr and lsmr
_ISTOP_STATUS = {
    0: "x = 0 is the exact solution",
    1: CONVERGED,
    2: "found a least-squares solution given atol and rtol",
    3: "condition number exceeds conlim",
    4: CONVERGED,
    5: "found a least-squares solution to machine precision",
    6: "condition number exceeds machine precision",
    7: MAXITERS,
}
_ISTOP_SOLVED = (0, 1, 2, 4, 5)


class _BidiagonalizationWorkspace(WindowedWorkspace):
    """lsqr and lsmr report only their final state, so history holds r0 and r_final."""

    def _run(self, A, b, M, monitor, *, atol, rtol, itmax, **kwargs):
        self._reject_preconditioner(M)
        x, istop, itn = self._routine(A, b, rtol, itmax, **kwargs)
        monitor(x, count=False)
        self.stats.niter = int(itn)
        return x, istop in _ISTOP_SOLVED, _ISTOP_STATUS.get(istop, "unknown")


class LsqrWorkspace(_BidiagonalizationWorkspace):
    algorithm = "lsqr"

    def _routine(self, A, b, rtol, itmax, **kwargs):
        result = spla.lsqr(A, b, atol=rtol, btol=rtol, iter_lim=itmax, **kwargs)
        return result[0], result[1], result[2]


class LsmrWorkspace(_BidiagonalizationWorkspace):
    """LSMR, for least-squares problems."""

    algorithm = "lsmr"

    def _routine(self, A, b, rtol, itmax, **kwargs):
        result = spla.lsmr(A, b, atol=rtol, btol=rtol, maxiter=itmax, **kwargs)
        return result[0], result[1], result[2]


class CglsWorkspace(KrylovWorkspace):
    """CG on the normal equations A^H A x = A^H b."""

    algorithm = "cgls"

    def _run(self, A, b, M, monitor, *, atol, rtol, itmax, **kwargs):
        self._reject_preconditioner(M)
        AH = adjoint(A)
        n = self.shape[1]
        normal = normal_operator(AH, A, (n, n), self.dtype)
        x, info = spla.cg(normal, AH @ b, rtol=rtol, atol=atol, maxiter=itmax,
                          callback=monitor, **kwargs)
        return (x, *status_from_info(info))


class CrlsWorkspace(KrylovWorkspace):
    """MINRES on the normal equations A^H A x = A^H b."""

    algorithm = "crls"

    def _run(self, A, b, M, monitor, *, atol, rtol, itmax, **kwargs):
        self._reject_preconditioner(M)
        AH = adjoint(A)
        n = self.shape[1]
        normal = normal_operator(AH, A, (n, n), self.dtype)
        rhs = AH @ b
        x, info = spla.minres(normal, rhs, rtol=relative_tolerance(atol, rtol, rhs),
                              maxiter=itmax, callback=monitor, **kwargs)
        return (x, *status_from_info(info))


class CgneWorkspace(KrylovWorkspace):
    """CG on A A^H y = b with x = A^H y, the minimum-norm solution."""

    algorithm = "cgne"

    def _run(self, A, b, M, monitor, *, atol, rtol, itmax, **kwargs):
        self._reject_preconditioner(M)
        AH = adjoint(A)
        m = self.shape[0]
        normal = normal_operator(A, AH, (m, m), self.dtype)
        y, info = spla.cg(normal, b, rtol=rtol, atol=atol, maxiter=itmax,
                          callback=lambda yk: monitor(AH @ np.ravel(yk)), **kwargs)
        return (AH @ y, *status_from_info(info))


class CraigmrWorkspace(KrylovWorkspace):
    """
    MINRES on A A^H y = b with x = A^H y.

    In exact arithmetic this is CRAIGMR: the iterates minimise ||b - A x||
    over the Krylov subspace and converge to the minimum-norm solution of a
    consistent system.
    """

    algorithm = "craigmr"

    def _run(self, A, b, M, monitor, *, atol, rtol, itmax, **kwargs):
        self._reject_preconditioner(M)
        AH = adjoint(A)
        m = self.shape[0]
        normal = normal_operator(A, AH, (m, m), self.dtype)
        y, info = spla.minres(normal, b, rtol=relative_tolerance(atol, rtol, b),
                              maxiter=itmax,
                              callback=lambda yk: monitor(AH @ np.ravel(yk)),
                              **kwargs)
        return (AH @ y, *status_from_info(info))
