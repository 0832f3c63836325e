"""
Workspaces for square systems, bound to scipy.sparse.linalg routines.
"""

import scipy.sparse.linalg as spla

from .base import (
    KrylovWorkspace,
    RestartedWorkspace,
    WindowedWorkspace,
    relative_tolerance,
    status_from_info,
)


class _CallbackWorkspace(KrylovWorkspace):
    """Workspace for routines with the common (rtol, atol, maxiter, M, callback) signature."""

    routine = None
    takes_preconditioner = True

    def _run(self, A, b, M, monitor, *, atol, rtol, itmax, **kwargs):
        if self.takes_preconditioner:
            kwargs["M"] = M
        else:
            self._reject_preconditioner(M)
        x, info = self.routine(A, b, rtol=rtol, atol=atol, maxiter=itmax,
                               callback=monitor, **kwargs)
        return (x, *status_from_info(info))


class CgWorkspace(_CallbackWorkspace):
    """Conjugate gradient, for Hermitian positive definite systems."""
    algorithm = "cg"
    routine = staticmethod(spla.cg)


class CgsWorkspace(_CallbackWorkspace):
    algorithm = "cgs"
    routine = staticmethod(spla.cgs)


class BicgWorkspace(_CallbackWorkspace):
    algorithm = "bicg"
    routine = staticmethod(spla.bicg)


class BicgstabWorkspace(_CallbackWorkspace):
    """BiCGStab, for general non-Hermitian systems."""
    algorithm = "bicgstab"
    routine = staticmethod(spla.bicgstab)


class QmrWorkspace(_CallbackWorkspace):
    # qmr needs rmatvec on its preconditioners, so none are passed
    algorithm = "qmr"
    routine = staticmethod(spla.qmr)
    takes_preconditioner = False


class TfqmrWorkspace(_CallbackWorkspace):
    algorithm = "tfqmr"
    routine = staticmethod(spla.tfqmr)


class MinresWorkspace(WindowedWorkspace):
    """MINRES, for Hermitian (possibly indefinite) systems."""

    algorithm = "minres"

    def _run(self, A, b, M, monitor, *, atol, rtol, itmax, **kwargs):
        x, info = spla.minres(A, b, rtol=relative_tolerance(atol, rtol, b),
                              maxiter=itmax, M=M, callback=monitor, **kwargs)
        return (x, *status_from_info(info))


class GmresWorkspace(RestartedWorkspace):
    """
    Restarted GMRES with ``memory`` basis vectors per cycle.

    SciPy counts ``maxiter`` in restart cycles, so each cycle is run as its
    own call, warm-started from the previous one, with the last cycle
    shortened to end exactly at ``itmax`` inner iterations.

    Inner iterations record SciPy's preconditioned residual estimate. The
    final history entry is the true residual of the returned solution.
    """

    algorithm = "gmres"

    def _run(self, A, b, M, monitor, *, atol, rtol, itmax, **kwargs):
        stats = self.stats
        x = None
        info = 0
        while stats.niter < itmax:
            done = stats.niter
            # the tolerance is relative to ||b|| in every cycle, not to x0
            x, info = spla.gmres(A, b, x0=x, rtol=rtol, atol=atol,
                                 restart=min(self.memory, itmax - done), maxiter=1,
                                 M=M, callback=monitor.estimate,
                                 callback_type="pr_norm", **kwargs)
            if info <= 0 or stats.niter == done:
                break
        monitor(x, count=False)
        return (x, *status_from_info(info))


class LgmresWorkspace(RestartedWorkspace):
    """LGMRES; ``memory`` is the number of inner iterations per outer one."""

    algorithm = "lgmres"

    def _run(self, A, b, M, monitor, *, atol, rtol, itmax, **kwargs):
        self._reject_preconditioner(M)
        x, info = spla.lgmres(A, b, rtol=rtol, atol=atol, maxiter=itmax,
                              callback=monitor, inner_m=self.memory, **kwargs)
        return (x, *status_from_info(info))


class GcrotmkWorkspace(RestartedWorkspace):
    algorithm = "gcrotmk"

    def _run(self, A, b, M, monitor, *, atol, rtol, itmax, **kwargs):
        self._reject_preconditioner(M)
        x, info = spla.gcrotmk(A, b, rtol=rtol, atol=atol, maxiter=itmax,
                               callback=monitor, m=self.memory, **kwargs)
        return (x, *status_from_info(info))
