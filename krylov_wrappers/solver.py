"""
Solve orchestrator: runs a cached Krylov workspace against a LinearCache.
"""

import logging
import time
import warnings
from typing import Optional

from .algorithms import AlgorithmConfig
from .convergence import LinearSolution, ReturnCode
from .exceptions import EmptyHistory, UnsupportedPreconditioner
from .factory import build_workspace
from .preconditioners import is_identity, normalize
from .registry import AlgorithmRegistry

logger = logging.getLogger(__name__)


def solve(cache, alg: Optional[AlgorithmConfig] = None) -> LinearSolution:
    """
    Solve the system held by ``cache`` with the Krylov method ``alg``.

    The workspace is (re)built only when ``cache.isfresh`` is set and is
    reused otherwise. The solution is written into ``cache.u`` in place.

    Parameters
    ----------
    cache : LinearCache
        System data and the cached workspace
    alg : AlgorithmConfig, optional
        Configuration to run with. Defaults to ``cache.alg``.

    Returns
    -------
    sol : LinearSolution
        Solution, final residual, iteration count and return code

    Raises
    ------
    UnsupportedAlgorithm
        If the algorithm is not registered
    EmptyHistory
        If the workspace recorded no residual
    TypeError
        If the cached workspace belongs to another algorithm
    """
    if alg is None:
        alg = cache.alg
    descriptor = AlgorithmRegistry.resolve(alg.algorithm)

    setup_time = 0.0
    if cache.isfresh:
        t0 = time.perf_counter()
        cache.cacheval = build_workspace(alg, cache.A, cache.b, cache.u)
        cache.isfresh = False
        setup_time = time.perf_counter() - t0

    workspace = cache.cacheval
    if type(workspace) is not descriptor.workspace:
        raise TypeError(
            f"Cached workspace {type(workspace).__name__} does not match "
            f"algorithm {alg.algorithm!r} ({descriptor.workspace_tag})"
        )

    M = normalize(cache.Pl)
    N = normalize(cache.Pr)

    options = dict(alg.kwargs)
    options.update(
        atol=float(cache.abstol),
        rtol=float(cache.reltol),
        itmax=int(cache.maxiters),
        verbose=1 if cache.verbose else 0,
        ldiv=True,
        history=True,
    )

    if descriptor.left_preconditioner:
        options["M"] = M
    else:
        options.pop("M", None)
        if not is_identity(M):
            warnings.warn(f"{alg.algorithm} doesn't support left preconditioning.",
                          UnsupportedPreconditioner, stacklevel=2)
    if descriptor.right_preconditioner:
        options["N"] = N
    else:
        options.pop("N", None)
        if not is_identity(N):
            warnings.warn(f"{alg.algorithm} doesn't support right preconditioning.",
                          UnsupportedPreconditioner, stacklevel=2)

    workspace.solve(cache.A, cache.b, *alg.args, **options)

    stats = workspace.stats
    if not stats.residuals:
        raise EmptyHistory(
            f"{descriptor.workspace_tag} returned without a residual history"
        )
    resid = stats.residuals[-1]

    return LinearSolution(
        u=cache.u,
        resid=resid,
        iters=stats.niter,
        retcode=ReturnCode.from_stats(stats, int(cache.maxiters)),
        alg=alg,
        residuals=tuple(stats.residuals),
        solve_time=stats.timer,
        setup_time=setup_time,
        reason=stats.status,
    )
