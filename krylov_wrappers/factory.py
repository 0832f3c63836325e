"""
Construction of solver workspaces.

A cache first receives a cheap placeholder workspace, built before the real
problem size matters. The real workspace, sized to A and b, replaces it on
the first solve and whenever the cache goes stale.
"""

import logging
from typing import Any

import numpy as np
import scipy.sparse as sp

from .algorithms import AlgorithmConfig
from .config import config
from .registry import AlgorithmRegistry
from .workspaces import KrylovWorkspace, representation_kind
from .workspaces.base import DENSE, SPARSE

logger = logging.getLogger(__name__)


def placeholder_operands(A: Any, b: Any) -> tuple[Any, Any]:
    """
    Zero-sized stand-ins for (A, b) of the same representation kind.

    Sparse matrices keep their sparse class and dtype, dense arrays their
    dtype. Opaque operators cannot be shrunk and are returned unchanged,
    together with b.
    """
    kind = representation_kind(A)
    if kind == SPARSE:
        A0 = A.__class__((0, 0), dtype=A.dtype)
    elif kind == DENSE:
        A0 = np.empty((0, 0), dtype=A.dtype)
    else:
        return A, b
    return A0, np.zeros(0, dtype=np.asarray(b).dtype)


def restart_memory(alg: AlgorithmConfig, A: Any) -> int:
    """Memory of a restarted method: ``gmres_restart`` or ``min(20, rows)``."""
    if alg.gmres_restart != 0:
        return alg.gmres_restart
    return min(config.DEFAULT_MEMORY_CAP, A.shape[0])


def build_workspace(alg: AlgorithmConfig,
                    A: Any,
                    b: Any,
                    u: Any,
                    placeholder: bool = False) -> KrylovWorkspace:
    """
    Build the workspace for ``alg`` and alias its solution slot to u.

    Parameters
    ----------
    alg : AlgorithmConfig
        Algorithm configuration
    A : sparse matrix, ndarray or LinearOperator
        System matrix
    b : array-like
        Right-hand side
    u : numpy.ndarray
        Output buffer the workspace writes its solution into
    placeholder : bool
        Build a zero-sized placeholder instead of the real workspace

    Returns
    -------
    workspace : KrylovWorkspace

    Raises
    ------
    UnsupportedAlgorithm
        If ``alg.algorithm`` is not registered
    """
    descriptor = AlgorithmRegistry.resolve(alg.algorithm)
    KS = descriptor.workspace

    if placeholder:
        A0, b0 = placeholder_operands(A, b)
        if descriptor.supports_restart:
            workspace = KS(A0, b0, 1)
        else:
            workspace = KS(A0, b0)
    else:
        if descriptor.supports_restart:
            workspace = KS(A, b, restart_memory(alg, A))
        elif descriptor.supports_window and alg.window != 0:
            workspace = KS(A, b, window=alg.window)
        else:
            workspace = KS(A, b)

    workspace.x = u
    logger.debug("Built %s%s", workspace, " placeholder" if placeholder else "")
    return workspace
