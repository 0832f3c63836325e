"""
Preconditioner handles and their conversion to SciPy linear operators.

A preconditioner slot holds either the identity marker (``IDENTITY`` or
``None``) or an operator. With ``ldiv=True`` an operator P is applied by
division, y = P \\ x, so P should approximate A itself. With ``ldiv=False`` it
is applied by multiplication, y = P x, so P should approximate inv(A).
"""

import numpy as np
import scipy.linalg as sla
import scipy.sparse as sp
import scipy.sparse.linalg as spla
from scipy.sparse.linalg import LinearOperator
from typing import Any, Optional


class IdentityPreconditioner:
    """No-op preconditioner marker."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def solve(self, x):
        return x

    def __repr__(self):
        return "IDENTITY"


IDENTITY = IdentityPreconditioner()


def is_identity(P: Any) -> bool:
    """True when P marks the absence of a preconditioner."""
    return P is None or isinstance(P, IdentityPreconditioner)


def normalize(P: Any) -> Any:
    """Map every identity marker onto the canonical ``IDENTITY`` token."""
    return IDENTITY if is_identity(P) else P


class JacobiPreconditioner:
    """
    Diagonal preconditioner D = diag(A), applied by division.

    Attributes
    ----------
    diagonal : numpy.ndarray
        The diagonal of the matrix it was built from
    """

    def __init__(self, diagonal: np.ndarray):
        self.diagonal = np.asarray(diagonal)
        self.shape = (self.diagonal.size, self.diagonal.size)

    def solve(self, x):
        if x.ndim == 1:
            return x / self.diagonal
        return x / self.diagonal[:, None]

    def __repr__(self):
        return f"JacobiPreconditioner(n={self.diagonal.size})"


def jacobi(A: Any) -> JacobiPreconditioner:
    """
    Build a Jacobi (diagonal) preconditioner.

    Parameters
    ----------
    A : scipy.sparse matrix or numpy.ndarray
        Square system matrix

    Returns
    -------
    P : JacobiPreconditioner
        Preconditioner meant to be applied with ``ldiv=True``

    Raises
    ------
    ValueError
        If the diagonal has a zero entry
    """
    D = A.diagonal() if sp.issparse(A) else np.diagonal(np.asarray(A))
    if np.any(D == 0):
        raise ValueError("Zero diagonal entry, cannot build Jacobi preconditioner.")
    return JacobiPreconditioner(D.copy())


def ilu(A: Any, drop_tol: float = 0.0, fill_factor: float = 1.0):
    """
    Build an incomplete LU factorization with scipy.sparse.linalg.spilu.

    Parameters
    ----------
    A : scipy.sparse matrix or numpy.ndarray
        Square system matrix
    drop_tol : float, optional
        Drop tolerance for ILU factorization. Default is 0.0.
    fill_factor : float, optional
        Fill factor for ILU factorization. Default is 1.0 (ILU(0)).

    Returns
    -------
    P : scipy.sparse.linalg.SuperLU
        Factorization whose ``solve`` applies the preconditioner by division
    """
    # SuperLU prefers CSC format
    A_csc = sp.csc_matrix(A)
    return spla.spilu(A_csc, drop_tol=drop_tol, fill_factor=fill_factor)


def as_operator(P: Any,
                n: int,
                ldiv: bool = True,
                dtype: Any = None) -> Optional[LinearOperator]:
    """
    Turn a preconditioner handle into a LinearOperator for SciPy's ``M`` slot.

    SciPy applies ``M`` by multiplication, so under ``ldiv=True`` the returned
    operator computes P \\ x.

    Parameters
    ----------
    P : Any
        Identity marker, LinearOperator, object with ``solve``, sparse matrix,
        dense array or callable
    n : int
        Size of the (square) preconditioner
    ldiv : bool
        Apply by division (True) or by multiplication (False)
    dtype : numpy.dtype, optional
        dtype reported by the operator

    Returns
    -------
    M : LinearOperator or None
        None for the identity marker

    Raises
    ------
    TypeError
        If P cannot be applied
    """
    if is_identity(P):
        return None
    if isinstance(P, LinearOperator):
        return P

    if not ldiv:
        if callable(P) and not hasattr(P, "shape"):
            return LinearOperator((n, n), matvec=P, dtype=dtype)
        return spla.aslinearoperator(P)

    if hasattr(P, "solve"):
        matvec = P.solve
    elif sp.issparse(P):
        matvec = spla.splu(sp.csc_matrix(P)).solve
    elif isinstance(P, np.ndarray):
        lu_piv = sla.lu_factor(P)

        def matvec(x):
            return sla.lu_solve(lu_piv, x)
    elif callable(P):
        matvec = P
    else:
        raise TypeError(f"Cannot apply preconditioner of type {type(P).__name__}")

    return LinearOperator((n, n), matvec=matvec, dtype=dtype)
