"""
Test-matrix generation and loading.
"""

import numpy as np
import scipy.sparse as sp


def poisson_2d(nx: int, ny: int, format: str = "csc"):
    """
    Five-point 2D Poisson matrix on an (nx * ny) grid with Dirichlet BC.

    Parameters
    ----------
    nx : int
        Number of grid points in x-direction
    ny : int
        Number of grid points in y-direction
    format : str, optional
        Sparse format of the result. Default is "csc".

    Returns
    -------
    A : scipy.sparse matrix
        Symmetric positive definite matrix of size (nx*ny, nx*ny)
    """
    Tx = sp.diags([-np.ones(nx - 1), 2.0 * np.ones(nx), -np.ones(nx - 1)], [-1, 0, 1])
    Ty = sp.diags([-np.ones(ny - 1), 2.0 * np.ones(ny), -np.ones(ny - 1)], [-1, 0, 1])
    A = sp.kron(sp.identity(ny), Tx) + sp.kron(Ty, sp.identity(nx))
    return A.asformat(format)


def load_matrix_market(filename: str, format: str = "csc"):
    """
    Load a matrix from a Matrix Market file.

    Parameters
    ----------
    filename : str
        Path to the Matrix Market file (.mtx)
    format : str, optional
        Sparse format of the result. Default is "csc".

    Returns
    -------
    A : scipy.sparse matrix
    """
    from scipy.io import mmread
    A = mmread(filename)
    if not sp.issparse(A):
        A = sp.csc_matrix(A)
    return A.asformat(format)
