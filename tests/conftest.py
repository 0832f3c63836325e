"""Shared fixtures for the krylov_wrappers tests."""

import numpy as np
import pytest
import scipy.sparse as sp

import krylov_wrappers as kw


@pytest.fixture
def spd_diag() -> tuple[np.ndarray, np.ndarray]:
    """Return the 3x3 system diag(4, 9, 16) u = [4, 9, 16] with solution ones."""
    A = np.diag([4.0, 9.0, 16.0])
    b = np.array([4.0, 9.0, 16.0])
    return A, b


@pytest.fixture
def poisson() -> tuple[sp.spmatrix, np.ndarray]:
    """Return an 8x8-grid Poisson system (64 unknowns)."""
    A = kw.poisson_2d(8, 8)
    b = np.ones(A.shape[0])
    return A, b


@pytest.fixture
def nonsymmetric() -> tuple[sp.spmatrix, np.ndarray]:
    """Return a diagonally dominant, non-symmetric sparse system."""
    n = 64
    A = kw.poisson_2d(8, 8, format="csr") + sp.diags([0.3 * np.ones(n - 1)], [1])
    b = np.linspace(1.0, 2.0, n)
    return A.tocsr(), b
