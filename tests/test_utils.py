"""Tests for matrix helpers, configuration and solution objects."""

import numpy as np
import scipy.sparse as sp
from scipy.io import mmwrite

import krylov_wrappers as kw
from krylov_wrappers.workspaces import SolverStats


class TestMatrices:
    """poisson_2d and load_matrix_market."""

    def test_poisson_structure(self) -> None:
        """The five-point stencil is symmetric with 4 on the diagonal."""
        A = kw.poisson_2d(4, 3)
        assert A.shape == (12, 12)
        assert A.format == "csc"
        np.testing.assert_allclose(A.diagonal(), 4.0)
        assert abs(A - A.T).max() == 0.0
        # no coupling across grid rows
        assert A[3, 4] == 0.0
        assert A[0, 1] == -1.0
        assert A[0, 4] == -1.0

    def test_poisson_format(self) -> None:
        """Other sparse formats can be requested."""
        assert kw.poisson_2d(3, 3, format="csr").format == "csr"

    def test_load_matrix_market(self, tmp_path) -> None:
        """Matrices written with mmwrite load back as CSC."""
        A = kw.poisson_2d(3, 3)
        path = tmp_path / "poisson.mtx"
        mmwrite(str(path), A)
        B = kw.load_matrix_market(str(path))
        assert sp.issparse(B)
        assert B.format == "csc"
        np.testing.assert_allclose(B.toarray(), A.toarray())


class TestConfig:
    """Global configuration."""

    def test_reset(self) -> None:
        """reset() restores the defaults."""
        config = kw.KrylovConfig()
        config.DEFAULT_MEMORY_CAP = 3
        config.DEFAULT_WINDOW = 1
        config.reset()
        assert config.DEFAULT_MEMORY_CAP == 20
        assert config.DEFAULT_WINDOW == 5
        assert "DEFAULT_MEMORY_CAP=20" in repr(config)


class TestReturnCode:
    """ReturnCode derivation from workspace statistics."""

    def test_success(self) -> None:
        """A solved workspace reports SUCCESS."""
        stats = SolverStats(niter=4, solved=True)
        assert kw.ReturnCode.from_stats(stats, 10) is kw.ReturnCode.SUCCESS

    def test_maxiters(self) -> None:
        """Exhausting the iteration limit reports MAXITERS."""
        stats = SolverStats(niter=10, solved=False)
        assert kw.ReturnCode.from_stats(stats, 10) is kw.ReturnCode.MAXITERS

    def test_failure(self) -> None:
        """Stopping early without convergence reports FAILURE."""
        stats = SolverStats(niter=3, solved=False)
        assert kw.ReturnCode.from_stats(stats, 10) is kw.ReturnCode.FAILURE

    def test_solution_dict(self) -> None:
        """to_dict() exposes the summary fields."""
        sol = kw.LinearSolution(u=np.ones(2), resid=1e-3, iters=5,
                                retcode=kw.ReturnCode.MAXITERS, reason="limit")
        d = sol.to_dict()
        assert d["converged"] is False
        assert d["niter"] == 5
        assert d["retcode"] == "MaxIters"
        assert "Not converged" in str(sol)
