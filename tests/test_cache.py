"""Tests for LinearCache construction and staleness."""

import numpy as np
import pytest

import krylov_wrappers as kw


class TestInit:
    """init() builds a stale cache around a placeholder workspace."""

    def test_defaults(self, spd_diag) -> None:
        """Defaults: zero u, sqrt(eps) tolerances, len(b) iterations, GMRES."""
        A, b = spd_diag
        cache = kw.init(A, b)
        assert cache.isfresh
        assert cache.alg.algorithm == "gmres"
        assert cache.cacheval.shape == (0, 0)
        assert cache.cacheval.x is cache.u
        np.testing.assert_array_equal(cache.u, np.zeros(3))
        assert cache.abstol == pytest.approx(np.sqrt(np.finfo(np.float64).eps))
        assert cache.reltol == cache.abstol
        assert cache.maxiters == 3
        assert cache.assumptions.issquare
        assert kw.is_identity(cache.Pl) and kw.is_identity(cache.Pr)

    def test_aliasing_default(self, spd_diag) -> None:
        """A and b are kept, not copied."""
        A, b = spd_diag
        cache = kw.init(A, b, kw.krylov_cg())
        assert cache.A is A
        assert cache.b is b

    def test_no_alias_copies(self, spd_diag) -> None:
        """alias_A=False and alias_b=False copy the operands."""
        A, b = spd_diag
        cache = kw.init(A, b, kw.krylov_cg(), alias_A=False, alias_b=False)
        assert cache.A is not A
        assert cache.b is not b
        A[0, 0] = 100.0
        assert cache.A[0, 0] == 4.0

    def test_user_buffer(self, spd_diag) -> None:
        """A caller-provided u receives the solution."""
        A, b = spd_diag
        u = np.zeros(3)
        sol = kw.linsolve(A, b, kw.krylov_cg(), u=u, reltol=1e-12)
        assert sol.u is u
        np.testing.assert_allclose(u, np.ones(3), rtol=1e-8)

    @pytest.mark.parametrize("dtype", [np.int64, np.float32])
    def test_lossy_buffer_rejected(self, dtype) -> None:
        """A u that would truncate a float64 solution is refused."""
        A = np.diag([4.0, 9.0, 16.0])
        b = np.array([2.0, 3.0, 4.0])
        with pytest.raises(TypeError, match="cannot hold"):
            kw.linsolve(A, b, kw.krylov_cg(), u=np.zeros(3, dtype=dtype))

    def test_complex_buffer_accepted(self, spd_diag) -> None:
        """A complex u can hold a real solution."""
        A, b = spd_diag
        u = np.zeros(3, dtype=np.complex128)
        sol = kw.linsolve(A, b, kw.krylov_cg(), u=u, reltol=1e-12)
        assert sol.u is u
        np.testing.assert_allclose(u.real, np.ones(3), rtol=1e-8)

    def test_integer_rhs(self) -> None:
        """Integer data is solved in floating point."""
        A = np.diag([4, 9, 16])
        b = np.array([4, 9, 16])
        cache = kw.init(A, b, kw.krylov_cg())
        assert cache.u.dtype == np.float64
        sol = cache.solve()
        np.testing.assert_allclose(sol.u, np.ones(3), rtol=1e-6)

    def test_rectangular_assumptions(self) -> None:
        """Rectangular systems are flagged as non-square and get u of length n."""
        A = np.ones((5, 3))
        cache = kw.init(A, np.ones(5), kw.krylov_lsmr())
        assert cache.assumptions.issquare is False
        assert cache.u.shape == (3,)


class TestStaleness:
    """Changing the system marks the cache stale."""

    def test_assigning_A(self, spd_diag) -> None:
        """A new A forces a new workspace and a new solution."""
        A, b = spd_diag
        cache = kw.init(A, b, kw.krylov_cg(), reltol=1e-12)
        cache.solve()
        old = cache.cacheval
        cache.A = 2 * A
        assert cache.isfresh
        sol = cache.solve()
        assert cache.cacheval is not old
        np.testing.assert_allclose(sol.u, 0.5 * np.ones(3), rtol=1e-8)

    def test_shape_change(self, spd_diag) -> None:
        """A differently shaped system gets a differently shaped workspace."""
        A, b = spd_diag
        cache = kw.init(A, b, kw.krylov_gmres(), reltol=1e-12)
        cache.solve()
        cache.A = np.diag([1.0, 2.0, 3.0, 4.0])
        cache.b = np.array([1.0, 2.0, 3.0, 4.0])
        cache.u = np.zeros(4)
        cache.maxiters = 10
        sol = cache.solve()
        assert cache.cacheval.shape == (4, 4)
        assert cache.cacheval.memory == 4
        np.testing.assert_allclose(sol.u, np.ones(4), rtol=1e-8)

    def test_rhs_length_change(self, spd_diag) -> None:
        """A right-hand side of another length marks the cache stale."""
        A, b = spd_diag
        cache = kw.init(A, b, kw.krylov_cg())
        cache.solve()
        cache.b = np.ones(3)
        assert not cache.isfresh
        cache.b = np.ones(4)
        assert cache.isfresh

    def test_reset(self, spd_diag) -> None:
        """reset() marks the cache stale explicitly."""
        A, b = spd_diag
        cache = kw.init(A, b, kw.krylov_cg())
        cache.solve()
        cache.reset()
        assert cache.isfresh

    def test_assigning_u_rebinds_workspace(self, spd_diag) -> None:
        """A new u becomes the workspace's solution slot."""
        A, b = spd_diag
        cache = kw.init(A, b, kw.krylov_cg(), reltol=1e-12)
        cache.solve()
        workspace = cache.cacheval
        new_u = np.zeros(3)
        cache.u = new_u
        assert workspace.x is new_u
        assert not cache.isfresh
        sol = cache.solve()
        assert sol.u is new_u
        np.testing.assert_allclose(new_u, np.ones(3), rtol=1e-8)

    def test_assigning_integer_u_rejected(self, spd_diag) -> None:
        """An integer u is refused and the old buffer stays bound."""
        A, b = spd_diag
        cache = kw.init(A, b, kw.krylov_cg())
        old = cache.u
        with pytest.raises(TypeError):
            cache.u = np.zeros(3, dtype=int)
        assert cache.u is old
        assert cache.cacheval.x is old


class TestLinsolve:
    """One-shot solve."""

    def test_linsolve(self, poisson) -> None:
        """linsolve() solves and reports the method it used."""
        A, b = poisson
        sol = kw.linsolve(A, b, kw.krylov_cg(), reltol=1e-10, maxiters=200)
        assert sol.converged
        assert sol.alg.algorithm == "cg"
        np.testing.assert_allclose(A @ sol.u, b, atol=1e-7)
        assert sol.to_dict()["converged"] is True
        assert "Converged" in str(sol)
