"""
Example demonstrating the krylov_wrappers package.
"""

import numpy as np
import scipy.sparse as sp

import krylov_wrappers as kw


def example_one_shot():
    """One-shot solve of a 2D Poisson problem with GMRES."""
    print("=" * 70)
    print("Example 1: linsolve() with GMRES")
    print("=" * 70)

    A = kw.poisson_2d(40, 40)
    b = np.random.rand(A.shape[0])

    sol = kw.linsolve(A, b, kw.krylov_gmres(gmres_restart=30),
                      reltol=1e-8, maxiters=2000)
    print(sol)
    print(f"Return code: {sol.retcode.value}")
    print(f"History length: {len(sol.residuals)}")
    print()


def example_cached_workspace():
    """Repeated solves reuse the workspace."""
    print("=" * 70)
    print("Example 2: LinearCache with workspace reuse")
    print("=" * 70)

    A = kw.poisson_2d(60, 60)
    cache = kw.init(A, np.random.rand(A.shape[0]), kw.krylov_cg(),
                    Pl=kw.jacobi(A), maxiters=1000)

    for k in range(3):
        cache.b = np.random.rand(A.shape[0])
        sol = cache.solve()
        print(f"Solve {k + 1}: {sol.iters} iterations, "
              f"setup {sol.setup_time:.4f}s, solve {sol.solve_time:.4f}s")
    print()


def example_least_squares():
    """LSMR on an overdetermined system and CRAIGMR on an underdetermined one."""
    print("=" * 70)
    print("Example 3: least-squares and least-norm problems")
    print("=" * 70)

    rng = np.random.default_rng(0)
    A = sp.random(200, 50, density=0.1, random_state=1, format="csr") + sp.eye(200, 50)
    b = rng.standard_normal(200)
    sol = kw.linsolve(A, b, kw.krylov_lsmr(), maxiters=500)
    print(f"LSMR:    {sol.retcode.value}, ||b - Ax|| = {sol.resid:.3e}")

    sol = kw.linsolve(A.T.tocsr(), rng.standard_normal(50), kw.krylov_craigmr(),
                      maxiters=500)
    print(f"CRAIGMR: {sol.retcode.value}, ||x|| = {np.linalg.norm(sol.u):.3e}")
    print()


def example_registry():
    """List the registered methods."""
    print("=" * 70)
    print("Example 4: algorithm registry")
    print("=" * 70)

    for name in kw.AlgorithmRegistry.list_algorithms():
        d = kw.resolve(name)
        print(f"{name:10s} {d.workspace_tag:20s} restart={d.supports_restart!s:5s} "
              f"window={d.supports_window!s:5s} M={d.left_preconditioner!s:5s} "
              f"N={d.right_preconditioner}")
    print()


if __name__ == "__main__":
    example_one_shot()
    example_cached_workspace()
    example_least_squares()
    example_registry()
