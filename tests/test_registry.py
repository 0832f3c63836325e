"""Tests for the algorithm registry."""

import pytest

import krylov_wrappers as kw
from krylov_wrappers.workspaces import KrylovWorkspace


class TestResolve:
    """resolve() is total over the registered identifiers and fails otherwise."""

    @pytest.mark.parametrize("algorithm", kw.AlgorithmRegistry.list_algorithms())
    def test_every_algorithm_has_workspace(self, algorithm) -> None:
        """Every descriptor names a non-empty workspace tag."""
        descriptor = kw.resolve(algorithm)
        assert descriptor.name == algorithm
        assert descriptor.workspace_tag
        assert issubclass(descriptor.workspace, KrylovWorkspace)

    @pytest.mark.parametrize("algorithm", ["nope", "", "cg_lanczos", None, 3])
    def test_unknown_algorithm(self, algorithm) -> None:
        """Unknown identifiers raise UnsupportedAlgorithm."""
        with pytest.raises(kw.UnsupportedAlgorithm):
            kw.resolve(algorithm)

    def test_unsupported_is_value_error(self) -> None:
        """UnsupportedAlgorithm is a ValueError carrying the available methods."""
        with pytest.raises(ValueError, match="nope") as excinfo:
            kw.resolve("nope")
        assert "gmres" in excinfo.value.available

    def test_case_insensitive(self) -> None:
        """Lookups ignore case."""
        assert kw.resolve("GMRES") is kw.resolve("gmres")

    def test_one_binding_per_identifier(self) -> None:
        """No two identifiers share a workspace class."""
        names = kw.AlgorithmRegistry.list_algorithms()
        workspaces = {kw.resolve(name).workspace for name in names}
        assert len(workspaces) == len(names)

    def test_supports(self) -> None:
        """supports() mirrors resolve()."""
        assert kw.AlgorithmRegistry.supports("CG")
        assert not kw.AlgorithmRegistry.supports("nope")
        assert not kw.AlgorithmRegistry.supports(None)


class TestDescriptors:
    """Structural metadata of the main methods."""

    def test_cg(self) -> None:
        """CG takes a left preconditioner only."""
        d = kw.resolve("cg")
        assert d.left_preconditioner and not d.right_preconditioner
        assert not d.supports_restart and not d.supports_window

    @pytest.mark.parametrize("algorithm", ["gmres", "bicgstab"])
    def test_two_sided(self, algorithm) -> None:
        """GMRES and BiCGStab take both preconditioners."""
        d = kw.resolve(algorithm)
        assert d.left_preconditioner and d.right_preconditioner

    @pytest.mark.parametrize("algorithm", ["gmres", "lgmres", "gcrotmk"])
    def test_restarted(self, algorithm) -> None:
        """Restarted methods take a memory size."""
        assert kw.resolve(algorithm).supports_restart

    @pytest.mark.parametrize("algorithm", ["minres", "lsqr", "lsmr"])
    def test_windowed(self, algorithm) -> None:
        """Windowed methods take a window size."""
        assert kw.resolve(algorithm).supports_window

    def test_minres(self) -> None:
        """MINRES takes a left preconditioner only."""
        d = kw.resolve("minres")
        assert d.left_preconditioner and not d.right_preconditioner

    @pytest.mark.parametrize(
        ("algorithm", "problem"),
        [("lsmr", "least-squares"), ("craigmr", "least-norm"), ("cg", "square")],
    )
    def test_problem_class(self, algorithm, problem) -> None:
        """Each descriptor records the problem class it solves."""
        d = kw.resolve(algorithm)
        assert d.problem == problem
        if problem != "square":
            assert not d.left_preconditioner and not d.right_preconditioner
