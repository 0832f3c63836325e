"""
Registry mapping algorithm identifiers to their workspace bindings.
"""

from dataclasses import dataclass
from typing import Dict

from .exceptions import UnsupportedAlgorithm
from .workspaces import (
    BicgstabWorkspace,
    BicgWorkspace,
    CglsWorkspace,
    CgneWorkspace,
    CgsWorkspace,
    CgWorkspace,
    CraigmrWorkspace,
    CrlsWorkspace,
    GcrotmkWorkspace,
    GmresWorkspace,
    LgmresWorkspace,
    LsmrWorkspace,
    LsqrWorkspace,
    MinresWorkspace,
    QmrWorkspace,
    TfqmrWorkspace,
)


@dataclass(frozen=True)
class AlgorithmDescriptor:
    """
    Static metadata of one Krylov method.

    Attributes
    ----------
    name : str
        Algorithm identifier
    workspace : type
        KrylovWorkspace subclass the method runs in
    supports_restart : bool
        Constructor takes a memory size
    supports_window : bool
        Constructor takes a ``window`` keyword
    left_preconditioner : bool
        Solve accepts ``M``
    right_preconditioner : bool
        Solve accepts ``N``
    problem : str
        "square", "least-squares" or "least-norm"
    """
    name: str
    workspace: type
    supports_restart: bool = False
    supports_window: bool = False
    left_preconditioner: bool = False
    right_preconditioner: bool = False
    problem: str = "square"

    @property
    def workspace_tag(self) -> str:
        return self.workspace.__name__


_D = AlgorithmDescriptor

_ALGORITHMS = (
    _D("cg", CgWorkspace, left_preconditioner=True),
    _D("cgs", CgsWorkspace),
    _D("bicg", BicgWorkspace),
    _D("bicgstab", BicgstabWorkspace, left_preconditioner=True, right_preconditioner=True),
    _D("qmr", QmrWorkspace),
    _D("tfqmr", TfqmrWorkspace),
    _D("minres", MinresWorkspace, supports_window=True, left_preconditioner=True),
    _D("gmres", GmresWorkspace, supports_restart=True,
       left_preconditioner=True, right_preconditioner=True),
    _D("lgmres", LgmresWorkspace, supports_restart=True),
    _D("gcrotmk", GcrotmkWorkspace, supports_restart=True),
    _D("lsqr", LsqrWorkspace, supports_window=True, problem="least-squares"),
    _D("lsmr", LsmrWorkspace, supports_window=True, problem="least-squares"),
    _D("cgls", CglsWorkspace, problem="least-squares"),
    _D("crls", CrlsWorkspace, problem="least-squares"),
    _D("cgne", CgneWorkspace, problem="least-norm"),
    _D("craigmr", CraigmrWorkspace, problem="least-norm"),
)


class AlgorithmRegistry:
    """Closed registry of the supported Krylov methods."""

    _descriptors: Dict[str, AlgorithmDescriptor] = {d.name: d for d in _ALGORITHMS}

    @classmethod
    def resolve(cls, algorithm: str) -> AlgorithmDescriptor:
        """
        Look up the descriptor of an algorithm.

        Parameters
        ----------
        algorithm : str
            Algorithm identifier (case insensitive)

        Returns
        -------
        descriptor : AlgorithmDescriptor

        Raises
        ------
        UnsupportedAlgorithm
            If the identifier is not registered
        """
        key = algorithm.lower() if isinstance(algorithm, str) else algorithm
        try:
            return cls._descriptors[key]
        except (KeyError, TypeError):
            raise UnsupportedAlgorithm(algorithm, cls.list_algorithms()) from None

    @classmethod
    def supports(cls, algorithm: str) -> bool:
        return isinstance(algorithm, str) and algorithm.lower() in cls._descriptors

    @classmethod
    def list_algorithms(cls) -> list[str]:
        """List all registered algorithm identifiers."""
        return list(cls._descriptors.keys())


def resolve(algorithm: str) -> AlgorithmDescriptor:
    """Shortcut for :meth:`AlgorithmRegistry.resolve`."""
    return AlgorithmRegistry.resolve(algorithm)
