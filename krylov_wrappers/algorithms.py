"""
Algorithm configurations and the named constructors for common methods.

Every constructor pins the algorithm identifier and forwards the rest of its
arguments, uninspected, into an :class:`AlgorithmConfig`. Validation happens
lazily when the first workspace is built.

Example
-------
>>> from krylov_wrappers import krylov_gmres
>>> alg = krylov_gmres(gmres_restart=30)
>>> alg.algorithm, alg.gmres_restart
('gmres', 30)

"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class AlgorithmConfig:
    """
    Immutable description of which Krylov method to run and how.

    Attributes
    ----------
    algorithm : str
        Algorithm identifier, lower-cased
    gmres_restart : int
        Memory of restarted methods, 0 for automatic
    window : int
        Window of windowed methods, 0 for the default
    args : tuple
        Positional arguments passed after (A, b); the first is the initial guess
    kwargs : Mapping
        Keyword arguments forwarded verbatim to the SciPy routine
    """
    algorithm: str = "gmres"
    gmres_restart: int = 0
    window: int = 0
    args: tuple = ()
    kwargs: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.algorithm, str):
            object.__setattr__(self, "algorithm", self.algorithm.lower())
        object.__setattr__(self, "args", tuple(self.args))
        object.__setattr__(self, "kwargs", MappingProxyType(dict(self.kwargs)))


def krylov(*args, algorithm: str = "gmres", gmres_restart: int = 0,
           window: int = 0, **kwargs) -> AlgorithmConfig:
    """
    Generic configuration for any registered Krylov method.

    Parameters
    ----------
    *args
        Extra positional arguments for the solve (initial guess first)
    algorithm : str
        Algorithm identifier. Default is "gmres".
    gmres_restart : int
        Restart memory, 0 for ``min(20, rows)``
    window : int
        Window size, 0 for the default
    **kwargs
        Options forwarded to the SciPy routine
    """
    return AlgorithmConfig(algorithm, gmres_restart, window, args, kwargs)


def krylov_cg(*args, **kwargs) -> AlgorithmConfig:
    """Conjugate gradient for Hermitian positive definite systems."""
    return krylov(*args, algorithm="cg", **kwargs)


def krylov_minres(*args, **kwargs) -> AlgorithmConfig:
    """MINRES for Hermitian systems."""
    return krylov(*args, algorithm="minres", **kwargs)


def krylov_gmres(*args, **kwargs) -> AlgorithmConfig:
    """Restarted GMRES for square non-Hermitian systems."""
    return krylov(*args, algorithm="gmres", **kwargs)


def krylov_bicgstab(*args, **kwargs) -> AlgorithmConfig:
    """BiCGStab for square non-Hermitian systems."""
    return krylov(*args, algorithm="bicgstab", **kwargs)


def krylov_lsmr(*args, **kwargs) -> AlgorithmConfig:
    """LSMR for least-squares problems."""
    return krylov(*args, algorithm="lsmr", **kwargs)


def krylov_craigmr(*args, **kwargs) -> AlgorithmConfig:
    """CRAIGMR for least-norm problems."""
    return krylov(*args, algorithm="craigmr", **kwargs)


def default_alias_A(alg: AlgorithmConfig, A: Any, b: Any) -> bool:
    """Krylov methods never modify A, so the cache may keep the caller's matrix."""
    return True


def default_alias_b(alg: AlgorithmConfig, A: Any, b: Any) -> bool:
    return True
