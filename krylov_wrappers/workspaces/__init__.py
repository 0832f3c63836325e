"""
Workspace implementations binding each Krylov method to a SciPy routine.
"""

from .base import (
    KrylovWorkspace,
    RestartedWorkspace,
    SolverStats,
    WindowedWorkspace,
    representation_kind,
)
from .rectangular import (
    CglsWorkspace,
    CgneWorkspace,
    CraigmrWorkspace,
    CrlsWorkspace,
    LsmrWorkspace,
    LsqrWorkspace,
)
from .square import (
    BicgstabWorkspace,
    BicgWorkspace,
    CgsWorkspace,
    CgWorkspace,
    GcrotmkWorkspace,
    GmresWorkspace,
    LgmresWorkspace,
    MinresWorkspace,
    QmrWorkspace,
    TfqmrWorkspace,
)

__all__ = [
    "KrylovWorkspace",
    "RestartedWorkspace",
    "WindowedWorkspace",
    "SolverStats",
    "representation_kind",
    "CgWorkspace",
    "CgsWorkspace",
    "BicgWorkspace",
    "BicgstabWorkspace",
    "QmrWorkspace",
    "TfqmrWorkspace",
    "MinresWorkspace",
    "GmresWorkspace",
    "LgmresWorkspace",
    "GcrotmkWorkspace",
    "LsqrWorkspace",
    "LsmrWorkspace",
    "CglsWorkspace",
    "CrlsWorkspace",
    "CgneWorkspace",
    "CraigmrWorkspace",
]
