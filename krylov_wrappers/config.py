"""Global configuration for krylov_wrappers.

Defaults that apply to every workspace built by the factory live here.
Per-solve settings (tolerances, iteration limit, preconditioners) belong to
the :class:`~krylov_wrappers.cache.LinearCache` instead.

Example
-------
>>> from krylov_wrappers import config
>>> config.DEFAULT_MEMORY_CAP
20
>>> config.DEFAULT_MEMORY_CAP = 40
>>> config.reset()

"""

from typing import Any

import numpy as np


class KrylovConfig:
    """Global configuration class for krylov_wrappers.

    Attributes
    ----------
    DEFAULT_MEMORY_CAP : int
        Upper bound on the memory of restarted methods when the algorithm
        configuration leaves ``gmres_restart`` at 0. The memory actually used
        is ``min(DEFAULT_MEMORY_CAP, number of rows)``.
    DEFAULT_WINDOW : int
        Window size of windowed methods when ``window`` is left at 0.
    DEFAULT_DTYPE : numpy.dtype
        Working dtype when neither the matrix nor the right-hand side carry one.

    """

    def __init__(self) -> None:
        self.DEFAULT_MEMORY_CAP: int = 20
        self.DEFAULT_WINDOW: int = 5
        self.DEFAULT_DTYPE: Any = np.float64

    def reset(self) -> None:
        """Restore every option to its default value."""
        self.DEFAULT_MEMORY_CAP = 20
        self.DEFAULT_WINDOW = 5
        self.DEFAULT_DTYPE = np.float64

    def __repr__(self) -> str:
        return (
            f"KrylovConfig(\n"
            f"    DEFAULT_MEMORY_CAP={self.DEFAULT_MEMORY_CAP},\n"
            f"    DEFAULT_WINDOW={self.DEFAULT_WINDOW},\n"
            f"    DEFAULT_DTYPE={self.DEFAULT_DTYPE}\n"
            f")"
        )


config = KrylovConfig()
