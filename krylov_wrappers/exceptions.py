"""
Exceptions and warnings raised by the Krylov wrappers.
"""


class KrylovWrapperError(Exception):
    """Base class for errors raised by this package."""


class UnsupportedAlgorithm(KrylovWrapperError, ValueError):
    """The algorithm identifier is not in the registry."""

    def __init__(self, algorithm, available=()):
        self.algorithm = algorithm
        self.available = tuple(available)
        msg = f"Unknown Krylov method: {algorithm!r}."
        if self.available:
            msg += f" Available: {list(self.available)}"
        super().__init__(msg)


class EmptyHistory(KrylovWrapperError, RuntimeError):
    """The workspace returned without recording a single residual."""


class UnsupportedPreconditioner(UserWarning):
    """A preconditioner was supplied for a slot the method cannot use."""
