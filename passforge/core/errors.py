"""
PassForge Exceptions
=====================

Exception hierarchy for failures the caller must see. Recoverable
conditions (a failing external backend, a missing oracle) are handled
inside the estimator and never surface as exceptions.
"""


class PassForgeError(Exception):
    """Base class for all PassForge errors."""


class GeneratorError(PassForgeError):
    """The secure generator could not produce a password."""


class SecureRandomUnavailableError(GeneratorError, RuntimeError):
    """The operating system's secure random source is unavailable.

    Raised instead of degrading to a non-cryptographic generator.
    """


class BackendLoadError(PassForgeError, ImportError):
    """An external estimator backend could not be imported."""
