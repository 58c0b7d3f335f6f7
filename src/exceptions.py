"""
Error taxonomy for the Brownian motion simulator.

Author: Jose Orlando Bobadilla Fuentes | CQF
"""


class BrownianSimError(Exception):
    """Base class for all simulator errors."""


class InvalidParameterError(BrownianSimError, ValueError):
    """Raised before any simulation work when T, n or m is invalid."""


class UniformSourceError(BrownianSimError, ValueError):
    """Raised when the injected uniform source returns a value outside [0, 1]."""
