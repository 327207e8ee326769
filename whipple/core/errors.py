"""
Error types raised by the Whipple model pipeline.

All errors derive from WhippleError so a host can catch the whole family,
and from the matching builtin/numpy error so generic handlers still work.
"""

import numpy as np


class WhippleError(Exception):
    """Base class for all Whipple model errors."""


class InvalidParameterValue(WhippleError, ValueError):
    """
    A parameter override could not be parsed as a finite number.

    Attributes
    ----------
    key : str
        Name of the offending parameter (as supplied by the caller)
    value : object
        The raw value that failed to parse
    applied : BicycleParameters or None
        Parameter set with every override parsed before the failure applied
    """

    def __init__(self, key, value, applied=None):
        self.key = key
        self.value = value
        self.applied = applied
        super().__init__(f"Invalid value for parameter '{key}': {value!r}")


class SingularMassMatrix(WhippleError, np.linalg.LinAlgError):
    """Mass matrix M is not invertible within the configured tolerance."""

    def __init__(self, condition: float, max_condition: float):
        self.condition = condition
        self.max_condition = max_condition
        super().__init__(
            f"Mass matrix is singular: condition number {condition:.3e} "
            f"exceeds limit {max_condition:.3e}"
        )


class NonConvergentEigensolve(WhippleError, np.linalg.LinAlgError):
    """Eigenvalue computation of the state matrix failed to converge."""
