"""Error taxonomy for scale generation, kernels, transforms and rendering.

Every error is a local validation failure: nothing here is transient, so
callers should fix the configuration rather than retry. All errors derive
from ``ValueError`` and carry the offending values in ``context``.

Example:
    >>> try:
    ...     generate_scales(4.0, 2.0, 8)
    ... except InvalidRange as exc:
    ...     print(exc.context)
    {'min_scale': 4.0, 'max_scale': 2.0}
"""

from __future__ import annotations

from typing import Any


class CWTError(ValueError):
    """Base class for all transform and rendering errors.

    Attributes:
        context: Offending parameters and computed bounds
    """

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.context = context


class InvalidRange(CWTError):
    """Scale bounds are non-positive, non-finite or not increasing."""


class InvalidCount(CWTError):
    """Requested number of scales is missing or too small."""


class InvalidParameter(CWTError):
    """A shape, policy or rendering parameter is outside its admissible set."""


class DegenerateSupport(CWTError):
    """Kernel support collapses to fewer than two samples."""


class EmptySignal(CWTError):
    """Signal has zero samples."""


class ScaleTooLarge(CWTError):
    """Kernel support exceeds the allowed multiple of the signal length."""


class EmptyMatrix(CWTError):
    """Coefficient matrix has zero rows or columns."""


class DegenerateRange(CWTError):
    """Reduced coefficients have max == min, so they cannot be normalized."""
