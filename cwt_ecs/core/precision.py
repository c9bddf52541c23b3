"""Floating-point width shared by every stage of the transform.

A Signal picks its precision once at ingestion. Kernels, correlation and
FFTs then run at that width; nothing in the pipeline promotes single
precision data to double mid-way.

Example:
    >>> p = Precision.of("single")
    >>> p.real_dtype, p.complex_dtype
    (dtype('float32'), dtype('complex64'))
    >>> p.tolerance < 1e-3  # sqrt(eps), used by equivalence checks
    True
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import numpy as np

from cwt_ecs.core.errors import InvalidParameter

_ALIASES = {
    "single": "single",
    "float32": "single",
    "f32": "single",
    "double": "double",
    "float64": "double",
    "float": "double",
    "f64": "double",
}


class Precision(str, Enum):
    """Single or double precision floating point."""

    SINGLE = "single"
    DOUBLE = "double"

    @property
    def real_dtype(self) -> np.dtype[Any]:
        """Real sample dtype."""
        return np.dtype(np.float32 if self is Precision.SINGLE else np.float64)

    @property
    def complex_dtype(self) -> np.dtype[Any]:
        """Complex coefficient dtype."""
        return np.dtype(np.complex64 if self is Precision.SINGLE else np.complex128)

    @property
    def eps(self) -> float:
        """Machine epsilon of the real dtype."""
        return float(np.finfo(self.real_dtype).eps)

    @property
    def tolerance(self) -> float:
        """Relative tolerance for comparing results computed two ways."""
        return float(np.sqrt(self.eps))

    def dtype_for(self, is_complex: bool) -> np.dtype[Any]:
        """Coefficient dtype for a real or complex wavelet."""
        return self.complex_dtype if is_complex else self.real_dtype

    @classmethod
    def of(cls, value: Any, hint: Any = None) -> Precision:
        """Resolve a precision from a name, dtype or existing Precision.

        Args:
            value: Precision, name ('single', 'double', 'float32', ...),
                numpy dtype, or None
            hint: dtype used when value is None (float32 -> single,
                anything else -> double)

        Returns:
            Resolved Precision

        Raises:
            InvalidParameter: If the value names no known precision
        """
        if isinstance(value, Precision):
            return value
        if value is None:
            if hint is not None and np.dtype(hint) == np.float32:
                return cls.SINGLE
            return cls.DOUBLE
        if isinstance(value, str):
            key = _ALIASES.get(value.strip().lower())
            if key is None:
                raise InvalidParameter(
                    f"Unknown precision {value!r}; expected 'single' or 'double'",
                    precision=value,
                )
            return cls(key)
        try:
            dt = np.dtype(value)
        except TypeError as e:
            raise InvalidParameter(
                f"Cannot interpret {value!r} as a precision", precision=value
            ) from e
        if dt in (np.float32, np.complex64):
            return cls.SINGLE
        if dt in (np.float64, np.complex128):
            return cls.DOUBLE
        raise InvalidParameter(
            f"Unsupported dtype {dt} for precision; use float32 or float64",
            precision=str(dt),
        )
