"""Wavelet base class and kernel sampling.

A wavelet family provides a mother wavelet psi(t) and a few constants;
the base class turns that into a sampled kernel for one scale:

1. Support: L = floor(half_width * scale / dt) samples on each side, so the
   kernel has 2L + 1 taps centred on index L.
2. Sampling: psi(k * dt / scale) for k = -L..L, evaluated in the caller's
   dtype.
3. Admissibility: the discrete mean is subtracted so the taps sum to zero
   even after truncation.
4. Normalisation: the taps are scaled to unit L2 norm. This matches the
   continuous psi(t / s) / sqrt(s) convention up to sampling error, so
   coefficient magnitudes are comparable across scales.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np

from cwt_ecs.core.errors import DegenerateSupport, InvalidParameter


def _check_order(order: Any, family: str) -> None:
    """Integer order >= 1 shared by Paul and Gaussian-derivative families."""
    if isinstance(order, bool) or not isinstance(order, (int, np.integer)):
        raise InvalidParameter(
            f"{family} order must be an integer, got {order!r}", order=order
        )
    if order < 1:
        raise InvalidParameter(
            f"{family} order must be >= 1, got {order}", order=int(order)
        )


@dataclass(frozen=True)
class Wavelet(ABC):
    """Mother wavelet with scale-dependent kernel sampling.

    Subclasses set ``family`` and ``is_complex`` and implement ``psi``,
    ``half_width`` and ``fourier_factor``.
    """

    family: ClassVar[str] = ""
    is_complex: ClassVar[bool] = False

    @abstractmethod
    def psi(self, t: np.ndarray) -> np.ndarray:
        """Evaluate the mother wavelet at dimensionless times t."""

    @property
    @abstractmethod
    def half_width(self) -> float:
        """Half support in units of scale, beyond which psi is negligible."""

    @property
    @abstractmethod
    def fourier_factor(self) -> float:
        """Equivalent Fourier period of a unit scale."""

    def params(self) -> dict[str, Any]:
        """Shape parameters as a plain dict (family included)."""
        return {"family": self.family}

    def support(self, scale: float, dt: float = 1.0) -> int:
        """Number of kernel taps at a scale.

        Raises:
            DegenerateSupport: If fewer than two taps would remain
        """
        if not (math.isfinite(scale) and scale > 0):
            raise DegenerateSupport(
                f"Scale must be positive and finite, got {scale}", scale=scale
            )
        if not (math.isfinite(dt) and dt > 0):
            raise DegenerateSupport(
                f"Sampling interval must be positive and finite, got {dt}", dt=dt
            )
        half = int(math.floor(self.half_width * scale / dt))
        length = 2 * half + 1
        if length < 2:
            raise DegenerateSupport(
                f"{self.family} kernel at scale {scale} spans {length} sample(s) "
                f"with dt={dt}; need a scale >= {dt / self.half_width:.6g}",
                scale=scale,
                dt=dt,
                length=length,
                min_scale=dt / self.half_width,
            )
        return length

    def kernel(self, scale: float, dt: float = 1.0, dtype: Any = np.float64) -> np.ndarray:
        """Sample the wavelet dilated to ``scale``.

        Args:
            scale: Dilation in seconds (samples when dt == 1)
            dt: Sampling interval in seconds
            dtype: Real dtype of the computation (float32 or float64); complex
                families return the matching complex dtype

        Returns:
            Zero-mean, unit-L2-norm kernel of length 2L + 1

        Raises:
            DegenerateSupport: If fewer than two taps would remain
        """
        real = np.dtype(dtype)
        if real.kind == "c":
            real = np.finfo(real).dtype
        out_dtype = np.result_type(real, np.complex64) if self.is_complex else real

        half = self.support(scale, dt) // 2
        step = real.type(dt) / real.type(scale)
        t = np.arange(-half, half + 1, dtype=real) * step

        taps = np.asarray(self.psi(t)).astype(out_dtype, copy=False)
        taps = taps - taps.mean(dtype=out_dtype)
        norm = np.sqrt(np.sum(np.abs(taps) ** 2, dtype=real))
        if not norm > 0:
            raise DegenerateSupport(
                f"{self.family} kernel at scale {scale} has zero energy after sampling",
                scale=scale,
                dt=dt,
            )
        return (taps / norm).astype(out_dtype, copy=False)
