"""Morlet wavelet: a complex sinusoid under a Gaussian envelope."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np

from cwt_ecs.core.errors import InvalidParameter
from cwt_ecs.wavelets.base import Wavelet


@dataclass(frozen=True)
class Morlet(Wavelet):
    """Complex Morlet wavelet.

    psi(t) = pi^(-1/4) * (exp(i*w0*t) - exp(-w0^2/2)) * exp(-t^2/2)

    The exp(-w0^2/2) term removes the DC component that the bare Gabor
    atom keeps for small w0.

    Attributes:
        center_frequency: w0 in radians per unit scale (6.0 balances time
            and frequency resolution)
    """

    center_frequency: float = 6.0

    family: ClassVar[str] = "morlet"
    is_complex: ClassVar[bool] = True

    def __post_init__(self) -> None:
        w0 = self.center_frequency
        if isinstance(w0, bool) or not isinstance(w0, (int, float, np.floating, np.integer)):
            raise InvalidParameter(
                f"Morlet center_frequency must be a number, got {w0!r}",
                center_frequency=w0,
            )
        if not (math.isfinite(w0) and w0 > 0):
            raise InvalidParameter(
                f"Morlet center_frequency must be positive and finite, got {w0}",
                center_frequency=w0,
            )

    def psi(self, t: np.ndarray) -> np.ndarray:
        w0 = t.dtype.type(self.center_frequency)
        envelope = np.exp(-0.5 * t * t)
        carrier = np.exp(1j * (w0 * t)) - np.exp(-0.5 * w0 * w0)
        return math.pi ** -0.25 * carrier * envelope

    @property
    def half_width(self) -> float:
        return 4.0

    @property
    def fourier_factor(self) -> float:
        w0 = float(self.center_frequency)
        return 4.0 * math.pi / (w0 + math.sqrt(2.0 + w0 * w0))

    def params(self) -> dict[str, Any]:
        return {"family": self.family, "center_frequency": float(self.center_frequency)}
