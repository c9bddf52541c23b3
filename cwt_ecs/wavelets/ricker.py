"""Ricker (Mexican hat) wavelet."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from cwt_ecs.wavelets.base import Wavelet

_RICKER_NORM = 2.0 / (math.sqrt(3.0) * math.pi ** 0.25)


@dataclass(frozen=True)
class Ricker(Wavelet):
    """Real Mexican hat wavelet, the negated second derivative of a Gaussian.

    psi(t) = 2 / (sqrt(3) * pi^(1/4)) * (1 - t^2) * exp(-t^2/2)
    """

    family: ClassVar[str] = "ricker"
    is_complex: ClassVar[bool] = False

    def psi(self, t: np.ndarray) -> np.ndarray:
        t2 = t * t
        return _RICKER_NORM * (1.0 - t2) * np.exp(-0.5 * t2)

    @property
    def half_width(self) -> float:
        return 5.0

    @property
    def fourier_factor(self) -> float:
        return 2.0 * math.pi / math.sqrt(2.5)
