"""Derivative-of-Gaussian (DOG) wavelets of any positive order."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np

from cwt_ecs.wavelets.base import Wavelet, _check_order

_RESCALE = 1e150
_LOG_RESCALE = math.log(_RESCALE)


@dataclass(frozen=True)
class GaussianDerivative(Wavelet):
    """Real wavelet built from the m-th derivative of a Gaussian.

    psi(t) = (-1)^(m+1) / sqrt(Gamma(m + 1/2)) * d^m/dt^m exp(-t^2/2)
           = -He_m(t) * exp(-t^2/2) / sqrt(Gamma(m + 1/2))

    with He_m the probabilists' Hermite polynomial. Order 2 is the Ricker
    wavelet.

    Attributes:
        order: m >= 1
    """

    order: int = 2

    family: ClassVar[str] = "gaussian_derivative"
    is_complex: ClassVar[bool] = False

    def __post_init__(self) -> None:
        _check_order(self.order, "GaussianDerivative")

    def psi(self, t: np.ndarray) -> np.ndarray:
        # Orthonormal recurrence p_n = (t p_{n-1} - sqrt(n-1) p_{n-2}) / sqrt(n),
        # with He_n = sqrt(n!) p_n; large values are rescaled into log_scale.
        m = int(self.order)
        t = np.asarray(t, dtype=np.float64)
        prev = np.ones_like(t)
        cur = t.copy()
        log_scale = np.zeros_like(t)
        for n in range(2, m + 1):
            prev, cur = cur, (t * cur - math.sqrt(n - 1) * prev) / math.sqrt(n)
            big = np.abs(cur) > _RESCALE
            if big.any():
                cur[big] /= _RESCALE
                prev[big] /= _RESCALE
                log_scale[big] += _LOG_RESCALE
        log_norm = 0.5 * (math.lgamma(m + 1) - math.lgamma(m + 0.5))
        with np.errstate(divide="ignore"):
            log_mag = np.log(np.abs(cur)) + log_scale - 0.5 * t * t + log_norm
        return -np.sign(cur) * np.exp(log_mag)

    @property
    def half_width(self) -> float:
        return 4.0 + math.sqrt(int(self.order))

    @property
    def fourier_factor(self) -> float:
        return 2.0 * math.pi / math.sqrt(int(self.order) + 0.5)

    def params(self) -> dict[str, Any]:
        return {"family": self.family, "order": int(self.order)}
