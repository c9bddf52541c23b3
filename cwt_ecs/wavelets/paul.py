"""Paul wavelet: complex, analytic, sharp in time and broad in frequency."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np

from cwt_ecs.wavelets.base import Wavelet, _check_order

# Support ends where |psi| drops to this fraction of its peak
_ENVELOPE_CUTOFF = 1e-3


@dataclass(frozen=True)
class Paul(Wavelet):
    """Paul wavelet of integer order m >= 1.

    psi(t) = 2^m * i^m * m! / sqrt(pi * (2m)!) * (1 - i*t)^(-(m+1))

    The envelope decays only polynomially, as (1 + t^2)^(-(m+1)/2), so low
    orders need a much wider support than Gaussian-based families.

    Attributes:
        order: m (4 is the common choice)
    """

    order: int = 4

    family: ClassVar[str] = "paul"
    is_complex: ClassVar[bool] = True

    def __post_init__(self) -> None:
        _check_order(self.order, "Paul")

    def _log_norm(self) -> float:
        m = int(self.order)
        return (
            m * math.log(2.0)
            + math.lgamma(m + 1)
            - 0.5 * (math.log(math.pi) + math.lgamma(2 * m + 1))
        )

    def psi(self, t: np.ndarray) -> np.ndarray:
        m = int(self.order)
        norm = math.exp(self._log_norm()) * (1j ** m)
        return norm * (1.0 - 1j * t) ** (-(m + 1))

    @property
    def half_width(self) -> float:
        m = int(self.order)
        width = math.sqrt(_ENVELOPE_CUTOFF ** (-2.0 / (m + 1)) - 1.0)
        return max(width, 4.0)

    @property
    def fourier_factor(self) -> float:
        return 4.0 * math.pi / (2 * int(self.order) + 1)

    def params(self) -> dict[str, Any]:
        return {"family": self.family, "order": int(self.order)}
