"""Wavelet families for the continuous wavelet transform.

| Family | Class | Values | Parameters |
|--------|-------|--------|------------|
| morlet | Morlet | complex | center_frequency > 0 |
| ricker | Ricker | real | none |
| paul | Paul | complex | integer order >= 1 |
| gaussian_derivative | GaussianDerivative | real | integer order >= 1 |
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from cwt_ecs.core.errors import InvalidParameter
from cwt_ecs.wavelets.base import Wavelet
from cwt_ecs.wavelets.gaussian import GaussianDerivative
from cwt_ecs.wavelets.morlet import Morlet
from cwt_ecs.wavelets.paul import Paul
from cwt_ecs.wavelets.ricker import Ricker

WaveletSpec = Union[Morlet, Ricker, Paul, GaussianDerivative]

FAMILIES: dict[str, type[Wavelet]] = {
    cls.family: cls for cls in (Morlet, Ricker, Paul, GaussianDerivative)
}

_FAMILY_ALIASES = {
    "mexican_hat": "ricker",
    "mexh": "ricker",
    "dog": "gaussian_derivative",
    "gaussian": "gaussian_derivative",
}


def wavelet_from_config(config: Mapping[str, Any] | str) -> Wavelet:
    """Build a wavelet from a family name or a {'family': ..., **params} mapping.

    Example:
        >>> wavelet_from_config({"family": "paul", "order": 6})
        Paul(order=6)
        >>> wavelet_from_config("ricker")
        Ricker()

    Raises:
        InvalidParameter: If the family is unknown or a parameter is invalid
    """
    if isinstance(config, str):
        params: dict[str, Any] = {"family": config}
    else:
        params = dict(config)
    name = str(params.pop("family", "")).strip().lower()
    name = _FAMILY_ALIASES.get(name, name)
    if name not in FAMILIES:
        raise InvalidParameter(
            f"Unknown wavelet family {name!r}; expected one of {sorted(FAMILIES)}",
            family=name,
        )
    try:
        return FAMILIES[name](**params)
    except TypeError as e:
        raise InvalidParameter(
            f"Invalid parameters {sorted(params)} for wavelet family {name!r}",
            family=name,
        ) from e


__all__ = [
    "Wavelet",
    "WaveletSpec",
    "Morlet",
    "Ricker",
    "Paul",
    "GaussianDerivative",
    "FAMILIES",
    "wavelet_from_config",
]
