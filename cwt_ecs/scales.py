"""Scale generation and scale/frequency conversion.

Three policies produce a ScaleSet:

- linear: uniform step (max - min) / (count - 1)
- logarithmic: uniform step in log space, min * (max/min)^(i/(count-1))
- Octave(voices_per_octave, octaves): min * 2^(i/voices) for
  i = 0..octaves*voices, so the count is derived

Example:
    >>> generate_scales(1.0, 16.0, 5, "logarithmic").values
    (1.0, 2.0, 4.0, 8.0, 16.0)
    >>> len(generate_scales(2.0, policy=Octave(voices_per_octave=12, octaves=5)))
    61
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal, Union

import numpy as np

from cwt_ecs.components.scales import ScaleSet
from cwt_ecs.core.errors import InvalidCount, InvalidParameter, InvalidRange
from cwt_ecs.wavelets.base import Wavelet


@dataclass(frozen=True)
class Octave:
    """Octave policy: a base scale doubled every ``voices_per_octave`` steps.

    Attributes:
        voices_per_octave: Scales per doubling (>= 1)
        octaves: Number of doublings covered (>= 1)
    """

    voices_per_octave: int
    octaves: int

    def __post_init__(self) -> None:
        for name in ("voices_per_octave", "octaves"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
                raise InvalidParameter(
                    f"{name} must be an integer >= 1, got {value!r}", **{name: value}
                )

    @property
    def count(self) -> int:
        return int(self.octaves) * int(self.voices_per_octave) + 1


DistributionPolicy = Union[Literal["linear", "logarithmic"], Octave]

_POLICY_ALIASES = {
    "linear": "linear",
    "lin": "linear",
    "logarithmic": "logarithmic",
    "log": "logarithmic",
    "geometric": "logarithmic",
}


def _check_bound(name: str, value: Any) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidRange(f"{name} must be a number, got {value!r}", **{name: value}) from e
    if not (math.isfinite(v) and v > 0):
        raise InvalidRange(f"{name} must be positive and finite, got {value}", **{name: value})
    return v


def generate_scales(
    min_scale: float,
    max_scale: float | None = None,
    count: int | None = None,
    policy: DistributionPolicy | str = "logarithmic",
) -> ScaleSet:
    """Generate an ordered ScaleSet.

    Args:
        min_scale: First (smallest) scale
        max_scale: Last scale for linear/logarithmic policies (unused by Octave)
        count: Number of scales for linear/logarithmic policies (unused by Octave)
        policy: 'linear', 'logarithmic', or an Octave instance

    Returns:
        ScaleSet whose first value is min_scale and, for linear/logarithmic,
        whose last value is exactly max_scale

    Raises:
        InvalidRange: If a bound is non-positive or max_scale <= min_scale
        InvalidCount: If count is missing or < 1
        InvalidParameter: If the policy is unknown
    """
    lo = _check_bound("min_scale", min_scale)

    if isinstance(policy, Octave):
        exponents = np.arange(policy.count, dtype=np.float64) / policy.voices_per_octave
        with np.errstate(over="ignore"):
            values = lo * np.exp2(exponents)
        values[0] = lo
        if not np.isfinite(values[-1]):
            raise InvalidRange(
                f"{policy.octaves} octaves above min_scale={lo} overflow",
                min_scale=lo,
                octaves=int(policy.octaves),
            )
        return ScaleSet(
            values=tuple(float(v) for v in values),
            policy="octave",
            voices_per_octave=int(policy.voices_per_octave),
        )

    name = _POLICY_ALIASES.get(str(policy).strip().lower()) if isinstance(policy, str) else None
    if name is None:
        raise InvalidParameter(
            f"Unknown scale policy {policy!r}; expected 'linear', 'logarithmic' or Octave(...)",
            policy=str(policy),
        )

    if max_scale is None:
        raise InvalidRange(f"max_scale is required for the {name} policy", max_scale=None)
    hi = _check_bound("max_scale", max_scale)
    if hi <= lo:
        raise InvalidRange(
            f"max_scale must be greater than min_scale (got min={lo}, max={hi})",
            min_scale=lo,
            max_scale=hi,
        )

    if count is None or isinstance(count, bool) or int(count) != count or count < 1:
        raise InvalidCount(
            f"count must be an integer >= 1, got {count!r}", count=count
        )
    n = int(count)
    if n == 1:
        return ScaleSet(values=(lo,), policy=name)

    if name == "linear":
        values = lo + (hi - lo) * (np.arange(n, dtype=np.float64) / (n - 1))
    else:
        values = lo * (hi / lo) ** (np.arange(n, dtype=np.float64) / (n - 1))
    values[0] = lo
    values[-1] = hi
    steps = np.diff(values)
    if not np.all(steps > 0):
        raise InvalidRange(
            f"Range [{lo}, {hi}] is too narrow for {n} distinct {name} scales "
            f"(smallest step {float(steps.min()):.3g})",
            min_scale=lo,
            max_scale=hi,
            count=n,
        )
    return ScaleSet(values=tuple(float(v) for v in values), policy=name)


def scales_to_frequencies(wavelet: Wavelet, scales: ScaleSet | Any) -> np.ndarray:
    """Equivalent Fourier frequency (Hz) of each scale.

    Scales are in seconds; with a sampling rate of 1.0 they count samples
    and frequencies are in cycles per sample. Ascending scales give
    descending frequencies.
    """
    values = scales.as_array() if isinstance(scales, ScaleSet) else np.asarray(scales, dtype=np.float64)
    return 1.0 / (wavelet.fourier_factor * values)


def frequencies_to_scales(
    wavelet: Wavelet,
    frequencies: Any,
    sampling_rate: float = 1.0,
) -> ScaleSet:
    """Scales whose equivalent Fourier frequencies are the given ones.

    Frequencies may be in any order; the result is sorted ascending by scale
    (descending by frequency).

    Raises:
        InvalidRange: If a frequency is non-positive or above Nyquist
    """
    freqs = np.asarray(frequencies, dtype=np.float64).ravel()
    nyquist = 0.5 * sampling_rate
    bad = freqs[~((freqs > 0) & (freqs <= nyquist))]
    if bad.size:
        raise InvalidRange(
            f"Frequencies must be in (0, {nyquist}] for sampling_rate={sampling_rate}, "
            f"got {bad.tolist()}",
            nyquist=nyquist,
        )
    return ScaleSet.from_values(np.sort(1.0 / (wavelet.fourier_factor * freqs)))


def scale_bounds(
    wavelet: Wavelet,
    signal_length: int,
    sampling_rate: float = 1.0,
) -> tuple[float, float]:
    """Useful scale range for a signal.

    The smallest scale puts the wavelet's Fourier period at two samples
    (Nyquist) while keeping at least three kernel taps; the largest is the
    widest whose kernel still fits inside the signal.

    Raises:
        InvalidRange: If the signal is too short to hold any kernel
    """
    dt = 1.0 / sampling_rate
    smallest = max(2.0 * dt / wavelet.fourier_factor, dt / wavelet.half_width)
    largest = ((signal_length - 1) // 2) * dt / wavelet.half_width
    if largest <= smallest:
        raise InvalidRange(
            f"Signal of {signal_length} samples is too short for {wavelet.family}: "
            f"smallest useful scale {smallest:.6g} >= largest {largest:.6g}",
            min_scale=smallest,
            max_scale=largest,
        )
    return smallest, largest
