"""ScaleSet component: the ordered scales a transform is evaluated at."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any, Literal

import numpy as np
from pydantic import Field, field_validator

from cwt_ecs.components.signal import Component
from cwt_ecs.core.errors import InvalidCount, InvalidRange

ScalePolicy = Literal["linear", "logarithmic", "octave", "explicit"]


class ScaleSet(Component):
    """Strictly increasing, strictly positive scale values.

    Scales are in seconds; with a sampling rate of 1.0 they count samples.

    Attributes:
        values: Scale values, ascending, no duplicates
        policy: How the values were generated
        voices_per_octave: Voices per octave for the 'octave' policy
    """

    values: tuple[float, ...]
    policy: ScalePolicy = Field(default="explicit")
    voices_per_octave: int | None = Field(default=None, ge=1)

    @field_validator("values")
    @classmethod
    def _check_values(cls, values: tuple[float, ...]) -> tuple[float, ...]:
        if len(values) < 1:
            raise ValueError("a ScaleSet needs at least one scale")
        if not all(math.isfinite(v) and v > 0 for v in values):
            raise ValueError(f"scales must be positive and finite, got {values}")
        if any(b <= a for a, b in zip(values, values[1:])):
            raise ValueError("scales must be strictly increasing")
        return values

    @classmethod
    def from_values(cls, values: Iterable[Any]) -> ScaleSet:
        """Build an explicit ScaleSet from caller-chosen scales.

        Raises:
            InvalidCount: If no scales are given
            InvalidRange: If a scale is non-positive or the order is not
                strictly increasing
        """
        scales = tuple(float(v) for v in np.asarray(list(values), dtype=np.float64).ravel())
        if not scales:
            raise InvalidCount("At least one scale is required", count=0)
        bad = [v for v in scales if not (math.isfinite(v) and v > 0)]
        if bad:
            raise InvalidRange(
                f"Scales must be positive and finite, got {bad}", scales=bad
            )
        for i, (a, b) in enumerate(zip(scales, scales[1:])):
            if b <= a:
                raise InvalidRange(
                    f"Scales must be strictly increasing: scale[{i + 1}]={b} <= scale[{i}]={a}",
                    index=i + 1,
                )
        return cls(values=scales, policy="explicit")

    def as_array(self, dtype: Any = np.float64) -> np.ndarray:
        """Scales as an ndarray of the given dtype."""
        return np.asarray(self.values, dtype=dtype)

    def __len__(self) -> int:
        return len(self.values)
