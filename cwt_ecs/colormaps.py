"""Colormaps for scaleogram rendering.

A Colormap is a (K, 3) table of RGB floats in [0, 1]. Normalised values
in [0, 1] are mapped by piecewise-linear interpolation between adjacent
entries and rounded to uint8.

Built-in tables are sampled from matplotlib's colormap registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

import matplotlib
import numpy as np

from cwt_ecs.core.errors import InvalidParameter

BUILTIN_COLORMAPS: tuple[str, ...] = (
    "turbo",
    "viridis",
    "jet",
    "cividis",
    "inferno",
    "magma",
    "ocean",
    "pink",
    "plasma",
    "spring",
    "summer",
    "twilight",
    "twilight_shifted",
    "winter",
    "gray",
)

DEFAULT_COLORMAP = "turbo"


@dataclass(frozen=True, eq=False)
class Colormap:
    """Piecewise-linear RGB lookup table.

    Attributes:
        name: Registry name, or 'custom' for caller tables
        table: (K, 3) float64 array in [0, 1], K >= 2, read-only
    """

    name: str
    table: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        table = np.asarray(self.table, dtype=np.float64)
        if table.ndim != 2 or table.shape[1] != 3 or table.shape[0] < 2:
            raise InvalidParameter(
                f"Colormap table must have shape (K, 3) with K >= 2, got {table.shape}",
                shape=table.shape,
            )
        if not np.all(np.isfinite(table)) or table.min() < 0.0 or table.max() > 1.0:
            raise InvalidParameter("Colormap table values must be in [0, 1]")
        table = table.copy()
        table.flags.writeable = False
        object.__setattr__(self, "table", table)

    @classmethod
    def named(cls, name: str, entries: int = 256) -> Colormap:
        """Built-in colormap sampled at ``entries`` evenly spaced points.

        Raises:
            InvalidParameter: If the name is not a built-in colormap
        """
        key = name.strip().lower() if isinstance(name, str) else name
        if key not in BUILTIN_COLORMAPS:
            raise InvalidParameter(
                f"Unknown colormap {name!r}; expected one of {list(BUILTIN_COLORMAPS)}",
                colormap=name,
            )
        if entries < 2:
            raise InvalidParameter(
                f"A colormap needs at least 2 entries, got {entries}", entries=entries
            )
        return _sample_registry(key, int(entries))

    @classmethod
    def from_table(cls, table: Any, name: str = "custom") -> Colormap:
        """Wrap a caller table of floats in [0, 1] or uint8 values 0..255."""
        arr = np.asarray(table)
        if arr.dtype == np.uint8:
            arr = arr.astype(np.float64) / 255.0
        return cls(name=name, table=arr)

    def __len__(self) -> int:
        return int(self.table.shape[0])

    def lookup(self, values: np.ndarray) -> np.ndarray:
        """Map values in [0, 1] to uint8 RGB with shape values.shape + (3,).

        Values outside [0, 1] are clipped.
        """
        v = np.clip(np.asarray(values, dtype=np.float64), 0.0, 1.0)
        last = len(self) - 1
        pos = v * last
        lo = np.minimum(np.floor(pos).astype(np.intp), last - 1)
        frac = (pos - lo)[..., np.newaxis]
        rgb = self.table[lo] * (1.0 - frac) + self.table[lo + 1] * frac
        return np.rint(rgb * 255.0).astype(np.uint8)


@lru_cache(maxsize=64)
def _sample_registry(name: str, entries: int) -> Colormap:
    cmap = matplotlib.colormaps[name]
    rgba = cmap(np.linspace(0.0, 1.0, entries))
    return Colormap(name=name, table=np.clip(rgba[:, :3], 0.0, 1.0))


def resolve_colormap(colormap: str | Colormap, entries: int = 256) -> Colormap:
    """Accept a built-in name or a Colormap instance."""
    if isinstance(colormap, Colormap):
        return colormap
    return Colormap.named(colormap, entries)
