"""Scaleogram rendering system.

Coefficients -> Scaleogram, in four vectorised passes over the matrix:

1. Reduction: magnitude |c| or power |c|^2
2. Normalisation to [0, 1]: linear min-max, or log-compressed (values
   floored at max * 10^(-dynamic_range_db / 10), converted to dB, then
   min-max)
3. Optional bilinear resize to an output shape and vertical flip
4. Colormap lookup to uint8 RGB
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal

import numpy as np
from skimage.transform import resize

from cwt_ecs.colormaps import Colormap, resolve_colormap
from cwt_ecs.components.coefficients import Coefficients, Scaleogram
from cwt_ecs.core.config import RenderConfig
from cwt_ecs.core.errors import DegenerateRange, EmptyMatrix, InvalidParameter
from cwt_ecs.core.system import System

if TYPE_CHECKING:
    from cwt_ecs.core.world import World

logger = logging.getLogger(__name__)

Reduction = Literal["magnitude", "power"]
Normalization = Literal["linear_minmax", "log_compressed"]

REDUCTIONS: tuple[str, ...] = ("magnitude", "power")
NORMALIZATIONS: tuple[str, ...] = ("linear_minmax", "log_compressed")


def _check_output_shape(output_shape: Any) -> tuple[int, int] | None:
    if output_shape is None:
        return None
    try:
        height, width = (int(v) for v in output_shape)
    except (TypeError, ValueError) as e:
        raise InvalidParameter(
            f"output_shape must be (height, width), got {output_shape!r}",
            output_shape=output_shape,
        ) from e
    if height < 1 or width < 1:
        raise InvalidParameter(
            f"output_shape must be positive, got {(height, width)}",
            output_shape=(height, width),
        )
    return height, width


def reduce_matrix(matrix: np.ndarray, reduction: Reduction | str = "magnitude") -> np.ndarray:
    """Magnitude or power of each coefficient as float64."""
    if reduction not in REDUCTIONS:
        raise InvalidParameter(
            f"Unknown reduction {reduction!r}; expected one of {list(REDUCTIONS)}",
            reduction=reduction,
        )
    magnitude = np.abs(matrix).astype(np.float64, copy=False)
    return magnitude if reduction == "magnitude" else magnitude * magnitude


def normalize_matrix(
    reduced: np.ndarray,
    normalization: Normalization | str = "linear_minmax",
    dynamic_range_db: float = 60.0,
) -> np.ndarray | None:
    """Scale reduced values to [0, 1]; None when the matrix has no range.

    Raises:
        InvalidParameter: If the normalization is unknown or a value is NaN or inf
    """
    if normalization not in NORMALIZATIONS:
        raise InvalidParameter(
            f"Unknown normalization {normalization!r}; expected one of {list(NORMALIZATIONS)}",
            normalization=normalization,
        )
    finite = np.isfinite(reduced)
    if not finite.all():
        bad = int(reduced.size - np.count_nonzero(finite))
        raise InvalidParameter(
            f"Coefficients contain {bad} non-finite value(s) (NaN or inf)",
            non_finite=bad,
        )
    lo = float(reduced.min())
    hi = float(reduced.max())
    if not hi > lo:
        return None

    values = reduced
    if normalization == "log_compressed":
        floor = hi * 10.0 ** (-dynamic_range_db / 10.0)
        values = 10.0 * np.log10(np.maximum(reduced, floor))
        lo = float(values.min())
        hi = float(values.max())
    return (values - lo) / (hi - lo)


def render_matrix(
    matrix: Any,
    reduction: Reduction | str = "magnitude",
    normalization: Normalization | str = "linear_minmax",
    colormap: str | Colormap | None = None,
    *,
    output_shape: tuple[int, int] | None = None,
    flip: bool = False,
    strict: bool = False,
    config: RenderConfig | None = None,
) -> tuple[np.ndarray, bool]:
    """Render a 2-D coefficient matrix to an RGB image.

    Args:
        matrix: (M, N) real or complex coefficients
        reduction: 'magnitude' or 'power'
        normalization: 'linear_minmax' or 'log_compressed'
        colormap: Built-in name or Colormap (default from config)
        output_shape: Optional (height, width) to resample to
        flip: Put the last row (largest scale) at the top
        strict: Raise DegenerateRange instead of filling a constant image
        config: Render settings

    Returns:
        (pixels, degenerate) where pixels is (H, W, 3) uint8

    Raises:
        EmptyMatrix: If the matrix is not 2-D or has no rows or columns
        DegenerateRange: If strict and max == min after reduction
        InvalidParameter: If a name or the output shape is invalid, or the
            matrix holds NaN or inf
    """
    config = config or RenderConfig()
    m = np.asarray(matrix)
    if m.ndim != 2 or m.shape[0] == 0 or m.shape[1] == 0:
        raise EmptyMatrix(
            f"Expected a non-empty 2-D coefficient matrix, got shape {m.shape}",
            shape=m.shape,
        )
    shape = _check_output_shape(output_shape)
    cmap = resolve_colormap(
        colormap if colormap is not None else config.colormap, config.colormap_entries
    )

    reduced = reduce_matrix(m, reduction)
    normalized = normalize_matrix(reduced, normalization, config.dynamic_range_db)
    height, width = shape or m.shape

    if normalized is None:
        value = float(reduced.flat[0])
        if strict:
            raise DegenerateRange(
                f"Reduced coefficients are constant ({value:.6g}); cannot normalize",
                value=value,
                shape=m.shape,
            )
        logger.warning(
            "Coefficient %s is constant (%.6g) over a %dx%d matrix; filling with %s",
            reduction,
            value,
            m.shape[0],
            m.shape[1],
            config.neutral_color,
        )
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[...] = np.asarray(config.neutral_color, dtype=np.uint8)
        return pixels, True

    if shape is not None and shape != m.shape:
        normalized = resize(
            normalized,
            shape,
            order=1,
            mode="edge",
            preserve_range=True,
            anti_aliasing=False,
        )
        normalized = np.clip(normalized, 0.0, 1.0)
    if flip:
        normalized = normalized[::-1]

    return cmap.lookup(normalized), False


class RenderScaleogram(System):
    """Render Coefficients to a Scaleogram RGB buffer in the arena.

    Example:
        >>> world.pipe(eid).to(WaveletTransform()).to(
        ...     RenderScaleogram(normalization="log_compressed", colormap="viridis")
        ... ).out(Scaleogram)
    """

    def __init__(
        self,
        reduction: Reduction = "magnitude",
        normalization: Normalization = "linear_minmax",
        colormap: str | Colormap | None = None,
        output_shape: tuple[int, int] | None = None,
        flip: bool = False,
        strict: bool = False,
        config: RenderConfig | None = None,
    ):
        if reduction not in REDUCTIONS:
            raise InvalidParameter(
                f"Unknown reduction {reduction!r}; expected one of {list(REDUCTIONS)}",
                reduction=reduction,
            )
        if normalization not in NORMALIZATIONS:
            raise InvalidParameter(
                f"Unknown normalization {normalization!r}; expected one of {list(NORMALIZATIONS)}",
                normalization=normalization,
            )
        self.config = config or RenderConfig()
        self.reduction = reduction
        self.normalization = normalization
        self.colormap = resolve_colormap(
            colormap if colormap is not None else self.config.colormap,
            self.config.colormap_entries,
        )
        self.output_shape = _check_output_shape(output_shape)
        self.flip = flip
        self.strict = strict

    def required_components(self) -> list[type]:
        return [Coefficients]

    def produced_components(self) -> list[type]:
        return [Scaleogram]

    def run(self, world: World, eids: list[int]) -> None:
        """Render every entity first, then attach, so a failure attaches nothing."""
        rendered = []
        for eid in eids:
            coeffs = world.get_component(eid, Coefficients)
            rendered.append(
                render_matrix(
                    world.arena.view(coeffs.coeffs),
                    self.reduction,
                    self.normalization,
                    self.colormap,
                    output_shape=self.output_shape,
                    flip=self.flip,
                    strict=self.strict,
                    config=self.config,
                )
            )

        for eid, (pixels, degenerate) in zip(eids, rendered):
            pix_ref = world.arena.copy_tensor(pixels)
            world.metadata[eid]["degenerate"] = degenerate
            world.add_component(
                eid,
                Scaleogram(
                    pix=pix_ref,
                    reduction=self.reduction,
                    normalization=self.normalization,
                    colormap=self.colormap.name,
                    degenerate=degenerate,
                ),
            )

    def __repr__(self) -> str:
        return (
            f"RenderScaleogram(reduction={self.reduction!r}, "
            f"normalization={self.normalization!r}, colormap={self.colormap.name!r})"
        )
