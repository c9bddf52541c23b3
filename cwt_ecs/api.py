"""High-level API for one-call transforms and scaleograms.

transform(), render() and scaleogram() build a short-lived World, run the
systems through a pipe, and return plain NumPy arrays that the caller
owns.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np

from cwt_ecs.colormaps import Colormap
from cwt_ecs.components.coefficients import Coefficients, Scaleogram
from cwt_ecs.components.scales import ScaleSet
from cwt_ecs.convolution import Method
from cwt_ecs.core.arena import Arena
from cwt_ecs.core.config import CWTConfig, load_config
from cwt_ecs.core.errors import InvalidParameter
from cwt_ecs.core.precision import Precision
from cwt_ecs.core.world import World, validate_samples
from cwt_ecs.scales import generate_scales
from cwt_ecs.systems.scaleogram import Normalization, Reduction, RenderScaleogram, render_matrix
from cwt_ecs.systems.transform import WaveletTransform
from cwt_ecs.wavelets import Morlet, Wavelet, wavelet_from_config

# Arena headroom for per-tensor alignment padding
_ARENA_SLACK = 4096


def _as_wavelet(wavelet: Wavelet | Mapping[str, Any] | str | None) -> Wavelet:
    if wavelet is None:
        return Morlet()
    if isinstance(wavelet, Wavelet):
        return wavelet
    if isinstance(wavelet, (str, Mapping)):
        return wavelet_from_config(wavelet)
    raise InvalidParameter(
        f"Expected a Wavelet, family name or mapping, got {type(wavelet).__name__}",
        wavelet=repr(wavelet),
    )


def _as_scale_set(scales: ScaleSet | Iterable[float]) -> ScaleSet:
    if isinstance(scales, ScaleSet):
        return scales
    return ScaleSet.from_values(scales)


def _resolve_config(config: CWTConfig | None, config_path: str | None) -> CWTConfig:
    return config if config is not None else load_config(config_path)


def _arena_bytes(
    signal_length: int,
    scale_count: int,
    precision: Precision,
    pixel_shape: tuple[int, int] | None = None,
) -> int:
    needed = Arena.bytes_needed((signal_length,), precision.real_dtype)
    needed += Arena.bytes_needed((scale_count, signal_length), precision.complex_dtype)
    if pixel_shape is not None:
        needed += Arena.bytes_needed((*pixel_shape, 3), np.uint8)
    return needed + _ARENA_SLACK


def transform(
    signal: Any,
    wavelet: Wavelet | Mapping[str, Any] | str | None = None,
    scales: ScaleSet | Iterable[float] = (),
    *,
    sampling_rate: float = 1.0,
    precision: Precision | str | None = None,
    method: Method | str = "auto",
    config: CWTConfig | None = None,
    config_path: str | None = None,
) -> np.ndarray:
    """Continuous wavelet transform of a 1-D real signal.

    Args:
        signal: 1-D real samples
        wavelet: Wavelet instance, family name, or {'family': ..., **params}
            mapping (default Morlet, w0 = 6)
        scales: ScaleSet or an increasing sequence of positive scales
        sampling_rate: Samples per second; scales are in seconds
        precision: 'single' or 'double' (inferred from the dtype if None)
        method: 'auto', 'direct' or 'frequency_domain'
        config: Settings (loaded from cwt_ecs.toml if None)
        config_path: Path to cwt_ecs.toml (auto-detected if None)

    Returns:
        (M, N) coefficient matrix, complex for complex wavelets, at the
        signal's precision; row i corresponds to scale i

    Raises:
        InvalidParameter: If the signal, wavelet or method is invalid
        InvalidCount, InvalidRange: If the scales are invalid
        EmptySignal: If the signal has no samples
        ScaleTooLarge: If a kernel exceeds the configured support bound
        DegenerateSupport: If a scale is too small for the sampling rate

    Example:
        >>> t = np.arange(1024) / 100.0
        >>> coeffs = transform(np.sin(2 * np.pi * 5 * t), "morlet",
        ...                    generate_scales(0.02, 1.0, 48), sampling_rate=100.0)
        >>> coeffs.shape, coeffs.dtype
        ((48, 1024), dtype('complex128'))
    """
    samples, resolved = validate_samples(signal, precision)
    scale_set = _as_scale_set(scales)
    cfg = _resolve_config(config, config_path)
    transformer = WaveletTransform(_as_wavelet(wavelet), method=method, config=cfg.transform)

    world = World(arena_bytes=_arena_bytes(samples.shape[0], len(scale_set), resolved))
    try:
        entity = world.spawn_signal(samples, sampling_rate=sampling_rate, precision=resolved)
        world.add_component(entity, scale_set)
        coeffs = world.pipe(entity).to(transformer).out(Coefficients)
        return world.arena.view(coeffs.coeffs).copy()
    finally:
        world.clear()


def render(
    coefficients: Any,
    reduction: Reduction = "magnitude",
    normalization: Normalization = "linear_minmax",
    colormap: str | Colormap | None = None,
    *,
    output_shape: tuple[int, int] | None = None,
    flip: bool = False,
    strict: bool = False,
    config: CWTConfig | None = None,
    config_path: str | None = None,
) -> np.ndarray:
    """Render a coefficient matrix as an (H, W, 3) uint8 scaleogram.

    A matrix whose reduced values are all equal renders as the configured
    neutral colour (with a logged warning), or raises DegenerateRange when
    strict is True.

    Raises:
        EmptyMatrix: If the matrix is not 2-D or has no rows or columns
        DegenerateRange: If strict and the matrix has no range
        InvalidParameter: If a name or the output shape is invalid, or the
            matrix holds NaN or inf
    """
    cfg = _resolve_config(config, config_path)
    pixels, _ = render_matrix(
        coefficients,
        reduction,
        normalization,
        colormap,
        output_shape=output_shape,
        flip=flip,
        strict=strict,
        config=cfg.render,
    )
    return pixels


def scaleogram(
    signal: Any,
    wavelet: Wavelet | Mapping[str, Any] | str | None = None,
    scales: ScaleSet | Iterable[float] = (),
    *,
    sampling_rate: float = 1.0,
    precision: Precision | str | None = None,
    method: Method | str = "auto",
    reduction: Reduction = "magnitude",
    normalization: Normalization = "linear_minmax",
    colormap: str | Colormap | None = None,
    output_shape: tuple[int, int] | None = None,
    flip: bool = False,
    strict: bool = False,
    config: CWTConfig | None = None,
    config_path: str | None = None,
) -> np.ndarray:
    """Transform a signal and render its scaleogram in one pipeline.

    Example:
        >>> pixels = scaleogram(samples, "morlet", generate_scales(1.0, 64.0, 64),
        ...                     normalization="log_compressed", flip=True)
        >>> pixels.shape
        (64, 4096, 3)
    """
    samples, resolved = validate_samples(signal, precision)
    scale_set = _as_scale_set(scales)
    cfg = _resolve_config(config, config_path)
    transformer = WaveletTransform(_as_wavelet(wavelet), method=method, config=cfg.transform)
    renderer = RenderScaleogram(
        reduction=reduction,
        normalization=normalization,
        colormap=colormap,
        output_shape=output_shape,
        flip=flip,
        strict=strict,
        config=cfg.render,
    )

    pixel_shape = renderer.output_shape or (len(scale_set), samples.shape[0])
    world = World(
        arena_bytes=_arena_bytes(samples.shape[0], len(scale_set), resolved, pixel_shape)
    )
    try:
        entity = world.spawn_signal(samples, sampling_rate=sampling_rate, precision=resolved)
        world.add_component(entity, scale_set)
        image = (world.pipe(entity) | transformer | renderer).out(Scaleogram)
        return world.arena.view(image.pix).copy()
    finally:
        world.clear()


__all__ = ["generate_scales", "transform", "render", "scaleogram"]
