"""Continuous wavelet transform engine with an ECS architecture.

This package computes the continuous wavelet transform (CWT) of 1-D real
signals and renders the coefficients as colour scaleograms:
- Scale sets on linear, logarithmic or octave grids
- Morlet, Ricker, Paul and Gaussian-derivative wavelets
- Direct or FFT correlation, chosen per scale
- Single or double precision throughout
- Entity-Component-System (ECS) architecture over an Arena allocator

Quick Start:
    >>> import numpy as np
    >>> from cwt_ecs import generate_scales, transform, render
    >>>
    >>> t = np.arange(2048) / 256.0
    >>> signal = np.sin(2 * np.pi * 8.0 * t)
    >>> scales = generate_scales(0.01, 1.0, 64, "logarithmic")
    >>> coeffs = transform(signal, "morlet", scales, sampling_rate=256.0)
    >>> pixels = render(coeffs, normalization="log_compressed", colormap="viridis")

For more control, use the fluent pipeline API:
    >>> from cwt_ecs import World, WaveletTransform, RenderScaleogram, Scaleogram
    >>> from cwt_ecs.wavelets import Paul
    >>>
    >>> world = World()
    >>> entity = world.spawn_signal(signal, sampling_rate=256.0)
    >>> world.add_component(entity, scales)
    >>> image = (
    ...     world.pipe(entity)
    ...     .to(WaveletTransform(Paul(order=4)))
    ...     .to(RenderScaleogram(flip=True))
    ...     .out(Scaleogram)
    ... )
"""

__version__ = "0.1.0"

from cwt_ecs.api import render, scaleogram, transform
from cwt_ecs.colormaps import BUILTIN_COLORMAPS, Colormap
from cwt_ecs.components import Coefficients, ScaleSet, Scaleogram, Signal
from cwt_ecs.core.arena import Arena, TensorRef
from cwt_ecs.core.config import CWTConfig, RenderConfig, TransformConfig, load_config
from cwt_ecs.core.errors import (
    CWTError,
    DegenerateRange,
    DegenerateSupport,
    EmptyMatrix,
    EmptySignal,
    InvalidCount,
    InvalidParameter,
    InvalidRange,
    ScaleTooLarge,
)
from cwt_ecs.core.precision import Precision
from cwt_ecs.core.world import World
from cwt_ecs.scales import (
    Octave,
    frequencies_to_scales,
    generate_scales,
    scale_bounds,
    scales_to_frequencies,
)
from cwt_ecs.systems import RenderScaleogram, WaveletTransform
from cwt_ecs.wavelets import (
    GaussianDerivative,
    Morlet,
    Paul,
    Ricker,
    Wavelet,
    wavelet_from_config,
)

__all__ = [
    "__version__",
    "generate_scales",
    "transform",
    "render",
    "scaleogram",
    "Octave",
    "scales_to_frequencies",
    "frequencies_to_scales",
    "scale_bounds",
    "World",
    "Arena",
    "TensorRef",
    "Signal",
    "ScaleSet",
    "Coefficients",
    "Scaleogram",
    "WaveletTransform",
    "RenderScaleogram",
    "Wavelet",
    "Morlet",
    "Ricker",
    "Paul",
    "GaussianDerivative",
    "wavelet_from_config",
    "Colormap",
    "BUILTIN_COLORMAPS",
    "Precision",
    "CWTConfig",
    "TransformConfig",
    "RenderConfig",
    "load_config",
    "CWTError",
    "InvalidRange",
    "InvalidCount",
    "InvalidParameter",
    "DegenerateSupport",
    "EmptySignal",
    "ScaleTooLarge",
    "EmptyMatrix",
    "DegenerateRange",
]
