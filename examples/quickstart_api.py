#!/usr/bin/env python3
"""Quickstart example using the high-level transform/render API.

This example shows the simplest way to use the SDK:
- Synthesize a chirp with a short burst on top
- Pick scales covering a frequency band with frequencies_to_scales()
- Compute the coefficient matrix with transform()
- Render it to an RGB scaleogram with render() and save it as PNG
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from cwt_ecs import (
    frequencies_to_scales,
    render,
    scale_bounds,
    scales_to_frequencies,
    transform,
    wavelet_from_config,
)


def _synthesize(duration: float, sampling_rate: float) -> np.ndarray:
    t = np.arange(int(duration * sampling_rate)) / sampling_rate
    chirp = np.sin(2 * np.pi * (4.0 + 20.0 * t) * t)
    burst = np.exp(-((t - duration / 2) ** 2) / 0.002) * np.sin(2 * np.pi * 80.0 * t)
    return chirp + burst


def _save_image(path: Path, image: np.ndarray) -> bool:
    try:
        from PIL import Image
    except ImportError:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(image).save(path)
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Quickstart API example")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("examples/scaleogram_api.png"),
        help="Output path for the rendered scaleogram",
    )
    parser.add_argument("--wavelet", default="morlet", help="Wavelet family name")
    parser.add_argument("--sampling-rate", type=float, default=500.0, help="Samples per second")
    parser.add_argument("--duration", type=float, default=4.0, help="Signal length in seconds")
    parser.add_argument("--voices", type=int, default=96, help="Number of scales")
    parser.add_argument(
        "--colormap",
        default=None,
        help="Colormap name (defaults to the configured one)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to cwt_ecs.toml (auto-detected if omitted)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config_arg = str(args.config) if args.config else None

    signal = _synthesize(args.duration, args.sampling_rate)
    wavelet = wavelet_from_config(args.wavelet)
    smallest, largest = scale_bounds(wavelet, signal.shape[0], args.sampling_rate)
    print(f"Signal: {signal.shape[0]} samples at {args.sampling_rate:g} Hz")
    print(f"Usable {wavelet.family} scales: {smallest:.4g}s .. {largest:.4g}s")

    nyquist = args.sampling_rate / 2
    frequencies = np.geomspace(2.0, 0.8 * nyquist, args.voices)
    scales = frequencies_to_scales(wavelet, frequencies, args.sampling_rate)

    print("Transforming...")
    coeffs = transform(
        signal,
        wavelet,
        scales,
        sampling_rate=args.sampling_rate,
        config_path=config_arg,
    )
    print(f"Coefficients: shape={coeffs.shape} dtype={coeffs.dtype}")

    # Dominant frequency per quarter of the recording
    magnitude = np.abs(coeffs)
    centers = scales_to_frequencies(wavelet, scales)
    for i, block in enumerate(np.array_split(magnitude, 4, axis=1)):
        row = int(np.argmax(block.mean(axis=1)))
        print(f"  quarter {i + 1}: peak near {centers[row]:.1f} Hz")

    print("Rendering...")
    pixels = render(
        coeffs,
        "magnitude",
        "log_compressed",
        args.colormap,
        output_shape=(256, 1024),
        flip=True,
        config_path=config_arg,
    )

    if _save_image(args.output, pixels):
        print(f"Scaleogram saved to: {args.output}")
    else:
        print("Pillow not installed; skipping image save")


if __name__ == "__main__":
    main()
