#!/usr/bin/env python3
"""Batch pipeline example using World + System APIs.

This example spawns several noisy tones as one contiguous batch, runs
WaveletTransform and RenderScaleogram over all of them with the fluent
pipe, and saves one PNG per entity.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from cwt_ecs import (
    Coefficients,
    Octave,
    RenderScaleogram,
    Scaleogram,
    WaveletTransform,
    World,
    generate_scales,
    load_config,
    scales_to_frequencies,
    wavelet_from_config,
)


def main() -> None:
    parser = argparse.ArgumentParser(description="Batch scaleogram pipeline example")
    parser.add_argument("--count", type=int, default=4, help="Number of signals")
    parser.add_argument("--length", type=int, default=4096, help="Samples per signal")
    parser.add_argument("--sampling-rate", type=float, default=1000.0, help="Samples per second")
    parser.add_argument("--wavelet", default="paul", help="Wavelet family name")
    parser.add_argument("--voices", type=int, default=16, help="Voices per octave")
    parser.add_argument("--octaves", type=int, default=6, help="Number of octaves")
    parser.add_argument(
        "--single",
        action="store_true",
        help="Run in single precision (float32 / complex64)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("examples/batch"),
        help="Directory for rendered PNGs",
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
    config = load_config(str(args.config) if args.config else None)

    rng = np.random.default_rng(0)
    t = np.arange(args.length) / args.sampling_rate
    tones = rng.uniform(10.0, 120.0, args.count)
    signals = [np.sin(2 * np.pi * f * t) + 0.5 * rng.standard_normal(t.shape) for f in tones]
    dtype = np.float32 if args.single else np.float64

    world = World()
    eids = world.spawn_batch_signals(
        [s.astype(dtype) for s in signals], sampling_rate=args.sampling_rate
    )
    print(f"Spawned {len(eids)} signals of {args.length} samples")

    wavelet = wavelet_from_config(args.wavelet)
    scales = generate_scales(
        2.0 / args.sampling_rate,
        policy=Octave(voices_per_octave=args.voices, octaves=args.octaves),
    )
    for eid in eids:
        world.add_component(eid, scales)

    print(f"Transforming and rendering with {wavelet!r} over {len(scales)} scales...")
    (
        world.pipe(eids)
        | WaveletTransform(wavelet, config=config.transform)
        | RenderScaleogram(
            normalization="log_compressed",
            output_shape=(len(scales) * 2, 1024),
            flip=True,
            config=config.render,
        )
    ).execute()

    try:
        from PIL import Image
    except ImportError:
        Image = None
        print("Pillow not installed; skipping image save")
    else:
        args.output_dir.mkdir(parents=True, exist_ok=True)

    freqs = scales_to_frequencies(wavelet, scales)
    print(f"\n{'Entity':<8} {'Tone (Hz)':<10} {'Peak (Hz)':<10} {'Image':<16} {'Methods'}")
    print("-" * 70)
    for eid, tone in zip(eids, tones):
        coeffs = world.arena.view(world.get_component(eid, Coefficients).coeffs)
        image = world.get_component(eid, Scaleogram)
        pixels = world.arena.view(image.pix)
        peak = freqs[int(np.argmax(np.abs(coeffs).mean(axis=1)))]
        methods = sorted(set(world.metadata[eid]["methods"]))
        print(
            f"{eid:<8} {tone:<10.1f} {peak:<10.1f} {str(pixels.shape):<16} {', '.join(methods)}"
        )
        if Image is not None:
            Image.fromarray(pixels).save(args.output_dir / f"scaleogram_{eid}.png")

    print("-" * 70)
    print(world)


if __name__ == "__main__":
    main()
