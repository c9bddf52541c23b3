"""Continuous wavelet transform system.

Signal + ScaleSet -> Coefficients. For every scale the wavelet kernel is
sampled at the signal's precision and correlated with the samples; row i
of the (M, N) coefficient matrix belongs to scale i.

All scales are validated before any row is computed, and the
Coefficients component is attached only after every row succeeded.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from cwt_ecs.components.coefficients import Coefficients
from cwt_ecs.components.scales import ScaleSet
from cwt_ecs.components.signal import Signal
from cwt_ecs.convolution import Method, check_method, choose_method, correlate_same
from cwt_ecs.core.config import TransformConfig
from cwt_ecs.core.errors import EmptySignal, InvalidParameter, ScaleTooLarge
from cwt_ecs.core.precision import Precision
from cwt_ecs.core.system import System
from cwt_ecs.wavelets import Morlet, Wavelet

if TYPE_CHECKING:
    from cwt_ecs.core.world import World

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowPlan:
    """Validated work for one scale."""

    scale: float
    kernel_length: int
    method: str


def plan_rows(
    wavelet: Wavelet,
    scales: ScaleSet,
    signal_length: int,
    dt: float,
    method: Method | str = "auto",
    config: TransformConfig | None = None,
) -> list[RowPlan]:
    """Validate every scale against the signal and pick a method per row.

    Raises:
        EmptySignal: If the signal has no samples
        DegenerateSupport: If a kernel would collapse to a single tap
        ScaleTooLarge: If a kernel is longer than max_support_ratio * N
        InvalidParameter: If the method is unknown
    """
    check_method(method)
    config = config or TransformConfig()
    if signal_length == 0:
        raise EmptySignal("Cannot transform an empty signal", signal_length=0)

    bound = config.max_support_ratio * signal_length
    plans = []
    for scale in scales.values:
        length = wavelet.support(scale, dt)
        if length > bound:
            raise ScaleTooLarge(
                f"Scale {scale:.6g} needs a {wavelet.family} kernel of {length} samples, "
                f"more than {config.max_support_ratio:g} x signal length {signal_length} "
                f"(= {bound:g})",
                scale=scale,
                kernel_length=length,
                signal_length=signal_length,
                bound=bound,
            )
        chosen = (
            choose_method(signal_length, length, config.fft_cost_factor)
            if method == "auto"
            else method
        )
        plans.append(RowPlan(scale=scale, kernel_length=length, method=chosen))
    return plans


def compute_rows(
    x: np.ndarray,
    wavelet: Wavelet,
    plans: list[RowPlan],
    dt: float,
    out: np.ndarray | list[np.ndarray],
    max_workers: int | None = None,
) -> None:
    """Fill out[i] with the correlation of x against the kernel of plans[i].

    Each row is an independent task; with more than one worker the tasks
    run on a thread pool and each one writes only its own row.
    """
    real = x.dtype

    def row_task(i: int) -> None:
        plan = plans[i]
        kernel = wavelet.kernel(plan.scale, dt, dtype=real)
        correlate_same(x, kernel, plan.method, out=out[i])

    workers = max_workers or os.cpu_count() or 1
    workers = min(workers, len(plans))
    logger.debug("Computing %d rows with %d worker(s)", len(plans), workers)

    if workers <= 1:
        for i in range(len(plans)):
            row_task(i)
        return

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(row_task, i) for i in range(len(plans))]
        for future in futures:
            future.result()


class WaveletTransform(System):
    """Continuous wavelet transform: Signal + ScaleSet -> Coefficients.

    Example:
        >>> eid = world.spawn_signal(samples, sampling_rate=250.0)
        >>> world.add_component(eid, generate_scales(0.01, 1.0, 64))
        >>> coeffs = world.pipe(eid).to(WaveletTransform(Paul(order=4))).out(Coefficients)
        >>> world.arena.view(coeffs.coeffs).shape
        (64, 2048)
    """

    def __init__(
        self,
        wavelet: Wavelet | None = None,
        method: Method | str = "auto",
        config: TransformConfig | None = None,
    ):
        """Initialize the transform.

        Args:
            wavelet: Mother wavelet (default Morlet with w0 = 6)
            method: 'auto', 'direct' or 'frequency_domain'
            config: Engine settings (support bound, method cost model,
                worker count)
        """
        if wavelet is None:
            wavelet = Morlet()
        if not isinstance(wavelet, Wavelet):
            raise InvalidParameter(
                f"Expected a Wavelet instance, got {type(wavelet).__name__}",
                wavelet=repr(wavelet),
            )
        self.wavelet = wavelet
        self.method = check_method(method)
        self.config = config or TransformConfig()

    def required_components(self) -> list[type]:
        return [Signal, ScaleSet]

    def produced_components(self) -> list[type]:
        return [Coefficients]

    def run(self, world: World, eids: list[int]) -> None:
        """Transform each entity's signal at its scales.

        Every entity is planned before any rows are allocated, so a failure
        on one entity leaves all of them without Coefficients.

        Raises:
            EmptySignal, ScaleTooLarge, DegenerateSupport: Before any row
                is computed
        """
        planned = []
        for eid in eids:
            signal = world.get_component(eid, Signal)
            scales = world.get_component(eid, ScaleSet)
            plans = plan_rows(
                self.wavelet, scales, len(signal), signal.dt, self.method, self.config
            )
            planned.append((eid, signal, scales, plans))

        outputs = [
            world.arena.alloc_tensor(
                (len(plans), len(signal)),
                Precision.of(signal.precision).dtype_for(self.wavelet.is_complex),
            )
            for _, signal, _, plans in planned
        ]

        for (eid, signal, scales, plans), coeffs_ref in zip(planned, outputs):
            precision = Precision.of(signal.precision)
            x = world.arena.view(signal.samples)
            x.flags.writeable = False

            rows = [world.arena.view(r) for r in coeffs_ref.rows()]
            compute_rows(x, self.wavelet, plans, signal.dt, rows, self.config.max_workers)

            for plan in plans:
                logger.debug(
                    "entity %d: scale %.6g, kernel %d taps, method %s",
                    eid,
                    plan.scale,
                    plan.kernel_length,
                    plan.method,
                )
            world.metadata[eid]["methods"] = [plan.method for plan in plans]
            world.metadata[eid]["kernel_lengths"] = [plan.kernel_length for plan in plans]

            world.add_component(
                eid,
                Coefficients(
                    coeffs=coeffs_ref,
                    scales=scales,
                    wavelet=self.wavelet.family,
                    is_complex=self.wavelet.is_complex,
                    precision=precision,
                    sampling_rate=signal.sampling_rate,
                ),
            )

    def __repr__(self) -> str:
        return f"WaveletTransform(wavelet={self.wavelet!r}, method={self.method!r})"
