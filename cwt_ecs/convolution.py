"""Same-length cross-correlation of a signal with a wavelet kernel.

Convention: for a kernel k of length K = 2L + 1 centred on index L,

    c[t] = sum_{tau=-L..L} x[t + tau] * conj(k[L + tau]),   t = 0..N-1

with x taken as zero outside [0, N). Both methods compute the full linear
correlation (length N + K - 1) and keep the N samples aligned with the
kernel centre, so there is no wrap-around.

- direct: ``numpy.convolve`` with the conjugated, time-reversed kernel
- frequency_domain: ``scipy.fft`` products padded to ``next_fast_len``;
  rfft/irfft when the kernel is real, fft/ifft when it is complex.
  scipy.fft keeps float32 inputs in single precision.
"""

from __future__ import annotations

import math
from typing import Literal

import numpy as np
from scipy import fft as sp_fft

from cwt_ecs.core.errors import InvalidParameter

Method = Literal["auto", "direct", "frequency_domain"]
METHODS: tuple[str, ...] = ("auto", "direct", "frequency_domain")


def check_method(method: str) -> str:
    """Raise InvalidParameter for a method name outside METHODS."""
    if method not in METHODS:
        raise InvalidParameter(
            f"Unknown correlation method {method!r}; expected one of {list(METHODS)}",
            method=method,
        )
    return method


def fft_length(signal_length: int, kernel_length: int) -> int:
    """Padded FFT length for a full linear correlation."""
    return sp_fft.next_fast_len(signal_length + kernel_length - 1, real=True)


def choose_method(
    signal_length: int, kernel_length: int, fft_cost_factor: float = 3.0
) -> str:
    """Pick 'direct' or 'frequency_domain' from a simple cost model.

    Direct correlation costs about N*K multiply-adds; the FFT path about
    fft_cost_factor * n*log2(n) for the padded length n.
    """
    n = fft_length(signal_length, kernel_length)
    direct_cost = signal_length * kernel_length
    fft_cost = fft_cost_factor * n * math.log2(max(n, 2))
    return "direct" if direct_cost <= fft_cost else "frequency_domain"


def correlate_direct(x: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """Same-length correlation by direct summation."""
    half = kernel.shape[0] // 2
    full = np.convolve(x, np.conj(kernel[::-1]))
    return full[half : half + x.shape[0]]


def correlate_fft(x: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """Same-length correlation through zero-padded FFT products."""
    n_x = x.shape[0]
    half = kernel.shape[0] // 2
    n = fft_length(n_x, kernel.shape[0])
    reversed_kernel = np.conj(kernel[::-1])

    if np.iscomplexobj(reversed_kernel) or np.iscomplexobj(x):
        spectrum = sp_fft.fft(x, n) * sp_fft.fft(reversed_kernel, n)
        full = sp_fft.ifft(spectrum, n)
    else:
        spectrum = sp_fft.rfft(x, n) * sp_fft.rfft(reversed_kernel, n)
        full = sp_fft.irfft(spectrum, n)
    return full[half : half + n_x]


def correlate_same(
    x: np.ndarray,
    kernel: np.ndarray,
    method: Method | str = "auto",
    out: np.ndarray | None = None,
    fft_cost_factor: float = 3.0,
) -> np.ndarray:
    """Correlate x with a centred kernel, returning len(x) samples.

    Args:
        x: 1-D real signal
        kernel: 1-D kernel of odd length, real or complex
        method: 'auto', 'direct' or 'frequency_domain'
        out: Optional array of len(x) to write the result into
        fft_cost_factor: Weight of the FFT cost when method is 'auto'

    Returns:
        The result array (``out`` when given), in the common dtype of x
        and kernel

    Raises:
        InvalidParameter: If the method is unknown
    """
    check_method(method)
    if method == "auto":
        method = choose_method(x.shape[0], kernel.shape[0], fft_cost_factor)

    row = correlate_direct(x, kernel) if method == "direct" else correlate_fft(x, kernel)
    dtype = np.result_type(x.dtype, kernel.dtype)
    if out is None:
        return row.astype(dtype, copy=False)
    out[...] = row
    return out
