"""Transform output components: Coefficients and Scaleogram."""

from typing import Literal

from pydantic import Field

from cwt_ecs.components.scales import ScaleSet
from cwt_ecs.components.signal import Component
from cwt_ecs.core.arena import TensorRef
from cwt_ecs.core.precision import Precision


class Coefficients(Component):
    """CWT coefficient matrix, one row per scale and one column per sample.

    Attributes:
        coeffs: TensorRef to (M, N) coefficients; complex dtype for complex
            wavelets, real dtype otherwise, at the signal's precision
        scales: Scales the rows correspond to, in row order
        wavelet: Wavelet family name
        is_complex: Whether coefficients are complex
        precision: Floating-point width of the coefficients
        sampling_rate: Sampling rate of the analysed signal
    """

    coeffs: TensorRef
    scales: ScaleSet
    wavelet: str
    is_complex: bool
    precision: Precision
    sampling_rate: float = Field(default=1.0, gt=0.0)


class Scaleogram(Component):
    """RGB rendering of a coefficient matrix.

    Attributes:
        pix: TensorRef to (H, W, 3) uint8 pixels
        reduction: 'magnitude' or 'power'
        normalization: 'linear_minmax' or 'log_compressed'
        colormap: Colormap name ('custom' for caller tables)
        degenerate: True when the matrix had no range and was filled with
            the neutral colour
    """

    pix: TensorRef
    reduction: Literal["magnitude", "power"]
    normalization: Literal["linear_minmax", "log_compressed"]
    colormap: str
    degenerate: bool = Field(default=False)
