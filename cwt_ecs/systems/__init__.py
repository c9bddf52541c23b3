"""ECS systems: the wavelet transform and the scaleogram renderer."""

from cwt_ecs.systems.scaleogram import RenderScaleogram, render_matrix
from cwt_ecs.systems.transform import WaveletTransform

__all__ = ["WaveletTransform", "RenderScaleogram", "render_matrix"]
