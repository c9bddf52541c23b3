"""ECS components: Signal, ScaleSet, Coefficients, Scaleogram."""

from cwt_ecs.components.coefficients import Coefficients, Scaleogram
from cwt_ecs.components.scales import ScaleSet
from cwt_ecs.components.signal import Component, Signal

__all__ = ["Component", "Signal", "ScaleSet", "Coefficients", "Scaleogram"]
