"""Signal component."""

from pydantic import BaseModel, Field

from cwt_ecs.core.arena import TensorRef
from cwt_ecs.core.precision import Precision


class Component(BaseModel):
    """Base class for all ECS components.

    Components are data containers using Pydantic for validation and type safety.
    All array data is stored as TensorRef handles pointing into the arena.
    """

    model_config = {"arbitrary_types_allowed": True, "frozen": True}


class Signal(Component):
    """Finite real signal at a fixed sampling rate.

    Attributes:
        samples: TensorRef to samples (N,) in the precision's real dtype
        sampling_rate: Samples per second
        precision: Floating-point width used by every downstream stage
    """

    samples: TensorRef
    sampling_rate: float = Field(default=1.0, gt=0.0)
    precision: Precision = Field(default=Precision.DOUBLE)

    @property
    def dt(self) -> float:
        """Sampling interval in seconds."""
        return 1.0 / self.sampling_rate

    def __len__(self) -> int:
        return self.samples.shape[0]
