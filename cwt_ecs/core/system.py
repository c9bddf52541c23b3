"""System base class for ECS transformations.

Systems are the "logic" layer of the ECS architecture. They read the
components an entity already has and attach new ones: the wavelet
transform turns Signal + ScaleSet into Coefficients, the renderer turns
Coefficients into a Scaleogram.

Example:
    >>> class Energy(System):
    ...     def required_components(self):
    ...         return [Coefficients]
    ...     def produced_components(self):
    ...         return []
    ...     def run(self, world, eids):
    ...         for eid in eids:
    ...             coeffs = world.get_component(eid, Coefficients)
    ...             world.metadata[eid]["energy"] = float(
    ...                 (abs(world.arena.view(coeffs.coeffs)) ** 2).sum()
    ...             )
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cwt_ecs.core.world import World


class System(ABC):
    """Base class for all ECS systems.

    Systems declare:
    - required_components(): What inputs they need
    - produced_components(): What outputs they create
    - run(): The actual transformation logic
    """

    @abstractmethod
    def required_components(self) -> list[type]:
        """Return list of component types this system requires as input."""

    @abstractmethod
    def produced_components(self) -> list[type]:
        """Return list of component types this system produces as output."""

    @abstractmethod
    def run(self, world: World, eids: list[int]) -> None:
        """Execute system on given entities.

        Args:
            world: World instance with entities and components
            eids: List of entity IDs to process

        Note:
            A system either attaches its outputs to an entity or raises;
            it never leaves a partially written component behind.
        """

    def can_run(self, world: World, eid: int) -> bool:
        """Check if entity has all required components."""
        return all(world.has_component(eid, ct) for ct in self.required_components())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
