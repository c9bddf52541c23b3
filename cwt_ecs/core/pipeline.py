"""Fluent pipeline for chaining systems on one or more entities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel

if TYPE_CHECKING:
    from cwt_ecs.core.system import System
    from cwt_ecs.core.world import World

T = TypeVar("T", bound=BaseModel)


class Pipe:
    """Fluent pipeline builder with dependency checking.

    Chain systems with `.to()` or the `|` operator and execute with
    `.out()` or `.execute()`.

    Example:
        >>> world = World()
        >>> entity = world.spawn_signal(samples)
        >>> world.add_component(entity, generate_scales(2.0, 64.0, 48))
        >>> coeffs = (
        ...     world.pipe(entity)
        ...     | WaveletTransform(Morlet(center_frequency=6.0))
        ... ).out(Coefficients)
    """

    def __init__(self, world: "World", entity: int | list[int]) -> None:
        """Initialize Pipe with world and entity.

        Args:
            world: The ECS world
            entity: Entity ID (or IDs) to apply the pipeline to
        """
        self.world: Any = world
        self.entities = list(entity) if isinstance(entity, list) else [entity]
        self.systems: list[Any] = []

    def to(self, system: "System") -> "Pipe":
        """Add system to pipeline."""
        self.systems.append(system)
        return self

    def __or__(self, system: "System") -> "Pipe":
        """Pipe operator for chaining systems; same as `.to(system)`."""
        return self.to(system)

    def out(self, component_type: type[T]) -> T:
        """Execute pipeline and return the first entity's component.

        Raises:
            RuntimeError: If any system cannot run (missing dependencies)
            KeyError: If entity doesn't have the requested component after execution
        """
        self.execute()
        return self.world.get_component(self.entities[0], component_type)  # type: ignore[no-any-return]

    def execute(self) -> None:
        """Run all systems in order with dependency checking.

        Every entity must satisfy a system's requirements before it runs.

        Raises:
            RuntimeError: If any entity is missing a required component
        """
        for system in self.systems:
            missing = [
                eid for eid in self.entities if not system.can_run(self.world, eid)
            ]
            if missing:
                required = [ct.__name__ for ct in system.required_components()]
                raise RuntimeError(
                    f"System {type(system).__name__} cannot run: "
                    f"entities {missing} missing required components {required}"
                )

            system.run(self.world, self.entities)
