"""World: Entity-Component-System manager for signals and their transforms.

The World is the central ECS registry that manages:
- Entity creation (integer IDs)
- Component storage (type -> entity -> component mapping)
- Component queries (find entities with specific component combinations)
- Arena memory management

Example:
    >>> world = World()
    >>> eid = world.spawn_signal(np.sin(np.arange(512) / 8.0), sampling_rate=100.0)
    >>> world.add_component(eid, generate_scales(1.0, 64.0, 32))
    >>> entities = world.query(Signal, ScaleSet)
    >>> world.clear()  # Reset for next batch
"""

from __future__ import annotations

from typing import Any, TypeVar

import numpy as np
from pydantic import BaseModel

from cwt_ecs.core.arena import Arena
from cwt_ecs.core.errors import InvalidParameter
from cwt_ecs.core.precision import Precision

Component = BaseModel

T = TypeVar("T", bound=Component)


def validate_samples(samples: Any, precision: Precision | str | None) -> tuple[np.ndarray, Precision]:
    """Validate raw samples and cast them to the requested precision."""
    arr = np.asarray(samples)
    if arr.ndim != 1:
        raise InvalidParameter(
            f"Expected a 1-D signal, got shape {arr.shape}", shape=arr.shape
        )
    if np.iscomplexobj(arr):
        raise InvalidParameter(
            f"Expected real-valued samples, got dtype {arr.dtype}", dtype=str(arr.dtype)
        )
    if arr.dtype.kind not in "biuf":
        raise InvalidParameter(
            f"Expected numeric samples, got dtype {arr.dtype}", dtype=str(arr.dtype)
        )
    resolved = Precision.of(precision, hint=arr.dtype)
    arr = arr.astype(resolved.real_dtype, copy=False)
    if arr.size and not np.all(np.isfinite(arr)):
        raise InvalidParameter("Signal contains NaN or infinite samples")
    return arr, resolved


class World:
    """Central ECS registry managing entities, components, and memory.

    The World owns:
    - Arena: Memory for samples, coefficients and pixels
    - Entity registry: Integer entity IDs
    - Component stores: Mappings from (component_type, entity_id) to component
    - Metadata: Arbitrary key-value data per entity

    Attributes:
        arena: Memory arena for tensor allocation
        metadata: Per-entity metadata dict
    """

    def __init__(self, arena_bytes: int = 64 << 20):
        """Create World with specified arena size.

        Args:
            arena_bytes: Arena size in bytes (default 64 MB)
        """
        self.arena = Arena(size_bytes=arena_bytes)
        self._next_eid = 0
        self._components: dict[type[Component], dict[int, Component]] = {}
        self.metadata: dict[int, dict[str, Any]] = {}

    def new_entity(self) -> int:
        """Create a new entity and return its ID."""
        eid = self._next_eid
        self._next_eid += 1
        self.metadata[eid] = {}
        return eid

    def spawn_signal(
        self,
        samples: Any,
        sampling_rate: float = 1.0,
        precision: Precision | str | None = None,
    ) -> int:
        """Ingest a signal into the world.

        Args:
            samples: 1-D real samples
            sampling_rate: Samples per second (1.0 makes scales count samples)
            precision: 'single' or 'double'; inferred from the dtype if None
                (float32 -> single, anything else -> double)

        Returns:
            Entity ID with a Signal component attached

        Raises:
            InvalidParameter: If samples are not 1-D, real and finite
        """
        from cwt_ecs.components.signal import Signal

        arr, resolved = validate_samples(samples, precision)

        eid = self.new_entity()
        samples_ref = self.arena.copy_tensor(arr)
        self.add_component(
            eid,
            Signal(samples=samples_ref, sampling_rate=sampling_rate, precision=resolved),
        )

        self.metadata[eid]["signal_length"] = int(arr.shape[0])
        self.metadata[eid]["precision"] = resolved.value

        return eid

    def spawn_batch_signals(
        self,
        signals: list[Any],
        sampling_rate: float = 1.0,
        precision: Precision | str | None = None,
    ) -> list[int]:
        """Ingest equal-length signals, stored contiguously as one batch.

        Args:
            signals: List of 1-D sample arrays with the same length
            sampling_rate: Shared sampling rate
            precision: Shared precision (inferred from the first signal if None)

        Returns:
            List of entity IDs with Signal components attached

        Raises:
            InvalidParameter: If signals differ in length or are invalid
        """
        from cwt_ecs.components.signal import Signal

        if not signals:
            return []

        first, resolved = validate_samples(signals[0], precision)
        arrays = [first]
        for i, samples in enumerate(signals[1:], start=1):
            arr, _ = validate_samples(samples, resolved)
            if arr.shape != first.shape:
                raise InvalidParameter(
                    f"Signal {i} has length {arr.shape[0]}, expected {first.shape[0]}",
                    index=i,
                )
            arrays.append(arr)

        batch_ref = self.arena.copy_tensor(np.stack(arrays))

        eids = []
        for i, row_ref in enumerate(batch_ref.rows()):
            eid = self.new_entity()
            self.add_component(
                eid,
                Signal(samples=row_ref, sampling_rate=sampling_rate, precision=resolved),
            )
            self.metadata[eid]["signal_length"] = int(first.shape[0])
            self.metadata[eid]["precision"] = resolved.value
            self.metadata[eid]["batch_index"] = i
            eids.append(eid)

        return eids

    def clear(self) -> None:
        """Reset arena and clear all entities/components for reuse.

        After clear(), all TensorRefs from previous entities are invalidated.
        """
        self.arena.reset()
        self._next_eid = 0
        self._components.clear()
        self.metadata.clear()

    def add_component(self, eid: int, component: Component) -> None:
        """Attach a component to an entity, replacing one of the same type.

        Raises:
            ValueError: If entity does not exist
        """
        if eid not in self.metadata:
            raise ValueError(f"Entity {eid} does not exist")

        self._components.setdefault(type(component), {})[eid] = component

    def get_component(self, eid: int, comp_type: type[T]) -> T:
        """Retrieve a component from an entity.

        Raises:
            KeyError: If entity does not have the component
        """
        if comp_type not in self._components:
            raise KeyError(f"No entities have component type {comp_type.__name__}")
        if eid not in self._components[comp_type]:
            raise KeyError(f"Entity {eid} does not have component {comp_type.__name__}")

        return self._components[comp_type][eid]  # type: ignore

    def has_component(self, eid: int, comp_type: type[Component]) -> bool:
        """Check if entity has a specific component type."""
        return (
            comp_type in self._components
            and eid in self._components[comp_type]
        )

    def remove_component(self, eid: int, comp_type: type[Component]) -> None:
        """Remove a component from an entity.

        Raises:
            KeyError: If entity does not have the component
        """
        if not self.has_component(eid, comp_type):
            raise KeyError(f"Entity {eid} does not have component {comp_type.__name__}")

        del self._components[comp_type][eid]

    def query(self, *comp_types: type[Component]) -> list[int]:
        """Query entities that have ALL specified component types.

        Example:
            >>> eids = world.query(Signal, ScaleSet)  # ready to transform
        """
        if not comp_types:
            return list(self.metadata.keys())

        result_set = set(self._components.get(comp_types[0], {}).keys())
        for comp_type in comp_types[1:]:
            if comp_type not in self._components:
                return []
            result_set &= set(self._components[comp_type].keys())

        return sorted(result_set)

    def destroy_entity(self, eid: int) -> None:
        """Remove entity and all its components.

        Note:
            Arena memory is only released by clear().
        """
        if eid not in self.metadata:
            raise ValueError(f"Entity {eid} does not exist")

        for comp_store in self._components.values():
            comp_store.pop(eid, None)

        del self.metadata[eid]

    def pipe(self, entity: int | list[int]) -> Any:
        """Create a pipeline for the given entity (or list of entities).

        Example:
            >>> pixels = (
            ...     world.pipe(entity)
            ...     .to(WaveletTransform(Morlet()))
            ...     .to(RenderScaleogram(colormap="viridis"))
            ...     .out(Scaleogram)
            ... )
        """
        from cwt_ecs.core.pipeline import Pipe

        return Pipe(world=self, entity=entity)

    def __repr__(self) -> str:
        num_entities = len(self.metadata)
        num_comp_types = len(self._components)
        return (
            f"World(entities={num_entities}, component_types={num_comp_types}, "
            f"arena={self.arena})"
        )
