"""Tests for System base class."""

import numpy as np
import pytest

from cwt_ecs.components import Coefficients, ScaleSet, Signal
from cwt_ecs.components.signal import Component
from cwt_ecs.core.system import System
from cwt_ecs.core.world import World


class Energy(Component):
    """Total signal energy."""

    value: float


class SignalEnergy(System):
    """Sum of squared samples per entity."""

    def required_components(self) -> list[type]:
        return [Signal]

    def produced_components(self) -> list[type]:
        return [Energy]

    def run(self, world: World, eids: list[int]) -> None:
        for eid in eids:
            signal = world.get_component(eid, Signal)
            samples = world.arena.view(signal.samples)
            world.add_component(eid, Energy(value=float(np.sum(samples * samples))))


class NeedsScales(System):
    """System that needs both a signal and its scales."""

    def required_components(self) -> list[type]:
        return [Signal, ScaleSet]

    def produced_components(self) -> list[type]:
        return [Coefficients]

    def run(self, world: World, eids: list[int]) -> None:
        pass


class TestSystemBase:
    """Tests for System base class."""

    def test_declared_components(self) -> None:
        """Test required/produced component declarations."""
        system = SignalEnergy()
        assert system.required_components() == [Signal]
        assert system.produced_components() == [Energy]

    def test_can_run(self) -> None:
        """Test can_run reflects the entity's components."""
        world = World(arena_bytes=1 << 12)
        bare = world.new_entity()
        with_signal = world.spawn_signal(np.ones(8))

        assert not SignalEnergy().can_run(world, bare)
        assert SignalEnergy().can_run(world, with_signal)

    def test_can_run_multiple_requirements(self) -> None:
        """Test that every required component must be present."""
        world = World(arena_bytes=1 << 12)
        eid = world.spawn_signal(np.ones(8))
        assert not NeedsScales().can_run(world, eid)

        world.add_component(eid, ScaleSet.from_values([1.0]))
        assert NeedsScales().can_run(world, eid)

    def test_run_multiple_entities(self) -> None:
        """Test running on several entities at once."""
        world = World(arena_bytes=1 << 12)
        eids = [world.spawn_signal(np.full(4, float(i))) for i in range(3)]
        SignalEnergy().run(world, eids)

        for i, eid in enumerate(eids):
            assert world.get_component(eid, Energy).value == pytest.approx(4.0 * i * i)

    def test_repr(self) -> None:
        """Test default system repr."""
        assert repr(SignalEnergy()) == "SignalEnergy()"

    def test_abstract_methods(self) -> None:
        """Test that abstract methods must be implemented."""

        class Incomplete(System):
            def produced_components(self) -> list[type]:
                return []

            def run(self, world: World, eids: list[int]) -> None:
                pass

        with pytest.raises(TypeError):
            Incomplete()  # type: ignore[abstract]
