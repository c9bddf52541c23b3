"""Tests for Pipe chaining and execution."""

import numpy as np
import pytest

from cwt_ecs.components import Coefficients, ScaleSet, Scaleogram, Signal
from cwt_ecs.core.pipeline import Pipe
from cwt_ecs.core.world import World
from cwt_ecs.systems import RenderScaleogram, WaveletTransform
from cwt_ecs.wavelets import Ricker


def _ready_entity(world: World, n: int = 128) -> int:
    eid = world.spawn_signal(np.sin(np.arange(n) / 4.0))
    world.add_component(eid, ScaleSet.from_values([1.0, 2.0, 4.0]))
    return eid


class TestPipeBasics:
    """Test Pipe construction and chaining."""

    def test_pipe_creation(self) -> None:
        """Test creating a pipe."""
        world = World(arena_bytes=1 << 12)
        entity = world.new_entity()
        pipe = world.pipe(entity)

        assert isinstance(pipe, Pipe)
        assert pipe.entities == [entity]
        assert pipe.systems == []

    def test_pipe_entity_list(self) -> None:
        """Test creating a pipe over several entities."""
        world = World(arena_bytes=1 << 12)
        eids = [world.new_entity(), world.new_entity()]
        assert world.pipe(eids).entities == eids

    def test_to_and_or_chain(self) -> None:
        """Test that .to() and | append systems in order."""
        world = World(arena_bytes=1 << 12)
        transform = WaveletTransform(Ricker())
        render = RenderScaleogram()

        pipe = world.pipe(world.new_entity()).to(transform) | render
        assert pipe.systems == [transform, render]

    def test_to_returns_self(self) -> None:
        """Test that chaining returns the same pipe."""
        world = World(arena_bytes=1 << 12)
        pipe = world.pipe(world.new_entity())
        assert pipe.to(WaveletTransform()) is pipe


class TestPipeExecution:
    """Test pipeline execution."""

    def test_execute_transform_then_render(self) -> None:
        """Test that both systems attach their outputs."""
        world = World(arena_bytes=1 << 20)
        eid = _ready_entity(world)

        (world.pipe(eid) | WaveletTransform(Ricker()) | RenderScaleogram()).execute()

        assert world.has_component(eid, Coefficients)
        assert world.has_component(eid, Scaleogram)

    def test_out_returns_component(self) -> None:
        """Test that .out() runs the pipe and returns the requested component."""
        world = World(arena_bytes=1 << 20)
        eid = _ready_entity(world)

        coeffs = world.pipe(eid).to(WaveletTransform(Ricker())).out(Coefficients)
        assert isinstance(coeffs, Coefficients)
        assert world.arena.view(coeffs.coeffs).shape == (3, 128)

    def test_missing_dependencies(self) -> None:
        """Test that execute fails when requirements are missing."""
        world = World(arena_bytes=1 << 12)
        eid = world.spawn_signal(np.ones(16))

        with pytest.raises(RuntimeError, match="missing required components"):
            world.pipe(eid).to(WaveletTransform()).execute()
        assert not world.has_component(eid, Coefficients)

    def test_order_matters(self) -> None:
        """Test that rendering before transforming fails."""
        world = World(arena_bytes=1 << 20)
        eid = _ready_entity(world)

        with pytest.raises(RuntimeError, match="RenderScaleogram cannot run"):
            (world.pipe(eid) | RenderScaleogram() | WaveletTransform()).execute()

    def test_out_missing_component(self) -> None:
        """Test that .out() raises KeyError for a component never produced."""
        world = World(arena_bytes=1 << 20)
        eid = _ready_entity(world)

        with pytest.raises(KeyError):
            world.pipe(eid).to(WaveletTransform()).out(Scaleogram)

    def test_execute_without_systems(self) -> None:
        """Test that an empty pipe is a no-op."""
        world = World(arena_bytes=1 << 12)
        eid = world.spawn_signal(np.ones(4))
        world.pipe(eid).execute()
        assert world.has_component(eid, Signal)

    def test_batch_entities(self) -> None:
        """Test running one pipe over a batch of signals."""
        world = World(arena_bytes=1 << 20)
        eids = world.spawn_batch_signals([np.sin(np.arange(64) * f) for f in (0.1, 0.2)])
        for eid in eids:
            world.add_component(eid, ScaleSet.from_values([1.0, 2.0]))

        world.pipe(eids).to(WaveletTransform(Ricker())).execute()
        for eid in eids:
            assert world.arena.view(world.get_component(eid, Coefficients).coeffs).shape == (2, 64)
