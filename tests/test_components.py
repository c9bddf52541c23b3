"""Tests for ECS component validation."""

import numpy as np
import pytest
from pydantic import ValidationError

from cwt_ecs.components import Coefficients, ScaleSet, Scaleogram, Signal
from cwt_ecs.core.arena import Arena
from cwt_ecs.core.errors import InvalidCount, InvalidRange
from cwt_ecs.core.precision import Precision


class TestSignal:
    """Tests for the Signal component."""

    def test_defaults(self) -> None:
        """Test default sampling rate and precision."""
        arena = Arena(size_bytes=1024)
        signal = Signal(samples=arena.alloc_tensor((16,), np.float64))
        assert signal.sampling_rate == 1.0
        assert signal.precision is Precision.DOUBLE
        assert signal.dt == 1.0
        assert len(signal) == 16

    def test_precision_from_string(self) -> None:
        """Test that precision accepts its string value."""
        arena = Arena(size_bytes=1024)
        signal = Signal(samples=arena.alloc_tensor((4,), np.float32), precision="single")
        assert signal.precision is Precision.SINGLE

    def test_invalid_sampling_rate(self) -> None:
        """Test that sampling rate must be positive."""
        arena = Arena(size_bytes=1024)
        with pytest.raises(ValidationError):
            Signal(samples=arena.alloc_tensor((4,), np.float64), sampling_rate=-1.0)

    def test_frozen(self) -> None:
        """Test that components are immutable."""
        arena = Arena(size_bytes=1024)
        signal = Signal(samples=arena.alloc_tensor((4,), np.float64))
        with pytest.raises(ValidationError):
            signal.sampling_rate = 2.0  # type: ignore[misc]


class TestScaleSet:
    """Tests for the ScaleSet component."""

    def test_from_values(self) -> None:
        """Test building an explicit scale set."""
        scales = ScaleSet.from_values(np.array([0.5, 1.0, 3.0]))
        assert scales.values == (0.5, 1.0, 3.0)
        assert scales.policy == "explicit"
        assert len(scales) == 3
        assert scales.as_array(np.float32).dtype == np.float32

    def test_from_values_empty(self) -> None:
        """Test that an empty scale list raises InvalidCount."""
        with pytest.raises(InvalidCount):
            ScaleSet.from_values([])

    @pytest.mark.parametrize("values", [[0.0, 1.0], [-1.0], [1.0, float("inf")]])
    def test_from_values_non_positive(self, values: list[float]) -> None:
        """Test that non-positive or non-finite scales raise InvalidRange."""
        with pytest.raises(InvalidRange, match="positive and finite"):
            ScaleSet.from_values(values)

    @pytest.mark.parametrize("values", [[2.0, 1.0], [1.0, 1.0, 2.0]])
    def test_from_values_not_increasing(self, values: list[float]) -> None:
        """Test that unsorted or duplicate scales raise InvalidRange."""
        with pytest.raises(InvalidRange, match="strictly increasing"):
            ScaleSet.from_values(values)

    def test_direct_construction_validates(self) -> None:
        """Test that the model validator enforces the same invariants."""
        with pytest.raises(ValidationError):
            ScaleSet(values=(3.0, 2.0))
        with pytest.raises(ValidationError):
            ScaleSet(values=())

    def test_unknown_policy(self) -> None:
        """Test that the policy label is restricted."""
        with pytest.raises(ValidationError):
            ScaleSet(values=(1.0,), policy="cubic")  # type: ignore[arg-type]


class TestOutputs:
    """Tests for Coefficients and Scaleogram components."""

    def test_coefficients(self) -> None:
        """Test creating a Coefficients component."""
        arena = Arena(size_bytes=1 << 12)
        scales = ScaleSet.from_values([1.0, 2.0])
        coeffs = Coefficients(
            coeffs=arena.alloc_tensor((2, 32), np.complex64),
            scales=scales,
            wavelet="morlet",
            is_complex=True,
            precision=Precision.SINGLE,
            sampling_rate=10.0,
        )
        assert coeffs.coeffs.shape == (2, 32)
        assert coeffs.scales is scales

    def test_scaleogram_labels(self) -> None:
        """Test Scaleogram reduction and normalisation labels."""
        arena = Arena(size_bytes=1 << 12)
        pix = arena.alloc_tensor((2, 4, 3), np.uint8)
        image = Scaleogram(
            pix=pix, reduction="power", normalization="log_compressed", colormap="viridis"
        )
        assert image.degenerate is False
        with pytest.raises(ValidationError):
            Scaleogram(pix=pix, reduction="phase", normalization="linear_minmax", colormap="jet")  # type: ignore[arg-type]
