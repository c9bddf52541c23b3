"""Tests for scale generation and scale/frequency helpers."""

import numpy as np
import pytest

from cwt_ecs.core.errors import InvalidCount, InvalidParameter, InvalidRange
from cwt_ecs.scales import (
    Octave,
    frequencies_to_scales,
    generate_scales,
    scale_bounds,
    scales_to_frequencies,
)
from cwt_ecs.wavelets import Morlet, Ricker


class TestLinearLogarithmic:
    """Tests for the linear and logarithmic policies."""

    def test_linear(self) -> None:
        """Test evenly spaced scales."""
        scales = generate_scales(1.0, 5.0, 5, "linear")
        assert scales.values == pytest.approx((1.0, 2.0, 3.0, 4.0, 5.0))
        assert scales.policy == "linear"

    def test_logarithmic(self) -> None:
        """Test geometrically spaced scales."""
        scales = generate_scales(1.0, 16.0, 5, "logarithmic")
        assert scales.values == pytest.approx((1.0, 2.0, 4.0, 8.0, 16.0))
        assert scales.policy == "logarithmic"

    def test_logarithmic_is_default(self) -> None:
        """Test that the default policy is logarithmic."""
        assert generate_scales(2.0, 32.0, 3).values == pytest.approx((2.0, 8.0, 32.0))

    @pytest.mark.parametrize("policy", ["linear", "logarithmic"])
    def test_endpoints_exact(self, policy: str) -> None:
        """Test that the first and last scales equal the bounds exactly."""
        scales = generate_scales(0.37, 123.4, 97, policy)
        assert scales.values[0] == 0.37
        assert scales.values[-1] == 123.4
        assert len(scales) == 97

    @pytest.mark.parametrize("policy", ["linear", "logarithmic"])
    def test_strictly_increasing(self, policy: str) -> None:
        """Test ordering and positivity."""
        values = np.array(generate_scales(0.5, 64.0, 200, policy).values)
        assert np.all(values > 0)
        assert np.all(np.diff(values) > 0)

    def test_log_ratio_constant(self) -> None:
        """Test that consecutive logarithmic scales share one ratio."""
        values = np.array(generate_scales(1.0, 1000.0, 31).values)
        ratios = values[1:] / values[:-1]
        assert np.allclose(ratios, ratios[0])

    @pytest.mark.parametrize("policy", ["linear", "logarithmic"])
    def test_count_one(self, policy: str) -> None:
        """Test that a single scale is the minimum."""
        assert generate_scales(3.0, 9.0, 1, policy).values == (3.0,)

    def test_policy_aliases(self) -> None:
        """Test short policy names."""
        assert generate_scales(1.0, 4.0, 3, "log").policy == "logarithmic"
        assert generate_scales(1.0, 4.0, 3, "lin").policy == "linear"


class TestOctave:
    """Tests for the octave policy."""

    def test_octave_count_and_values(self) -> None:
        """Test that octaves * voices + 1 scales double every octave."""
        scales = generate_scales(2.0, policy=Octave(voices_per_octave=4, octaves=3))
        values = np.array(scales.values)
        assert len(scales) == 13
        assert scales.policy == "octave"
        assert scales.voices_per_octave == 4
        assert values[0] == 2.0
        assert values[4] == pytest.approx(4.0)
        assert values[-1] == pytest.approx(16.0)

    def test_octave_ignores_max_and_count(self) -> None:
        """Test that max_scale and count do not change an octave grid."""
        policy = Octave(voices_per_octave=2, octaves=2)
        assert generate_scales(1.0, 0.5, 99, policy).values == generate_scales(1.0, policy=policy).values

    @pytest.mark.parametrize("voices, octaves", [(0, 3), (4, 0), (-1, 2), (1.5, 2), (True, 2)])
    def test_octave_invalid(self, voices: object, octaves: object) -> None:
        """Test that octave parameters must be integers >= 1."""
        with pytest.raises(InvalidParameter):
            Octave(voices_per_octave=voices, octaves=octaves)  # type: ignore[arg-type]

    def test_octave_non_positive_min(self) -> None:
        """Test that the base scale must be positive."""
        with pytest.raises(InvalidRange):
            generate_scales(0.0, policy=Octave(voices_per_octave=1, octaves=1))


class TestGenerateScalesErrors:
    """Tests for generate_scales error kinds."""

    @pytest.mark.parametrize(
        "min_scale, max_scale",
        [(0.0, 10.0), (-1.0, 10.0), (1.0, -2.0), (5.0, 5.0), (10.0, 2.0), (1.0, float("nan"))],
    )
    def test_invalid_range(self, min_scale: float, max_scale: float) -> None:
        """Test non-positive bounds and max <= min."""
        with pytest.raises(InvalidRange):
            generate_scales(min_scale, max_scale, 8)

    def test_missing_max(self) -> None:
        """Test that linear/logarithmic need a maximum."""
        with pytest.raises(InvalidRange, match="max_scale is required"):
            generate_scales(1.0, count=8)

    @pytest.mark.parametrize("count", [0, -3, None, 2.5])
    def test_invalid_count(self, count: object) -> None:
        """Test that count must be an integer >= 1."""
        with pytest.raises(InvalidCount):
            generate_scales(1.0, 10.0, count)  # type: ignore[arg-type]

    def test_unknown_policy(self) -> None:
        """Test that an unknown policy raises InvalidParameter."""
        with pytest.raises(InvalidParameter, match="Unknown scale policy"):
            generate_scales(1.0, 10.0, 8, "cubic")

    @pytest.mark.parametrize("policy", ["linear", "logarithmic"])
    def test_range_too_narrow_for_count(self, policy: str) -> None:
        """Test that a range a few ulps wide cannot hold distinct scales."""
        with pytest.raises(InvalidRange, match="too narrow") as excinfo:
            generate_scales(1.0, float(np.nextafter(1.0, 2.0)), 3, policy)
        assert excinfo.value.context["count"] == 3

    def test_narrow_range_with_two_scales(self) -> None:
        """Test that the two endpoints alone are still distinct."""
        hi = float(np.nextafter(1.0, 2.0))
        assert generate_scales(1.0, hi, 2, "linear").values == (1.0, hi)

    def test_octave_overflow(self) -> None:
        """Test that octaves running past the float range raise InvalidRange."""
        with pytest.raises(InvalidRange, match="overflow"):
            generate_scales(1e300, policy=Octave(voices_per_octave=1, octaves=64))

    def test_error_context(self) -> None:
        """Test that errors carry the offending values."""
        with pytest.raises(InvalidRange) as excinfo:
            generate_scales(4.0, 2.0, 8)
        assert excinfo.value.context == {"min_scale": 4.0, "max_scale": 2.0}


class TestFrequencyHelpers:
    """Tests for scale/frequency conversion and useful bounds."""

    def test_morlet_frequency_near_center(self) -> None:
        """Test that a Morlet scale maps to roughly w0 / (2 pi s)."""
        freqs = scales_to_frequencies(Morlet(), generate_scales(1.0, 8.0, 4, "linear"))
        expected = 6.0 / (2.0 * np.pi * np.array([1.0, 3.333333333, 5.666666667, 8.0]))
        assert np.allclose(freqs, expected, rtol=0.02)
        assert np.all(np.diff(freqs) < 0)

    def test_round_trip(self) -> None:
        """Test that frequencies_to_scales inverts scales_to_frequencies."""
        wavelet = Ricker()
        scales = generate_scales(0.01, 0.5, 16)
        freqs = scales_to_frequencies(wavelet, scales)
        back = frequencies_to_scales(wavelet, freqs, sampling_rate=1000.0)
        assert np.allclose(back.values, scales.values)

    def test_frequencies_above_nyquist(self) -> None:
        """Test that frequencies above Nyquist are rejected."""
        with pytest.raises(InvalidRange, match="Frequencies must be in"):
            frequencies_to_scales(Morlet(), [10.0, 60.0], sampling_rate=100.0)

    def test_scale_bounds(self) -> None:
        """Test that the bounds bracket a usable, non-degenerate range."""
        wavelet = Morlet()
        lo, hi = scale_bounds(wavelet, 1024, sampling_rate=100.0)
        assert 0 < lo < hi
        assert wavelet.support(lo, 0.01) >= 3
        assert wavelet.support(hi, 0.01) <= 1024
        assert scales_to_frequencies(wavelet, [lo])[0] <= 50.0 * (1 + 1e-12)

    def test_scale_bounds_short_signal(self) -> None:
        """Test that a signal too short for any kernel raises InvalidRange."""
        with pytest.raises(InvalidRange, match="too short"):
            scale_bounds(Ricker(), 3)
