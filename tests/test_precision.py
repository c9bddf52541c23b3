"""Tests for the Precision enum."""

import numpy as np
import pytest

from cwt_ecs.core.errors import InvalidParameter
from cwt_ecs.core.precision import Precision


class TestPrecision:
    """Tests for precision resolution and dtypes."""

    def test_dtypes(self) -> None:
        """Test real and complex dtypes for each width."""
        assert Precision.SINGLE.real_dtype == np.float32
        assert Precision.SINGLE.complex_dtype == np.complex64
        assert Precision.DOUBLE.real_dtype == np.float64
        assert Precision.DOUBLE.complex_dtype == np.complex128
        assert Precision.SINGLE.dtype_for(True) == np.complex64
        assert Precision.DOUBLE.dtype_for(False) == np.float64

    def test_tolerance(self) -> None:
        """Test that tolerance is the square root of epsilon."""
        assert Precision.DOUBLE.tolerance == pytest.approx(np.sqrt(np.finfo(np.float64).eps))
        assert Precision.SINGLE.tolerance > Precision.DOUBLE.tolerance

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("single", Precision.SINGLE),
            ("Float32", Precision.SINGLE),
            ("f32", Precision.SINGLE),
            ("double", Precision.DOUBLE),
            (" f64 ", Precision.DOUBLE),
            ("float", Precision.DOUBLE),
            (float, Precision.DOUBLE),
            (np.float32, Precision.SINGLE),
            (np.dtype(np.complex128), Precision.DOUBLE),
            (Precision.SINGLE, Precision.SINGLE),
        ],
    )
    def test_of(self, value: object, expected: Precision) -> None:
        """Test resolving names, aliases and dtypes."""
        assert Precision.of(value) is expected

    def test_of_none_uses_hint(self) -> None:
        """Test that None falls back to the dtype hint."""
        assert Precision.of(None, hint=np.float32) is Precision.SINGLE
        assert Precision.of(None, hint=np.int64) is Precision.DOUBLE
        assert Precision.of(None) is Precision.DOUBLE

    @pytest.mark.parametrize("value", ["half", np.float16, np.int32])
    def test_of_rejects_unknown(self, value: object) -> None:
        """Test that unsupported precisions raise InvalidParameter."""
        with pytest.raises(InvalidParameter):
            Precision.of(value)

    def test_string_value(self) -> None:
        """Test that the enum compares equal to its string value."""
        assert Precision.SINGLE == "single"
        assert Precision("double") is Precision.DOUBLE
