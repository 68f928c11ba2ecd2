"""
Tests for Abstract Float Construction
"""

import dataclasses

import pytest
from fperror.core.errors import InvalidConstructionError
from fperror.core.formats import SINGLE, DOUBLE, get_format
from fperror.core.value import ANY, AnyFloat, Valued, fl, make_float


class TestMakeFloat:
    """Test the validating constructor."""

    def test_negative_error_fails(self):
        """Negative error bounds are rejected."""
        with pytest.raises(InvalidConstructionError):
            make_float(1.0, -0.0001)

    def test_invalid_construction_is_value_error(self):
        """Construction failures are ValueErrors too."""
        with pytest.raises(ValueError):
            make_float(1.0, -1.0)

    def test_error_below_one(self):
        """Error just below 1 is still a Valued."""
        x = make_float(2.0, 0.9999)
        assert x == Valued(2.0, 0.9999)

    def test_error_one_is_any(self):
        """Error of 1 or more carries no information."""
        assert make_float(2.0, 1.0) is ANY
        assert isinstance(make_float(2.0, 5.0), AnyFloat)

    def test_zero_forces_zero_error(self):
        """Zero always has zero error."""
        assert make_float(0.0, 0.5) == Valued(0.0, 0.0)

    def test_negative_zero_folded(self):
        """-0.0 becomes +0.0."""
        z = make_float(-0.0, 0.0)
        assert z == Valued(0.0, 0.0)
        assert str(z.value) == "0.0"

    def test_non_finite_is_any(self):
        """Infinite and NaN values are ANY."""
        assert isinstance(make_float(float('inf'), 0.0), AnyFloat)
        assert isinstance(make_float(float('nan'), 0.0), AnyFloat)
        assert isinstance(make_float(1.0, float('nan')), AnyFloat)

    def test_overflow_past_format(self):
        """Intervals reaching past the format's range are ANY."""
        assert isinstance(make_float(3.0e38, 0.2, SINGLE), AnyFloat)
        assert make_float(3.0e38, 0.2, DOUBLE) == Valued(3.0e38, 0.2)
        assert make_float(3.0e38, 0.2) == Valued(3.0e38, 0.2)

    def test_literal(self):
        """fl gives an exact value."""
        x = fl(3.0)
        assert x == Valued(3.0, 0.0)
        assert x.is_exact


class TestValued:
    """Test the Valued variant."""

    def test_direct_construction_validated(self):
        """Invariants hold even when bypassing make_float."""
        with pytest.raises(InvalidConstructionError):
            Valued(1.0, 1.0)
        with pytest.raises(InvalidConstructionError):
            Valued(1.0, -0.1)
        with pytest.raises(InvalidConstructionError):
            Valued(0.0, 0.1)
        with pytest.raises(InvalidConstructionError):
            Valued(float('inf'), 0.0)

    def test_immutable(self):
        """Values cannot be mutated."""
        x = fl(1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            x.value = 2.0

    def test_positive_interval(self):
        """Interval of a positive value."""
        x = make_float(10.0, 0.1)
        assert x.lower == pytest.approx(9.0)
        assert x.upper == pytest.approx(11.0)
        assert x.contains(10.5)
        assert not x.contains(11.5)

    def test_negative_interval(self):
        """Interval of a negative value."""
        x = make_float(-10.0, 0.1)
        assert x.lower == pytest.approx(-11.0)
        assert x.upper == pytest.approx(-9.0)
        assert x.contains(-9.5)
        assert not x.contains(-8.0)

    def test_zero_interval(self):
        """Zero is a single point."""
        z = fl(0.0)
        assert z.lower == 0.0 and z.upper == 0.0
        assert z.contains(0.0)
        assert not z.contains(1e-300)

    def test_canonical(self):
        """Canonical forms."""
        assert fl(2.0).to_canonical() == {"type": "valued", "value": 2.0, "error": 0.0}
        assert ANY.to_canonical() == {"type": "any"}


class TestOperators:
    """Test Python operator overloads."""

    def test_arithmetic(self):
        """Operators dispatch to the error-propagating operations."""
        x = fl(3.0)
        y = fl(4.0)
        assert (x + y).value == 7.0
        assert (x - y).value == -1.0
        assert (x * y).value == 12.0
        assert (y / x).value == pytest.approx(4.0 / 3.0)
        assert (-x) == fl(-3.0)
        assert abs(fl(-3.0)) == x

    def test_numbers_coerced(self):
        """Plain numbers are exact literals."""
        x = fl(3.0)
        assert (x + 1).value == 4.0
        assert (1 + x).value == 4.0
        assert (2 * x).value == 6.0
        assert (6 / x).value == 2.0

    def test_any_operators(self):
        """ANY absorbs under operators."""
        assert isinstance(ANY + 1.0, AnyFloat)
        assert isinstance(-ANY, AnyFloat)

    def test_unsupported_operand(self):
        """Non-numeric operands are rejected."""
        with pytest.raises(TypeError):
            fl(1.0) + "1"


class TestFormats:
    """Test format lookup."""

    def test_single_rounding_unit(self):
        """Single precision rounding unit is 2^-24."""
        assert SINGLE.rounding_unit == 2.0 ** -24

    def test_lookup(self):
        """Formats are found by name."""
        assert get_format("double") is DOUBLE
        with pytest.raises(ValueError):
            get_format("quad")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
