"""Tests for range expansion."""

from __future__ import annotations

from decimal import Decimal

import pytest

from combinatorial.errors import InvalidRangeError
from combinatorial.numeric import (
    CHAR,
    DECIMAL,
    FLOAT16,
    FLOAT32,
    FLOAT64,
    INT8,
    INT32,
    INT64,
    UINT8,
    UINT32,
)
from combinatorial.ranges import expand_bounds, expand_count, iter_bounds, iter_count


def _stepped(start: int, stop: int, step: int) -> list[int]:
    """Reference stepped range with an inclusive stop."""
    values = []
    value = start
    while (value <= stop) if step > 0 else (value >= stop):
        values.append(value)
        value += step
    return values


class TestCountForm:
    """Tests for (start, count) expansion."""

    def test_signed_happy_path(self):
        """Five values from zero."""
        assert expand_count(INT32, 0, 5) == (0, 1, 2, 3, 4)

    def test_unsigned_happy_path(self):
        """Unsigned domain counts the same way."""
        assert expand_count(UINT32, 0, 5) == (0, 1, 2, 3, 4)

    @pytest.mark.parametrize("start", [-3, 0, 7])
    @pytest.mark.parametrize("count", [1, 2, 6])
    def test_length_and_elements(self, start, count):
        """i-th element is start + i and length is exactly count."""
        values = expand_count(INT64, start, count)
        assert len(values) == count
        assert all(values[i] == start + i for i in range(count))

    @pytest.mark.parametrize("count", [0, -2])
    def test_count_below_one_rejected(self, count):
        """count < 1 names the count argument."""
        with pytest.raises(InvalidRangeError) as exc_info:
            expand_count(INT32, 0, count)
        assert exc_info.value.argument == "count"

    def test_validation_happens_before_iteration(self):
        """The lazy form still validates at call time."""
        with pytest.raises(InvalidRangeError):
            iter_count(INT32, 0, 0)

    def test_lazy_form_matches_eager(self):
        assert list(iter_count(INT32, 10, 3)) == list(expand_count(INT32, 10, 3))

    def test_unsigned_wraps_silently(self):
        """Values past the unsigned maximum wrap around to zero."""
        values = expand_count(UINT8, 250, 10)
        assert values == (250, 251, 252, 253, 254, 255, 0, 1, 2, 3)

    def test_signed_wraps_silently(self):
        assert expand_count(INT8, 126, 4) == (126, 127, -128, -127)

    def test_start_outside_domain(self):
        with pytest.raises(InvalidRangeError) as exc_info:
            expand_count(INT8, 200, 2)
        assert exc_info.value.argument == "start"

    def test_float(self):
        assert expand_count(FLOAT32, 0.5, 3) == (0.5, 1.5, 2.5)

    def test_float_fractional_count(self):
        """Offsets run while below count, so 2.5 yields three values."""
        assert expand_count(FLOAT64, 0.0, 2.5) == (0.0, 1.0, 2.0)

    def test_decimal(self):
        values = expand_count(DECIMAL, Decimal("0.5"), 3)
        assert values == (Decimal("0.5"), Decimal("1.5"), Decimal("2.5"))

    def test_decimal_nan_count(self):
        with pytest.raises(InvalidRangeError) as exc_info:
            expand_count(DECIMAL, Decimal(0), Decimal("NaN"))
        assert exc_info.value.argument == "count"

    def test_char(self):
        """Characters are presented as one-character strings."""
        assert expand_count(CHAR, "a", 3) == ("a", "b", "c")

    def test_half_precision_counter_terminates(self):
        """A counter that can no longer advance ends the range."""
        values = expand_count(FLOAT16, 0.0, 4096)
        assert 0 < len(values) < 4096


class TestBoundsForm:
    """Tests for (start, stop, step) expansion."""

    @pytest.mark.parametrize(
        "start,stop,step,expected",
        [
            (0, 7, 2, (0, 2, 4, 6)),
            (0, 8, 2, (0, 2, 4, 6, 8)),
            (7, 0, -2, (7, 5, 3, 1)),
            (0, -8, -2, (0, -2, -4, -6, -8)),
        ],
    )
    def test_integer_step(self, start, stop, step, expected):
        assert expand_bounds(INT32, start, stop, step) == expected
        assert list(expected) == _stepped(start, stop, step)

    @pytest.mark.parametrize("start,stop,step", [(4, 2, 1), (1, 5, -1)])
    def test_step_disagrees_with_bounds(self, start, stop, step):
        """Ascending step with descending bounds (and vice versa) fail on stop."""
        with pytest.raises(InvalidRangeError) as exc_info:
            expand_bounds(INT32, start, stop, step)
        assert exc_info.value.argument == "stop"

    @pytest.mark.parametrize("start,stop", [(0, 5), (5, 0), (3, 3)])
    def test_zero_step(self, start, stop):
        with pytest.raises(InvalidRangeError) as exc_info:
            expand_bounds(INT32, start, stop, 0)
        assert exc_info.value.argument == "step"

    @pytest.mark.parametrize("step", [1, -1, 5])
    def test_equal_bounds_single_value(self, step):
        assert expand_bounds(INT32, 3, 3, step) == (3,)

    def test_validation_happens_before_iteration(self):
        with pytest.raises(InvalidRangeError):
            iter_bounds(INT32, 4, 2, 1)

    @pytest.mark.parametrize("start,stop,step", [(0, 10, 3), (-5, 5, 4), (1, 1000, 7)])
    def test_ascending_properties(self, start, stop, step):
        """Strictly ascending, starts at start, within stop, no missed step."""
        values = expand_bounds(INT32, start, stop, step)
        assert values[0] == start
        assert all(a < b for a, b in zip(values, values[1:]))
        assert all(v <= stop for v in values)
        assert values[-1] + step > stop

    @pytest.mark.parametrize("start,stop,step", [(10, 0, -3), (5, -5, -4)])
    def test_descending_properties(self, start, stop, step):
        values = expand_bounds(INT32, start, stop, step)
        assert values[0] == start
        assert all(a > b for a, b in zip(values, values[1:]))
        assert all(v >= stop for v in values)
        assert values[-1] + step < stop

    def test_unsigned_negative_step_rejected(self):
        """A negative step is outside an unsigned domain."""
        with pytest.raises(InvalidRangeError) as exc_info:
            expand_bounds(UINT32, 5, 0, -1)
        assert exc_info.value.argument == "step"

    def test_unsigned_step_past_maximum_terminates(self):
        """Wrapping past the domain maximum ends the range."""
        assert expand_bounds(UINT8, 250, 255, 2) == (250, 252, 254)
        assert len(expand_bounds(UINT8, 0, 255, 1)) == 256

    def test_float_exact_step(self):
        assert expand_bounds(FLOAT64, 0.0, 1.0, 0.25) == (0.0, 0.25, 0.5, 0.75, 1.0)

    def test_float_inexact_step_does_not_overshoot(self):
        values = expand_bounds(FLOAT64, 0.0, 1.0, 0.3)
        assert len(values) == 4
        assert all(v <= 1.0 for v in values)

    def test_decimal_step(self):
        values = expand_bounds(DECIMAL, Decimal("0.1"), Decimal("0.5"), Decimal("0.1"))
        assert values == tuple(Decimal(f"0.{i}") for i in range(1, 6))

    @pytest.mark.parametrize("argument", ["start", "stop", "step"])
    def test_decimal_nan_names_argument(self, argument):
        arguments = {"start": Decimal(0), "stop": Decimal(5), "step": Decimal(1)}
        arguments[argument] = Decimal("NaN")
        with pytest.raises(InvalidRangeError) as exc_info:
            expand_bounds(DECIMAL, **arguments)
        assert exc_info.value.argument == argument

    def test_decimal_nan_step_rejected_before_iteration(self):
        with pytest.raises(InvalidRangeError) as exc_info:
            iter_bounds(DECIMAL, Decimal(0), Decimal(5), Decimal("NaN"))
        assert exc_info.value.argument == "step"

    def test_decimal_accepts_float_arguments(self):
        assert expand_bounds(DECIMAL, 0.1, 0.3, 0.1) == (
            Decimal("0.1"),
            Decimal("0.2"),
            Decimal("0.3"),
        )

    def test_char_step(self):
        assert expand_bounds(CHAR, "a", "e", 2) == ("a", "c", "e")
