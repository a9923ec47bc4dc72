"""Tests for numeric kinds."""

from __future__ import annotations

import math
import typing
from decimal import Decimal

import pytest

from combinatorial.errors import InvalidRangeError
from combinatorial.numeric import (
    CHAR,
    DECIMAL,
    FLOAT32,
    FLOAT64,
    INT8,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT128,
    get_kind,
    infer_kind,
    kind_of,
)


class TestBounds:
    def test_signed(self):
        assert INT8.minimum == -128
        assert INT8.maximum == 127
        assert INT32.minimum == -(2**31)
        assert INT32.maximum == 2**31 - 1

    def test_unsigned(self):
        assert UINT8.minimum == 0
        assert UINT8.maximum == 255
        assert UINT128.maximum == 2**128 - 1

    def test_char_is_sixteen_bit(self):
        assert CHAR.minimum == 0
        assert CHAR.maximum == 0xFFFF

    def test_non_integral_unbounded(self):
        assert FLOAT64.minimum is None
        assert DECIMAL.maximum is None

    def test_identities(self):
        assert INT32.zero == 0 and INT32.one == 1
        assert FLOAT32.one == 1.0
        assert DECIMAL.one == Decimal(1)


class TestArithmetic:
    def test_signed_wraparound(self):
        assert INT8.add(127, 1) == -128
        assert INT8.add(-128, -1) == 127

    def test_unsigned_wraparound(self):
        assert UINT8.add(255, 1) == 0
        assert UINT16.add(65535, 2) == 1

    def test_float32_rounds(self):
        """Results carry float32 precision, not float64."""
        assert FLOAT32.add(0.1, 0.0) != 0.1
        assert FLOAT32.add(0.5, 0.25) == 0.75

    def test_float32_overflow_is_infinite(self):
        assert FLOAT32.add(3.4e38, 3.4e38) == math.inf

    def test_decimal_exact(self):
        assert DECIMAL.add(Decimal("0.1"), Decimal("0.2")) == Decimal("0.3")


class TestCoerce:
    def test_integer_accepted(self):
        assert INT32.coerce(5) == 5

    def test_bool_rejected(self):
        with pytest.raises(InvalidRangeError):
            INT32.coerce(True, "start")

    def test_wrong_type_names_argument(self):
        with pytest.raises(InvalidRangeError) as exc_info:
            INT32.coerce("x", "stop")
        assert exc_info.value.argument == "stop"

    def test_out_of_domain(self):
        with pytest.raises(InvalidRangeError) as exc_info:
            UINT8.coerce(256, "count")
        assert exc_info.value.argument == "count"

    def test_char_from_string_or_code(self):
        assert CHAR.coerce("a") == 97
        assert CHAR(98) == "b"

    def test_char_rejects_long_string(self):
        with pytest.raises(InvalidRangeError):
            CHAR.coerce("ab")

    def test_decimal_from_float_uses_shortest_repr(self):
        assert DECIMAL.coerce(0.1) == Decimal("0.1")

    def test_decimal_rejects_garbage(self):
        with pytest.raises(InvalidRangeError):
            DECIMAL.coerce("not a number")

    def test_float_rejects_string(self):
        with pytest.raises(InvalidRangeError):
            FLOAT64.coerce("1.5")

    def test_call_validates(self):
        assert UINT8(200) == 200
        with pytest.raises(InvalidRangeError):
            UINT8(-1)


class TestKindLookup:
    def test_builtin_annotations(self):
        assert kind_of(int) is INT32
        assert kind_of(float) is FLOAT64
        assert kind_of(Decimal) is DECIMAL

    def test_kind_maps_to_itself(self):
        assert kind_of(UINT8) is UINT8

    @pytest.mark.parametrize("annotation", [bool, str, list[int], typing.Optional[int], None])
    def test_non_numeric(self, annotation):
        assert kind_of(annotation) is None

    def test_get_kind_by_name(self):
        assert get_kind("UINT8") is UINT8
        assert get_kind("int64") is INT64

    def test_get_kind_unknown(self):
        with pytest.raises(KeyError):
            get_kind("int7")

    def test_infer_kind(self):
        assert infer_kind(1) is INT32
        assert infer_kind(1.5) is FLOAT64
        assert infer_kind(Decimal("1")) is DECIMAL
        assert infer_kind("a") is CHAR

    @pytest.mark.parametrize("value", [True, object(), None])
    def test_infer_kind_rejects(self, value):
        with pytest.raises(InvalidRangeError):
            infer_kind(value)

    def test_numpy_scalar_types(self):
        np = pytest.importorskip("numpy")
        assert kind_of(np.uint8) is UINT8
        assert kind_of(np.int64) is INT64
        assert kind_of(np.float32) is FLOAT32
        assert kind_of(np.bool_) is None
        assert infer_kind(np.uint8(3)) is UINT8

    def test_usable_in_optional_annotation(self):
        args = typing.get_args(typing.Optional[UINT8])
        assert UINT8 in args
        assert type(None) in args
