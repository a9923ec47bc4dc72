"""
Numeric kinds: the closed set of numeric domains a range can be declared over.

Each NumericKind describes one concrete domain (fixed-width signed or
unsigned integers, a 16-bit character code, IEEE binary floats, arbitrary
precision decimals) and supplies what the range expander needs:

- zero / one identities
- ordering (values are plain Python numbers, compared natively)
- addition with the domain's own semantics (two's complement wraparound for
  fixed-width integers, rounding to the format's precision for binary floats)
- coercion of user-supplied values into the domain

Kinds double as parameter annotations:

    def test_pixels(level: UINT8): ...
    def test_maybe(level: UINT8 | None): ...
"""

from __future__ import annotations

import math
import operator
import struct
import typing
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from combinatorial.errors import InvalidRangeError

_INTEGRAL = ("signed", "unsigned", "char")


def _round_binary(value: float, fmt: str) -> float:
    """Round a Python float to the precision of a struct float format."""
    if fmt == "d" or math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack(fmt, struct.pack(fmt, value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


@dataclass(frozen=True)
class NumericKind:
    """
    A numeric domain usable by the range expander.

    Attributes:
        name: Short identifier (e.g. "uint8", "float32").
        category: One of "signed", "unsigned", "char", "binary", "decimal".
        bits: Width in bits for fixed-width domains, None for decimal.
        float_format: struct format character for binary floats.
    """

    name: str
    category: str
    bits: int | None = None
    float_format: str | None = None

    # -- identities and bounds ------------------------------------------------

    @property
    def is_integral(self) -> bool:
        return self.category in _INTEGRAL

    @property
    def zero(self) -> Any:
        if self.is_integral:
            return 0
        if self.category == "binary":
            return 0.0
        return Decimal(0)

    @property
    def one(self) -> Any:
        if self.is_integral:
            return 1
        if self.category == "binary":
            return 1.0
        return Decimal(1)

    @property
    def minimum(self) -> int | None:
        """Smallest representable value for integral kinds, else None."""
        if self.category == "signed":
            return -(1 << (self.bits - 1))
        if self.category in ("unsigned", "char"):
            return 0
        return None

    @property
    def maximum(self) -> int | None:
        """Largest representable value for integral kinds, else None."""
        if self.category == "signed":
            return (1 << (self.bits - 1)) - 1
        if self.category in ("unsigned", "char"):
            return (1 << self.bits) - 1
        return None

    # -- arithmetic -------------------------------------------------------------

    def add(self, a: Any, b: Any) -> Any:
        """
        Add two domain values using the domain's own arithmetic.

        Fixed-width integer results wrap around silently, binary float
        results are rounded to the format's precision.
        """
        if self.is_integral:
            low = self.minimum
            return ((a + b - low) % (1 << self.bits)) + low
        if self.category == "binary":
            return _round_binary(a + b, self.float_format)
        return a + b

    # -- conversion -------------------------------------------------------------

    def coerce(self, value: Any, argument: str = "value") -> Any:
        """
        Convert a user-supplied value into this domain's representation.

        Args:
            value: The value to convert.
            argument: Argument name reported if the value is rejected.

        Returns:
            The value as stored by this kind (character kinds store the
            integer code point).

        Raises:
            InvalidRangeError: If the value has the wrong type or lies
                outside the domain.
        """
        if self.is_integral:
            return self._coerce_integral(value, argument)
        if self.category == "binary":
            if isinstance(value, bool) or isinstance(value, str):
                raise InvalidRangeError(
                    argument, f"{self.name} expects a number for {argument}, got {value!r}"
                )
            try:
                number = float(value)
            except (TypeError, ValueError) as e:
                raise InvalidRangeError(
                    argument, f"{self.name} expects a number for {argument}, got {value!r}"
                ) from e
            return _round_binary(number, self.float_format)

        if isinstance(value, bool):
            raise InvalidRangeError(
                argument, f"{self.name} expects a number for {argument}, got {value!r}"
            )
        try:
            # repr() keeps the shortest round-tripping digits of a float
            number = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
        except (TypeError, ValueError, InvalidOperation) as e:
            raise InvalidRangeError(
                argument, f"{self.name} expects a number for {argument}, got {value!r}"
            ) from e
        if number.is_nan():
            raise InvalidRangeError(argument, f"{argument} must not be NaN")
        return number

    def _coerce_integral(self, value: Any, argument: str) -> int:
        if self.category == "char" and isinstance(value, str):
            if len(value) != 1:
                raise InvalidRangeError(
                    argument, f"char expects a single character for {argument}, got {value!r}"
                )
            number = ord(value)
        elif isinstance(value, bool):
            raise InvalidRangeError(
                argument, f"{self.name} expects an integer for {argument}, got {value!r}"
            )
        else:
            try:
                number = operator.index(value)
            except TypeError as e:
                raise InvalidRangeError(
                    argument, f"{self.name} expects an integer for {argument}, got {value!r}"
                ) from e

        if not self.minimum <= number <= self.maximum:
            raise InvalidRangeError(
                argument,
                f"{argument}={value!r} is outside the {self.name} domain "
                f"[{self.minimum}, {self.maximum}]",
            )
        return number

    def present(self, value: Any) -> Any:
        """Convert a stored domain value to the value handed to tests."""
        if self.category == "char":
            return chr(value)
        return value

    def __call__(self, value: Any) -> Any:
        """Validate a value against this domain: ``UINT8(200) -> 200``."""
        return self.present(self.coerce(value))

    # -- annotation support -----------------------------------------------------

    def __or__(self, other: Any) -> Any:
        return typing.Union[self, other]

    def __ror__(self, other: Any) -> Any:
        return typing.Union[other, self]

    def __repr__(self) -> str:
        return self.name.upper()


INT8 = NumericKind("int8", "signed", 8)
INT16 = NumericKind("int16", "signed", 16)
INT32 = NumericKind("int32", "signed", 32)
INT64 = NumericKind("int64", "signed", 64)
INT128 = NumericKind("int128", "signed", 128)
UINT8 = NumericKind("uint8", "unsigned", 8)
UINT16 = NumericKind("uint16", "unsigned", 16)
UINT32 = NumericKind("uint32", "unsigned", 32)
UINT64 = NumericKind("uint64", "unsigned", 64)
UINT128 = NumericKind("uint128", "unsigned", 128)
CHAR = NumericKind("char", "char", 16)
FLOAT16 = NumericKind("float16", "binary", 16, "e")
FLOAT32 = NumericKind("float32", "binary", 32, "f")
FLOAT64 = NumericKind("float64", "binary", 64, "d")
DECIMAL = NumericKind("decimal", "decimal")

KINDS: dict[str, NumericKind] = {
    kind.name: kind
    for kind in (
        INT8, INT16, INT32, INT64, INT128,
        UINT8, UINT16, UINT32, UINT64, UINT128,
        CHAR, FLOAT16, FLOAT32, FLOAT64, DECIMAL,
    )
}

# Builtin annotations and the domain they stand for
_BUILTIN_KINDS: dict[Any, NumericKind] = {
    int: INT32,
    float: FLOAT64,
    Decimal: DECIMAL,
}


def get_kind(name: str) -> NumericKind:
    """
    Look up a kind by name (case-insensitive).

    Raises:
        KeyError: If no kind has that name.
    """
    try:
        return KINDS[name.lower()]
    except KeyError:
        raise KeyError(f"Unknown numeric kind: {name!r} (expected one of {', '.join(KINDS)})")


def kind_of(annotation: Any) -> NumericKind | None:
    """
    Map a static annotation to its numeric kind.

    Args:
        annotation: A NumericKind, ``int``, ``float``, ``decimal.Decimal``
            or a NumPy scalar type.

    Returns:
        The matching NumericKind, or None if the annotation is not numeric.
    """
    if isinstance(annotation, NumericKind):
        return annotation
    try:
        builtin = _BUILTIN_KINDS.get(annotation)
    except TypeError:
        # Unhashable annotation objects are never numeric
        return None
    if builtin is not None:
        return builtin
    return _numpy_kind(annotation)


def infer_kind(value: Any) -> NumericKind:
    """
    Infer the kind of a range from its start value.

    Raises:
        InvalidRangeError: If the value's type has no default kind.
    """
    if isinstance(value, bool):
        raise InvalidRangeError("start", "Booleans cannot start a range")
    if isinstance(value, str):
        return CHAR
    for python_type, kind in _BUILTIN_KINDS.items():
        if type(value) is python_type:
            return kind
    kind = _numpy_kind(type(value))
    if kind is None:
        raise InvalidRangeError(
            "start", f"Cannot infer a numeric kind for {value!r}; pass kind= explicitly"
        )
    return kind


def _numpy_kind(annotation: Any) -> NumericKind | None:
    """Map a NumPy scalar type (numpy.uint8, numpy.float32, ...) to a kind."""
    if not isinstance(annotation, type) or getattr(annotation, "__module__", None) != "numpy":
        return None
    try:
        import numpy as np
    except ImportError:
        return None

    if not issubclass(annotation, np.number):
        return None
    dtype = np.dtype(annotation)
    prefix = {"i": "int", "u": "uint", "f": "float"}.get(dtype.kind)
    if prefix is None:
        return None
    return KINDS.get(f"{prefix}{dtype.itemsize * 8}")
