"""
Value source declarations.

A declaration tells the resolver which values to try for one parameter.
The variants are:

- Values: explicit literals, in order (None allowed)
- RangeSource: a numeric range of one kind (count_range(), step_range())
- RandomData: values generated once, at declaration time (random_data())
- MemberData: a named attribute or callable looked up on the parameter's owner

Declarations are immutable. Range and random declarations validate their
arguments when constructed, so a malformed declaration fails when the test
module is imported rather than when combinations are generated.
"""

from __future__ import annotations

import logging
import random as stdlib_random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from combinatorial.errors import InvalidRangeError, MemberDataError
from combinatorial.numeric import NumericKind, infer_kind
from combinatorial.ranges import expand_bounds, expand_count

if TYPE_CHECKING:
    from combinatorial.parameters import Parameter

logger = logging.getLogger(__name__)

DEFAULT_RANDOM_COUNT = 5
DEFAULT_RANDOM_MAXIMUM = 2**31 - 2


class ValueSource:
    """Marker base class for value source declarations."""

    __slots__ = ()

    def describe(self) -> str:
        """Short human-readable description (used by the CLI)."""
        return type(self).__name__


@dataclass(frozen=True, init=False)
class Values(ValueSource):
    """
    Explicit values for a parameter, tried in the given order.

    Example:
        Values(1, 2, None)
    """

    items: tuple[Any, ...]

    def __init__(self, *items: Any) -> None:
        object.__setattr__(self, "items", items)

    def describe(self) -> str:
        return f"values ({len(self.items)})"


@dataclass(frozen=True)
class RangeSource(ValueSource):
    """
    A numeric range declaration of a single kind.

    Build with count_range() or step_range(); the expanded values are
    computed once, at construction.

    Attributes:
        kind: The numeric domain the range is declared over.
        start: First value.
        count: Number of values (count form), else None.
        stop: Inclusive bound (bounds form), else None.
        step: Increment (bounds form), else None.
        values: The expanded values.
    """

    kind: NumericKind
    start: Any
    count: Any = None
    stop: Any = None
    step: Any = None
    values: tuple[Any, ...] = field(default=(), repr=False, compare=False)

    def describe(self) -> str:
        if self.stop is None:
            shape = f"start={self.start!r}, count={self.count!r}"
        else:
            shape = f"start={self.start!r}, stop={self.stop!r}, step={self.step!r}"
        return f"range[{self.kind.name}]({shape})"


def count_range(start: Any, count: Any, *, kind: NumericKind | None = None) -> RangeSource:
    """
    Declare ``count`` consecutive values starting at ``start``.

    Args:
        start: First value.
        count: Number of values; must be at least one.
        kind: Numeric domain. Inferred from ``start`` when omitted
            (int -> INT32, float -> FLOAT64, Decimal -> DECIMAL,
            str -> CHAR).

    Returns:
        A RangeSource holding the expanded values.

    Raises:
        InvalidRangeError: If ``count`` is below one or a value lies outside
            the domain.

    Example:
        count_range(0, 5)                 # 0, 1, 2, 3, 4
        count_range(250, 3, kind=UINT8)   # 250, 251, 252
    """
    kind = kind or infer_kind(start)
    values = expand_count(kind, start, count)
    return RangeSource(kind=kind, start=start, count=count, values=values)


def step_range(
    start: Any, stop: Any, step: Any = 1, *, kind: NumericKind | None = None
) -> RangeSource:
    """
    Declare a stepped range from ``start`` to ``stop`` inclusive.

    Args:
        start: First value.
        stop: Inclusive bound. A step that passes it ends the range.
        step: Non-zero increment; negative for descending ranges.
        kind: Numeric domain, inferred from ``start`` when omitted.

    Returns:
        A RangeSource holding the expanded values.

    Raises:
        InvalidRangeError: If ``step`` is zero or disagrees in sign with the
            direction from ``start`` to ``stop``.

    Example:
        step_range(0, 7, 2)    # 0, 2, 4, 6
        step_range(7, 0, -2)   # 7, 5, 3, 1
    """
    kind = kind or infer_kind(start)
    values = expand_bounds(kind, start, stop, step)
    return RangeSource(kind=kind, start=start, stop=stop, step=step, values=values)


@dataclass(frozen=True)
class RandomData(ValueSource):
    """
    Values generated ahead of time, returned verbatim by the resolver.

    Use random_data() to generate seeded integers, or construct directly
    from values produced elsewhere.
    """

    values: tuple[Any, ...]
    seed: int | None = None

    def describe(self) -> str:
        seed = "unseeded" if self.seed is None else f"seed={self.seed}"
        return f"random ({len(self.values)}, {seed})"


def random_data(
    count: int = DEFAULT_RANDOM_COUNT,
    minimum: int = 0,
    maximum: int = DEFAULT_RANDOM_MAXIMUM,
    seed: int | None = None,
) -> RandomData:
    """
    Generate ``count`` random integers in ``[minimum, maximum]``.

    Args:
        count: Number of values to generate.
        minimum: Inclusive lower bound.
        maximum: Inclusive upper bound.
        seed: Seed for replayable values. None draws a fresh sequence.

    Returns:
        A RandomData declaration.

    Raises:
        InvalidRangeError: If ``count`` is below one or ``minimum`` exceeds
            ``maximum``.
    """
    if count < 1:
        raise InvalidRangeError("count", f"count must be at least 1, got {count!r}")
    if minimum > maximum:
        raise InvalidRangeError("maximum", f"maximum {maximum} is below minimum {minimum}")

    rng = stdlib_random.Random(seed)
    values = tuple(rng.randint(minimum, maximum) for _ in range(count))
    return RandomData(values=values, seed=seed)


@dataclass(frozen=True, init=False)
class MemberData(ValueSource):
    """
    Values produced by a named member of the test's owner.

    The member is looked up on ``owner`` when given, otherwise on the owner
    recorded in the parameter descriptor (the enclosing class of a test
    method, or the defining module of a test function). Callable members
    are invoked with ``args``; other members must be iterable.

    A callable may be given in place of a name.

    Example:
        def primes():
            return [2, 3, 5, 7]

        @declare(n=MemberData("primes"))
        def test_is_prime(n): ...
    """

    member: str | Callable[..., Any]
    args: tuple[Any, ...]
    owner: Any

    def __init__(self, member: str | Callable[..., Any], *args: Any, owner: Any = None) -> None:
        object.__setattr__(self, "member", member)
        object.__setattr__(self, "args", args)
        object.__setattr__(self, "owner", owner)

    @property
    def name(self) -> str:
        if isinstance(self.member, str):
            return self.member
        return getattr(self.member, "__qualname__", repr(self.member))

    def describe(self) -> str:
        return f"member {self.name}"

    def get_values(self, parameter: Parameter) -> tuple[Any, ...]:
        """
        Produce the values for ``parameter``.

        Raises:
            MemberDataError: If the member cannot be found, is given
                arguments it cannot take, or does not produce an iterable.
        """
        target = self._lookup(parameter)

        if callable(target):
            logger.debug(f"Calling member data {self.name} for parameter {parameter.name}")
            produced = target(*self.args)
        elif self.args:
            raise MemberDataError(
                f"Member {self.name!r} is not callable but arguments were given"
            )
        else:
            produced = target

        if isinstance(produced, (str, bytes)):
            raise MemberDataError(f"Member {self.name!r} produced a string, not a sequence of values")
        try:
            return tuple(produced)
        except TypeError as e:
            raise MemberDataError(
                f"Member {self.name!r} produced {type(produced).__name__}, which is not iterable"
            ) from e

    def _lookup(self, parameter: Parameter) -> Any:
        if not isinstance(self.member, str):
            return self.member

        owner = self.owner if self.owner is not None else parameter.owner
        if owner is None:
            raise MemberDataError(
                f"No owner to look up member {self.member!r} for parameter {parameter.name!r}"
            )
        try:
            return getattr(owner, self.member)
        except AttributeError as e:
            owner_name = getattr(owner, "__qualname__", None) or getattr(owner, "__name__", repr(owner))
            raise MemberDataError(f"{owner_name} has no member {self.member!r}") from e
