"""
Range expansion over numeric kinds.

Two shapes are supported:

- count form ``(start, count)``: ``count`` consecutive values from ``start``
- bounds form ``(start, stop, step)``: stepped inclusive range, ascending for
  a positive step and descending for a negative one

Values are produced by repeated addition in the kind's own arithmetic, never
by converting to a Python index, so the same code serves every domain.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from combinatorial.errors import InvalidRangeError
from combinatorial.numeric import NumericKind

logger = logging.getLogger(__name__)


def _validate_count(kind: NumericKind, start: Any, count: Any) -> tuple[Any, Any]:
    start = kind.coerce(start, "start")
    count = kind.coerce(count, "count")
    if count < kind.one:
        raise InvalidRangeError("count", f"count must be at least 1, got {kind.present(count)!r}")
    return start, count


def _validate_bounds(
    kind: NumericKind, start: Any, stop: Any, step: Any
) -> tuple[Any, Any, Any]:
    start = kind.coerce(start, "start")
    stop = kind.coerce(stop, "stop")
    step = kind.coerce(step, "step")
    if step > kind.zero:
        if stop < start:
            raise InvalidRangeError("stop", "stop must not be below start for a positive step")
    elif step < kind.zero:
        if stop > start:
            raise InvalidRangeError("stop", "stop must not be above start for a negative step")
    else:
        # Zero, or NaN for binary floats
        raise InvalidRangeError("step", f"step must be non-zero, got {kind.present(step)!r}")
    return start, stop, step


def iter_count(kind: NumericKind, start: Any, count: Any) -> Iterator[Any]:
    """
    Lazily yield ``count`` consecutive values starting at ``start``.

    Fixed-width integer values wrap silently when ``start + i`` exceeds the
    domain. Arguments are validated when this function is called, before the
    first value is requested.

    Args:
        kind: The numeric domain.
        start: First value.
        count: Number of values; must be at least one.

    Returns:
        An iterator over the values, as presented to tests.

    Raises:
        InvalidRangeError: If ``count`` is below one or an argument is outside
            the domain.
    """
    start, count = _validate_count(kind, start, count)
    return _count_values(kind, start, count)


def _count_values(kind: NumericKind, start: Any, count: Any) -> Iterator[Any]:
    offset = kind.zero
    while offset < count:
        yield kind.present(kind.add(start, offset))
        advanced = kind.add(offset, kind.one)
        if advanced == offset:
            # Low precision floats stop advancing past their integer limit
            logger.debug(f"{kind.name} counter saturated at {offset!r}; stopping")
            return
        offset = advanced


def iter_bounds(kind: NumericKind, start: Any, stop: Any, step: Any) -> Iterator[Any]:
    """
    Lazily yield the stepped range from ``start`` towards ``stop``.

    Both endpoints are included when ``step`` divides the interval evenly;
    a step that would pass ``stop`` ends the range without adding a value.
    ``start == stop`` yields ``start`` alone.

    Args:
        kind: The numeric domain.
        start: First value.
        stop: Inclusive bound.
        step: Non-zero increment; its sign must agree with the direction
            from ``start`` to ``stop``.

    Returns:
        An iterator over the values, as presented to tests.

    Raises:
        InvalidRangeError: If ``step`` is zero (argument "step"), if its sign
            disagrees with the bounds (argument "stop"), or if an argument is
            outside the domain.
    """
    start, stop, step = _validate_bounds(kind, start, stop, step)
    return _bounded_values(kind, start, stop, step)


def _bounded_values(kind: NumericKind, start: Any, stop: Any, step: Any) -> Iterator[Any]:
    ascending = step > kind.zero
    current = start
    while (current <= stop) if ascending else (current >= stop):
        yield kind.present(current)
        advanced = kind.add(current, step)
        # A step that wraps around the domain or stalls has passed stop
        if (advanced <= current) if ascending else (advanced >= current):
            return
        current = advanced


def expand_count(kind: NumericKind, start: Any, count: Any) -> tuple[Any, ...]:
    """Eager form of iter_count()."""
    return tuple(iter_count(kind, start, count))


def expand_bounds(kind: NumericKind, start: Any, stop: Any, step: Any) -> tuple[Any, ...]:
    """Eager form of iter_bounds()."""
    return tuple(iter_bounds(kind, start, stop, step))
