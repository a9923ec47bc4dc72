"""
Value resolution: pick one source per parameter and produce its values.

Precedence, checked in this fixed order regardless of how the declarations
were attached:

1. Values
2. RangeSource of exactly the parameter's numeric kind
3. RandomData
4. MemberData
5. Default enumeration of the parameter's annotation

Default enumeration covers ``bool``, 32-bit signed integers (``int`` or
INT32), Enum subclasses and optionals of those. The 32-bit domain has over
four billion values, so it is returned as a lazy ``range``; consumers bound
their own iteration.
"""

from __future__ import annotations

import enum
import logging
import types
import typing
from collections.abc import Sequence
from typing import Any

from combinatorial.errors import MissingArgumentError, UnsupportedTypeError
from combinatorial.numeric import INT32, kind_of
from combinatorial.parameters import Parameter
from combinatorial.sources import MemberData, RandomData, RangeSource, Values, ValueSource

logger = logging.getLogger(__name__)

_INT32_VALUES = range(INT32.minimum, INT32.maximum + 1)


class NullableValues(Sequence):
    """
    ``None`` followed by the values of an inner sequence.

    Keeps lazy inner sequences (like the 32-bit domain) lazy while still
    supporting ``len()`` and indexing.
    """

    def __init__(self, inner: Sequence) -> None:
        self._inner = inner

    def __len__(self) -> int:
        return len(self._inner) + 1

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            return tuple(self[i] for i in range(*index.indices(len(self))))
        if index < 0:
            index += len(self)
        if index < 0 or index >= len(self):
            raise IndexError(f"Index {index} out of range [0, {len(self)})")
        if index == 0:
            return None
        return self._inner[index - 1]

    def __iter__(self):
        yield None
        yield from self._inner

    def __repr__(self) -> str:
        return f"NullableValues({self._inner!r})"


def optional_inner(annotation: Any) -> Any | None:
    """
    Return T for ``Optional[T]`` / ``T | None``, else None.

    Unions of more than one non-None member are not optionals.
    """
    origin = typing.get_origin(annotation)
    if origin is not typing.Union and origin is not getattr(types, "UnionType", None):
        return None
    args = typing.get_args(annotation)
    if type(None) not in args:
        return None
    rest = [a for a in args if a is not type(None)]
    if len(rest) != 1:
        return None
    return rest[0]


def values_for_type(annotation: Any) -> Sequence:
    """
    Default enumeration of a static type.

    Args:
        annotation: The type to enumerate.

    Returns:
        - ``bool``: (True, False)
        - ``int`` / INT32: every 32-bit signed value, ascending, as a range
        - Enum subclass: every named member, aliases included, in definition order
        - ``Optional[T]``: None, then the default enumeration of T

    Raises:
        MissingArgumentError: If ``annotation`` is None.
        UnsupportedTypeError: For any other type.
    """
    if annotation is None:
        raise MissingArgumentError("annotation")

    if annotation is bool:
        return (True, False)
    if annotation is int or annotation is INT32:
        return _INT32_VALUES
    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        return tuple(annotation.__members__.values())

    inner = optional_inner(annotation)
    if inner is not None:
        return NullableValues(values_for_type(inner))

    raise UnsupportedTypeError(annotation)


def select_source(parameter: Parameter) -> ValueSource | None:
    """
    Pick the declaration that supplies ``parameter``'s values.

    Returns:
        The winning declaration, or None when default enumeration applies.
    """
    if parameter is None:
        raise MissingArgumentError("parameter")

    explicit = parameter.first(Values)
    if explicit is not None:
        return explicit

    kind = kind_of(parameter.annotation)
    if kind is not None:
        for source in parameter.sources:
            if isinstance(source, RangeSource) and source.kind == kind:
                return source

    for source_type in (RandomData, MemberData):
        source = parameter.first(source_type)
        if source is not None:
            return source
    return None


def resolve_values(parameter: Parameter) -> Sequence:
    """
    Resolve a parameter to the ordered values it should be tested with.

    Args:
        parameter: The parameter descriptor.

    Returns:
        A finite, ordered sequence. Explicit, range, random and member
        sources come back as tuples; default enumeration may be lazy.

    Raises:
        MissingArgumentError: If ``parameter`` is None.
        UnsupportedTypeError: If no declaration applies and the annotation
            has no default enumeration.
        MemberDataError: If a member data source fails.
    """
    source = select_source(parameter)

    if source is None:
        logger.debug(f"Parameter {parameter.name!r}: default values for {parameter.annotation!r}")
        return values_for_type(parameter.annotation)

    logger.debug(f"Parameter {parameter.name!r}: using {source.describe()}")
    if isinstance(source, Values):
        return source.items
    if isinstance(source, (RangeSource, RandomData)):
        return source.values
    return source.get_values(parameter)
