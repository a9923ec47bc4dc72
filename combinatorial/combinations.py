"""
CombinationSource: the Cartesian product of resolved parameter values.

Each parameter is resolved once, up front, with resolve_values(); the
product itself is computed lazily by index, so a lazy per-parameter
sequence (such as the 32-bit integer domain) is never materialized.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable, Iterator

from combinatorial._canonical import fingerprint
from combinatorial.parameters import Parameter, parameters_of
from combinatorial.resolver import resolve_values


@dataclass(frozen=True)
class Combination:
    """
    One assignment of a value to every parameter.

    Attributes:
        params: Parameter names mapped to values, in signature order.
        case_id: A stable identifier for this combination.
        index: Position of this combination in the product.
    """

    params: dict[str, Any]
    case_id: str
    index: int

    def args(self) -> tuple[Any, ...]:
        """Values in parameter order, for positional calls."""
        return tuple(self.params.values())


class CombinationSource:
    """
    All combinations of values for a list of parameters.

    The rightmost parameter varies fastest, matching itertools.product.

    Example:
    ```python
    source = CombinationSource([
        Parameter("flag", bool),
        Parameter("n", int, (count_range(1, 3),)),
    ])
    # Yields 6 combinations: (True, 1), (True, 2), ..., (False, 3)
    ```
    """

    def __init__(self, parameters: list[Parameter]) -> None:
        """
        Resolve every parameter's values.

        Args:
            parameters: Parameter descriptors in call order.

        Raises:
            UnsupportedTypeError: If a parameter cannot be resolved.
        """
        self._parameters = list(parameters)
        self._keys = [p.name for p in self._parameters]
        self._values: list[Sequence] = [self._as_sequence(resolve_values(p)) for p in self._parameters]

    @staticmethod
    def _as_sequence(values: Any) -> Sequence:
        if isinstance(values, Sequence):
            return values
        return tuple(values)

    @property
    def parameters(self) -> list[Parameter]:
        return list(self._parameters)

    def values_for(self, name: str) -> Sequence:
        """Return the resolved values of the named parameter."""
        try:
            return self._values[self._keys.index(name)]
        except ValueError:
            raise KeyError(name) from None

    def __iter__(self) -> Iterator[Combination]:
        """Yield every combination, in product order."""
        for index in range(len(self)):
            yield self[index]

    def __len__(self) -> int:
        """Return the total number of combinations."""
        total = 1
        for values in self._values:
            total *= len(values)
        return total

    def __getitem__(self, index: int) -> Combination:
        """
        Get a combination by index without enumerating the ones before it.

        Args:
            index: The index of the combination (0-based, negatives allowed).

        Returns:
            The Combination at the given index.

        Raises:
            IndexError: If index is out of range.
        """
        total = len(self)
        if index < 0:
            index = total + index
        if index < 0 or index >= total:
            raise IndexError(f"Index {index} out of range [0, {total})")

        # Decode the linear index, rightmost parameter fastest
        positions = []
        remaining = index
        for values in reversed(self._values):
            positions.append(remaining % len(values))
            remaining //= len(values)
        positions.reverse()

        params = {key: values[pos] for key, values, pos in zip(self._keys, self._values, positions)}
        return Combination(params=params, case_id=fingerprint(params), index=index)

    def __repr__(self) -> str:
        names = ", ".join(f"{k}[{len(v)}]" for k, v in zip(self._keys, self._values))
        return f"CombinationSource({names})"


def combinations(func: Callable[..., Any], owner: Any = None) -> CombinationSource:
    """
    Create a CombinationSource for a test function.

    Args:
        func: The test function; see parameters_of() for how its
            declarations are discovered.
        owner: Optional object member data is looked up on.

    Returns:
        A CombinationSource over the function's parameters.

    Example:
    ```python
    @declare(size=count_range(1, 3))
    def test_fill(size: int, strict: bool): ...

    for combo in combinations(test_fill):
        test_fill(**combo.params)   # 6 calls
    ```
    """
    return CombinationSource(parameters_of(func, owner=owner))
