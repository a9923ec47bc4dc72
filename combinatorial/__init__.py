"""
combinatorial: value sources and combinations for parameterized tests.

Each parameter of a test function resolves to one ordered sequence of
values, picked from its declared value source (explicit values, a numeric
range, random data or member data) or from a default enumeration of its
type. The test is then run over the Cartesian product of those sequences.

Example:
    from typing import Annotated

    import combinatorial
    from combinatorial import UINT8, count_range, declare, step_range

    @declare(mode=["fast", "safe", None])
    def test_scale(
        level: Annotated[UINT8, count_range(0, 3, kind=UINT8)],
        offset: Annotated[int, step_range(10, 0, -5)],
        strict: bool,
        mode,
    ):
        ...

    source = combinatorial.combinations(test_scale)
    len(source)          # 3 * 3 * 2 * 3 = 54
    for combo in source:
        test_scale(**combo.params)
"""

__version__ = "0.1.0"

# Combinations
from combinatorial.combinations import Combination, CombinationSource, combinations

# Errors
from combinatorial.errors import (
    CombinatorialError,
    DeclarationError,
    InvalidRangeError,
    MemberDataError,
    MissingArgumentError,
    UnsupportedTypeError,
)

# Numeric kinds
from combinatorial.numeric import (
    CHAR,
    DECIMAL,
    FLOAT16,
    FLOAT32,
    FLOAT64,
    INT8,
    INT16,
    INT32,
    INT64,
    INT128,
    KINDS,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    UINT128,
    NumericKind,
    get_kind,
    kind_of,
)

# Parameters
from combinatorial.parameters import Parameter, declare, parameters_of

# Ranges
from combinatorial.ranges import expand_bounds, expand_count, iter_bounds, iter_count

# Resolution
from combinatorial.resolver import resolve_values, select_source, values_for_type

# Sources
from combinatorial.sources import (
    MemberData,
    RandomData,
    RangeSource,
    Values,
    ValueSource,
    count_range,
    random_data,
    step_range,
)

__all__ = [
    "__version__",
    # Combinations
    "Combination",
    "CombinationSource",
    "combinations",
    # Errors
    "CombinatorialError",
    "DeclarationError",
    "InvalidRangeError",
    "MemberDataError",
    "MissingArgumentError",
    "UnsupportedTypeError",
    # Numeric kinds
    "NumericKind",
    "KINDS",
    "get_kind",
    "kind_of",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "INT128",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "UINT128",
    "CHAR",
    "FLOAT16",
    "FLOAT32",
    "FLOAT64",
    "DECIMAL",
    # Parameters
    "Parameter",
    "declare",
    "parameters_of",
    # Ranges
    "iter_count",
    "iter_bounds",
    "expand_count",
    "expand_bounds",
    # Resolution
    "resolve_values",
    "select_source",
    "values_for_type",
    # Sources
    "ValueSource",
    "Values",
    "RangeSource",
    "RandomData",
    "MemberData",
    "count_range",
    "step_range",
    "random_data",
]
