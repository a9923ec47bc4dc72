"""
Minimal Working Example: checking a saturating add over every combination.

Usage:
    python examples/bit_widths/run.py

This demonstrates the core combinatorial workflow:
- Attach value sources to a test function's parameters
- Let bool and Enum parameters fall back to their default values
- Iterate the Cartesian product and call the test once per combination
"""

import enum
from typing import Annotated

import combinatorial
from combinatorial import UINT8, MemberData, count_range, declare, step_range


class Mode(enum.Enum):
    WRAP = "wrap"
    SATURATE = "saturate"


def increments():
    # Member data: any iterable the test module can compute
    return [1, 16, 255]


def saturating_add(a, b, mode):
    total = a + b
    if mode is Mode.SATURATE:
        return min(total, 255)
    return total % 256


# level: 250..255 in the uint8 domain (count form)
# step: 0, 64, 128, 192 (bounds form, inclusive stop)
# delta: produced by increments()
# mode, check_bounds: default enumeration of Enum and bool
@declare(delta=MemberData("increments"))
def test_saturating_add(
    level: Annotated[UINT8, count_range(250, 6, kind=UINT8)],
    step: Annotated[int, step_range(0, 192, 64)],
    delta,
    mode: Mode,
    check_bounds: bool,
):
    result = saturating_add(level, delta + step, mode)
    if check_bounds:
        assert 0 <= result <= 255


if __name__ == "__main__":
    source = combinatorial.combinations(test_saturating_add)

    # 6 levels x 4 steps x 3 deltas x 2 modes x 2 flags = 288 combinations
    print(f"{source!r}: {len(source)} combinations")

    for combo in source:
        test_saturating_add(**combo.params)

    print("first:", source[0].params)
    print("last: ", source[-1].params)
