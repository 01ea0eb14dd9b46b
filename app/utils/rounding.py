from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[int, float, Decimal]


def round_half_up(value: Number) -> int:
    """
    Round to the nearest integer, ties away from zero.

    Python's round() uses banker's rounding (round(70.5) == 70), which
    would shift scores sitting exactly on .5 down a point.
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
