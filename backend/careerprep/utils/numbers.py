"""
Numeric helpers
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Union


def round_half_up(value: float, ndigits: int = 0) -> Union[int, float]:
    """
    Round with halves going up (12.5 -> 13), unlike the builtin round()

    Returns an int when ndigits is 0.
    """
    exponent = Decimal(1).scaleb(-ndigits)
    rounded = Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)
    return int(rounded) if ndigits == 0 else float(rounded)
