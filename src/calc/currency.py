import math


def round_currency(amount: float) -> int:
    """Round to the nearest whole currency unit, halves rounding up (2.5 -> 3)."""
    return int(math.floor(amount + 0.5))
