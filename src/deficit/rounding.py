"""Half-up rounding shared by every engine output.

Python's ``round`` uses banker's rounding (``round(2.5) == 2``). The engine
rounds half toward positive infinity instead, so that ``2.5 -> 3`` and
``-2.5 -> -2``, and results stay reproducible across consumers.
"""

from __future__ import annotations

import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round ``value`` half toward positive infinity.

    Args:
        value: Number to round
        ndigits: Decimal places to keep (0 for whole numbers)

    Returns:
        Rounded value as float

    Example:
        >>> round_half_up(2.5)
        3.0
        >>> round_half_up(-2.5)
        -2.0
        >>> round_half_up(1.25, 1)
        1.3
    """
    scale = 10**ndigits
    return math.floor(value * scale + 0.5) / scale


def round_int(value: float) -> int:
    """Round half-up to the nearest whole number and return an int."""
    return int(math.floor(value + 0.5))
