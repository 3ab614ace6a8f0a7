from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
import math
from typing import Protocol


class NumberFormatter(Protocol):
    def __call__(self, value: float) -> str:
        ...


def format_grouped_integer(value: float) -> str:
    """Format a tick value as a grouped integer with no decimals (``12,500``)."""
    if not math.isfinite(value):
        return str(value)
    try:
        q = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_EVEN)
    except InvalidOperation:
        q = Decimal(int(round(value)))
    out = format(q, ",f")
    if out == "-0":
        out = "0"
    return out
