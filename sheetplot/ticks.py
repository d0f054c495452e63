from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Callable

from sheetplot.formatting import format_scientific, shift_decimal, to_fixed
from sheetplot.scales import AxisMap, tick_value

TickFormatter = Callable[[float], str]

__all__ = [
    "TickFormatter",
    "format_mm",
    "format_tick_label",
    "make_tick_formatter",
    "tick_value",
]


def format_mm(mm_value: float) -> str:
    """Millimetre position rounded to 1 decimal, ``(mm)`` appended at the origin."""
    try:
        q = Decimal(float(mm_value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        out = f"{float(mm_value):.1f}"
    else:
        if q == 0:
            return "0(mm)"
        out = format(q, "f")
    if out.endswith(".0"):
        out = out[:-2]
    return out


def format_tick_label(mm_value: float, data_value: float, common_exp: int = 0) -> str:
    if common_exp != 0:
        formatted = to_fixed(shift_decimal(data_value, -common_exp), 4)
    else:
        formatted = format_scientific(data_value)
    return f"{formatted} | {format_mm(mm_value)}"


def make_tick_formatter(axis: AxisMap, common_exp: int = 0) -> TickFormatter:
    def _format(mm_value: float) -> str:
        return format_tick_label(mm_value, axis.to_data(float(mm_value)), common_exp)

    return _format
