from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import math


@dataclass(frozen=True)
class ScientificParts:
    mantissa: str
    exponent: int


def engineering_exponent(value: float) -> int:
    """Largest multiple of 3 not above ``floor(log10(|value|))``; 0 for zero."""
    abs_v = abs(value)
    if abs_v == 0 or not math.isfinite(abs_v):
        return 0
    return (math.floor(math.log10(abs_v)) // 3) * 3


def decompose(value: float) -> ScientificParts:
    if value is None or math.isnan(value) or value == 0:
        return ScientificParts(mantissa="0", exponent=0)
    if math.isinf(value):
        return ScientificParts(mantissa=str(value), exponent=0)
    exponent = engineering_exponent(value)
    mantissa = shift_decimal(value, -exponent)
    # 999.99999 keeps exponent 0 and shows as "1000.0000"; no re-bucketing.
    if float(mantissa).is_integer():
        text = str(int(mantissa))
    else:
        text = to_fixed(mantissa, 4)
    return ScientificParts(mantissa=text, exponent=exponent)


def shift_decimal(value: float, places: int) -> float:
    """``value * 10**places`` without forming the power as a float."""
    if not math.isfinite(value):
        return value
    return float(Decimal(value).scaleb(places))


def common_exponent(vmin: float, vmax: float) -> int:
    max_abs = max(abs(vmin), abs(vmax))
    if max_abs == 0:
        return 0
    return decompose(max_abs).exponent


def format_scientific(value: float) -> str:
    parts = decompose(value)
    if parts.exponent == 0:
        return parts.mantissa
    return f"{parts.mantissa}*10^{parts.exponent}"


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point text with ties rounded away from zero on the exact binary value."""
    if not math.isfinite(value):
        return str(value)
    quant = Decimal("1").scaleb(-digits)
    try:
        q = Decimal(value).quantize(quant, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return f"{value:.{digits}f}"
    return format(q, "f")
