from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
import math
from typing import Literal

from sheetplot.formatting import format_scientific, to_fixed
from sheetplot.points import RawRow, RawValue, parse_value
from sheetplot.scales import AxisMap, SheetTransform

LOGGER = logging.getLogger(__name__)

ROUND_TRIP_TOLERANCE = 1e-4

RoundTripStatus = Literal["match", "mismatch", "incomplete"]


@dataclass(frozen=True)
class RoundTripRow:
    index: int
    raw_x: RawValue
    raw_y: RawValue
    reverse_x: float | None
    reverse_y: float | None
    x_match: bool
    y_match: bool
    status: RoundTripStatus

    @property
    def reverse_x_text(self) -> str:
        return "" if self.reverse_x is None else to_fixed(self.reverse_x, 6)

    @property
    def reverse_y_text(self) -> str:
        return "" if self.reverse_y is None else to_fixed(self.reverse_y, 6)


@dataclass(frozen=True)
class RoundTripReport:
    rows: list[RoundTripRow]
    scale_x: str
    scale_y: str
    tick_at_zero_x: str
    tick_at_zero_y: str

    @property
    def total(self) -> int:
        return len(self.rows)

    @property
    def valid_count(self) -> int:
        return sum(1 for row in self.rows if row.status != "incomplete")

    @property
    def mismatch_count(self) -> int:
        return sum(1 for row in self.rows if row.status == "mismatch")

    @property
    def all_match(self) -> bool:
        return self.mismatch_count == 0


def scale_text(units_per_mm: float) -> str:
    return f"1mm → {format_scientific(units_per_mm)}"


def reverse_value(value: float, axis: AxisMap) -> float:
    return axis.to_data(axis.to_physical(value))


def check_row(index: int, row: RawRow, transform: SheetTransform, tolerance: float = ROUND_TRIP_TOLERANCE) -> RoundTripRow:
    raw_x, raw_y = row
    x = parse_value(raw_x)
    y = parse_value(raw_y)
    if x is None or y is None:
        return RoundTripRow(
            index=index,
            raw_x=raw_x,
            raw_y=raw_y,
            reverse_x=None,
            reverse_y=None,
            x_match=False,
            y_match=False,
            status="incomplete",
        )
    rev_x = float(reverse_value(x, transform.x))
    rev_y = float(reverse_value(y, transform.y))
    x_match = _within(x, rev_x, tolerance)
    y_match = _within(y, rev_y, tolerance)
    return RoundTripRow(
        index=index,
        raw_x=raw_x,
        raw_y=raw_y,
        reverse_x=rev_x,
        reverse_y=rev_y,
        x_match=x_match,
        y_match=y_match,
        status="match" if x_match and y_match else "mismatch",
    )


def validate_round_trip(
    rows: Sequence[RawRow],
    transform: SheetTransform,
    *,
    tolerance: float = ROUND_TRIP_TOLERANCE,
) -> RoundTripReport:
    checked = [check_row(i, row, transform, tolerance) for i, row in enumerate(rows)]
    report = RoundTripReport(
        rows=checked,
        scale_x=scale_text(transform.x.units_per_mm),
        scale_y=scale_text(transform.y.units_per_mm),
        tick_at_zero_x=format_scientific(transform.x.tick_at_zero),
        tick_at_zero_y=format_scientific(transform.y.tick_at_zero),
    )
    if report.mismatch_count:
        LOGGER.warning("round trip mismatch on %d of %d rows", report.mismatch_count, report.valid_count)
    return report


def _within(raw: float, reverse: float, tolerance: float) -> bool:
    if not math.isfinite(reverse):
        return False
    return abs(raw - reverse) < tolerance
