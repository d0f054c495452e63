from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import logging
import math
import re
from typing import Union

import numpy as np

LOGGER = logging.getLogger(__name__)

RawValue = Union[str, float, int, None]
RawRow = tuple[RawValue, RawValue]

_FIELD_SPLIT = re.compile(r"\t|,|\s+")


@dataclass(frozen=True)
class DataPoint:
    x: float
    y: float


def parse_value(raw: RawValue) -> float | None:
    """Parse one table cell; ``None`` for empty, non-numeric or non-finite input."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else None
    text = str(raw).strip()
    # float() accepts digit separators the table editor never produces.
    if not text or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def sanitize_points(rows: Iterable[RawRow]) -> list[DataPoint]:
    out: list[DataPoint] = []
    dropped = 0
    for raw_x, raw_y in rows:
        x = parse_value(raw_x)
        y = parse_value(raw_y)
        if x is None or y is None:
            dropped += 1
            continue
        out.append(DataPoint(x=x, y=y))
    if dropped:
        LOGGER.debug("dropped %d incomplete or non-numeric rows", dropped)
    return out


def points_to_arrays(points: Sequence[DataPoint]) -> tuple[np.ndarray, np.ndarray]:
    xs = np.fromiter((p.x for p in points), dtype=np.float64, count=len(points))
    ys = np.fromiter((p.y for p in points), dtype=np.float64, count=len(points))
    return xs, ys


def parse_points_text(text: str) -> list[tuple[str, str]]:
    rows: list[tuple[str, str]] = []
    for line in text.strip().splitlines():
        parts = [p for p in _FIELD_SPLIT.split(line) if p.strip()]
        if len(parts) >= 2:
            rows.append((parts[0], parts[1]))
        elif len(parts) == 1:
            rows.append((parts[0], ""))
    return rows


def format_points_text(rows: Iterable[RawRow]) -> str:
    lines = []
    for raw_x, raw_y in rows:
        x = _cell_text(raw_x)
        y = _cell_text(raw_y)
        if x and y:
            lines.append(f"{x}\t{y}")
    return "\n".join(lines)


def merge_columns(xs_text: str, ys_text: str) -> list[tuple[str, str]]:
    xs = [line.strip() for line in xs_text.strip().split("\n")]
    ys = [line.strip() for line in ys_text.strip().split("\n")]
    rows: list[tuple[str, str]] = []
    for i in range(max(len(xs), len(ys))):
        x = xs[i] if i < len(xs) else ""
        y = ys[i] if i < len(ys) else ""
        if x or y:
            rows.append((x, y))
    return rows


def swap_axes(rows: Iterable[RawRow]) -> list[RawRow]:
    return [(raw_y, raw_x) for raw_x, raw_y in rows]


def _cell_text(raw: RawValue) -> str:
    if raw is None:
        return ""
    return str(raw).strip()
