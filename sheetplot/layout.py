from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
from typing import Any

from sheetplot.axis_config import AxisConfig, build_axis_config
from sheetplot.config import SheetConfig
from sheetplot.formatting import format_scientific
from sheetplot.mapping import MappingResult, map_with_transform
from sheetplot.points import DataPoint, RawRow, sanitize_points
from sheetplot.scales import Ranges, SheetTransform, compute_ranges
from sheetplot.validation import RoundTripReport, scale_text, validate_round_trip

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetLayout:
    rows: tuple[RawRow, ...]
    config: SheetConfig
    points: list[DataPoint]
    ranges: Ranges
    transform: SheetTransform
    mapping: MappingResult
    x_axis: AxisConfig
    y_axis: AxisConfig

    @property
    def is_empty(self) -> bool:
        return len(self.points) == 0

    @property
    def drawing_area_mm(self) -> tuple[float, float]:
        return (self.transform.x.drawing_mm, self.transform.y.drawing_mm)

    def validate(self) -> RoundTripReport:
        return validate_round_trip(self.rows, self.transform)

    def scale_lines(self) -> dict[str, str]:
        return {
            "x": scale_text(self.transform.x.units_per_mm),
            "y": scale_text(self.transform.y.units_per_mm),
            "x_tick_at_0mm": format_scientific(self.transform.x.tick_at_zero),
            "y_tick_at_0mm": format_scientific(self.transform.y.tick_at_zero),
        }

    def summary(self) -> dict[str, Any]:
        width, height = self.drawing_area_mm
        return {
            "point_count": len(self.points),
            "row_count": len(self.rows),
            "sheet_size": {"x": self.config.sheet.width_mm, "y": self.config.sheet.height_mm},
            "squeeze": {"x": self.config.margins.x_mm, "y": self.config.margins.y_mm},
            "drawing_area": {"x": width, "y": height},
        }


def build_layout(rows: Sequence[RawRow], config: SheetConfig | None = None) -> SheetLayout:
    cfg = config or SheetConfig()
    frozen_rows = tuple((r[0], r[1]) for r in rows)
    points = sanitize_points(frozen_rows)
    ranges = compute_ranges(points)
    transform = SheetTransform.build(ranges, cfg.sheet, cfg.margins)
    return SheetLayout(
        rows=frozen_rows,
        config=cfg,
        points=points,
        ranges=ranges,
        transform=transform,
        mapping=map_with_transform(points, transform),
        x_axis=build_axis_config(
            "x",
            transform.x,
            mode=cfg.tick_label_mode,
            tick_count=cfg.tick_count_x,
            show_grid=cfg.show_grid,
        ),
        y_axis=build_axis_config(
            "y",
            transform.y,
            mode=cfg.tick_label_mode,
            tick_count=cfg.tick_count_y,
            show_grid=cfg.show_grid,
        ),
    )


class LayoutBuilder:
    """Recomputes a layout on demand, reusing the last one for identical input."""

    def __init__(self, config: SheetConfig | None = None) -> None:
        self._config = config or SheetConfig()
        self._last_key: tuple[Any, ...] | None = None
        self._last_layout: SheetLayout | None = None
        self.rebuilds = 0

    @property
    def config(self) -> SheetConfig:
        return self._config

    def set_config(self, config: SheetConfig) -> None:
        self._config = config

    def build(self, rows: Sequence[RawRow]) -> SheetLayout:
        frozen_rows = tuple((r[0], r[1]) for r in rows)
        key = (frozen_rows, self._config)
        if self._last_layout is not None and key == self._last_key:
            return self._last_layout
        layout = build_layout(frozen_rows, self._config)
        self._last_key = key
        self._last_layout = layout
        self.rebuilds += 1
        LOGGER.debug("rebuilt layout #%d for %d rows", self.rebuilds, len(frozen_rows))
        return layout
