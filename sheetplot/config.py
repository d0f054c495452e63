from __future__ import annotations

from dataclasses import dataclass, field, replace as dc_replace
import logging
import math
from pathlib import Path
import tomllib
from typing import Any, Literal, get_args

from sheetplot.errors import SheetConfigError

LOGGER = logging.getLogger(__name__)

TickLabelMode = Literal["none", "interval", "all"]
TICK_LABEL_MODES: tuple[str, ...] = get_args(TickLabelMode)

DEFAULT_SHEET_WIDTH_MM = 180.0
DEFAULT_SHEET_HEIGHT_MM = 250.0
DEFAULT_MARGIN_MM = 10.0
DEFAULT_TICK_COUNT = 5


@dataclass(frozen=True)
class SheetSize:
    width_mm: float
    height_mm: float

    def __post_init__(self) -> None:
        for name in ("width_mm", "height_mm"):
            value = getattr(self, name)
            if not _is_real(value) or not math.isfinite(value) or value <= 0:
                raise SheetConfigError(f"sheet {name} must be a finite number > 0, got {value!r}")

    @property
    def orientation(self) -> str:
        return "landscape" if self.width_mm > self.height_mm else "portrait"

    def swapped(self) -> "SheetSize":
        return SheetSize(width_mm=self.height_mm, height_mm=self.width_mm)


@dataclass(frozen=True)
class SqueezeMargins:
    """Blank border reserved on both sides of each axis, in millimetres.

    Not validated here. A margin at or beyond half the sheet dimension
    gives a non-positive drawing extent; ``SheetConfig`` rejects that case.
    """

    x_mm: float = DEFAULT_MARGIN_MM
    y_mm: float = DEFAULT_MARGIN_MM


@dataclass(frozen=True)
class SheetConfig:
    sheet: SheetSize = field(default_factory=lambda: SheetSize(DEFAULT_SHEET_WIDTH_MM, DEFAULT_SHEET_HEIGHT_MM))
    margins: SqueezeMargins = field(default_factory=SqueezeMargins)
    tick_label_mode: TickLabelMode = "all"
    tick_count_x: int = DEFAULT_TICK_COUNT
    tick_count_y: int = DEFAULT_TICK_COUNT
    show_grid: bool = True

    def __post_init__(self) -> None:
        _check_margin("x", self.margins.x_mm, self.sheet.width_mm)
        _check_margin("y", self.margins.y_mm, self.sheet.height_mm)
        if self.tick_label_mode not in TICK_LABEL_MODES:
            raise SheetConfigError(
                f"tick_label_mode must be one of {', '.join(TICK_LABEL_MODES)}, got {self.tick_label_mode!r}"
            )
        object.__setattr__(self, "tick_count_x", _coerce_tick_count(self.tick_count_x, "tick_count_x"))
        object.__setattr__(self, "tick_count_y", _coerce_tick_count(self.tick_count_y, "tick_count_y"))
        object.__setattr__(self, "show_grid", bool(self.show_grid))

    def replace(self, **changes: Any) -> "SheetConfig":
        return dc_replace(self, **changes)

    def swapped_sheet(self) -> "SheetConfig":
        return self.replace(sheet=self.sheet.swapped())


def load_config(path: str | Path) -> SheetConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"sheet config not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise SheetConfigError(f"invalid TOML in {config_path}: {exc}") from exc
    config = config_from_mapping(raw)
    LOGGER.info("loaded sheet config from %s: %s", config_path, config)
    return config


def config_from_mapping(raw: dict[str, Any]) -> SheetConfig:
    sheet = _table(raw, "sheet")
    margins = _table(raw, "margins")
    ticks = _table(raw, "ticks")
    return SheetConfig(
        sheet=SheetSize(
            width_mm=_number(sheet, "width_mm", DEFAULT_SHEET_WIDTH_MM),
            height_mm=_number(sheet, "height_mm", DEFAULT_SHEET_HEIGHT_MM),
        ),
        margins=SqueezeMargins(
            x_mm=_number(margins, "x_mm", DEFAULT_MARGIN_MM),
            y_mm=_number(margins, "y_mm", DEFAULT_MARGIN_MM),
        ),
        tick_label_mode=_string(ticks, "label_mode", "all"),  # type: ignore[arg-type]
        tick_count_x=_number(ticks, "count_x", DEFAULT_TICK_COUNT),
        tick_count_y=_number(ticks, "count_y", DEFAULT_TICK_COUNT),
        show_grid=_boolean(ticks, "show_grid", True),
    )


def _check_margin(axis: str, margin: float, extent: float) -> None:
    if not _is_real(margin) or not math.isfinite(margin):
        raise SheetConfigError(f"{axis} margin must be a finite number, got {margin!r}")
    if margin < 0:
        raise SheetConfigError(f"{axis} margin must be >= 0, got {margin}")
    if margin * 2 >= extent:
        raise SheetConfigError(
            f"{axis} margin {margin}mm leaves no drawing area on a {extent}mm sheet (must be < {extent / 2}mm)"
        )


def _coerce_tick_count(value: Any, name: str) -> int:
    if not _is_real(value) or not math.isfinite(value):
        raise SheetConfigError(f"{name} must be a number, got {value!r}")
    return max(1, int(value))


def _is_real(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _table(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {})
    if not isinstance(value, dict):
        raise SheetConfigError(f"`{name}` must be a table")
    return value


def _number(table: dict[str, Any], key: str, default: float) -> float:
    value = table.get(key, default)
    if not _is_real(value):
        raise SheetConfigError(f"`{key}` must be a number, got {value!r}")
    return value


def _string(table: dict[str, Any], key: str, default: str) -> str:
    value = table.get(key, default)
    if not isinstance(value, str):
        raise SheetConfigError(f"`{key}` must be a string, got {value!r}")
    return value


def _boolean(table: dict[str, Any], key: str, default: bool) -> bool:
    value = table.get(key, default)
    if not isinstance(value, bool):
        raise SheetConfigError(f"`{key}` must be a boolean, got {value!r}")
    return value
