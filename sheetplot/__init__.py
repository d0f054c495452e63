from sheetplot.axis_config import AxisConfig, GridLineStyle, build_axis_config, grid_line_style, make_grid_styler
from sheetplot.config import SheetConfig, SheetSize, SqueezeMargins, TickLabelMode, load_config
from sheetplot.errors import PlotDataError, SheetConfigError
from sheetplot.formatting import ScientificParts, common_exponent, decompose, format_scientific
from sheetplot.layout import LayoutBuilder, SheetLayout, build_layout
from sheetplot.mapping import AxisLine, MappedPoint, MappingResult, map_points_to_physical
from sheetplot.points import DataPoint, parse_points_text, sanitize_points
from sheetplot.scales import AxisMap, Ranges, SheetTransform, UnitsPerMm, compute_ranges, compute_units_per_mm
from sheetplot.ticks import format_tick_label, make_tick_formatter, tick_value
from sheetplot.validation import RoundTripReport, RoundTripRow, validate_round_trip

__all__ = [
    "AxisConfig",
    "AxisLine",
    "AxisMap",
    "DataPoint",
    "GridLineStyle",
    "LayoutBuilder",
    "MappedPoint",
    "MappingResult",
    "PlotDataError",
    "Ranges",
    "RoundTripReport",
    "RoundTripRow",
    "ScientificParts",
    "SheetConfig",
    "SheetConfigError",
    "SheetLayout",
    "SheetSize",
    "SheetTransform",
    "SqueezeMargins",
    "TickLabelMode",
    "UnitsPerMm",
    "build_axis_config",
    "build_layout",
    "common_exponent",
    "compute_ranges",
    "compute_units_per_mm",
    "decompose",
    "format_scientific",
    "format_tick_label",
    "grid_line_style",
    "load_config",
    "make_grid_styler",
    "make_tick_formatter",
    "map_points_to_physical",
    "parse_points_text",
    "sanitize_points",
    "tick_value",
    "validate_round_trip",
]
