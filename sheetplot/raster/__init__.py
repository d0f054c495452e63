from .canvas import RGBA, draw_hline, draw_vline, new_canvas, to_image
from .draw_lines import draw_dashed_hline, draw_dashed_vline
from .draw_markers import draw_markers

__all__ = [
    "RGBA",
    "draw_dashed_hline",
    "draw_dashed_vline",
    "draw_hline",
    "draw_markers",
    "draw_vline",
    "new_canvas",
    "to_image",
]
