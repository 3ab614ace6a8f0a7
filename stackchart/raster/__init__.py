from .canvas import RGBA, coerce_color, draw_hline, draw_vline, fill_rect, new_canvas
from .draw_text import draw_text, draw_text_in_rect, text_size, wrap_text
from .render import RasterStyle, render_chart

__all__ = [
    "RGBA",
    "RasterStyle",
    "coerce_color",
    "draw_hline",
    "draw_text",
    "draw_text_in_rect",
    "draw_vline",
    "fill_rect",
    "new_canvas",
    "render_chart",
    "text_size",
    "wrap_text",
]
