from __future__ import annotations

import re
from typing import Any

import numpy as np

from stackchart.errors import ChartDataError
from stackchart.model import Rect


RGBA = tuple[int, int, int, int]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")


def coerce_color(token: Any) -> RGBA:
    """Resolve a renderer color token: RGB/RGBA int tuples or `#RRGGBB[AA]` strings."""
    if isinstance(token, str):
        if not _HEX_COLOR.match(token):
            raise ChartDataError(f"color must be a hex color (#RRGGBB or #RRGGBBAA), got {token!r}")
        raw = token[1:]
        r, g, b = int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16)
        a = int(raw[6:8], 16) if len(raw) == 8 else 255
        return (r, g, b, a)
    if isinstance(token, (tuple, list)) and len(token) in (3, 4):
        channels = [int(c) for c in token]
        if any(c < 0 or c > 255 for c in channels):
            raise ChartDataError(f"color channels must be in [0, 255], got {token!r}")
        if len(channels) == 3:
            channels.append(255)
        return (channels[0], channels[1], channels[2], channels[3])
    raise ChartDataError(f"unsupported color token: {token!r}")


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def fill_rect(dst: np.ndarray, rect: Rect, color: RGBA) -> None:
    x0 = int(round(min(rect.x, rect.max_x)))
    x1 = int(round(max(rect.x, rect.max_x)))
    y0 = int(round(min(rect.y, rect.max_y)))
    y1 = int(round(max(rect.y, rect.max_y)))
    x0, x1 = max(0, x0), min(dst.shape[1], x1)
    y0, y1 = max(0, y0), min(dst.shape[0], y1)
    if x1 <= x0 or y1 <= y0:
        return
    _blend(dst[y0:y1, x0:x1], color)


def draw_hline(dst: np.ndarray, x0: float, x1: float, y: float, color: RGBA) -> None:
    yy = int(round(y))
    if yy < 0 or yy >= dst.shape[0]:
        return
    xa = max(0, int(round(min(x0, x1))))
    xb = min(dst.shape[1] - 1, int(round(max(x0, x1))))
    if xa > xb:
        return
    _blend(dst[yy : yy + 1, xa : xb + 1], color)


def draw_vline(dst: np.ndarray, x: float, y0: float, y1: float, color: RGBA) -> None:
    xx = int(round(x))
    if xx < 0 or xx >= dst.shape[1]:
        return
    ya = max(0, int(round(min(y0, y1))))
    yb = min(dst.shape[0] - 1, int(round(max(y0, y1))))
    if ya > yb:
        return
    _blend(dst[ya : yb + 1, xx : xx + 1], color)


def _blend(view: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    inv = 1.0 - a
    view[:, :, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + view[:, :, :3].astype(np.float32) * inv).astype(np.uint8)
    view[:, :, 3] = 255
