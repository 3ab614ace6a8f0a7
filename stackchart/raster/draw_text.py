from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from stackchart.model import Rect
from stackchart.raster.canvas import RGBA


DEFAULT_FONT_FAMILY = "Helvetica"
DEFAULT_FONT_SIZE_PX = 14.0
SANS_FONT_FALLBACK_PATTERNS = (
    "helvetica",
    "arial",
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "freesans",
)

HAlign = Literal["left", "center", "right"]


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> tuple[int, int]:
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    return (max(0, int(right - left)), max(1, int(bottom - top)))


def wrap_text(
    text: str,
    max_width: float,
    *,
    max_lines: int = 2,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> list[str]:
    """Greedy word wrap; overflow past `max_lines` is folded into the last line."""
    words = text.split()
    if not words:
        return []
    lines: list[str] = []
    current = words[0]
    for word in words[1:]:
        candidate = f"{current} {word}"
        if text_size(candidate, font_family=font_family, font_size_px=font_size_px)[0] <= max_width:
            current = candidate
            continue
        lines.append(current)
        current = word
    lines.append(current)
    if len(lines) > max_lines:
        lines = lines[: max_lines - 1] + [" ".join(lines[max_lines - 1 :])]
    return lines


def draw_text_in_rect(
    dst: np.ndarray,
    rect: Rect,
    lines: list[str],
    color: RGBA,
    *,
    align: HAlign = "center",
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    embolden_px: int = 1,
) -> None:
    if not lines:
        return
    line_h = max(1, int(round(font_size_px * 1.2)))
    block_h = line_h * len(lines)
    y = int(round(rect.y + (rect.height - block_h) / 2))
    for line in lines:
        w, h = text_size(line, font_family=font_family, font_size_px=font_size_px)
        if align == "left":
            x = rect.x
        elif align == "right":
            x = rect.max_x - w
        else:
            x = rect.x + (rect.width - w) / 2
        draw_text(
            dst,
            int(round(x)),
            y + (line_h - h) // 2,
            line,
            color,
            font_family=font_family,
            font_size_px=font_size_px,
            embolden_px=embolden_px,
        )
        y += line_h


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    embolden_px: int = 1,
) -> None:
    if not text:
        return
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    mask = _render_mask(text=text, font=font)
    if embolden_px > 1:
        mask = _embolden(mask, embolden_px)
    _blend_mask(dst, x, y, mask, color)


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    x0, y0 = max(0, x), max(0, y)
    x1, y1 = min(dst.shape[1], x + w), min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    # Canvases stay opaque, so coverage only mixes RGB.
    a = mask[y0 - y : y1 - y, x0 - x : x1 - x, None].astype(np.float32) * (color[3] / 65025.0)
    patch = dst[y0:y1, x0:x1]
    rgb = np.asarray(color[:3], dtype=np.float32) * a + patch[:, :, :3].astype(np.float32) * (1.0 - a)
    patch[:, :, :3] = np.clip(rgb + 0.5, 0, 255).astype(np.uint8)
    patch[:, :, 3] = 255


def _embolden(mask: np.ndarray, embolden_px: int) -> np.ndarray:
    out = mask.copy()
    for shift in range(1, min(embolden_px, mask.shape[1])):
        np.maximum(out[:, shift:], mask[:, :-shift], out=out[:, shift:])
    return out


@lru_cache(maxsize=256)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is None:
        return ImageFont.load_default()
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        return ImageFont.load_default()


@lru_cache(maxsize=16)
def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + SANS_FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            if p in path.name.lower().replace(" ", ""):
                return path
    return None
