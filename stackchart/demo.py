from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image

from stackchart.animation import animation_frames
from stackchart.layout import ChartLayout
from stackchart.model import Bar, BarPart
from stackchart.raster import render_chart

LOGGER = logging.getLogger(__name__)

DEMO_COLORS = ("#81D0A0", "#B1CEEA", "#FBE341", "#33786C", "#74A2D2", "#55BF80")


def random_bars(rng: np.random.Generator, colors: Sequence[str] = DEMO_COLORS) -> list[Bar]:
    """1-4 bars of 2..len(colors) parts valued 100-1000; part j always uses colors[j]."""
    bars: list[Bar] = []
    for i in range(1, int(rng.integers(1, 5)) + 1):
        part_count = int(rng.integers(2, len(colors) + 1))
        parts = tuple(
            BarPart(value=float(rng.integers(100, 1001)), color=colors[j], title=f"Item {j + 1}")
            for j in range(part_count)
        )
        bars.append(Bar(title=f"Data {i}", parts=parts))
    return bars


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render a random stacked-bar chart to PNG.")
    p.add_argument("--out", default="stacked_bars.png")
    p.add_argument("--gif", default=None, help="also write the grow-in animation as an animated GIF")
    p.add_argument("--width", type=int, default=800)
    p.add_argument("--height", type=int, default=600)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--axis-y-width", type=float, default=60.0)
    p.add_argument("--axis-x-height", type=float, default=40.0)
    p.add_argument("--hide-y-lines", action="store_true")
    p.add_argument("--hide-x-lines", action="store_true")
    p.add_argument("--fps", type=int, default=30)
    p.add_argument("--verbose", action="store_true")
    return p.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    layout = ChartLayout(width=args.width, height=args.height)
    layout.set_config(
        axis_y_width=args.axis_y_width,
        axis_x_height=args.axis_x_height,
        axis_y_lines_hidden=args.hide_y_lines,
        axis_x_lines_hidden=args.hide_x_lines,
    )
    geometry = layout.set_data(random_bars(np.random.default_rng(args.seed)))

    out_path = Path(args.out)
    Image.fromarray(render_chart(geometry)).save(out_path)
    LOGGER.info("wrote %s (%d bars, axis max %s)", out_path, len(layout.bars), geometry.scale.maximum if geometry.scale else None)

    if args.gif:
        frames = [
            Image.fromarray(render_chart(geometry, content=content)).convert("RGB")
            for content in animation_frames(geometry.content, fps=args.fps)
        ]
        gif_path = Path(args.gif)
        frames[0].save(
            gif_path,
            save_all=True,
            append_images=frames[1:],
            duration=max(1, int(round(1000 / args.fps))),
        )
        LOGGER.info("wrote %s (%d frames)", gif_path, len(frames))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
