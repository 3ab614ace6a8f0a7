from __future__ import annotations

from dataclasses import replace
import math
from typing import Callable

from stackchart.geometry import BarColumn, ContentGeometry, Segment


Easing = Callable[[float], float]

DEFAULT_DURATION_S = 1.0
DEFAULT_FPS = 30


def linear(t: float) -> float:
    return max(0.0, min(1.0, float(t)))


def ease_in_out(t: float) -> float:
    t = linear(t)
    return t * t * (3.0 - 2.0 * t)


def interpolate_content(content: ContentGeometry, progress: float, *, easing: Easing = ease_in_out) -> ContentGeometry:
    """Grow every segment from the content baseline towards its target rect.

    At progress 0 each segment sits on the baseline with zero height; at 1 the
    target geometry is returned unchanged.
    """
    k = easing(progress)
    if k >= 1.0:
        return content
    baseline = content.rect.height
    bars: list[BarColumn] = []
    for bar in content.bars:
        segments: list[Segment] = []
        for segment in bar.segments:
            target = segment.rect
            rect = replace(
                target,
                y=baseline + (target.y - baseline) * k,
                height=target.height * k,
            )
            segments.append(replace(segment, rect=rect))
        bars.append(replace(bar, segments=tuple(segments)))
    return replace(content, bars=tuple(bars))


def animation_frames(
    content: ContentGeometry,
    *,
    duration: float = DEFAULT_DURATION_S,
    fps: int = DEFAULT_FPS,
    easing: Easing = ease_in_out,
) -> tuple[ContentGeometry, ...]:
    if duration <= 0:
        raise ValueError("duration must be > 0")
    if fps <= 0:
        raise ValueError("fps must be > 0")
    steps = max(1, int(math.ceil(duration * fps)))
    frames = [interpolate_content(content, i / steps, easing=easing) for i in range(steps)]
    frames.append(content)
    return tuple(frames)
