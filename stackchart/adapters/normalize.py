from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np

from stackchart.errors import ChartDataError
from stackchart.model import Bar, BarPart, ColorToken


try:
    import pandas as pd
except ImportError:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except ImportError:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def bars_from_records(records: Sequence[Mapping[str, Any]]) -> list[Bar]:
    """Build bars from ``{"title": ..., "parts": [{"value", "color", "title"}, ...]}`` mappings."""
    if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
        raise ChartDataError("records must be a sequence of mappings")
    bars: list[Bar] = []
    for i, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise ChartDataError(f"record {i} must be a mapping, got {type(record)!r}")
        if "title" not in record:
            raise ChartDataError(f"record {i} is missing `title`")
        raw_parts = record.get("parts", ())
        if isinstance(raw_parts, Mapping):
            raw_parts = [raw_parts]
        parts: list[BarPart] = []
        for j, raw in enumerate(raw_parts):
            if not isinstance(raw, Mapping):
                raise ChartDataError(f"record {i} part {j} must be a mapping")
            missing = [key for key in ("color", "title") if key not in raw]
            if missing:
                raise ChartDataError(f"record {i} part {j} is missing {', '.join(missing)}")
            parts.append(BarPart(value=raw.get("value"), color=_freeze_color(raw["color"]), title=raw["title"]))
        bars.append(Bar(title=record["title"], parts=tuple(parts)))
    return bars


def bars_from_matrix(
    values: Any,
    *,
    bar_titles: Sequence[str],
    part_titles: Sequence[str],
    colors: Sequence[ColorToken] | Mapping[str, ColorToken],
) -> list[Bar]:
    """Rows are bars, columns are stacked parts (bottom first)."""
    matrix = _coerce_2d_numeric(values)
    rows, cols = matrix.shape
    if len(bar_titles) != rows:
        raise ChartDataError(f"bar_titles length mismatch: {len(bar_titles)} != {rows}")
    if len(part_titles) != cols:
        raise ChartDataError(f"part_titles length mismatch: {len(part_titles)} != {cols}")
    palette = _resolve_palette(colors, part_titles)
    return [
        Bar(
            title=str(bar_titles[r]),
            parts=tuple(
                BarPart(value=float(matrix[r, c]), color=palette[c], title=str(part_titles[c])) for c in range(cols)
            ),
        )
        for r in range(rows)
    ]


def bars_from_frame(frame: Any, colors: Sequence[ColorToken] | Mapping[str, ColorToken]) -> list[Bar]:
    """Rows (index labels) become bars, numeric columns become parts."""
    if pd is None:
        raise ChartDataError("pandas is required for bars_from_frame")
    if not isinstance(frame, pd.DataFrame):
        raise ChartDataError("frame must be a pandas DataFrame")
    numeric_cols = [c for c in frame.columns if pd.api.types.is_numeric_dtype(frame[c])]
    if not numeric_cols:
        raise ChartDataError("frame has no numeric columns")
    return bars_from_matrix(
        frame[numeric_cols].to_numpy(dtype=np.float64, na_value=np.nan),
        bar_titles=[str(idx) for idx in frame.index],
        part_titles=[str(c) for c in numeric_cols],
        colors=colors,
    )


def _resolve_palette(colors: Sequence[ColorToken] | Mapping[str, ColorToken], part_titles: Sequence[str]) -> list[ColorToken]:
    if isinstance(colors, Mapping):
        missing = [t for t in part_titles if str(t) not in colors]
        if missing:
            raise ChartDataError(f"no color for parts: {', '.join(str(t) for t in missing)}")
        return [_freeze_color(colors[str(t)]) for t in part_titles]
    palette = [_freeze_color(c) for c in colors]
    if not palette:
        raise ChartDataError("colors must not be empty")
    # Cycle like a categorical palette when there are more parts than colors.
    return [palette[i % len(palette)] for i in range(len(part_titles))]


def _freeze_color(color: Any) -> ColorToken:
    if isinstance(color, list):
        return tuple(color)
    return color


def _coerce_2d_numeric(values: Any) -> np.ndarray:
    if torch is not None and isinstance(values, torch.Tensor):
        tensor = values.detach()
        if tensor.is_cuda:
            tensor = tensor.cpu()
        values = tensor.to(torch.float64).numpy()

    if isinstance(values, np.ndarray) and values.dtype.kind in {"i", "u", "f", "b"}:
        arr = values.astype(np.float64, copy=False)
    else:
        raw = np.asarray(values, dtype=object)
        if raw.ndim != 2:
            raise ChartDataError("values must be 2-D (bars x parts)")
        arr = np.empty(raw.shape, dtype=np.float64)
        for idx, item in np.ndenumerate(raw):
            if item is None:
                arr[idx] = np.nan
                continue
            try:
                arr[idx] = float(item)
            except (TypeError, ValueError) as exc:
                raise ChartDataError(f"values contain non-numeric entry at {idx}: {item!r}") from exc

    if arr.ndim != 2:
        raise ChartDataError("values must be 2-D (bars x parts)")
    return arr
