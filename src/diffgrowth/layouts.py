from __future__ import annotations

import math
from enum import IntEnum
from typing import Any, Callable, Mapping

import numpy as np

from .bounds import Bounds
from .node import Node
from .path import Path
from .settings import Settings, merge_settings

# Reference frame the line studies were composed in.
FRAME_SIZE = 900.0


class LineLayout(IntEnum):
    HORIZONTAL = 0
    VERTICAL = 1
    ANGLED = 2
    RADIAL = 3
    OPPOSING_ARCS = 4
    BOUNDED_CIRCLE = 5


def _make_path(
    points: list[tuple[float, float]],
    settings: Settings,
    rng: np.random.Generator | None,
    clock: Callable[[], float] | None,
    **kwargs: Any,
) -> Path:
    nodes = [Node.from_settings(x, y, settings) for x, y in points]
    return Path(nodes, settings, rng=rng, clock=clock, **kwargs)


def create_lines(
    rows: int,
    columns: int,
    row_spacing: float,
    column_spacing: float,
    x_delta: float,
    y_delta: float,
    *,
    center: tuple[float, float],
    settings: Mapping[str, object] | None = None,
    rng: np.random.Generator | None = None,
    clock: Callable[[], float] | None = None,
) -> list[Path]:
    """Grid of two-node segments, each offset by (x_delta, y_delta) from its start."""
    merged = merge_settings(settings)
    total_width = column_spacing * columns
    total_height = row_spacing * rows
    cx, cy = center

    paths: list[Path] = []
    for i in range(rows):
        for j in range(columns):
            x0 = j * column_spacing + cx - total_width / 2
            y0 = i * row_spacing + cy - total_height / 2 + row_spacing / 2
            paths.append(
                _make_path([(x0, y0), (x0 + x_delta, y0 + y_delta)], merged, rng, clock)
            )
    return paths


def horizontal_lines(rows: int, columns: int, **kwargs: Any) -> list[Path]:
    return create_lines(rows, columns, 20, 45, 30, 0, **kwargs)


def vertical_lines(rows: int, columns: int, **kwargs: Any) -> list[Path]:
    return create_lines(rows, columns, 38, 20, 0, 30, **kwargs)


def angled_lines(rows: int, columns: int, **kwargs: Any) -> list[Path]:
    return create_lines(rows, columns, 38, 20, -30, 30, **kwargs)


def arc_lines(
    center: tuple[float, float],
    degrees_start: float,
    degrees_end: float,
    inner_radius: float,
    lines_per_arc: int,
    line_length: float,
    *,
    settings: Mapping[str, object] | None = None,
    rng: np.random.Generator | None = None,
    clock: Callable[[], float] | None = None,
) -> list[Path]:
    """Radial segments fanned along an arc, from inner_radius outward."""
    merged = merge_settings(settings)
    angle_delta = (degrees_end - degrees_start) / lines_per_arc
    outer_radius = inner_radius + line_length

    paths: list[Path] = []
    for k in range(lines_per_arc):
        theta = math.radians(degrees_start + k * angle_delta)
        c, s = math.cos(theta), math.sin(theta)
        path = _make_path(
            [(inner_radius * c, inner_radius * s), (outer_radius * c, outer_radius * s)],
            merged,
            rng,
            clock,
        )
        path.translate(*center)
        paths.append(path)
    return paths


def opposing_arcs(width: float, height: float, **kwargs: Any) -> list[Path]:
    """Two quarter fans in opposite corners of the centered frame."""
    cx, cy = width / 2, height / 2
    half = FRAME_SIZE / 2
    return arc_lines(
        (cx - half + 100, cy + half - 75), 270, 360, 375, 66, 100, **kwargs
    ) + arc_lines(
        (cx + half - 100, cy - half + 75), 90, 180, 375, 60, 100, **kwargs
    )


def line_ring(center: tuple[float, float], **kwargs: Any) -> list[Path]:
    return arc_lines(center, 0, 360, 75, 60, 50, **kwargs)


def circle_points(
    center: tuple[float, float], radius: float, count: int
) -> list[tuple[float, float]]:
    cx, cy = center
    return [
        (
            cx + radius * math.cos(2 * math.pi * k / count),
            cy + radius * math.sin(2 * math.pi * k / count),
        )
        for k in range(count)
    ]


def bounded_circle(
    center: tuple[float, float],
    radius: float,
    bounds_size: float,
    *,
    node_count: int = 30,
    settings: Mapping[str, object] | None = None,
    rng: np.random.Generator | None = None,
    clock: Callable[[], float] | None = None,
) -> list[Path]:
    """Closed circle growing inside a square Bounds; nodes freeze where they touch it."""
    merged = merge_settings(settings)
    cx, cy = center
    half = bounds_size / 2
    bounds = Bounds(
        [
            (cx - half, cy - half),
            (cx + half, cy - half),
            (cx + half, cy + half),
            (cx - half, cy + half),
        ]
    )
    path = _make_path(
        circle_points(center, radius, node_count),
        merged,
        rng,
        clock,
        is_closed=True,
        bounds=bounds,
    )
    return [path]


def build_layout(
    layout: LineLayout | int,
    width: float,
    height: float,
    *,
    settings: Mapping[str, object] | None = None,
    rng: np.random.Generator | None = None,
    clock: Callable[[], float] | None = None,
) -> list[Path]:
    center = (width / 2, height / 2)
    opts: dict[str, Any] = {"settings": settings, "rng": rng, "clock": clock}
    choice = LineLayout(layout)
    if choice is LineLayout.HORIZONTAL:
        return horizontal_lines(30, 10, center=center, **opts)
    if choice is LineLayout.VERTICAL:
        return vertical_lines(10, 30, center=center, **opts)
    if choice is LineLayout.ANGLED:
        return angled_lines(15, 20, center=center, **opts)
    if choice is LineLayout.RADIAL:
        return line_ring(center, **opts)
    if choice is LineLayout.OPPOSING_ARCS:
        return opposing_arcs(width, height, **opts)
    return bounded_circle(center, 50.0, 0.75 * min(width, height), **opts)


def layout_from_name(name: str) -> LineLayout:
    try:
        return LineLayout[name.strip().upper().replace("-", "_")]
    except KeyError as exc:
        choices = ", ".join(m.name.lower() for m in LineLayout)
        raise ValueError(f"Unknown layout {name!r}; choose from {choices}") from exc
