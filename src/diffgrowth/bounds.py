from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence, cast

import numpy as np
from shapely.geometry import Point, Polygon
from shapely.prepared import prep

from .canvas import Canvas
from .colors import Color
from .svg_io import load_outline_polygon
from .types import NpPolygon

if TYPE_CHECKING:
    from .path import Path


class Bounds:
    """Immutable containment polygon. Paths borrow it; nodes that leave it get fixed."""

    def __init__(self, vertices: NpPolygon | Sequence[Sequence[float]]) -> None:
        V = np.asarray(vertices, dtype=np.float64)
        if V.ndim != 2 or V.shape[1] != 2:
            raise ValueError("Bounds vertices must have shape (N,2)")
        if V.shape[0] < 3:
            raise ValueError("Bounds need at least 3 vertices")
        if not np.isfinite(V).all():
            raise ValueError("Bounds vertices contain non-finite coordinates")

        poly = Polygon(V)
        repaired = not poly.is_valid
        if repaired:
            fixed = cast(Any, poly.buffer(0))
            if getattr(fixed, "geom_type", None) == "MultiPolygon":
                fixed = max(fixed.geoms, key=lambda g: g.area)
            poly = fixed
        if poly.is_empty or poly.area <= 0.0:
            raise ValueError("Bounds polygon is empty")
        if repaired:
            # Drawn vertices follow the region that is tested.
            V = np.asarray(poly.exterior.coords, dtype=np.float64)[:-1]

        V.setflags(write=False)
        self._vertices = V
        self._polygon = poly
        self._prepared = prep(poly)

    @classmethod
    def from_path(cls, path: Path) -> Bounds:
        return cls(path.to_array())

    @classmethod
    def from_svg(cls, svg_path: str, flat_tol: float = 1.0) -> Bounds:
        return cls(load_outline_polygon(svg_path, flat_tol=flat_tol))

    @property
    def vertices(self) -> NpPolygon:
        return self._vertices

    @property
    def polygon(self) -> Polygon:
        return self._polygon

    def contains(self, point: Sequence[float]) -> bool:
        """Strict interior test; points on the outline are outside."""
        return bool(self._prepared.contains(Point(float(point[0]), float(point[1]))))

    def draw(self, canvas: Canvas, color: Color) -> None:
        pts = [(float(x), float(y)) for x, y in self._vertices]
        canvas.polyline(pts, stroke=color, fill=None, closed=True)
