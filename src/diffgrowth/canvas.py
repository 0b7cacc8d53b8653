from __future__ import annotations

from typing import Protocol, Sequence

from .colors import Color
from .types import Point2


class Canvas(Protocol):
    """Drawing sink for World/Path rendering. Coordinates are canvas units."""

    width: int
    height: int

    def background(self, color: Color) -> None: ...

    def polyline(
        self,
        points: Sequence[Point2],
        *,
        stroke: Color | None,
        fill: Color | None = None,
        closed: bool = False,
        stroke_width: float = 1.0,
    ) -> None: ...

    def line(
        self,
        p0: Point2,
        p1: Point2,
        *,
        stroke: Color,
        stroke_width: float = 1.0,
    ) -> None: ...

    def circle(self, center: Point2, radius: float, *, fill: Color) -> None: ...
