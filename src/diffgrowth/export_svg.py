from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

import svgwrite  # type: ignore[reportMissingTypeStubs]

from .colors import Color
from .types import CanvasSize, Point2, Viewbox

if TYPE_CHECKING:
    from .world import World


class SvgCanvas:
    """
    Canvas that records draw calls as SVG elements.
    background() starts a fresh drawing, so a non-trace frame holds only itself.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        viewbox: Viewbox | None = None,
        canvas_size: CanvasSize | None = None,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.viewbox: Viewbox = (
            viewbox
            if viewbox is not None
            else (0.0, 0.0, float(self.width), float(self.height))
        )
        self.canvas_size: CanvasSize = (
            canvas_size
            if canvas_size is not None
            else (float(self.width), float(self.height))
        )
        self.dwg = self._new_drawing()

    def _new_drawing(self) -> Any:
        dwg = svgwrite.Drawing(profile="tiny", size=self.canvas_size)
        vb = self.viewbox
        dwg.attribs["viewBox"] = f"{vb[0]} {vb[1]} {vb[2]} {vb[3]}"
        return dwg

    @staticmethod
    def _paint(prefix: str, color: Color | None) -> dict[str, object]:
        if color is None:
            return {prefix: "none"}
        kwargs: dict[str, object] = {prefix: color.to_hex()}
        if color.a < 255:
            kwargs[f"{prefix}_opacity"] = round(color.opacity, 4)
        return kwargs

    def background(self, color: Color) -> None:
        self.dwg = self._new_drawing()
        vb = self.viewbox
        self.dwg.add(
            self.dwg.rect(
                insert=(vb[0], vb[1]),
                size=(vb[2], vb[3]),
                stroke="none",
                **self._paint("fill", color),
            )
        )

    def polyline(
        self,
        points: Sequence[Point2],
        *,
        stroke: Color | None,
        fill: Color | None = None,
        closed: bool = False,
        stroke_width: float = 1.0,
    ) -> None:
        if len(points) < 2:
            return
        pts = [(float(x), float(y)) for x, y in points]
        kwargs: dict[str, object] = {
            "stroke_width": stroke_width,
            "stroke_linejoin": "round",
        }
        kwargs.update(self._paint("stroke", stroke))
        kwargs.update(self._paint("fill", fill))
        if closed:
            self.dwg.add(self.dwg.polygon(points=pts, **kwargs))
        else:
            self.dwg.add(self.dwg.polyline(points=pts, **kwargs))

    def line(
        self,
        p0: Point2,
        p1: Point2,
        *,
        stroke: Color,
        stroke_width: float = 1.0,
    ) -> None:
        self.dwg.add(
            self.dwg.line(
                start=(float(p0[0]), float(p0[1])),
                end=(float(p1[0]), float(p1[1])),
                stroke_width=stroke_width,
                **self._paint("stroke", stroke),
            )
        )

    def circle(self, center: Point2, radius: float, *, fill: Color) -> None:
        self.dwg.add(
            self.dwg.circle(
                center=(float(center[0]), float(center[1])),
                r=float(radius),
                stroke="none",
                **self._paint("fill", fill),
            )
        )

    def tostring(self) -> str:
        return self.dwg.tostring()

    def save(self, out_path: str) -> None:
        self.dwg.saveas(out_path)


def export_world_svg(
    out_path: str,
    world: "World",
    width: int,
    height: int,
    *,
    viewbox: Viewbox | None = None,
    canvas_size: CanvasSize | None = None,
) -> None:
    """Render the current state of ``world`` into a standalone SVG file."""
    canvas = SvgCanvas(width, height, viewbox=viewbox, canvas_size=canvas_size)
    world.draw_background(canvas)
    for path in world.paths:
        path.draw(canvas)
    canvas.save(out_path)
