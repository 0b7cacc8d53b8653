from __future__ import annotations

from pathlib import Path
from typing import Sequence

from PIL import Image, ImageDraw

from .colors import Color
from .types import Point2


class RasterCanvas:
    """Pillow-backed canvas; colors with alpha < 255 blend onto what is already drawn."""

    def __init__(self, width: int, height: int, scale: float = 1.0) -> None:
        self.width = int(width)
        self.height = int(height)
        self.scale = float(scale)
        out_w = max(1, int(round(self.width * self.scale)))
        out_h = max(1, int(round(self.height * self.scale)))
        self.image = Image.new("RGB", (out_w, out_h), color=(255, 255, 255))
        self._draw = ImageDraw.Draw(self.image, "RGBA")

    def _px(self, p: Point2) -> tuple[float, float]:
        return (float(p[0]) * self.scale, float(p[1]) * self.scale)

    def _width_px(self, stroke_width: float) -> int:
        return max(1, int(round(stroke_width * self.scale)))

    def background(self, color: Color) -> None:
        self._draw.rectangle(
            [(0, 0), (self.image.width, self.image.height)], fill=color.to_rgba()
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
        pts = [self._px(p) for p in points]
        if fill is not None and closed and len(pts) >= 3:
            self._draw.polygon(pts, fill=fill.to_rgba())
        if stroke is None:
            return
        if closed:
            pts = pts + [pts[0]]
        self._draw.line(
            pts,
            fill=stroke.to_rgba(),
            width=self._width_px(stroke_width),
            joint="curve",
        )

    def line(
        self,
        p0: Point2,
        p1: Point2,
        *,
        stroke: Color,
        stroke_width: float = 1.0,
    ) -> None:
        self._draw.line(
            [self._px(p0), self._px(p1)],
            fill=stroke.to_rgba(),
            width=self._width_px(stroke_width),
        )

    def circle(self, center: Point2, radius: float, *, fill: Color) -> None:
        cx, cy = self._px(center)
        r = max(0.5, radius * self.scale)
        self._draw.ellipse([(cx - r, cy - r), (cx + r, cy + r)], fill=fill.to_rgba())

    def snapshot(self) -> Image.Image:
        return self.image.copy()

    def save(self, out_path: str | Path) -> None:
        self.image.save(out_path)


def save_gif(
    frames: Sequence[Image.Image],
    out_path: str | Path,
    fps: float = 30.0,
) -> Path:
    if not frames:
        raise ValueError("No frames to write")
    if fps <= 0:
        raise ValueError("fps must be > 0")
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    duration_ms = int(round(1000.0 / fps))
    frames[0].save(
        out,
        save_all=True,
        append_images=list(frames[1:]),
        duration=duration_ms,
        loop=0,
        disposal=2,
    )
    return out
