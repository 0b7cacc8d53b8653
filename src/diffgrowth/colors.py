from __future__ import annotations

import colorsys
from dataclasses import dataclass, replace

from .geometry import remap
from .types import RGBA


@dataclass(frozen=True)
class Color:
    """HSB color with alpha, every channel on a 0-255 scale."""

    h: float = 0.0
    s: float = 0.0
    b: float = 0.0
    a: float = 255.0

    def with_alpha(self, a: float) -> Color:
        return replace(self, a=float(min(max(a, 0.0), 255.0)))

    def to_rgba(self) -> RGBA:
        r, g, b = colorsys.hsv_to_rgb(
            (self.h % 256.0) / 255.0,
            min(max(self.s, 0.0), 255.0) / 255.0,
            min(max(self.b, 0.0), 255.0) / 255.0,
        )
        return (
            int(round(r * 255)),
            int(round(g * 255)),
            int(round(b * 255)),
            int(round(min(max(self.a, 0.0), 255.0))),
        )

    def to_hex(self) -> str:
        r, g, b, _a = self.to_rgba()
        return f"#{r:02x}{g:02x}{b:02x}"

    @property
    def opacity(self) -> float:
        return min(max(self.a, 0.0), 255.0) / 255.0


BLACK = Color(0, 0, 0, 255)
WHITE = Color(0, 0, 255, 255)
LIGHT_GRAY = Color(0, 0, 200, 255)
DARK_GRAY = Color(0, 0, 100, 255)


def hue_ramp(index: int, count: int, a: float = 255.0) -> Color:
    """Fully saturated color whose hue walks 0..255 along ``count`` items."""
    if count <= 1:
        return Color(0, 255, 255, a)
    h = remap(index, 0, count - 1, 0.0, 255.0)
    return Color(h, 255, 255, a)
