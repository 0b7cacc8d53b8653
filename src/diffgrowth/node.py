from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .canvas import Canvas
from .colors import Color
from .geometry import lerp

if TYPE_CHECKING:
    from .settings import Settings


@dataclass(eq=False)
class Node:
    """
    A point on a Path with a target position for the current tick.
    Nodes compare by identity; a node belongs to exactly one Path.
    """

    x: float
    y: float
    min_distance: float = 1.0
    max_distance: float = 5.0
    repulsion_radius: float = 10.0
    max_velocity: float = 0.1
    is_fixed: bool = False
    next_x: float = field(init=False)
    next_y: float = field(init=False)

    def __post_init__(self) -> None:
        self.x = float(self.x)
        self.y = float(self.y)
        self.next_x = self.x
        self.next_y = self.y

    @classmethod
    def from_settings(
        cls,
        x: float,
        y: float,
        settings: Settings,
        fixed: bool = False,
    ) -> Node:
        return cls(
            x,
            y,
            min_distance=float(settings["min_distance"]),
            max_distance=float(settings["max_distance"]),
            repulsion_radius=float(settings["repulsion_radius"]),
            max_velocity=float(settings["max_velocity"]),
            is_fixed=fixed,
        )

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    def distance(self, other: Node) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def reset_target(self) -> None:
        self.next_x = self.x
        self.next_y = self.y

    def iterate(self) -> None:
        """Step toward the target by ``max_velocity``. Fixed nodes stay put."""
        if self.is_fixed:
            return
        self.x = lerp(self.x, self.next_x, self.max_velocity)
        self.y = lerp(self.y, self.next_y, self.max_velocity)

    def draw(self, canvas: Canvas, radius: float, color: Color) -> None:
        canvas.circle(self.position, radius, fill=color)
