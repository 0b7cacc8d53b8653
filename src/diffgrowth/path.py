from __future__ import annotations

import time
from collections import deque
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Sequence

import numpy as np

from ..utils import debug_helpers
from .bounds import Bounds
from .canvas import Canvas
from .colors import BLACK, DARK_GRAY, LIGHT_GRAY, WHITE, Color, hue_ramp
from .geometry import lerp, turning_angle_deg
from .node import Node
from .settings import Settings, merge_settings
from .spatial_index import SpatialIndex, node_positions
from .types import NpPoints, NpSnapshot


class InjectionMode(str, Enum):
    RANDOM = "RANDOM"
    CURVATURE = "CURVATURE"


def wall_clock_ms() -> float:
    return time.perf_counter() * 1000.0


class Path:
    """
    Ordered sequence of Nodes, open or closed, relaxed once per tick.

    Forces only write node targets during the per-node pass. Topology edits
    (split, prune, inject) run afterwards as separate passes over the list.
    """

    def __init__(
        self,
        nodes: Iterable[Node],
        settings: Mapping[str, object] | None = None,
        *,
        is_closed: bool = False,
        bounds: Bounds | None = None,
        fill_color: Color = BLACK,
        stroke_color: Color = BLACK,
        inverted_fill_color: Color = WHITE,
        inverted_stroke_color: Color = WHITE,
        rng: np.random.Generator | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.nodes: list[Node] = list(nodes)
        self.is_closed = is_closed
        self.settings: Settings = merge_settings(settings)
        self.bounds = bounds
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clock = clock if clock is not None else wall_clock_ms

        self.injection_mode = InjectionMode.RANDOM
        self.last_node_inject_time = 0.0

        self.node_history: deque[NpSnapshot] = deque(
            maxlen=int(self.settings["max_history_size"])
        )

        self.draw_nodes = self.settings["draw_nodes"]
        self.inverted_colors = self.settings["inverted_colors"]
        self.trace_mode = self.settings["trace_mode"]
        self.debug_mode = self.settings["debug_mode"]
        self.fill_mode = self.settings["fill_mode"]
        self.use_brownian_motion = self.settings["use_brownian_motion"]
        self.draw_history = self.settings["draw_history"]
        self.show_bounds = self.settings["show_bounds"]

        self.fill_color = fill_color
        self.stroke_color = stroke_color
        self.inverted_fill_color = inverted_fill_color
        self.inverted_stroke_color = inverted_stroke_color
        self.current_fill_color = fill_color
        self.current_stroke_color = stroke_color
        self.set_inverted_colors(self.inverted_colors)

    def __len__(self) -> int:
        return len(self.nodes)

    def iterate(self, tree: SpatialIndex, now_ms: float | None = None) -> None:
        """Run one tick: per-node forces, then split, prune and periodic injection."""
        for index, node in enumerate(self.nodes):
            node.reset_target()

            if self.use_brownian_motion:
                self.apply_brownian_motion(index)

            self.apply_attraction(index)
            self.apply_repulsion(index, tree)
            self.apply_alignment(index)
            self.apply_bounds(index)

            node.iterate()

        self.split_edges()
        self.prune_nodes()

        now = self.clock() if now_ms is None else now_ms
        if now - self.last_node_inject_time >= self.settings["node_injection_interval"]:
            self.inject_node()
            self.last_node_inject_time = now

    def apply_brownian_motion(self, index: int) -> None:
        node = self.nodes[index]
        if node.is_fixed:
            return
        half = self.settings["brownian_motion_range"] / 2.0
        node.x += float(self.rng.uniform(-half, half))
        node.y += float(self.rng.uniform(-half, half))

    def apply_attraction(self, index: int) -> None:
        node = self.nodes[index]
        if node.is_fixed:
            return
        force = self.settings["attraction_force"]
        previous_node, next_node = self.get_connected_nodes(index)
        for neighbor in (next_node, previous_node):
            if neighbor is None or neighbor is node:
                continue
            least_min_distance = min(node.min_distance, neighbor.min_distance)
            if node.distance(neighbor) > least_min_distance:
                node.next_x = lerp(node.next_x, neighbor.x, force)
                node.next_y = lerp(node.next_y, neighbor.y, force)

    def apply_repulsion(self, index: int, tree: SpatialIndex) -> None:
        # Every hit inside the radius pushes, whichever Path owns it. Pushes add up
        # on the target (reset each tick) rather than replacing it.
        node = self.nodes[index]
        force = self.settings["repulsion_force"]
        for neighbor in tree.query_radius(node.x, node.y, node.repulsion_radius):
            if neighbor is node:
                continue
            node.next_x += lerp(node.x, neighbor.x, -force) - node.x
            node.next_y += lerp(node.y, neighbor.y, -force) - node.y

    def apply_alignment(self, index: int) -> None:
        node = self.nodes[index]
        if node.is_fixed:
            return
        previous_node, next_node = self.get_connected_nodes(index)
        if previous_node is None or next_node is None:
            return
        mid_x = (previous_node.x + next_node.x) / 2.0
        mid_y = (previous_node.y + next_node.y) / 2.0
        force = self.settings["alignment_force"]
        node.next_x = lerp(node.next_x, mid_x, force)
        node.next_y = lerp(node.next_y, mid_y, force)

    def apply_bounds(self, index: int) -> None:
        node = self.nodes[index]
        if self.bounds is None or node.is_fixed:
            return
        if not self.bounds.contains(node.position):
            node.is_fixed = True

    def split_edges(self) -> None:
        """Insert midpoints until no edge is longer than max_distance."""
        max_distance = self.settings["max_distance"]
        index = 0
        while index < len(self.nodes):
            node = self.nodes[index]
            previous_node, _ = self.get_connected_nodes(index)
            if previous_node is not None and node.distance(previous_node) > max_distance:
                midpoint = self.get_midpoint_node(node, previous_node)
                if index == 0:
                    # closing edge: the midpoint goes last, then node 0 is checked again
                    self.nodes.append(midpoint)
                    continue
                # the midpoint is checked against the predecessor next, then node
                # (now at index + 1) against the midpoint
                self.nodes.insert(index, midpoint)
                continue
            index += 1

    def prune_nodes(self) -> None:
        """Remove a node's predecessor while the two sit closer than min_distance."""
        min_distance = self.settings["min_distance"]
        min_count = 3 if self.is_closed else 2
        index = 0
        while index < len(self.nodes) and len(self.nodes) > min_count:
            node = self.nodes[index]
            previous_node, _ = self.get_connected_nodes(index)
            if (
                previous_node is not None
                and not previous_node.is_fixed
                and node.distance(previous_node) < min_distance
            ):
                if index == 0:
                    self.nodes.pop()
                else:
                    self.nodes.pop(index - 1)
                    index -= 1
                continue
            index += 1

    def inject_node(self) -> None:
        if self.injection_mode is InjectionMode.RANDOM:
            self.inject_random_node()
        elif self.injection_mode is InjectionMode.CURVATURE:
            self.inject_node_by_curvature()

    def inject_random_node(self) -> None:
        if len(self.nodes) < 2:
            return
        index = int(self.rng.integers(1, len(self.nodes)))
        previous_node, next_node = self.get_connected_nodes(index)
        if previous_node is None or next_node is None:
            return
        node = self.nodes[index]
        if node.distance(previous_node) > self.settings["min_distance"]:
            self.nodes.insert(index, self.get_midpoint_node(node, previous_node))

    def inject_node_by_curvature(self) -> None:
        """Replace sharply bending nodes with the midpoints of their two edges."""
        threshold = self.settings["curvature_threshold"]
        replaced: list[Node] = []
        changed = 0
        for index, node in enumerate(self.nodes):
            previous_node, next_node = self.get_connected_nodes(index)
            if previous_node is None or next_node is None:
                replaced.append(node)
                continue
            angle = turning_angle_deg(
                previous_node.position, node.position, next_node.position
            )
            if angle > threshold and not node.is_fixed:
                replaced.append(self.get_midpoint_node(node, previous_node))
                replaced.append(self.get_midpoint_node(node, next_node))
                changed += 1
            else:
                replaced.append(node)
        if changed:
            debug_helpers.log_once(
                "curvature_injection",
                f"curvature injection replaced {changed} node(s) threshold={threshold}",
            )
        self.nodes = replaced

    def get_connected_nodes(self, index: int) -> tuple[Node | None, Node | None]:
        """(previous, next) neighbors of ``index``; closed paths wrap around."""
        count = len(self.nodes)
        previous_node: Node | None = None
        next_node: Node | None = None
        if index >= 1:
            previous_node = self.nodes[index - 1]
        elif self.is_closed and count > 1:
            previous_node = self.nodes[count - 1]
        if index < count - 1:
            next_node = self.nodes[index + 1]
        elif self.is_closed and count > 1:
            next_node = self.nodes[0]
        return previous_node, next_node

    def get_midpoint_node(self, node1: Node, node2: Node, fixed: bool = False) -> Node:
        return Node.from_settings(
            (node1.x + node2.x) / 2.0,
            (node1.y + node2.y) / 2.0,
            self.settings,
            fixed,
        )

    def draw(self, canvas: Canvas) -> None:
        if self.draw_history:
            self.draw_previous_edges(canvas)

        if self.show_bounds and self.bounds is not None:
            self.draw_bounds(canvas)

        self.draw_current_edges(canvas)

        if self.draw_nodes:
            self.draw_current_nodes(canvas)

    def draw_current_edges(self, canvas: Canvas) -> None:
        fill = self.current_fill_color if self.fill_mode and self.is_closed else None
        self.draw_edges(canvas, node_positions(self.nodes), self.current_stroke_color, fill)

    def draw_previous_edges(self, canvas: Canvas) -> None:
        # Oldest snapshot is faintest.
        for index, snapshot in enumerate(self.node_history):
            stroke = self.current_stroke_color.with_alpha(index * 30)
            self.draw_edges(canvas, snapshot, stroke, None)

    def draw_edges(
        self,
        canvas: Canvas,
        points: NpPoints,
        stroke: Color,
        fill: Color | None,
    ) -> None:
        pts = [(float(x), float(y)) for x, y in points]
        if len(pts) < 2:
            return
        if not self.debug_mode:
            canvas.polyline(pts, stroke=stroke, fill=fill, closed=self.is_closed)
            return

        # One color per segment, walking the hue along the path.
        alpha = 2 if self.trace_mode else 255
        count = len(pts)
        for i in range(1, count):
            canvas.line(pts[i - 1], pts[i], stroke=hue_ramp(i, count, alpha))
        if self.is_closed:
            canvas.line(pts[-1], pts[0], stroke=hue_ramp(count - 1, count, alpha))

    def draw_current_nodes(self, canvas: Canvas) -> None:
        base = WHITE if self.inverted_colors else BLACK
        radius = self.settings["node_radius"]
        count = len(self.nodes)
        for index, node in enumerate(self.nodes):
            color = hue_ramp(index, count) if self.debug_mode else base
            node.draw(canvas, radius, color)

    def draw_bounds(self, canvas: Canvas) -> None:
        if self.bounds is None:
            return
        color = DARK_GRAY if self.inverted_colors else LIGHT_GRAY
        self.bounds.draw(canvas, color)

    def add_to_history(self) -> None:
        snapshot = node_positions(self.nodes).copy()
        snapshot.setflags(write=False)
        self.node_history.append(snapshot)

    def translate(self, x_offset: float, y_offset: float) -> None:
        for node in self.nodes:
            node.x += x_offset
            node.y += y_offset
            node.reset_target()

    def scale(self, factor: float) -> None:
        for node in self.nodes:
            node.x *= factor
            node.y *= factor
            node.reset_target()

    def add_node(self, node: Node) -> None:
        self.nodes.append(node)

    def to_array(self) -> NpPoints:
        return node_positions(self.nodes)

    def set_min_distance(self, min_distance: float) -> None:
        self.settings["min_distance"] = min_distance
        for node in self.nodes:
            node.min_distance = min_distance

    def set_max_distance(self, max_distance: float) -> None:
        self.settings["max_distance"] = max_distance
        for node in self.nodes:
            node.max_distance = max_distance

    def set_repulsion_radius(self, repulsion_radius: float) -> None:
        self.settings["repulsion_radius"] = repulsion_radius
        for node in self.nodes:
            node.repulsion_radius = repulsion_radius

    def set_trace_mode(self, state: bool) -> None:
        self.trace_mode = state
        alpha = self.settings["trace_alpha"] if state else 255
        self.current_fill_color = self.current_fill_color.with_alpha(alpha)
        self.current_stroke_color = self.current_stroke_color.with_alpha(alpha)

    def set_inverted_colors(self, state: bool) -> None:
        self.inverted_colors = state
        if state:
            self.current_fill_color = self.inverted_fill_color
            self.current_stroke_color = self.inverted_stroke_color
        else:
            self.current_fill_color = self.fill_color
            self.current_stroke_color = self.stroke_color
        # Swapping pairs drops the trace opacity; put it back.
        self.set_trace_mode(self.trace_mode)

    def set_bounds(self, bounds: Bounds | None) -> None:
        self.bounds = bounds

    def set_injection_mode(self, mode: InjectionMode | str) -> None:
        self.injection_mode = InjectionMode(mode)

    def toggle_trace_mode(self) -> None:
        self.set_trace_mode(not self.trace_mode)

    def toggle_inverted_colors(self) -> None:
        self.set_inverted_colors(not self.inverted_colors)


def path_from_points(
    points: Sequence[Sequence[float]],
    settings: Mapping[str, object] | None = None,
    **kwargs: Any,
) -> Path:
    """Build a Path from raw (x, y) pairs, nodes configured from ``settings``."""
    merged = merge_settings(settings)
    nodes = [Node.from_settings(float(p[0]), float(p[1]), merged) for p in points]
    return Path(nodes, merged, **kwargs)
