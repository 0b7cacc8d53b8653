from __future__ import annotations

from typing import Iterable, Mapping

from ..utils import debug
from .canvas import Canvas
from .colors import BLACK, WHITE, Color
from .export_svg import export_world_svg
from .geometry import polyline_length
from .path import Path
from .settings import Settings, merge_settings
from .spatial_index import SpatialIndex
from .types import CanvasSize


class World:
    """
    Owns every Path and the spatial index they share for repulsion.
    Display toggles set here are broadcast to all Paths.
    """

    def __init__(
        self,
        settings: Mapping[str, object] | None = None,
        paths: Iterable[Path] = (),
        *,
        background_color: Color = WHITE,
        inverted_background_color: Color = BLACK,
    ) -> None:
        self.settings: Settings = merge_settings(settings)
        self.paths: list[Path] = []
        self.tree = SpatialIndex()
        self.paused = False
        self.frame_count = 0

        self.background_color = background_color
        self.inverted_background_color = inverted_background_color

        self.draw_nodes = self.settings["draw_nodes"]
        self.trace_mode = self.settings["trace_mode"]
        self.inverted_colors = self.settings["inverted_colors"]
        self.debug_mode = self.settings["debug_mode"]
        self.fill_mode = self.settings["fill_mode"]
        self.draw_history = self.settings["draw_history"]
        self.show_bounds = self.settings["show_bounds"]

        for path in paths:
            self.add_path(path)

    def add_path(self, path: Path) -> None:
        self.paths.append(path)

    def clear_paths(self) -> None:
        self.paths.clear()
        self.tree = SpatialIndex()

    def build_tree(self) -> SpatialIndex:
        self.tree = SpatialIndex(node for path in self.paths for node in path.nodes)
        return self.tree

    def iterate(self, now_ms: float | None = None) -> None:
        self.build_tree()
        if self.paused:
            return
        for path in self.paths:
            path.iterate(self.tree, now_ms)

        interval = self.settings["history_capture_interval"]
        if self.draw_history and interval > 0 and self.frame_count % interval == 0:
            for path in self.paths:
                path.add_to_history()
        self.frame_count += 1

    def draw(self, canvas: Canvas) -> None:
        # Trace mode keeps earlier frames on the canvas.
        if not self.trace_mode:
            self.draw_background(canvas)
        for path in self.paths:
            path.draw(canvas)

    def draw_background(self, canvas: Canvas) -> None:
        if self.inverted_colors:
            canvas.background(self.inverted_background_color)
        else:
            canvas.background(self.background_color)

    def export_svg(
        self,
        out_path: str,
        width: int,
        height: int,
        canvas_size: CanvasSize | None = None,
    ) -> None:
        export_world_svg(out_path, self, width, height, canvas_size=canvas_size)
        debug.log(f"svg export: {out_path} paths={len(self.paths)}")

    def node_count(self) -> int:
        return sum(len(path.nodes) for path in self.paths)

    def fixed_node_count(self) -> int:
        return sum(1 for path in self.paths for node in path.nodes if node.is_fixed)

    def total_length(self) -> float:
        return float(
            sum(
                polyline_length(path.to_array(), closed=path.is_closed)
                for path in self.paths
            )
        )

    def pause(self) -> None:
        self.paused = True

    def unpause(self) -> None:
        self.paused = False

    def toggle_pause(self) -> None:
        self.paused = not self.paused

    def set_trace_mode(self, state: bool) -> None:
        self.trace_mode = state
        for path in self.paths:
            path.set_trace_mode(state)

    def set_inverted_colors(self, state: bool) -> None:
        self.inverted_colors = state
        for path in self.paths:
            path.set_inverted_colors(state)

    def set_debug_mode(self, state: bool) -> None:
        self.debug_mode = state
        for path in self.paths:
            path.debug_mode = state

    def set_draw_nodes(self, state: bool) -> None:
        self.draw_nodes = state
        for path in self.paths:
            path.draw_nodes = state

    def set_fill_mode(self, state: bool) -> None:
        self.fill_mode = state
        for path in self.paths:
            path.fill_mode = state

    def set_draw_history(self, state: bool) -> None:
        self.draw_history = state
        for path in self.paths:
            path.draw_history = state

    def set_show_bounds(self, state: bool) -> None:
        self.show_bounds = state
        for path in self.paths:
            path.show_bounds = state

    def toggle_trace_mode(self) -> None:
        self.set_trace_mode(not self.trace_mode)

    def toggle_inverted_colors(self) -> None:
        self.set_inverted_colors(not self.inverted_colors)

    def toggle_debug_mode(self) -> None:
        self.set_debug_mode(not self.debug_mode)

    def toggle_draw_nodes(self) -> None:
        self.set_draw_nodes(not self.draw_nodes)

    def toggle_fill_mode(self) -> None:
        self.set_fill_mode(not self.fill_mode)

    def toggle_draw_history(self) -> None:
        self.set_draw_history(not self.draw_history)

    def toggle_show_bounds(self) -> None:
        self.set_show_bounds(not self.show_bounds)

    def set_min_distance(self, min_distance: float) -> None:
        self.settings["min_distance"] = min_distance
        for path in self.paths:
            path.set_min_distance(min_distance)

    def set_max_distance(self, max_distance: float) -> None:
        self.settings["max_distance"] = max_distance
        for path in self.paths:
            path.set_max_distance(max_distance)

    def set_repulsion_radius(self, repulsion_radius: float) -> None:
        self.settings["repulsion_radius"] = repulsion_radius
        for path in self.paths:
            path.set_repulsion_radius(repulsion_radius)
