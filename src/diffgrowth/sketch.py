from __future__ import annotations

from pathlib import Path as FsPath
from typing import Callable, Mapping

import numpy as np

from ..utils import debug, debug_helpers
from .canvas import Canvas
from .layouts import LineLayout, build_layout
from .path import InjectionMode, wall_clock_ms
from .settings import LINE_STUDY_SETTINGS, Settings, merge_settings
from .world import World


class FrameClock:
    """Simulated milliseconds that advance a fixed amount per frame."""

    def __init__(self, fps: float = 60.0) -> None:
        if fps <= 0:
            raise ValueError("fps must be > 0")
        self.frame_ms = 1000.0 / fps
        self.now_ms = 0.0

    def __call__(self) -> float:
        return self.now_ms

    def tick(self) -> None:
        self.now_ms += self.frame_ms


class Sketch:
    """
    One running line-study session: the World, the selected layout and the
    key bindings that drive them. Everything the frame loop touches hangs off
    this object.
    """

    def __init__(
        self,
        width: int = 900,
        height: int = 900,
        *,
        settings: Mapping[str, object] | None = None,
        layout: LineLayout | int = LineLayout.OPPOSING_ARCS,
        rng: np.random.Generator | None = None,
        clock: Callable[[], float] | None = None,
        restart_delay_ms: float = 1000.0,
        export_dir: str | FsPath = ".",
    ) -> None:
        self.width = width
        self.height = height
        self.settings: Settings = merge_settings(settings, base=LINE_STUDY_SETTINGS)
        self.layout = LineLayout(layout)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clock = clock if clock is not None else wall_clock_ms
        self.restart_delay_ms = restart_delay_ms
        self.export_dir = FsPath(export_dir)
        self.export_count = 0
        self.unpause_at: float | None = None
        self.world = World(self.settings)
        # Shared with the world, so its distance setters reach rebuilt layouts.
        self.settings = self.world.settings

        self.bindings: dict[str, Callable[[], object]] = {
            "1": lambda: self.select_layout(LineLayout.HORIZONTAL),
            "2": lambda: self.select_layout(LineLayout.VERTICAL),
            "3": lambda: self.select_layout(LineLayout.ANGLED),
            "4": lambda: self.select_layout(LineLayout.RADIAL),
            "5": lambda: self.select_layout(LineLayout.BOUNDED_CIRCLE),
            "t": self.world.toggle_trace_mode,
            "n": self.world.toggle_draw_nodes,
            "r": self.restart,
            " ": self.world.toggle_pause,
            "i": self.world.toggle_inverted_colors,
            "d": self.world.toggle_debug_mode,
            "f": self.world.toggle_fill_mode,
            "h": self.world.toggle_draw_history,
            "b": self.world.toggle_show_bounds,
            "c": self.cycle_injection_mode,
            "s": self.export_svg,
        }

    def restart(self) -> None:
        """Rebuild the selected layout, hold it for restart_delay_ms, then run."""
        debug_helpers.reset_once()
        self.world.clear_paths()
        for path in build_layout(
            self.layout,
            self.width,
            self.height,
            settings=self.settings,
            rng=self.rng,
            clock=self.clock,
        ):
            self.world.add_path(path)
        # Paths pick up the session's current display toggles.
        self.world.set_trace_mode(self.world.trace_mode)
        self.world.set_inverted_colors(self.world.inverted_colors)
        self.world.set_debug_mode(self.world.debug_mode)
        self.world.set_draw_nodes(self.world.draw_nodes)
        self.world.set_fill_mode(self.world.fill_mode)
        self.world.set_draw_history(self.world.draw_history)
        self.world.set_show_bounds(self.world.show_bounds)

        self.world.pause()
        self.unpause_at = self.clock() + self.restart_delay_ms
        debug.log(
            f"restart layout={self.layout.name.lower()} paths={len(self.world.paths)} "
            f"nodes={self.world.node_count()}"
        )

    def select_layout(self, layout: LineLayout | int) -> None:
        self.layout = LineLayout(layout)
        self.restart()

    def frame(self, canvas: Canvas | None = None) -> None:
        now = self.clock()
        if self.unpause_at is not None and now >= self.unpause_at:
            self.world.unpause()
            self.unpause_at = None
        self.world.iterate(now)
        if canvas is not None:
            self.world.draw(canvas)

    def key_released(self, key: str) -> bool:
        """Dispatch a key. Returns False for keys with no binding."""
        action = self.bindings.get(key if key == " " else key.lower())
        if action is None:
            return False
        action()
        return True

    def cycle_injection_mode(self) -> None:
        modes = list(InjectionMode)
        for path in self.world.paths:
            current = modes.index(path.injection_mode)
            path.set_injection_mode(modes[(current + 1) % len(modes)])

    def export_svg(self) -> FsPath:
        self.export_dir.mkdir(parents=True, exist_ok=True)
        out = self.export_dir / f"sketch_{self.export_count:04d}.svg"
        self.export_count += 1
        self.world.export_svg(str(out), self.width, self.height)
        return out
