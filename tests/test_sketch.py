from pathlib import Path as FsPath

import numpy as np
import pytest

from src.diffgrowth.layouts import LineLayout
from src.diffgrowth.path import InjectionMode, wall_clock_ms
from src.diffgrowth.settings import LINE_STUDY_SETTINGS
from src.diffgrowth.sketch import FrameClock, Sketch


def _sketch(tmp_path: FsPath, **kwargs) -> tuple[Sketch, FrameClock]:
    clock = FrameClock(fps=10.0)
    sketch = Sketch(
        rng=np.random.default_rng(0),
        clock=clock,
        export_dir=tmp_path,
        **kwargs,
    )
    return sketch, clock


def test_frame_clock_advances_per_tick() -> None:
    clock = FrameClock(fps=4.0)
    assert clock() == 0.0
    clock.tick()
    clock.tick()
    assert clock() == pytest.approx(500.0)
    with pytest.raises(ValueError):
        FrameClock(fps=0.0)


def test_sketch_uses_line_study_preset(tmp_path: FsPath) -> None:
    sketch, _ = _sketch(tmp_path, settings={"MinDistance": 12.0})
    assert sketch.settings["min_distance"] == 12.0
    assert sketch.settings["repulsion_radius"] == LINE_STUDY_SETTINGS["repulsion_radius"]
    assert sketch.world.inverted_colors


def test_restart_holds_then_unpauses(tmp_path: FsPath) -> None:
    sketch, clock = _sketch(tmp_path, layout=LineLayout.RADIAL, restart_delay_ms=1000.0)
    sketch.restart()
    assert len(sketch.world.paths) == 60
    assert sketch.world.paused
    start = [p.to_array().copy() for p in sketch.world.paths]

    for _ in range(10):
        sketch.frame()
        clock.tick()
    assert sketch.world.paused
    for path, pts in zip(sketch.world.paths, start):
        np.testing.assert_array_equal(path.to_array(), pts)

    sketch.frame()
    assert not sketch.world.paused
    assert sketch.unpause_at is None
    assert sketch.world.frame_count == 1


def test_restart_replaces_pending_unpause(tmp_path: FsPath) -> None:
    sketch, clock = _sketch(tmp_path, restart_delay_ms=300.0)
    sketch.restart()
    clock.tick()
    clock.tick()
    sketch.key_released("r")
    assert sketch.unpause_at == pytest.approx(500.0)


def test_number_keys_select_layouts(tmp_path: FsPath) -> None:
    sketch, _ = _sketch(tmp_path)
    assert sketch.key_released("2")
    assert sketch.layout is LineLayout.VERTICAL
    assert len(sketch.world.paths) == 300
    assert sketch.key_released("5")
    assert sketch.layout is LineLayout.BOUNDED_CIRCLE
    (path,) = sketch.world.paths
    assert path.is_closed and path.bounds is not None


def test_display_keys_toggle_world_and_paths(tmp_path: FsPath) -> None:
    sketch, _ = _sketch(tmp_path, layout=LineLayout.RADIAL)
    sketch.restart()
    assert sketch.key_released("T")
    assert sketch.world.trace_mode
    assert all(p.trace_mode for p in sketch.world.paths)
    assert sketch.key_released("d")
    assert all(p.debug_mode for p in sketch.world.paths)

    # Toggles survive a restart.
    sketch.key_released("4")
    assert all(p.trace_mode and p.debug_mode for p in sketch.world.paths)


def test_space_toggles_pause(tmp_path: FsPath) -> None:
    sketch, _ = _sketch(tmp_path)
    assert not sketch.world.paused
    assert sketch.key_released(" ")
    assert sketch.world.paused


def test_unknown_key_is_ignored(tmp_path: FsPath) -> None:
    sketch, _ = _sketch(tmp_path)
    assert not sketch.key_released("x")


def test_c_cycles_injection_mode(tmp_path: FsPath) -> None:
    sketch, _ = _sketch(tmp_path, layout=LineLayout.RADIAL)
    sketch.restart()
    sketch.key_released("c")
    assert all(p.injection_mode is InjectionMode.CURVATURE for p in sketch.world.paths)
    sketch.key_released("c")
    assert all(p.injection_mode is InjectionMode.RANDOM for p in sketch.world.paths)


def test_s_exports_numbered_svgs(tmp_path: FsPath) -> None:
    sketch, _ = _sketch(tmp_path, layout=LineLayout.RADIAL)
    sketch.restart()
    sketch.key_released("s")
    first = sketch.export_svg()
    assert (tmp_path / "sketch_0000.svg").exists()
    assert first == tmp_path / "sketch_0001.svg"
    assert "<svg" in first.read_text(encoding="utf-8")


def test_frame_draws_on_canvas(tmp_path: FsPath, make_canvas) -> None:
    sketch, _ = _sketch(tmp_path, layout=LineLayout.RADIAL, restart_delay_ms=0.0)
    sketch.restart()
    canvas = make_canvas()
    sketch.frame(canvas)
    assert not sketch.world.paused
    assert len(canvas.named("background")) == 1
    assert len(canvas.named("polyline")) == 60


def test_distance_setters_survive_restart(tmp_path: FsPath) -> None:
    sketch, _ = _sketch(tmp_path, layout=LineLayout.RADIAL)
    sketch.restart()
    sketch.world.set_max_distance(33.0)
    sketch.world.set_repulsion_radius(7.0)
    sketch.key_released("r")
    assert sketch.settings["max_distance"] == 33.0
    for path in sketch.world.paths:
        assert path.settings["max_distance"] == 33.0
        assert all(n.max_distance == 33.0 for n in path.nodes)
        assert all(n.repulsion_radius == 7.0 for n in path.nodes)


def test_sketch_defaults_to_wall_clock(tmp_path: FsPath) -> None:
    sketch = Sketch(export_dir=tmp_path)
    assert sketch.clock is wall_clock_ms
