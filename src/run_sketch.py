from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import Protocol, TypedDict, cast

import numpy as np
from PIL import Image
from tqdm import tqdm  # type: ignore[reportMissingModuleSource]

from .diffgrowth.checkpoint import (
    append_metrics_csv,
    frame_row,
    init_run,
    save_frame_svg,
)
from .diffgrowth.layouts import LineLayout, layout_from_name
from .diffgrowth.raster import RasterCanvas, save_gif
from .diffgrowth.settings import LINE_STUDY_SETTINGS, load_settings, merge_settings
from .diffgrowth.sketch import FrameClock, Sketch
from .utils import debug, debug_helpers


def _resolve_repo_path(rel_path: str) -> Path:
    # src/ is the package root; the repo is one directory above it.
    project_root = Path(__file__).resolve().parent.parent
    return project_root / rel_path


class CliArgs(Protocol):
    layout: str
    frames: int
    width: int
    height: int
    fps: float
    seed: int
    settings: str | None
    output_dir: str
    output: str | None
    svg_every: int
    gif: bool
    gif_stride: int
    raster_scale: float
    keys: str | None
    restart_delay: float
    trace: bool
    inverted: bool
    debug_colors: bool
    verbose: bool


class CliArgsDict(TypedDict):
    layout: str
    frames: int
    width: int
    height: int
    fps: float
    seed: int
    settings: str | None
    output_dir: str
    output: str | None
    svg_every: int
    gif: bool
    gif_stride: int
    raster_scale: float
    keys: str | None
    restart_delay: float
    trace: bool
    inverted: bool
    debug_colors: bool
    verbose: bool


def parse_key_script(script: str | None) -> dict[int, list[str]]:
    """
    "120:t,300:i,300:space" -> {120: ["t"], 300: ["i", " "]}
    Keys fire right before the given frame is simulated.
    """
    events: dict[int, list[str]] = {}
    if not script:
        return events
    for item in script.split(","):
        item = item.strip()
        if not item:
            continue
        frame_raw, sep, key = item.partition(":")
        if not sep or not key:
            raise ValueError(f"Bad key event {item!r}; expected FRAME:KEY")
        try:
            frame = int(frame_raw)
        except ValueError as exc:
            raise ValueError(f"Bad frame number in key event {item!r}") from exc
        if frame < 0:
            raise ValueError(f"Key event frame must be >= 0: {item!r}")
        events.setdefault(frame, []).append(" " if key.lower() == "space" else key)
    return events


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Run a differential growth line study headless and save frames"
    )
    ap.add_argument(
        "--layout",
        default="opposing_arcs",
        help="One of: " + ", ".join(m.name.lower() for m in LineLayout),
    )
    ap.add_argument("--frames", type=int, default=600, help="Frames to simulate")
    ap.add_argument("--width", type=int, default=900)
    ap.add_argument("--height", type=int, default=900)
    ap.add_argument(
        "--fps",
        type=float,
        default=60.0,
        help="Simulated frame rate; drives the injection timer and GIF speed",
    )
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument(
        "--settings", default=None, help="JSON file with setting overrides"
    )
    ap.add_argument(
        "--output_dir",
        default=str(_resolve_repo_path("runs")),
        help="Directory for run folders",
    )
    ap.add_argument(
        "--output", default=None, help="Final frame SVG (defaults to the run folder)"
    )
    ap.add_argument(
        "--svg_every",
        type=int,
        default=0,
        help="Save an SVG snapshot every N frames (0 disables)",
    )
    ap.add_argument("--gif", action="store_true", help="Write an animated GIF")
    ap.add_argument("--gif_stride", type=int, default=2, help="Use every Nth frame")
    ap.add_argument(
        "--raster_scale", type=float, default=0.5, help="GIF pixels per canvas unit"
    )
    ap.add_argument(
        "--keys",
        default=None,
        help='Scripted key presses, e.g. "120:t,300:i,400:space"',
    )
    ap.add_argument(
        "--restart_delay",
        type=float,
        default=1000.0,
        help="Pause after (re)start in ms of simulated time",
    )
    ap.add_argument("--trace", action="store_true", help="Start in trace mode")
    ap.add_argument("--inverted", action="store_true", help="Start with inverted colors")
    ap.add_argument(
        "--debug_colors", action="store_true", help="Color segments along each path"
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logs")
    return ap


def main(argv: list[str] | None = None) -> Path:
    args = cast(CliArgs, build_parser().parse_args(argv))
    debug.set_verbose(args.verbose)

    if args.frames <= 0:
        raise ValueError("frames must be > 0")
    if args.width <= 0 or args.height <= 0:
        raise ValueError("width and height must be > 0")
    if args.svg_every < 0:
        raise ValueError("svg_every must be >= 0")
    if args.gif_stride <= 0:
        raise ValueError("gif_stride must be > 0")
    if args.raster_scale <= 0:
        raise ValueError("raster_scale must be > 0")

    layout = layout_from_name(args.layout)
    key_events = parse_key_script(args.keys)

    if args.settings is not None:
        settings = load_settings(args.settings, base=LINE_STUDY_SETTINGS)
    else:
        settings = merge_settings(None, base=LINE_STUDY_SETTINGS)
    if args.trace:
        settings["trace_mode"] = True
    if args.inverted:
        settings["inverted_colors"] = True
    if args.debug_colors:
        settings["debug_mode"] = True

    cli_args_raw = vars(args)
    expected_cli = set(CliArgsDict.__annotations__.keys())
    actual_cli = set(cli_args_raw.keys())
    if actual_cli != expected_cli:
        missing = sorted(expected_cli - actual_cli)
        extra = sorted(actual_cli - expected_cli)
        raise ValueError(
            "CliArgsDict mismatch. Update CliArgsDict. "
            f"missing={missing} extra={extra}"
        )
    cli_args = cast(CliArgsDict, dict(cli_args_raw))
    run = init_run(
        Path(args.output_dir),
        {"cli_args": cli_args, "settings": dict(settings)},
    )
    debug.log(f"run dir={run.run_dir}")

    clock = FrameClock(args.fps)
    sketch = Sketch(
        args.width,
        args.height,
        settings=settings,
        layout=layout,
        rng=np.random.default_rng(args.seed),
        clock=clock,
        restart_delay_ms=args.restart_delay,
        export_dir=run.run_dir,
    )
    sketch.restart()

    gif_frames: list[Image.Image] = []
    # One raster canvas for the whole run so trace mode can accumulate.
    canvas = (
        RasterCanvas(args.width, args.height, scale=args.raster_scale)
        if args.gif
        else None
    )

    start = time.perf_counter()
    for frame in tqdm(range(args.frames), desc="Simulating", unit="frame"):
        for key in key_events.get(frame, []):
            if not sketch.key_released(key):
                debug.warn(f"no binding for key {key!r} at frame {frame}")

        frame_start = time.perf_counter()
        sketch.frame(canvas)
        frame_s = time.perf_counter() - frame_start

        append_metrics_csv(
            run.csv_path,
            frame_row(frame, sketch.world, time.perf_counter() - start, frame_s),
        )
        if canvas is not None and frame % args.gif_stride == 0:
            gif_frames.append(canvas.snapshot())
        if args.svg_every > 0 and frame % args.svg_every == 0:
            save_frame_svg(run.run_dir, frame, sketch.world, args.width, args.height)
        debug_helpers.log_world(frame, sketch.world)
        clock.tick()

    out_svg = (
        Path(args.output) if args.output is not None else run.run_dir / "final.svg"
    )
    out_svg.parent.mkdir(parents=True, exist_ok=True)
    sketch.world.export_svg(str(out_svg), args.width, args.height)

    if args.gif:
        gif_path = save_gif(
            gif_frames, run.run_dir / "frames.gif", fps=args.fps / args.gif_stride
        )
        print(f"Saved GIF with {len(gif_frames)} frames to {gif_path}")

    print(
        f"Saved: {out_svg}  frames={args.frames} paths={len(sketch.world.paths)} "
        f"nodes={sketch.world.node_count()}"
    )
    return run.run_dir


if __name__ == "__main__":
    main()
