from __future__ import annotations

import csv
import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .export_svg import export_world_svg

if TYPE_CHECKING:
    from .world import World

FRAME_CSV_FIELDS = [
    "frame",
    "paths",
    "nodes",
    "fixed_nodes",
    "length",
    "paused",
    "elapsed_s",
    "frame_s",
]


@dataclass(frozen=True)
class SketchRun:
    run_dir: Path
    csv_path: Path


def init_run(base_dir: Path, metadata: dict[str, Any]) -> SketchRun:
    base_dir.mkdir(parents=True, exist_ok=True)
    now = time.localtime()
    timestamp = time.strftime("%Y%m%d_%H%M%S", now)
    nonce = time.time_ns() % 1_000_000_000
    run_id = f"run_{timestamp}_{nonce:09d}"
    run_dir = base_dir / run_id
    while run_dir.exists():
        nonce = (nonce + 1) % 1_000_000_000
        run_id = f"run_{timestamp}_{nonce:09d}"
        run_dir = base_dir / run_id
    run_dir.mkdir(parents=True, exist_ok=False)

    metadata_out = dict(metadata)
    metadata_out["run_id"] = run_id
    metadata_out["created_at"] = time.strftime("%Y-%m-%dT%H:%M:%S", now)
    (run_dir / "metadata.json").write_text(
        json.dumps(metadata_out, indent=2, sort_keys=True), encoding="utf-8"
    )
    return SketchRun(run_dir=run_dir, csv_path=run_dir / "metrics.csv")


def frame_row(
    frame: int, world: World, elapsed_s: float, frame_s: float
) -> dict[str, Any]:
    return {
        "frame": frame,
        "paths": len(world.paths),
        "nodes": world.node_count(),
        "fixed_nodes": world.fixed_node_count(),
        "length": round(world.total_length(), 3),
        "paused": int(world.paused),
        "elapsed_s": round(elapsed_s, 6),
        "frame_s": round(frame_s, 6),
    }


def append_metrics_csv(
    csv_path: Path,
    row: dict[str, Any],
    fieldnames: list[str] = FRAME_CSV_FIELDS,
) -> None:
    write_header = not csv_path.exists()
    with csv_path.open("a", newline="") as csv_file:
        writer = csv.DictWriter(csv_file, fieldnames=fieldnames)
        if write_header:
            writer.writeheader()
        writer.writerow(row)


def save_frame_svg(
    run_dir: Path,
    frame: int,
    world: World,
    width: int,
    height: int,
) -> Path:
    svg_path = run_dir / f"frame_{frame:06d}.svg"
    export_world_svg(str(svg_path), world, width, height)
    return svg_path
