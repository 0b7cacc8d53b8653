from __future__ import annotations

import argparse
import csv
from pathlib import Path

import matplotlib
import numpy as np

from .plots import plot_frame_times, plot_node_counts, plot_path_length

REQUIRED_FIELDS = [
    "frame",
    "nodes",
    "fixed_nodes",
    "frame_s",
]
OPTIONAL_FIELDS = [
    "paths",
    "paused",
    "elapsed_s",
    "length",
]


def read_metrics(csv_path: Path) -> dict[str, np.ndarray]:
    with csv_path.open(newline="") as csv_file:
        reader = csv.DictReader(csv_file)
        if reader.fieldnames is None:
            raise ValueError("metrics.csv is missing a header row")
        missing = [field for field in REQUIRED_FIELDS if field not in reader.fieldnames]
        if missing:
            raise ValueError(f"metrics.csv missing columns: {', '.join(missing)}")
        optional = [field for field in OPTIONAL_FIELDS if field in reader.fieldnames]
        rows = list(reader)

    if not rows:
        raise ValueError("metrics.csv has no data rows")

    frames = np.array([int(row["frame"]) for row in rows], dtype=np.int64)
    order = np.argsort(frames, kind="stable")

    def col(name: str, dtype: type) -> np.ndarray:
        return np.array([dtype(float(row[name])) for row in rows])[order]

    data = {
        "frame": frames[order],
        "nodes": col("nodes", int),
        "fixed_nodes": col("fixed_nodes", int),
        "frame_s": col("frame_s", float),
    }
    for name in optional:
        data[name] = col(name, float)
    return data


def plot_run(run_dir: Path, out_dir: Path | None = None) -> list[Path]:
    matplotlib.use("Agg")
    csv_path = run_dir / "metrics.csv"
    if not csv_path.exists():
        raise ValueError(f"Missing metrics.csv in {run_dir}")
    data = read_metrics(csv_path)

    target = out_dir if out_dir is not None else run_dir / "plots"
    target.mkdir(parents=True, exist_ok=True)

    counts_path = target / "node_counts.png"
    plot_node_counts(
        counts_path,
        data["frame"],
        data["nodes"],
        data["fixed_nodes"],
        data.get("paused"),
    )
    times_path = target / "frame_times.png"
    plot_frame_times(times_path, data["frame"], data["frame_s"], data["nodes"])
    out = [counts_path, times_path]
    if "length" in data:
        length_path = target / "path_length.png"
        plot_path_length(length_path, data["frame"], data["length"])
        out.append(length_path)
    return out


def main() -> None:
    ap = argparse.ArgumentParser(description="Plot per-frame metrics of a sketch run")
    ap.add_argument("--run-dir", required=True, help="Run folder holding metrics.csv")
    ap.add_argument(
        "--out-dir", default=None, help="Output folder (defaults to <run-dir>/plots)"
    )
    args = ap.parse_args()

    run_dir = Path(args.run_dir)
    if not run_dir.exists():
        raise ValueError(f"Run dir does not exist: {run_dir}")
    out_dir = Path(args.out_dir) if args.out_dir is not None else None
    for path in plot_run(run_dir, out_dir):
        print(f"Saved: {path}")


if __name__ == "__main__":
    main()
