from __future__ import annotations

from pathlib import Path

import numpy as np


def plot_frame_times(
    out_path: Path,
    frames: np.ndarray,
    frame_s: np.ndarray,
    nodes: np.ndarray,
) -> None:
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(8.5, 5.0), dpi=120)
    ax.plot(frames, frame_s * 1000.0, label="frame ms", color="tab:red")
    ax.set_xlabel("frame")
    ax.set_ylabel("frame time (ms)")
    ax.grid(True, alpha=0.3)

    ax_nodes = ax.twinx()
    ax_nodes.plot(frames, nodes, label="nodes", color="tab:blue", alpha=0.6)
    ax_nodes.set_ylabel("nodes")

    lines = ax.get_lines() + ax_nodes.get_lines()
    ax.legend(lines, [ln.get_label() for ln in lines], loc="best")
    fig.tight_layout()
    fig.savefig(out_path, dpi=160)
    plt.close(fig)
