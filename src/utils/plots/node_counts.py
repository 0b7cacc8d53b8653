from __future__ import annotations

from pathlib import Path

import numpy as np


def plot_node_counts(
    out_path: Path,
    frames: np.ndarray,
    nodes: np.ndarray,
    fixed_nodes: np.ndarray,
    paused: np.ndarray | None = None,
) -> None:
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(8.5, 5.0), dpi=120)
    ax.plot(frames, nodes, label="nodes", linewidth=2.0)
    ax.plot(frames, fixed_nodes, label="fixed nodes")
    if paused is not None and paused.any():
        ax.fill_between(
            frames,
            0,
            float(np.max(nodes)) if nodes.size else 1.0,
            where=paused > 0,
            color="0.85",
            step="mid",
            label="paused",
        )
    ax.set_xlabel("frame")
    ax.set_ylabel("count")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best")
    fig.tight_layout()
    fig.savefig(out_path, dpi=160)
    plt.close(fig)
