from __future__ import annotations

from pathlib import Path

import numpy as np


def plot_path_length(out_path: Path, frames: np.ndarray, length: np.ndarray) -> None:
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(8.5, 4.0), dpi=120)
    ax.plot(frames, length, color="tab:green")
    ax.set_xlabel("frame")
    ax.set_ylabel("total path length")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(out_path, dpi=160)
    plt.close(fig)
