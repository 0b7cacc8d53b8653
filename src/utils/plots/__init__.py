from .frame_times import plot_frame_times
from .node_counts import plot_node_counts
from .path_length import plot_path_length

__all__ = [
    "plot_frame_times",
    "plot_node_counts",
    "plot_path_length",
]
