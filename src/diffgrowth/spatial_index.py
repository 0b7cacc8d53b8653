from __future__ import annotations

from typing import Iterable, Sequence, cast

import numpy as np
from beartype import beartype
from jaxtyping import Float, jaxtyped
from scipy.spatial import cKDTree  # type: ignore[reportMissingTypeStubs]

from .node import Node


@jaxtyped(typechecker=beartype)
def node_positions(nodes: Sequence[Node]) -> Float[np.ndarray, "N 2"]:
    if not nodes:
        return np.zeros((0, 2), dtype=np.float64)
    return np.array([(n.x, n.y) for n in nodes], dtype=np.float64)


class SpatialIndex:
    """
    Radius queries over a fixed set of nodes. Positions are captured at build
    time; rebuild after nodes move.
    """

    def __init__(self, nodes: Iterable[Node] = ()) -> None:
        self.nodes: list[Node] = list(nodes)
        self.points = node_positions(self.nodes)
        self._tree = cKDTree(self.points) if self.nodes else None

    def __len__(self) -> int:
        return len(self.nodes)

    def query_radius(self, x: float, y: float, radius: float) -> list[Node]:
        """Nodes at distance <= radius, nearest first."""
        if self._tree is None or radius < 0:
            return []
        hits = cast(list[int], self._tree.query_ball_point((x, y), r=radius))
        if not hits:
            return []
        idx = np.asarray(hits, dtype=np.int64)
        d2 = np.sum(np.square(self.points[idx] - np.array([x, y])), axis=1)
        order = idx[np.argsort(d2, kind="stable")]
        return [self.nodes[int(i)] for i in order]
