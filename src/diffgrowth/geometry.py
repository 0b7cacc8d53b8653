from __future__ import annotations

import math

import numpy as np
from beartype import beartype
from jaxtyping import Float, jaxtyped


def lerp(start: float, stop: float, amount: float) -> float:
    """Linear interpolation; negative amounts extrapolate away from ``stop``."""
    return start + (stop - start) * amount


def remap(
    value: float,
    start1: float,
    stop1: float,
    start2: float,
    stop2: float,
    clamp: bool = True,
) -> float:
    if stop1 == start1:
        return start2
    out = start2 + (stop2 - start2) * ((value - start1) / (stop1 - start1))
    if clamp:
        lo, hi = min(start2, stop2), max(start2, stop2)
        out = min(max(out, lo), hi)
    return out


def turning_angle_deg(
    prev: tuple[float, float],
    point: tuple[float, float],
    nxt: tuple[float, float],
) -> float:
    """
    Angle in degrees between the incoming edge prev->point and the chord prev->nxt.
    0 for collinear points, grows as the path bends at ``point``.
    Zero-length edges give 0.
    """
    ux = point[0] - prev[0]
    uy = point[1] - prev[1]
    vx = nxt[0] - prev[0]
    vy = nxt[1] - prev[1]
    cross = ux * vy - uy * vx
    dot = ux * vx + uy * vy
    if cross == 0.0 and dot == 0.0:
        return 0.0
    return abs(math.degrees(math.atan2(cross, dot)))


@jaxtyped(typechecker=beartype)
def edge_lengths(
    x: Float[np.ndarray, "M 2"],
    *,
    closed: bool = False,
) -> Float[np.ndarray, "E"]:
    """Length of every edge; closed polylines include the last->first edge."""
    if x.shape[0] < 2:
        return np.zeros((0,), dtype=np.float64)
    if closed:
        seg = np.roll(x, -1, axis=0) - x
    else:
        seg = x[1:, :] - x[:-1, :]
    return np.linalg.norm(seg, axis=-1).astype(np.float64)


@jaxtyped(typechecker=beartype)
def polyline_length(
    x: Float[np.ndarray, "M 2"],
    *,
    closed: bool = False,
) -> float:
    """Polyline length in canvas units."""
    return float(np.sum(edge_lengths(x, closed=closed)))

