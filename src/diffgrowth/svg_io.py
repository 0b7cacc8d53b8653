from __future__ import annotations

import numpy as np
from beartype import beartype
from jaxtyping import Float, jaxtyped
from svgpathtools import svg2paths2, Path  # type: ignore[reportMissingTypeStubs]

from ..utils import debug


@jaxtyped(typechecker=beartype)
def load_outline_polygon(
    svg_path: str,
    flat_tol: float = 1.0,
) -> Float[np.ndarray, "N 2"]:
    """
    Flatten the first <path> of an SVG into polygon vertices (N,2).
    Open outlines are closed with a straight edge. Coordinates are SVG user units.
    """
    paths = svg2paths2(svg_path)[0]
    if len(paths) == 0:
        raise ValueError(f"No <path> found in SVG: {svg_path}")
    p: Path = paths[0]
    if len(p) == 0:
        raise ValueError(f"First <path> in {svg_path} has no segments")
    if not p.isclosed():
        debug.warn(f"outline in {svg_path} is not closed; closing it")

    tol = max(flat_tol, 1e-6)
    pts: list[tuple[float, float]] = []
    for seg in p:
        seg_len = max(float(seg.length(error=1e-3)), 1e-6)
        n = max(2, int(np.ceil(seg_len / tol)))
        for t in np.linspace(0.0, 1.0, n, endpoint=False):
            z = seg.point(float(t))
            pts.append((z.real, z.imag))

    vertices = np.asarray(pts, dtype=np.float64)
    keep: list[int] = [0]
    for i in range(1, len(vertices)):
        if np.linalg.norm(vertices[i] - vertices[keep[-1]]) > tol * 0.25:
            keep.append(i)
    return vertices[keep]

