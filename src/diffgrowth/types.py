from __future__ import annotations

from typing import TypeAlias

import numpy as np
from jaxtyping import Float

NpPoints: TypeAlias = Float[np.ndarray, "N 2"]
NpPolygon: TypeAlias = Float[np.ndarray, "V 2"]
NpSnapshot: TypeAlias = Float[np.ndarray, "N 2"]
Point2: TypeAlias = tuple[float, float]
Viewbox: TypeAlias = tuple[float, float, float, float]
CanvasSize: TypeAlias = tuple[float, float] | tuple[str, str]
RGBA: TypeAlias = tuple[int, int, int, int]
