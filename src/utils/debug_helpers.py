from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from . import debug

if TYPE_CHECKING:
    from ..diffgrowth.world import World

_seen: set[str] = set()


def log_once(key: str, message: str) -> None:
    if debug.is_verbose() and key not in _seen:
        _seen.add(key)
        debug.log(message)


def reset_once() -> None:
    _seen.clear()


def log_array(name: str, arr: np.ndarray) -> None:
    if not debug.is_verbose():
        return
    if arr.size == 0:
        debug.log(f"{name}: shape={arr.shape} dtype={arr.dtype} empty")
        return
    finite_mask = np.isfinite(arr)
    finite_all = bool(finite_mask.all())
    if finite_mask.any():
        finite_vals = arr[finite_mask]
        min_val = float(np.min(finite_vals))
        max_val = float(np.max(finite_vals))
    else:
        min_val = float("nan")
        max_val = float("nan")
    debug.log(
        f"{name}: shape={arr.shape} dtype={arr.dtype} "
        f"finite_all={finite_all} min={min_val:.6g} max={max_val:.6g}"
    )


def log_world(frame: int, world: "World", every: int = 100) -> None:
    """Periodic summary of the simulation state, plus the first few paths."""
    if not debug.is_verbose() or every <= 0 or frame % every != 0:
        return
    debug.log(
        f"frame={frame} paths={len(world.paths)} nodes={world.node_count()} "
        f"fixed={world.fixed_node_count()} length={world.total_length():.1f} "
        f"paused={world.paused}"
    )
    for index, path in enumerate(world.paths[:3]):
        log_array(f"path[{index}] positions", path.to_array())
