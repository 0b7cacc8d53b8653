from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Mapping, TypedDict, cast

from ..utils import debug


class Settings(TypedDict):
    min_distance: float
    max_distance: float
    repulsion_radius: float
    attraction_force: float
    repulsion_force: float
    alignment_force: float
    node_injection_interval: float
    max_velocity: float
    brownian_motion_range: float
    use_brownian_motion: bool
    curvature_threshold: float
    max_history_size: int
    history_capture_interval: int
    node_radius: float
    trace_alpha: int
    draw_nodes: bool
    trace_mode: bool
    inverted_colors: bool
    debug_mode: bool
    fill_mode: bool
    draw_history: bool
    show_bounds: bool


# Distances are in canvas units, forces are lerp fractions and the injection
# interval is in milliseconds.
DEFAULTS: Settings = {
    "min_distance": 1.0,
    "max_distance": 5.0,
    "repulsion_radius": 10.0,
    "attraction_force": 0.5,
    "repulsion_force": 0.5,
    "alignment_force": 0.45,
    "node_injection_interval": 100.0,
    "max_velocity": 0.1,
    "brownian_motion_range": 0.01,
    "use_brownian_motion": True,
    "curvature_threshold": 20.0,
    "max_history_size": 10,
    "history_capture_interval": 20,
    "node_radius": 2.0,
    "trace_alpha": 255,
    "draw_nodes": False,
    "trace_mode": False,
    "inverted_colors": False,
    "debug_mode": False,
    "fill_mode": False,
    "draw_history": False,
    "show_bounds": False,
}

LINE_STUDY_OVERRIDES: dict[str, Any] = {
    "min_distance": 10.0,
    "max_distance": 20.0,
    "repulsion_radius": 30.0,
    "attraction_force": 0.2,
    "repulsion_force": 0.6,
    "alignment_force": 0.55,
    "node_injection_interval": 100.0,
    "draw_nodes": False,
    "trace_mode": False,
    "inverted_colors": True,
    "debug_mode": False,
    "fill_mode": False,
    "draw_history": False,
    "show_bounds": True,
}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _normalize_key(key: str) -> str:
    # MinDistance -> min_distance
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def merge_settings(
    overrides: Mapping[str, Any] | None = None,
    base: Mapping[str, Any] | None = None,
) -> Settings:
    """Copy ``base`` (DEFAULTS when omitted) and apply recognized overrides.

    Keys may be snake_case or the CamelCase names used by sketch settings files.
    Unrecognized keys are dropped. Values are taken as given.
    """
    merged: dict[str, Any] = dict(DEFAULTS if base is None else base)
    if overrides is None:
        return cast(Settings, merged)
    for key, value in overrides.items():
        name = _normalize_key(key)
        if name not in DEFAULTS:
            debug.log(f"settings: ignoring unknown option {key!r}")
            continue
        merged[name] = value
    return cast(Settings, merged)


def load_settings(
    json_path: str | Path, base: Mapping[str, Any] | None = None
) -> Settings:
    raw = json.loads(Path(json_path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"Settings file must hold a JSON object: {json_path}")
    return merge_settings(raw, base=base)


LINE_STUDY_SETTINGS: Settings = merge_settings(LINE_STUDY_OVERRIDES)
