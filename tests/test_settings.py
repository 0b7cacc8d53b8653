import json
from pathlib import Path as FsPath

import pytest

from src.diffgrowth.settings import (
    DEFAULTS,
    LINE_STUDY_SETTINGS,
    load_settings,
    merge_settings,
)
from src.utils import debug


def test_merge_without_overrides_copies_defaults() -> None:
    merged = merge_settings()
    assert merged == DEFAULTS
    merged["min_distance"] = 99.0
    assert DEFAULTS["min_distance"] == 1.0


def test_merge_accepts_camel_case_aliases() -> None:
    merged = merge_settings({"MinDistance": 3.0, "repulsion_force": 0.9, "UseBrownianMotion": False})
    assert merged["min_distance"] == 3.0
    assert merged["repulsion_force"] == 0.9
    assert merged["use_brownian_motion"] is False


def test_merge_drops_unknown_keys(capsys: pytest.CaptureFixture[str]) -> None:
    debug.set_verbose(True)
    try:
        merged = merge_settings({"Wobble": 1})
    finally:
        debug.set_verbose(False)
    assert "wobble" not in merged
    assert "Wobble" in capsys.readouterr().out


def test_merge_over_custom_base() -> None:
    merged = merge_settings({"max_distance": 25.0}, base=LINE_STUDY_SETTINGS)
    assert merged["max_distance"] == 25.0
    assert merged["min_distance"] == 10.0
    assert LINE_STUDY_SETTINGS["max_distance"] == 20.0


def test_line_study_preset() -> None:
    assert LINE_STUDY_SETTINGS["min_distance"] == 10.0
    assert LINE_STUDY_SETTINGS["repulsion_radius"] == 30.0
    assert LINE_STUDY_SETTINGS["alignment_force"] == 0.55
    assert LINE_STUDY_SETTINGS["inverted_colors"] is True
    assert LINE_STUDY_SETTINGS["show_bounds"] is True
    assert LINE_STUDY_SETTINGS["max_velocity"] == DEFAULTS["max_velocity"]


def test_load_settings_from_json(tmp_path: FsPath) -> None:
    cfg = tmp_path / "settings.json"
    cfg.write_text(json.dumps({"MaxDistance": 12, "trace_alpha": 40}), encoding="utf-8")
    loaded = load_settings(cfg)
    assert loaded["max_distance"] == 12
    assert loaded["trace_alpha"] == 40
    assert loaded["min_distance"] == DEFAULTS["min_distance"]


def test_load_settings_rejects_non_object(tmp_path: FsPath) -> None:
    cfg = tmp_path / "settings.json"
    cfg.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(cfg)
