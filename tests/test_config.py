import json
import math
from pathlib import Path

import pytest

from plan_visit.config import VisitSettings, load_settings, waypoints_from_degrees
from plan_visit.errors import ConfigurationError


def test_odd_length_is_rejected():
    with pytest.raises(ConfigurationError):
        waypoints_from_degrees([41.0, -8.0, 42.0])


def test_conversion_happens_once_per_call():
    raw = [41.0, -8.0, 42.5, -7.25]
    first = waypoints_from_degrees(raw)
    second = waypoints_from_degrees(raw)
    assert raw == [41.0, -8.0, 42.5, -7.25]
    assert first == second
    assert first[0].lat == math.radians(41.0)
    assert first[1].lon == math.radians(-7.25)


def test_latitude_out_of_range():
    with pytest.raises(ConfigurationError):
        waypoints_from_degrees([95.0, 0.0])


def test_empty_list_is_valid():
    assert waypoints_from_degrees([]) == []


def test_example_settings_load():
    settings = load_settings(Path(__file__).parents[1] / "examples" / "missions" / "harbour_visit.json")
    assert settings.plan_id == "PlanVisit"
    assert len(settings.points_to_visit) % 2 == 0
    assert len(waypoints_from_degrees(settings.points_to_visit)) == 4


def test_env_overrides(tmp_path, monkeypatch):
    cfg = tmp_path / "visit.json"
    cfg.write_text(json.dumps({"points_to_visit": [1, 2], "speed_mps": 1.0}), encoding="utf-8")
    monkeypatch.setenv("PLANVISIT_POINTS", "10, 20; 30, 40")
    monkeypatch.setenv("PLANVISIT_SPEED_MPS", "2.5")
    monkeypatch.setenv("PLANVISIT_SYSTEM_ID", "7")
    settings = load_settings(cfg)
    assert settings.points_to_visit == [10.0, 20.0, 30.0, 40.0]
    assert settings.speed_mps == 2.5
    assert settings.system_id == 7


def test_bad_settings_file(tmp_path):
    cfg = tmp_path / "visit.json"
    cfg.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(cfg)
    cfg.write_text(json.dumps({"speed_mps": -1}), encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(cfg)


def test_defaults():
    s = VisitSettings()
    assert s.points_to_visit == []
    assert s.max_waypoints == 10
    assert s.poll_interval_s == 1.0
