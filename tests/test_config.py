import json
import math

import pytest

from tagcloud.config import load_config, parse_rotation, save_config
from tagcloud.data_structures import CloudSettings
from tagcloud.state import TagCloudState
from tagcloud.utilities import IDENTITY, Quaternion, Vector3


class LogSink:
    def __init__(self):
        self.records = []

    def __call__(self, message, level="INFO"):
        self.records.append((level, message))

    def levels(self):
        return [level for level, _ in self.records]


def test_missing_file_gives_defaults(tmp_path):
    settings = load_config(str(tmp_path / "missing.json"))
    assert settings == CloudSettings()
    assert settings.rotation == IDENTITY
    assert settings.auto_rotation.axis == [1.0, 1.0, 1.0]


def test_partial_file_keeps_defaults(tmp_path):
    path = tmp_path / "cloud.json"
    path.write_text(json.dumps({"touch_slop": 12, "auto_rotation": {"enabled": True}}))

    sink = LogSink()
    settings = load_config(str(path), log_callback=sink)
    assert settings.touch_slop == 12.0
    assert settings.auto_rotation.enabled is True
    assert settings.auto_rotation.interval_ms == 10
    assert settings.gesture_enabled is True
    assert sink.levels() == ["INFO"]


def test_euler_rotation(tmp_path):
    path = tmp_path / "cloud.json"
    path.write_text(json.dumps({"rotation": {"euler": [0, 0, 180], "sequence": "xyz"}}))

    rotation = load_config(str(path)).rotation
    assert abs(rotation.z) == pytest.approx(1.0)
    assert rotation.w == pytest.approx(0.0, abs=1e-12)


def test_list_rotation_is_normalized():
    assert parse_rotation([2, 0, 0, 0]) == IDENTITY
    assert parse_rotation(None) == IDENTITY


def test_broken_file_is_logged_and_ignored(tmp_path):
    path = tmp_path / "cloud.json"
    path.write_text("{not json")

    sink = LogSink()
    settings = load_config(str(path), log_callback=sink)
    assert settings == CloudSettings()
    assert sink.levels() == ["ERROR"]


def test_bad_rotation_is_logged_and_ignored(tmp_path):
    path = tmp_path / "cloud.json"
    path.write_text(json.dumps({"rotation": [1, 0, 0]}))

    sink = LogSink()
    assert load_config(str(path), log_callback=sink) == CloudSettings()
    assert sink.levels() == ["ERROR"]


def test_save_and_load_round_trip(tmp_path):
    path = str(tmp_path / "cloud.json")
    settings = CloudSettings(
        gesture_enabled=False,
        rotation=Quaternion.create(0.8, Vector3(0.0, 1.0, 0.0)),
        touch_slop=4.0,
        fade_to_alpha=0.1,
    )
    settings.auto_rotation.enabled = True
    settings.auto_rotation.axis = [0.0, 1.0, 0.0]

    assert save_config(settings, path)
    assert load_config(path) == settings


def test_save_uses_live_state(tmp_path):
    path = str(tmp_path / "cloud.json")
    state = TagCloudState(gesture_enabled=False)
    state.rotate_by_angle(math.pi / 2, Vector3(1.0, 0.0, 0.0))

    save_config(CloudSettings(), path, state=state)
    with open(path, encoding="utf-8") as f:
        stored = json.load(f)
    assert stored["gesture_enabled"] is False
    assert stored["rotation"] == state.rotation.as_list()

    restored = TagCloudState(gesture_enabled=False, rotation=load_config(path).rotation)
    assert restored.rotation == state.rotation


def test_save_failure_returns_false(tmp_path):
    sink = LogSink()
    path = str(tmp_path / "no-such-dir" / "cloud.json")
    assert save_config(CloudSettings(), path, log_callback=sink) is False
    assert sink.levels() == ["ERROR"]
