#!/usr/bin/env python3
"""
Module config.py
Load and save tag cloud settings as JSON.

File layout (every key optional):
{
  "gesture_enabled": true,
  "rotation": [1.0, 0.0, 0.0, 0.0],          # [W, X, Y, Z]
      or {"euler": [0, 45, 0], "sequence": "xyz", "degrees": true},
  "touch_slop": 8.0,
  "fade_to_alpha": 0.25,
  "scale_to": 0.5,
  "auto_rotation": {
    "enabled": false, "angle": 0.001, "axis": [1, 1, 1], "interval_ms": 10
  }
}
"""
import json
import os
from typing import Callable, Optional

from tagcloud.data_structures import AutoRotationSettings, CloudSettings
from tagcloud.state import TagCloudState
from tagcloud.utilities import Quaternion, IDENTITY, quaternion_from_euler

CONFIG_FILE = "tagcloud_config.json"


def parse_rotation(value) -> Quaternion:
    """Rotation from either a [W, X, Y, Z] list or an Euler angle block."""
    if value is None:
        return IDENTITY
    if isinstance(value, dict):
        return quaternion_from_euler(
            value.get('euler', [0.0, 0.0, 0.0]),
            sequence=value.get('sequence', 'xyz'),
            degrees=value.get('degrees', True),
        )
    w, x, y, z = (float(c) for c in value)
    return Quaternion.of(w, x, y, z)


def settings_from_dict(config: dict) -> CloudSettings:
    defaults = CloudSettings()
    auto_cfg = config.get('auto_rotation', {})
    auto_defaults = AutoRotationSettings()
    return CloudSettings(
        gesture_enabled=bool(config.get('gesture_enabled', defaults.gesture_enabled)),
        rotation=parse_rotation(config.get('rotation')),
        touch_slop=float(config.get('touch_slop', defaults.touch_slop)),
        fade_to_alpha=float(config.get('fade_to_alpha', defaults.fade_to_alpha)),
        scale_to=float(config.get('scale_to', defaults.scale_to)),
        auto_rotation=AutoRotationSettings(
            enabled=bool(auto_cfg.get('enabled', auto_defaults.enabled)),
            angle=float(auto_cfg.get('angle', auto_defaults.angle)),
            axis=[float(c) for c in auto_cfg.get('axis', auto_defaults.axis)],
            interval_ms=int(auto_cfg.get('interval_ms', auto_defaults.interval_ms)),
        ),
    )


def settings_to_dict(settings: CloudSettings) -> dict:
    auto = settings.auto_rotation
    return {
        'gesture_enabled': settings.gesture_enabled,
        'rotation': settings.rotation.as_list(),
        'touch_slop': settings.touch_slop,
        'fade_to_alpha': settings.fade_to_alpha,
        'scale_to': settings.scale_to,
        'auto_rotation': {
            'enabled': auto.enabled,
            'angle': auto.angle,
            'axis': list(auto.axis),
            'interval_ms': auto.interval_ms,
        },
    }


def load_config(path: str = CONFIG_FILE,
                log_callback: Optional[Callable] = None) -> CloudSettings:
    """
    Load settings from `path`.
    A missing or unreadable file yields the defaults; errors are logged.
    """
    def log(message: str, level: str = "INFO"):
        if log_callback:
            log_callback(message, level)

    if not os.path.exists(path):
        return CloudSettings()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
        settings = settings_from_dict(config)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        log(f"Error loading config: {e}", "ERROR")
        return CloudSettings()

    log(f"Config loaded from {path}")
    return settings


def save_config(settings: CloudSettings, path: str = CONFIG_FILE,
                state: Optional[TagCloudState] = None,
                log_callback: Optional[Callable] = None) -> bool:
    """
    Write settings to `path`. When `state` is given its live rotation and
    gesture flag are stored instead of the ones in `settings`.
    """
    config = settings_to_dict(settings)
    if state is not None:
        gesture_enabled, w, x, y, z = state.save()
        config['gesture_enabled'] = gesture_enabled
        config['rotation'] = [w, x, y, z]

    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=2, ensure_ascii=False)
    except OSError as e:
        if log_callback:
            log_callback(f"Error saving config: {e}", "ERROR")
        return False

    if log_callback:
        log_callback(f"Config saved to {path}", "INFO")
    return True
