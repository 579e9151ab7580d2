#!/usr/bin/env python3
"""
Module data_structures.py
Basic data structures shared by the tag cloud modules.
"""
from dataclasses import dataclass, field
from typing import Any, List

from tagcloud.utilities import Vector3, Quaternion, IDENTITY


@dataclass(frozen=True)
class TagCloudItem:
    """
    A registered item of the tag cloud.

    Attributes:
      coordinates: initial position in the cloud, before the cloud rotation
      content: whatever the host uses to draw the item (label, widget, callable)
    """
    coordinates: Vector3
    content: Any = None


@dataclass(frozen=True)
class Placement:
    """
    Result of one layout pass for one item.

    Attributes:
      index: registration index of the item
      item: the registered item
      coordinates: item position after the cloud rotation
      offset_x, offset_y: top-left corner of the item inside the cloud bounds
      depth: z coordinate, higher is drawn on top
    """
    index: int
    item: TagCloudItem
    coordinates: Vector3
    offset_x: int
    offset_y: int
    depth: float


@dataclass
class AutoRotationSettings:
    """Continuous rotation applied while no gesture is in progress."""
    enabled: bool = False
    angle: float = 0.001
    """Angle in radians added on every tick"""

    axis: List[float] = field(default_factory=lambda: [1.0, 1.0, 1.0])
    """Rotation axis [X, Y, Z], global frame"""

    interval_ms: int = 10


@dataclass
class CloudSettings:
    """
    Everything the configuration file stores for one tag cloud.
    """
    gesture_enabled: bool = True

    rotation: Quaternion = IDENTITY
    """Initial cloud orientation"""

    touch_slop: float = 8.0
    """Pointer travel in pixels after which a press counts as a drag"""

    fade_to_alpha: float = 0.25
    """Alpha of the farthest items (z = -1)"""

    scale_to: float = 0.5
    """Scale of the farthest items (z = -1)"""

    auto_rotation: AutoRotationSettings = field(default_factory=AutoRotationSettings)
