#!/usr/bin/env python3
"""
Module tag_cloud.py
Tag cloud controller.

Ties the pieces together for a host that owns the event loop:

  - item registry (TagCloudScope) rebuilt from a content function
  - orientation state (TagCloudState) and its change notification
  - radius cache, updated by measure() on every layout pass
  - drag gesture tracker feeding rotations into the state
  - optional auto rotation, paused while a drag is in progress

The host calls measure() and layout() when `dirty` is set, draws the
placements in draw_order(), and forwards pointer events to
press()/move()/release().
"""
from datetime import datetime
from typing import Callable, List, Optional, Sequence

import numpy as np

from tagcloud.auto_rotation import AutoRotator, Schedule
from tagcloud.data_structures import CloudSettings, Placement
from tagcloud.gesture import Point, RotateGesture
from tagcloud.layout import (
    Size, TagCloudItemScope, TagCloudScope, draw_order, layout_items
)
from tagcloud.state import TagCloudState
from tagcloud.utilities import Quaternion, Vector3, rotate_points


class TagCloud:
    """
    One tag cloud instance. Owns its state exclusively; all methods must be
    called from the same loop.
    """

    def __init__(self,
                 settings: Optional[CloudSettings] = None,
                 state: Optional[TagCloudState] = None,
                 log_callback: Optional[Callable] = None,
                 schedule: Optional[Schedule] = None):
        self.settings = settings or CloudSettings()
        self.log_callback = log_callback

        if state is None:
            state = TagCloudState(
                gesture_enabled=self.settings.gesture_enabled,
                rotation=self.settings.rotation,
            )
        self.state = state
        # Chain the caller's gesture callbacks behind our own.
        self._user_on_start = state.on_start_gesture
        self._user_on_end = state.on_end_gesture
        state.on_start_gesture = self._on_gesture_start
        state.on_end_gesture = self._on_gesture_end
        state.add_listener(self._on_rotation_changed)

        self.scope = TagCloudScope()
        self.radius = 0
        self.dirty = True

        self.gesture = RotateGesture(
            state,
            radius_provider=lambda: self.radius,
            touch_slop=self.settings.touch_slop,
        )
        self.auto_rotator: Optional[AutoRotator] = None
        if self.settings.auto_rotation.enabled:
            if schedule is None:
                self.log("Auto rotation enabled but no scheduler given", "WARN")
            else:
                self.start_auto_rotation(schedule)

    def log(self, message: str, level: str = "INFO"):
        timestamp = datetime.now().strftime("%H:%M:%S")
        log_line = f"[{timestamp}] {message}"
        print(log_line)
        if self.log_callback:
            self.log_callback(message, level)

    # -------------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------------

    def build(self, content: Callable[[TagCloudScope], None]):
        """Rebuild the item registry by running `content` on an empty scope."""
        self.scope.clear()
        content(self.scope)
        self.dirty = True
        self.log(f"Registered {len(self.scope)} items")

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    def measure(self, width: int, height: int) -> int:
        """Update the cached radius from the available bounds."""
        radius = min(width, height) // 2
        if radius != self.radius:
            self.radius = radius
            self.dirty = True
        return self.radius

    def layout(self, sizes: Optional[Sequence[Size]] = None) -> List[Placement]:
        """Placements of all items for the current rotation, registration order."""
        placements = layout_items(self.scope.registered, self.state.rotation,
                                  self.radius, sizes)
        self.dirty = False
        return placements

    def draw_list(self, sizes: Optional[Sequence[Size]] = None) -> List[Placement]:
        return draw_order(self.layout(sizes))

    def item_scope(self, placement: Placement) -> TagCloudItemScope:
        return TagCloudItemScope(placement.coordinates)

    def alpha(self, placement: Placement) -> float:
        return self.item_scope(placement).fade(self.settings.fade_to_alpha)

    def scale(self, placement: Placement) -> float:
        return self.item_scope(placement).scale_down(self.settings.scale_to)

    def snapshot(self) -> np.ndarray:
        """Rotated coordinates of all items as an (N, 3) array."""
        static = np.array([item.coordinates.as_list() for item in self.scope.registered],
                          dtype=float).reshape(-1, 3)
        return rotate_points(static, self.state.rotation)

    # -------------------------------------------------------------------------
    # Rotation
    # -------------------------------------------------------------------------

    def rotate_by(self, quaternion: Quaternion, global_axis: bool = True):
        self.state.rotate_by(quaternion, global_axis)

    def rotate_by_angle(self, angle: float, vector: Vector3, global_axis: bool = True):
        self.state.rotate_by_angle(angle, vector, global_axis)

    def rotate_to(self, quaternion: Quaternion):
        self.state.rotate_to(quaternion)

    def _on_rotation_changed(self, rotation: Quaternion):
        self.dirty = True

    # -------------------------------------------------------------------------
    # Pointer events
    # -------------------------------------------------------------------------

    def press(self, position: Point) -> bool:
        return self.gesture.press(position)

    def move(self, position: Point) -> bool:
        return self.gesture.move(position)

    def release(self):
        self.gesture.release()

    def _on_gesture_start(self):
        if self.auto_rotator:
            self.auto_rotator.pause()
        self.log("Rotation gesture started")
        self._user_on_start()

    def _on_gesture_end(self):
        self.log("Rotation gesture ended")
        self._user_on_end()
        if self.auto_rotator:
            self.auto_rotator.resume()

    # -------------------------------------------------------------------------
    # Auto rotation
    # -------------------------------------------------------------------------

    def start_auto_rotation(self, schedule: Schedule) -> AutoRotator:
        """
        Start continuous rotation using the host's `schedule(delay_ms, callback)`.
        Angle, axis and interval come from settings.auto_rotation.
        Called from __init__ when settings.auto_rotation.enabled is set and a
        schedule is given.
        """
        if self.auto_rotator is None:
            auto = self.settings.auto_rotation
            self.auto_rotator = AutoRotator(
                self.state, schedule,
                angle=auto.angle,
                axis=Vector3(*auto.axis),
                interval_ms=auto.interval_ms,
                log_callback=self.log_callback,
            )
        # A drag already in progress keeps it paused until release.
        self.auto_rotator.start(paused=self.gesture.active)
        return self.auto_rotator

    def stop_auto_rotation(self):
        if self.auto_rotator:
            self.auto_rotator.stop()
