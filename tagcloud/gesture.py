#!/usr/bin/env python3
"""
Module gesture.py
Drag gesture → cloud rotation.

A drag is reported as a stream of 2D pointer positions in the cloud's own
pixel space, where the cloud is a circle of `radius` centered at
(radius, radius). Every pair of successive positions is lifted onto the
front hemisphere of the unit sphere and converted to the incremental
rotation between the two lifted vectors.
"""
import math
from typing import Callable, Optional, Tuple

from tagcloud.state import TagCloudState
from tagcloud.utilities import Quaternion, Vector3

Point = Tuple[float, float]


def lift_to_sphere(point: Point, radius: float) -> Vector3:
    """
    Map a 2D offset to the unit sphere (inverse orthographic projection).

    Points outside the projected circle get z = 0 instead of a NaN.
    """
    x, y = point
    dx = (x - radius) / radius
    dy = -(y - radius) / radius
    radicand = 1.0 - dx * dx - dy * dy
    dz = math.sqrt(radicand) if radicand > 0.0 else 0.0
    return Vector3(dx, dy, dz).normalized()


def rotation_between(from_point: Point, to_point: Point, radius: float) -> Quaternion:
    """Incremental rotation for one drag step."""
    return Quaternion.from_vectors(
        lift_to_sphere(from_point, radius),
        lift_to_sphere(to_point, radius),
    )


def _distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


class RotateGesture:
    """
    Tracks one pointer and rotates the state on every move.

    press → state.on_start_gesture
    move  → state.rotate_by(increment), applied immediately, never batched
    release → state.on_end_gesture

    Args:
      state: the state to rotate
      radius_provider: returns the current cloud radius in pixels
      touch_slop: travel from the press point after which moves are consumed
    """

    def __init__(self, state: TagCloudState,
                 radius_provider: Callable[[], float],
                 touch_slop: float = 8.0):
        self.state = state
        self.radius_provider = radius_provider
        self.touch_slop = touch_slop
        self._down: Optional[Point] = None
        self._current: Optional[Point] = None

    @property
    def active(self) -> bool:
        return self._down is not None

    def press(self, position: Point) -> bool:
        """Start a drag. Returns False when gestures are disabled."""
        if not self.state.gesture_enabled:
            return False
        self._down = position
        self._current = position
        self.state.on_start_gesture()
        return True

    def move(self, position: Point) -> bool:
        """
        Rotate by the step from the previous position to `position`.
        Returns True when the move should be consumed (travel > touch slop).
        """
        if self._down is None:
            return False

        radius = self.radius_provider()
        # Disabling gestures mid-drag stops rotation; release still ends the drag.
        if radius > 0 and self.state.gesture_enabled:
            self.state.rotate_by(rotation_between(self._current, position, radius))
        self._current = position

        return _distance(position, self._down) > self.touch_slop

    def release(self):
        if self._down is None:
            return
        self._down = None
        self._current = None
        self.state.on_end_gesture()


class ClickDetector:
    """
    Tells a tap on an item apart from a drag of the whole cloud.

    Pointer travel is accumulated between press and release; a release with
    travel below touch slop is a click.
    """

    def __init__(self, on_click: Callable[[], None],
                 touch_slop: float = 8.0,
                 enabled: bool = True):
        self.on_click = on_click
        self.touch_slop = touch_slop
        self.enabled = enabled
        self._position: Optional[Point] = None
        self._travel = 0.0

    def press(self, position: Point):
        self._position = position
        self._travel = 0.0

    def move(self, position: Point):
        if self._position is None:
            return
        self._travel += _distance(self._position, position)
        self._position = position

    def release(self) -> bool:
        """Returns True if the release fired on_click."""
        if self._position is None:
            return False
        clicked = self._travel < self.touch_slop and self.enabled
        self._position = None
        self._travel = 0.0
        if clicked:
            self.on_click()
        return clicked
