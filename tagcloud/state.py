#!/usr/bin/env python3
"""
Module state.py
Orientation state of a tag cloud.

The state owns a single rotation quaternion. It is changed only through
rotate_by / rotate_to, from the loop that drives layout and gestures.
Listeners are notified after every change so the host can re-layout.
"""
from typing import Callable, List, Optional, Sequence

from tagcloud.utilities import Quaternion, Vector3, IDENTITY


def _noop():
    pass


class TagCloudState:
    """
    State of a tag cloud: current rotation plus the gesture flag.

    Args:
      gesture_enabled: True if drag rotation is enabled
      rotation: initial rotation of the cloud
      on_start_gesture: invoked when a drag gesture starts
      on_end_gesture: invoked when a drag gesture ends
    """

    def __init__(self,
                 gesture_enabled: bool = True,
                 rotation: Quaternion = IDENTITY,
                 on_start_gesture: Optional[Callable[[], None]] = None,
                 on_end_gesture: Optional[Callable[[], None]] = None):
        self.gesture_enabled = gesture_enabled
        self._rotation = rotation
        self.on_start_gesture = on_start_gesture or _noop
        self.on_end_gesture = on_end_gesture or _noop
        self._listeners: List[Callable[[Quaternion], None]] = []

    @property
    def rotation(self) -> Quaternion:
        """The current rotation of the cloud."""
        return self._rotation

    # -------------------------------------------------------------------------
    # Rotation
    # -------------------------------------------------------------------------

    def rotate_by(self, quaternion: Quaternion, global_axis: bool = True):
        """
        Rotate the cloud by `quaternion`.

        global_axis=True rotates around world axes (quaternion ∘ current),
        False around the cloud's own rotated axes (current ∘ quaternion).
        """
        if global_axis:
            self.rotate_to(quaternion.compose(self._rotation))
        else:
            self.rotate_to(self._rotation.compose(quaternion))

    def rotate_by_angle(self, angle: float, vector: Vector3, global_axis: bool = True):
        self.rotate_by(Quaternion.create(angle, vector), global_axis)

    def rotate_to(self, quaternion: Quaternion):
        """Replace the rotation, ignoring the current one."""
        if quaternion == self._rotation:
            return
        self._rotation = quaternion
        for listener in list(self._listeners):
            listener(quaternion)

    def rotate_to_angle(self, angle: float, vector: Vector3):
        self.rotate_to(Quaternion.create(angle, vector))

    # -------------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------------

    def add_listener(self, callback: Callable[[Quaternion], None]):
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[Quaternion], None]):
        if callback in self._listeners:
            self._listeners.remove(callback)

    # -------------------------------------------------------------------------
    # Save / restore
    # -------------------------------------------------------------------------

    def save(self) -> list:
        """[gesture_enabled, W, X, Y, Z]"""
        r = self._rotation
        return [self.gesture_enabled, r.w, r.x, r.y, r.z]

    @classmethod
    def restore(cls, saved: Sequence,
                on_start_gesture: Optional[Callable[[], None]] = None,
                on_end_gesture: Optional[Callable[[], None]] = None) -> "TagCloudState":
        """Inverse of save(). Callbacks are not persisted and must be passed again."""
        gesture_enabled, w, x, y, z = saved
        return cls(
            gesture_enabled=bool(gesture_enabled),
            rotation=Quaternion.of(float(w), float(x), float(y), float(z)),
            on_start_gesture=on_start_gesture,
            on_end_gesture=on_end_gesture,
        )
