#!/usr/bin/env python3
"""
Module auto_rotation.py
Continuous rotation of a tag cloud, driven by the host event loop.

The rotator never starts a thread. It re-arms itself through a
`schedule(delay_ms, callback)` function (tkinter's `root.after` has this
signature), so every rotation happens on the loop that also delivers
gesture events. Gesture start must pause it and gesture end resume it,
otherwise both sources rotate the same state in between frames.
"""
from typing import Any, Callable, Optional

from tagcloud.state import TagCloudState
from tagcloud.utilities import ZERO, Vector3

Schedule = Callable[[int, Callable[[], None]], Any]


class AutoRotator:
    """
    Rotates `state` by `angle` around the global `axis` every `interval_ms`.
    """

    def __init__(self, state: TagCloudState, schedule: Schedule,
                 angle: float = 0.001,
                 axis: Vector3 = Vector3(1.0, 1.0, 1.0),
                 interval_ms: int = 10,
                 log_callback: Optional[Callable] = None):
        self.state = state
        self.schedule = schedule
        self.angle = angle
        self.axis = axis
        self.interval_ms = interval_ms
        self.log_callback = log_callback

        self.running = False
        self.paused = False
        self.ticks = 0
        # Incremented on every start/resume; stale callbacks see an old value.
        self._generation = 0

    def log(self, message: str, level: str = "INFO"):
        if self.log_callback:
            self.log_callback(message, level)

    def start(self, paused: bool = False):
        """
        Start rotating. With `paused` set nothing is scheduled until resume(),
        for a start that happens while a drag is in progress.
        """
        if self.running:
            self.log("Auto rotation already running", "WARN")
            return
        self.running = True
        self.paused = paused
        if not paused:
            self._arm()
        self.log("Auto rotation started")

    def stop(self):
        if not self.running:
            return
        self.running = False
        self._generation += 1
        self.log("Auto rotation stopped")

    def pause(self):
        """Called on gesture start."""
        if self.running and not self.paused:
            self.paused = True
            self._generation += 1

    def resume(self):
        """Called on gesture end."""
        if self.running and self.paused:
            self.paused = False
            self._arm()

    def tick(self):
        """One rotation step. Public so hosts with their own frame clock can drive it."""
        # A zero axis has no direction to turn around.
        if self.axis != ZERO:
            self.state.rotate_by_angle(self.angle, self.axis)
        self.ticks += 1

    def _arm(self):
        self._generation += 1
        generation = self._generation
        self.schedule(self.interval_ms, lambda: self._on_timer(generation))

    def _on_timer(self, generation: int):
        if generation != self._generation or not self.running or self.paused:
            return
        self.tick()
        self._arm()
