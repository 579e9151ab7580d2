import math

import pytest

from tagcloud.gesture import ClickDetector, RotateGesture, lift_to_sphere, rotation_between
from tagcloud.state import TagCloudState
from tagcloud.utilities import IDENTITY, Vector3, rotate_vector_by_quaternion

RADIUS = 100


def assert_vectors_close(a, b, tol=1e-9):
    assert a.x == pytest.approx(b.x, abs=tol)
    assert a.y == pytest.approx(b.y, abs=tol)
    assert a.z == pytest.approx(b.z, abs=tol)


# ---------------------------------------------------------------------------
# Sphere lift
# ---------------------------------------------------------------------------

def test_center_lifts_to_front_pole():
    assert lift_to_sphere((RADIUS, RADIUS), RADIUS) == Vector3(0.0, 0.0, 1.0)


def test_edges_lift_to_equator():
    assert_vectors_close(lift_to_sphere((2 * RADIUS, RADIUS), RADIUS), Vector3(1.0, 0.0, 0.0))
    # Screen y grows downwards, sphere y upwards.
    assert_vectors_close(lift_to_sphere((RADIUS, 0), RADIUS), Vector3(0.0, 1.0, 0.0))


def test_point_outside_circle_is_clamped_to_equator():
    lifted = lift_to_sphere((0, 0), RADIUS)
    assert lifted.z == 0.0
    assert_vectors_close(lifted, Vector3(-math.sqrt(0.5), math.sqrt(0.5), 0.0))

    far = lift_to_sphere((5 * RADIUS, RADIUS), RADIUS)
    assert far == Vector3(1.0, 0.0, 0.0)


@pytest.mark.parametrize("point", [(10, 20), (150, 40), (100, 199), (0, 0), (400, -50)])
def test_lifted_points_are_unit_vectors(point):
    assert lift_to_sphere(point, RADIUS).length() == pytest.approx(1.0)


def test_same_point_gives_no_rotation():
    q = rotation_between((120, 80), (120, 80), RADIUS)
    assert q.w == pytest.approx(IDENTITY.w)
    assert q.x == pytest.approx(0.0)
    assert q.y == pytest.approx(0.0)
    assert q.z == pytest.approx(0.0)


def test_drag_right_turns_front_to_the_right():
    q = rotation_between((RADIUS, RADIUS), (RADIUS + 5, RADIUS), RADIUS)
    front = rotate_vector_by_quaternion(Vector3(0.0, 0.0, 1.0), q)
    assert front.x > 0.0
    assert front.y == pytest.approx(0.0)


# ---------------------------------------------------------------------------
# RotateGesture
# ---------------------------------------------------------------------------

class Recorder:
    def __init__(self):
        self.events = []

    def start(self):
        self.events.append("start")

    def end(self):
        self.events.append("end")


def make_gesture(gesture_enabled=True, radius=RADIUS, touch_slop=8.0):
    recorder = Recorder()
    state = TagCloudState(gesture_enabled=gesture_enabled,
                          on_start_gesture=recorder.start,
                          on_end_gesture=recorder.end)
    gesture = RotateGesture(state, radius_provider=lambda: radius, touch_slop=touch_slop)
    return gesture, state, recorder


def test_drag_fires_start_and_end():
    gesture, state, recorder = make_gesture()
    assert gesture.press((100, 100))
    assert gesture.active
    gesture.move((110, 100))
    gesture.release()
    assert recorder.events == ["start", "end"]
    assert not gesture.active


def test_each_move_is_applied_immediately():
    gesture, state, _ = make_gesture()
    gesture.press((100, 100))

    gesture.move((104, 100))
    first = rotation_between((100, 100), (104, 100), RADIUS)
    assert state.rotation == first.compose(IDENTITY)

    gesture.move((104, 107))
    second = rotation_between((104, 100), (104, 107), RADIUS)
    assert state.rotation == second.compose(first.compose(IDENTITY))


def test_move_is_consumed_after_touch_slop():
    gesture, _, _ = make_gesture(touch_slop=8.0)
    gesture.press((100, 100))
    assert gesture.move((103, 100)) is False
    assert gesture.move((109, 100)) is True


def test_disabled_gesture_is_ignored():
    gesture, state, recorder = make_gesture(gesture_enabled=False)
    assert gesture.press((100, 100)) is False
    assert gesture.move((150, 100)) is False
    gesture.release()
    assert state.rotation == IDENTITY
    assert recorder.events == []


def test_disabling_mid_drag_stops_rotation_but_still_ends():
    gesture, state, recorder = make_gesture()
    gesture.press((100, 100))
    state.gesture_enabled = False
    gesture.move((130, 100))
    gesture.release()
    assert state.rotation == IDENTITY
    assert recorder.events == ["start", "end"]


def test_zero_radius_does_not_rotate():
    gesture, state, _ = make_gesture(radius=0)
    gesture.press((0, 0))
    gesture.move((5, 5))
    assert state.rotation == IDENTITY


def test_release_without_press_is_noop():
    gesture, _, recorder = make_gesture()
    gesture.release()
    assert recorder.events == []


# ---------------------------------------------------------------------------
# ClickDetector
# ---------------------------------------------------------------------------

def test_tap_is_a_click():
    clicks = []
    detector = ClickDetector(lambda: clicks.append(1), touch_slop=8.0)
    detector.press((10, 10))
    detector.move((12, 11))
    assert detector.release() is True
    assert clicks == [1]


def test_travel_counts_the_whole_path():
    clicks = []
    detector = ClickDetector(lambda: clicks.append(1), touch_slop=8.0)
    detector.press((10, 10))
    detector.move((15, 10))
    detector.move((10, 10))
    assert detector.release() is False
    assert clicks == []


def test_disabled_detector_never_clicks():
    clicks = []
    detector = ClickDetector(lambda: clicks.append(1), enabled=False)
    detector.press((10, 10))
    assert detector.release() is False
    assert clicks == []


def test_release_without_press_is_not_a_click():
    detector = ClickDetector(lambda: None)
    assert detector.release() is False
