import math

import pytest

from conftest import make_state
from termite_tracker.model.draw_order import opacity_for_rank, resolve_draw_order
from termite_tracker.model.entities import DragResult
from termite_tracker.model.markers import Marker, PointerInput
from termite_tracker.model.settings import MarkerSettings

VIEWPORT = (640, 480)


def assert_body_attached(marker: Marker) -> None:
    length = marker.geometry.body_length
    assert marker.body[0] == pytest.approx(marker.head[0] + length * math.cos(marker.orientation))
    assert marker.body[1] == pytest.approx(marker.head[1] + length * math.sin(marker.orientation))


def test_body_is_placed_along_orientation(clock):
    marker = Marker(make_state(position=(100, 100), orientation=math.pi / 2), VIEWPORT, clock=clock)
    assert marker.body == pytest.approx((100.0, 140.0))
    assert_body_attached(marker)


def test_head_grab_moves_head_and_body(clock):
    marker = Marker(make_state(position=(100, 100)), VIEWPORT, clock=clock)
    assert marker.update(PointerInput(position=(102, 101), pressed=True)) is DragResult.HEAD_GRABBED
    assert marker.last_update_time == 1.0

    result = marker.update(PointerInput(position=(112, 96), delta=(10, -5)))
    assert result is DragResult.HEAD_GRABBED
    assert marker.head == (110, 95)
    assert_body_attached(marker)


def test_head_is_clamped_per_axis(clock):
    marker = Marker(make_state(position=(5, 470)), VIEWPORT, clock=clock)
    marker.try_begin_drag((5, 470))
    marker.update_drag((-50, 50), (0, 0))
    assert marker.head == (0, 480)
    marker.update_drag((1000, -1000), (0, 0))
    assert marker.head == (640, 0)
    assert_body_attached(marker)


def test_rotation_keys_only_apply_while_head_is_grabbed(clock):
    geometry = MarkerSettings(rotation_step=0.1)
    marker = Marker(make_state(orientation=1.0), VIEWPORT, geometry=geometry, clock=clock)

    marker.update(PointerInput(rotate_left=True))
    assert marker.orientation == pytest.approx(1.0)

    marker.try_begin_drag(marker.head)
    marker.update(PointerInput(rotate_left=True))
    assert marker.orientation == pytest.approx(1.1)
    marker.update(PointerInput(rotate_right=True))
    marker.update(PointerInput(rotate_right=True))
    assert marker.orientation == pytest.approx(0.9)
    marker.update(PointerInput(rotate_left=True, rotate_right=True))
    assert marker.orientation == pytest.approx(1.0)
    assert_body_attached(marker)


def test_body_grab_turns_body_towards_cursor(clock):
    marker = Marker(make_state(position=(100, 100), orientation=0.0), VIEWPORT, clock=clock)
    assert marker.try_begin_drag((140, 100)) is DragResult.BODY_GRABBED

    assert marker.update(PointerInput(position=(100, 300), delta=(-40, 200))) is DragResult.BODY_GRABBED
    assert marker.head == (100, 100)
    assert marker.body == pytest.approx((100.0, 140.0))
    assert_body_attached(marker)

    marker.update(PointerInput(position=(20, 100)))
    assert marker.body == pytest.approx((60.0, 100.0))


def test_release_ends_grab(clock):
    marker = Marker(make_state(), VIEWPORT, clock=clock)
    marker.try_begin_drag(marker.head)
    assert marker.update(PointerInput(position=marker.head, released=True)) is DragResult.RELEASED
    assert not marker.is_grabbed
    assert marker.update(PointerInput(delta=(5, 5))) is DragResult.IDLE


def test_click_outside_marker_is_idle(clock):
    marker = Marker(make_state(position=(100, 100)), VIEWPORT, clock=clock)
    assert marker.update(PointerInput(position=(300, 300), pressed=True)) is DragResult.IDLE
    assert marker.last_update_time == 0.0


def test_head_wins_when_head_and_body_overlap(clock):
    geometry = MarkerSettings(body_length=4)
    marker = Marker(make_state(position=(100, 100)), VIEWPORT, geometry=geometry, clock=clock)
    assert marker.hits_body((103, 100))
    assert marker.try_begin_drag((103, 100)) is DragResult.HEAD_GRABBED


def test_state_round_trip_drops_grab(clock):
    state = make_state(marker_id=7, position=(10, 20), orientation=0.5, caste=1, color=(1, 2, 3))
    marker = Marker(state, VIEWPORT, clock=clock)
    assert marker.state() == state

    marker.try_begin_drag(marker.head)
    marker.apply_state(make_state(marker_id=7, position=(30, 40), color=[4, 5, 6]))
    assert not marker.is_grabbed
    assert marker.head == (30, 40)
    assert marker.color == (4, 5, 6)
    assert_body_attached(marker)


def test_draw_order_prefers_recent_and_is_stable(clock):
    markers = [Marker(make_state(marker_id=i), VIEWPORT, clock=clock) for i in range(4)]
    assert resolve_draw_order(markers) == [0, 1, 2, 3]

    markers[2].last_update_time = 5.0
    markers[3].last_update_time = 9.0
    markers[0].last_update_time = 5.0
    assert resolve_draw_order(markers) == [3, 0, 2, 1]


def test_opacity_for_rank():
    assert opacity_for_rank(0) == 150
    assert opacity_for_rank(1) == 80
    assert opacity_for_rank(5, active_alpha=200, inactive_alpha=10) == 10
