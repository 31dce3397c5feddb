import cv2
import numpy as np
import pytest

from termite_tracker.model.timeline import TimelineController
from termite_tracker.model.video import VideoPlayer


@pytest.fixture
def clip_path(tmp_path):
    path = tmp_path / "clip.avi"
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), 10.0, (64, 48))
    if not writer.isOpened():
        pytest.skip("MJPG writer unavailable in this OpenCV build")
    for index in range(10):
        writer.write(np.full((48, 64, 3), index * 20, dtype=np.uint8))
    writer.release()
    return path


@pytest.fixture
def player(clip_path):
    player = VideoPlayer()
    player.load(str(clip_path))
    player.read_first_frame()
    yield player
    player.release()


def test_load_reports_length(player):
    assert player.current_frame_index == 0
    assert player.current_frame is not None
    assert player.length_sec == pytest.approx(1.0)


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(ValueError):
        VideoPlayer().load(str(tmp_path / "missing.avi"))


def test_seek_sec_lands_on_first_frame_at_or_after_time(player):
    player.seek_sec(0.5)
    assert player.current_frame_index == 5

    player.seek_sec(0.25)
    assert player.current_frame_index == 3


def test_seek_sec_keeps_bucket_start_inside_bucket(player):
    timeline = TimelineController(player, bucket_sec=0.3)

    timeline.set_timestamp(1)

    assert player.current_frame_index == 3
    assert timeline.current_timestamp() == 1


def test_advance_frame_steps_and_loops(player):
    player.seek(2)
    player.advance_frame()
    assert player.current_frame_index == 3
    assert player.position_sec == pytest.approx(0.3)

    player.seek(9)
    player.advance_frame()
    assert player.current_frame_index == 0
