import json

import pytest

from conftest import make_state
from termite_tracker.model.entities import FrameStatus
from termite_tracker.model.frame_store import (
    DocumentParseError,
    FrameNotFoundError,
    FrameStore,
    MissingTemplateError,
    parse_document,
)


def test_empty_document_has_no_frames(tmp_path):
    store = FrameStore.open(tmp_path / "locations.json")
    assert not store.has_frame(0)
    assert store.frame_status(0) is FrameStatus.NOT_ANNOTATED
    with pytest.raises(FrameNotFoundError):
        store.load(0)


def test_save_then_load_returns_same_marker(tmp_path):
    store = FrameStore.open(tmp_path / "locations.json")
    state = make_state(marker_id=1, position=(10, 20), orientation=0.0, caste=0, color=(255, 0, 0))

    store.save(5, [state])

    assert store.load(5) == [state]
    assert store.has_frame(5)
    assert not store.has_frame(4)
    assert store.frame_status(5) is FrameStatus.ANNOTATED
    assert store.annotated_timestamps() == [5]


def test_save_writes_string_keyed_document(tmp_path):
    path = tmp_path / "locations.json"
    store = FrameStore.open(path)
    store.save(3, [make_state(marker_id=2, position=(7, 8), orientation=1.5, caste=1, color=(1, 2, 3))])

    data = json.loads(path.read_text())
    assert data["termites"] == {"2": {"caste": 1, "color": {"r": 1, "g": 2, "b": 3}}}
    assert data["locations"] == {"3": [{"ant_id": 2, "pos_x": 7, "pos_y": 8, "body_rot": 1.5}]}

    reopened = FrameStore.open(path)
    assert reopened.load(3) == store.load(3)


def test_templates_are_last_write_wins(tmp_path):
    store = FrameStore.open(tmp_path / "locations.json")
    store.save(0, [make_state(marker_id=1, color=(255, 0, 0), caste=0)])
    store.save(1, [make_state(marker_id=1, position=(50, 60), color=(0, 0, 255), caste=1)])

    earlier = store.load(0)[0]
    assert earlier.position == (100, 100)
    assert earlier.color == (0, 0, 255)
    assert earlier.caste == 1


def test_save_overwrites_and_empty_frame_counts_as_annotated(tmp_path):
    store = FrameStore.open(tmp_path / "locations.json")
    store.save(2, [make_state(marker_id=1), make_state(marker_id=2)])
    store.save(2, [])
    assert store.has_frame(2)
    assert store.load(2) == []


def test_missing_template_is_an_error():
    document = parse_document({"locations": {"0": [{"ant_id": 9, "pos_x": 1, "pos_y": 2, "body_rot": 0.0}]}})
    store = FrameStore(document=document)
    with pytest.raises(MissingTemplateError):
        store.load(0)


def test_missing_sections_read_as_empty():
    document = parse_document({})
    assert document.templates == {}
    assert document.frames == {}


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"locations": []}',
        '{"termites": {"1": {"caste": 0}}}',
        '{"locations": {"abc": []}}',
        '{"locations": {"0": [{"ant_id": 1}]}}',
    ],
)
def test_malformed_documents_raise_parse_error(tmp_path, content):
    path = tmp_path / "locations.json"
    path.write_text(content)
    with pytest.raises(DocumentParseError):
        FrameStore.open(path)


def test_store_without_path_keeps_document_in_memory():
    store = FrameStore()
    store.save(1, [make_state()])
    assert store.has_frame(1)
