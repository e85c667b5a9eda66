"""Tests for Session bulk state: ingestion, snapshots, reset."""

import json

import pytest

from drill.models import ImportRow
from drill.state import Session


def test_add_items_accepts_rows_and_dicts(session):
    session.add_items([ImportRow(front="cat", back="gato"), {"front": "dog", "back": "perro"}])
    assert [i.front for i in session.items_by_id.values()] == ["cat", "dog"]
    assert set(session.records_by_id) == {0, 1}
    assert session.item_ids_by_answer == {"gato": [0], "perro": [1]}


def test_clear_resets_everything(session):
    session.add_items([{"front": "cat", "back": "gato"}])
    session.get_or_create_child(session.get_item(0), "prefix1")
    session.review(0, 5)
    session.clear()
    assert session.items_by_id == {}
    assert session.records_by_id == {}
    assert session.children_by_parent_id == {}
    assert session.item_ids_by_answer == {}
    assert session.history == []
    assert session.min_id == 0


def test_snapshot_roundtrip_through_json(session, clock, scheduler):
    session.add_items([{"front": "cat", "back": "gato"}, {"front": "dog", "back": "perro"}])
    session.get_or_create_child(session.get_item(0), "prefix1")
    session.review(0, 3)

    data = json.loads(json.dumps(session.snapshot()))
    restored = Session(scheduler=scheduler, clock=clock)
    restored.load_snapshot(data)

    assert restored.items_by_id == session.items_by_id
    assert restored.records_by_id == session.records_by_id
    assert restored.history == session.history
    assert restored.children_by_parent_id == {0: {"prefix1": 2}}
    assert restored.item_ids_by_answer == {"gato": [0, 2], "perro": [1]}
    assert restored.min_id == 3


def test_loaded_session_keeps_allocating_fresh_ids(session, clock, scheduler):
    session.add_items([{"front": "cat", "back": "gato"}])
    restored = Session(scheduler=scheduler, clock=clock)
    restored.load_snapshot(session.snapshot())
    restored.add_items([{"front": "dog", "back": "perro"}])
    assert sorted(restored.items_by_id) == [0, 1]


def test_loaded_child_index_prevents_duplicates(session, clock, scheduler):
    session.add_items([{"front": "cat", "back": "gato"}])
    child = session.get_or_create_child(session.get_item(0), "prefix1")
    restored = Session(scheduler=scheduler, clock=clock)
    restored.load_snapshot(session.snapshot())
    again = restored.get_or_create_child(restored.get_item(0), "prefix1")
    assert again.id == child.id
    assert len(restored.items_by_id) == 2


def test_loaded_history_still_dedups(session, clock, scheduler):
    session.add_items([{"front": "hola", "back": "hello"}, {"front": "buenas", "back": "hello"}])
    session.review(0, 5)
    restored = Session(scheduler=scheduler, clock=clock, skip_window_seconds=20)
    restored.load_snapshot(session.snapshot())
    assert restored.select_next("learn") is None


def test_load_snapshot_rejects_items_without_records(session, clock, scheduler):
    session.add_items([{"front": "cat", "back": "gato"}])
    data = session.snapshot()
    data["records"] = {}
    restored = Session(scheduler=scheduler, clock=clock)
    with pytest.raises(ValueError):
        restored.load_snapshot(data)


def test_load_snapshot_rejects_records_without_items(session, clock, scheduler):
    session.add_items([{"front": "cat", "back": "gato"}])
    data = session.snapshot()
    data["records"][5] = data["records"][0]
    restored = Session(scheduler=scheduler, clock=clock)
    with pytest.raises(ValueError):
        restored.load_snapshot(data)
    assert restored.records_by_id == {}


def test_cards_sorted_by_due(session, clock):
    session.add_items([{"front": "a", "back": "1"}, {"front": "b", "back": "2"}])
    session.review(0, 5)
    assert [c.id for c in session.cards()] == [1, 0]
