# tests/test_clock_collection.py
import pytest

from clockboard_qt.services.clock_collection import ChangeKind, ClockCollection
from clockboard_qt.utils.errors import (
    ClockNotFoundError,
    IndexOutOfRangeError,
    UnknownTimeZoneError,
)


@pytest.fixture
def collection(make_clocks):
    return ClockCollection(make_clocks("A", "B", "C", "D", "E"))


@pytest.fixture
def events(collection):
    received = []
    collection.changed.connect(received.append)
    return received


def order(collection):
    return [entity.location for entity in collection]


def test_add_appends_and_returns_index(make_clocks):
    collection = ClockCollection()
    received = []
    collection.changed.connect(received.append)

    (first,) = make_clocks("Tokyo")
    (second,) = make_clocks("Paris")
    assert collection.add(first) == 0
    assert collection.add(second) == 1
    assert order(collection) == ["Tokyo", "Paris"]
    assert [e.kind for e in received] == [ChangeKind.ADDED, ChangeKind.ADDED]
    assert received[1].clock_id == second.clock_id and received[1].index == 1


def test_remove_at(collection, events):
    removed = collection.remove_at(2)
    assert removed.location == "C"
    assert order(collection) == ["A", "B", "D", "E"]
    assert events[-1].kind == ChangeKind.REMOVED
    assert events[-1].old_index == 2


def test_remove_by_id(collection):
    target = collection[3]
    collection.remove(target.clock_id)
    assert target.clock_id not in collection.ids()


@pytest.mark.parametrize("index", [-1, 5, 99])
def test_remove_at_out_of_range(collection, events, index):
    with pytest.raises(IndexOutOfRangeError):
        collection.remove_at(index)
    assert len(collection) == 5
    assert events == []


def test_unknown_id_raises(collection):
    with pytest.raises(ClockNotFoundError):
        collection.remove("missing")
    with pytest.raises(KeyError):
        collection.index_of("missing")


def test_move_up_and_down(collection):
    assert collection.move_up_at(2)
    assert order(collection) == ["A", "C", "B", "D", "E"]
    assert collection.move_down_at(0)
    assert order(collection) == ["C", "A", "B", "D", "E"]


def test_move_boundaries_are_noops(collection, events):
    assert not collection.move_up_at(0)
    assert not collection.move_down_at(4)
    assert order(collection) == ["A", "B", "C", "D", "E"]
    assert events == []


def test_move_by_id_signals(collection):
    moved = []
    collection.clock_moved.connect(lambda cid, old, new: moved.append((cid, old, new)))
    clock_id = collection[1].clock_id

    collection.move_down(clock_id)

    assert moved == [(clock_id, 1, 2)]


def test_drag_upwards_inserts_at_target(collection):
    assert collection.move_to(3, 1)
    assert order(collection) == ["A", "D", "B", "C", "E"]


def test_drag_downwards_lands_before_target(collection):
    assert collection.move_to(1, 3)
    assert order(collection) == ["A", "C", "B", "D", "E"]


def test_drag_onto_next_neighbour_changes_nothing(collection, events):
    assert not collection.move_to(1, 2)
    assert order(collection) == ["A", "B", "C", "D", "E"]
    assert events == []


def test_drag_onto_self_is_noop(collection, events):
    assert not collection.move_to(2, 2)
    assert events == []


def test_drag_out_of_range(collection):
    with pytest.raises(IndexOutOfRangeError):
        collection.move_to(0, 5)


def test_move_by_ids(collection):
    source, target = collection[4].clock_id, collection[0].clock_id
    collection.move(source, target)
    assert order(collection) == ["E", "A", "B", "C", "D"]


def test_edit(collection, events):
    clock_id = collection[0].clock_id
    collection.edit(clock_id, "Europe/Berlin", ["Berlin"])
    assert collection[0].time_zone_id == "Europe/Berlin"
    assert events[-1].kind == ChangeKind.EDITED
    assert events[-1].clock_id == clock_id


def test_failed_edit_leaves_clock_and_emits_nothing(collection, events):
    clock_id = collection[0].clock_id
    with pytest.raises(UnknownTimeZoneError):
        collection.edit(clock_id, "Bad/Zone", ["x"])
    assert collection[0].time_zone_id == "UTC"
    assert events == []


def test_global_format_broadcast(collection):
    received = []
    collection.format_changed.connect(received.append)

    collection.set_global_format(True)

    assert collection.global_format is True
    assert all(entity.is_24_hour for entity in collection)
    assert received == [True]


def test_clocks_added_later_keep_their_own_format(collection, make_clocks):
    collection.set_global_format(True)
    (late,) = make_clocks("Late")
    collection.add(late)
    assert late.is_24_hour is False


def test_replace_all(collection, make_clocks, events):
    collection.replace_all(make_clocks("X", "Y"), True)
    assert order(collection) == ["X", "Y"]
    assert collection.global_format is True
    assert events[-1].kind == ChangeKind.RESET


def test_iteration_is_a_snapshot(collection):
    for entity in collection:
        collection.remove(entity.clock_id)
    assert len(collection) == 0
