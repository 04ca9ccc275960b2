"""Tests for the participant ring."""

from __future__ import annotations

import pytest

from eventdesk.errors import MalformedRecordError, ParticipantNotFoundError
from eventdesk.models import PHONE_MAX, Participant
from eventdesk.stores import ParticipantStore


@pytest.fixture
def store() -> ParticipantStore:
    return ParticipantStore()


def _ids(store: ParticipantStore) -> list[int]:
    return [p.id for p in store.list()]


def _fill(store: ParticipantStore, *names: str) -> list[int]:
    return [store.add(name, f"{name.lower()}@example.com", "555-0100") for name in names]


class TestRing:
    def test_empty(self, store: ParticipantStore):
        assert store.list() == []
        assert store.count() == 0

    def test_insertion_order(self, store: ParticipantStore):
        ids = _fill(store, "Ana", "Bruno", "Carla")
        assert _ids(store) == ids

    def test_each_element_visited_once(self, store: ParticipantStore):
        _fill(store, "Ana", "Bruno", "Carla", "Davi")
        ids = _ids(store)
        assert len(ids) == len(set(ids)) == 4

    def test_remove_sole_element_empties(self, store: ParticipantStore):
        (only,) = _fill(store, "Ana")
        assert store.remove(only) is True
        assert store.count() == 0
        assert store.list() == []

    def test_remove_head_promotes_successor(self, store: ParticipantStore):
        a, b, c = _fill(store, "Ana", "Bruno", "Carla")
        store.remove(a)
        assert _ids(store) == [b, c]

    def test_remove_middle_and_last(self, store: ParticipantStore):
        a, b, c, d = _fill(store, "Ana", "Bruno", "Carla", "Davi")
        store.remove(c)
        assert _ids(store) == [a, b, d]
        store.remove(d)
        assert _ids(store) == [a, b]

    def test_add_after_head_removal_appends_to_end(self, store: ParticipantStore):
        a, b, c = _fill(store, "Ana", "Bruno", "Carla")
        store.remove(a)
        (d,) = _fill(store, "Davi")
        assert _ids(store) == [b, c, d]
        store.remove(b)
        (e,) = _fill(store, "Eva")
        assert _ids(store) == [c, d, e]

    def test_reuse_after_emptying(self, store: ParticipantStore):
        (a,) = _fill(store, "Ana")
        store.remove(a)
        b, c = _fill(store, "Bruno", "Carla")
        assert _ids(store) == [b, c]
        assert b == 2

    def test_remove_missing(self, store: ParticipantStore):
        _fill(store, "Ana")
        assert store.remove(99) is False
        assert store.count() == 1


class TestLookup:
    def test_find_by_id(self, store: ParticipantStore):
        _, b = _fill(store, "Ana", "Bruno")
        assert store.find_by_id(b).name == "Bruno"
        assert b in store

    def test_find_missing(self, store: ParticipantStore):
        assert store.find_by_id(1) is None
        assert 1 not in store

    def test_get_missing_raises(self, store: ParticipantStore):
        with pytest.raises(ParticipantNotFoundError) as exc:
            store.get(5)
        assert exc.value.participant_id == 5


class TestEdit:
    def test_partial_edit(self, store: ParticipantStore):
        (a,) = _fill(store, "Ana")
        participant = store.edit(a, email="ana@work.example")
        assert participant.email == "ana@work.example"
        assert participant.name == "Ana"
        assert participant.phone == "555-0100"

    def test_phone_is_clipped(self, store: ParticipantStore):
        (a,) = _fill(store, "Ana")
        participant = store.edit(a, phone="9" * 40)
        assert len(participant.phone) == PHONE_MAX

    def test_edit_missing_raises(self, store: ParticipantStore):
        with pytest.raises(ParticipantNotFoundError):
            store.edit(3, name="x")


class TestRestore:
    def test_restore_keeps_ids_and_order(self, store: ParticipantStore):
        store.restore(Participant(4, "Ana", "a@x", "1"))
        store.restore(Participant(2, "Bruno", "b@x", "2"))
        assert _ids(store) == [4, 2]
        assert store.next_id == 5

    def test_restore_duplicate_id(self, store: ParticipantStore):
        store.restore(Participant(1, "Ana", "a@x", "1"))
        with pytest.raises(MalformedRecordError):
            store.restore(Participant(1, "Ana again", "a@x", "1"))
