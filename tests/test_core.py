"""Tests for the EventDesk facade."""

from __future__ import annotations

from pathlib import Path

import pytest

from eventdesk.config import EventDeskConfig
from eventdesk.core import EventDesk
from eventdesk.errors import ActiveRegistrationsError, AlreadyRegisteredError, NoCapacityError
from eventdesk.models import RegistrationStatus


@pytest.fixture
def config(tmp_path: Path) -> EventDeskConfig:
    return EventDeskConfig(data_dir=tmp_path / "data")


@pytest.fixture
def desk(config: EventDeskConfig) -> EventDesk:
    return EventDesk(config)


class TestScenarios:
    def test_register_cancel_sort(self, desk: EventDesk):
        e1 = desk.events.add("E1", "", "Tech", "2025-03-01", 2)
        e2 = desk.events.add("E2", "", "Tech", "2025-01-10", 1)
        p1 = desk.participants.add("P1", "p1@x", "1")

        desk.registrations.register(p1, e1)
        assert desk.events.get(e1).available == 1
        with pytest.raises(AlreadyRegisteredError):
            desk.registrations.register(p1, e1)
        assert desk.registrations.cancel(p1, e1) is True
        assert desk.events.get(e1).available == 2

        desk.sort_events()
        assert [e.id for e in desk.events.list()] == [e2, e1]

    def test_last_slot(self, desk: EventDesk):
        e2 = desk.events.add("E2", "", "Tech", "2025-01-10", 1)
        p1 = desk.participants.add("P1", "p1@x", "1")
        p2 = desk.participants.add("P2", "p2@x", "2")

        desk.registrations.register(p1, e2)
        with pytest.raises(NoCapacityError):
            desk.registrations.register(p2, e2)


class TestPersistence:
    def test_save_and_reload(self, config: EventDeskConfig):
        desk = EventDesk(config)
        e = desk.events.add("E", "", "Tech", "2025-01-10", 3)
        p = desk.participants.add("P", "p@x", "1")
        desk.registrations.register(p, e, "2025-01-01")
        assert desk.save() is True
        assert (config.data_dir / "eventos.csv").exists()

        reloaded = EventDesk(config)
        report = reloaded.load()
        assert report.skipped == 0
        assert reloaded.registrations.exists(p, e)
        assert reloaded.events.get(e).available == 2
        assert reloaded.events.add("Next", "", "", "2025-02-01", 1) == e + 1

    def test_load_from_empty_dir(self, desk: EventDesk):
        report = desk.load()
        assert report.events == 0
        assert desk.events.count() == 0


class TestRemovalPolicy:
    def test_reject_event_with_active_registrations(self, desk: EventDesk):
        e = desk.events.add("E", "", "Tech", "2025-01-10", 3)
        p = desk.participants.add("P", "p@x", "1")
        desk.registrations.register(p, e)

        with pytest.raises(ActiveRegistrationsError) as exc:
            desk.remove_event(e)
        assert exc.value.active == 1
        assert e in desk.events

    def test_remove_event_after_cancellation(self, desk: EventDesk):
        e = desk.events.add("E", "", "Tech", "2025-01-10", 3)
        p = desk.participants.add("P", "p@x", "1")
        desk.registrations.register(p, e)
        desk.registrations.cancel(p, e)

        assert desk.remove_event(e) is True
        assert desk.registrations.count() == 1

    def test_cascade_event(self, desk: EventDesk):
        e = desk.events.add("E", "", "Tech", "2025-01-10", 3)
        p1 = desk.participants.add("P1", "p1@x", "1")
        p2 = desk.participants.add("P2", "p2@x", "2")
        desk.registrations.register(p1, e)
        desk.registrations.register(p2, e)

        assert desk.remove_event(e, policy="cascade") is True
        assert e not in desk.events
        assert all(r.status == RegistrationStatus.CANCELLED for r in desk.registrations)
        assert desk.registrations.count() == 2

    def test_cascade_from_config(self, tmp_path: Path):
        desk = EventDesk(EventDeskConfig(data_dir=tmp_path, removal_policy="cascade"))
        e = desk.events.add("E", "", "Tech", "2025-01-10", 3)
        p = desk.participants.add("P", "p@x", "1")
        desk.registrations.register(p, e)

        assert desk.remove_participant(p) is True
        assert desk.registrations.list_by_participant(p) == []
        assert desk.events.get(e).available == 3

    def test_reject_participant(self, desk: EventDesk):
        e = desk.events.add("E", "", "Tech", "2025-01-10", 3)
        p = desk.participants.add("P", "p@x", "1")
        desk.registrations.register(p, e)

        with pytest.raises(ActiveRegistrationsError):
            desk.remove_participant(p)
        assert p in desk.participants

    def test_unknown_policy_rejected(self, desk: EventDesk):
        e = desk.events.add("E", "", "Tech", "2025-01-10", 3)
        p = desk.participants.add("P", "p@x", "1")
        desk.registrations.register(p, e)

        with pytest.raises(ValueError):
            desk.remove_event(e, policy="rejct")
        with pytest.raises(ValueError):
            desk.remove_participant(p, policy="rejct")
        assert e in desk.events
        assert p in desk.participants
        assert desk.registrations.exists(p, e)
        assert desk.events.get(e).available == 2

    def test_cascade_tombstones_dropped_on_reload(self, config: EventDeskConfig):
        desk = EventDesk(config)
        e = desk.events.add("E", "", "Tech", "2025-01-10", 3)
        p = desk.participants.add("P", "p@x", "1")
        desk.registrations.register(p, e, "2025-01-01")
        desk.remove_event(e, policy="cascade")
        assert desk.registrations.count() == 1
        assert desk.save() is True

        reloaded = EventDesk(config)
        report = reloaded.load()
        assert report.dangling == 1
        assert reloaded.registrations.count() == 0

    def test_remove_missing(self, desk: EventDesk):
        assert desk.remove_event(5) is False
        assert desk.remove_participant(5) is False


class TestStats:
    def test_stats(self, desk: EventDesk):
        e1 = desk.events.add("E1", "", "Tech", "2025-01-10", 3)
        desk.events.add("E2", "", "Tech", "2025-02-10", 3)
        p = desk.participants.add("P", "p@x", "1")
        desk.registrations.register(p, e1)

        stats = desk.stats()
        assert stats.total_events == 2
        assert stats.total_participants == 1
        assert stats.total_registrations == 1
        assert stats.mean_registrations_per_event == 0.5
        assert stats.busiest_event.id == e1
