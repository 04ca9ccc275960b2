"""Registration log: the append-only link between participants and events.

The log never holds event or participant objects. Every operation that
needs live data (slot counts, existence) resolves ids against the owning
store at call time, so events can be sorted, edited or removed without the
log pointing at the wrong record.

Cancelling keeps the record as a tombstone: a pair may accumulate several
CANCELLED records, plus at most one active one.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from datetime import date as date_cls

from eventdesk.errors import AlreadyRegisteredError, NoCapacityError
from eventdesk.models import Registration, RegistrationStatus
from eventdesk.stores.events import EventStore
from eventdesk.stores.participants import ParticipantStore

logger = logging.getLogger(__name__)


class RegistrationLog:
    """Append-mostly collection of registrations, cross-referencing stores by id."""

    def __init__(self, events: EventStore, participants: ParticipantStore) -> None:
        self._events = events
        self._participants = participants
        self._records: list[Registration] = []
        self._lane_locks: dict[int, threading.Lock] = {}  # per-event serialization

    def __iter__(self) -> Iterator[Registration]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    # ── Lane locks (per-event serialization) ─────────────────

    def _get_lane_lock(self, event_id: int) -> threading.Lock:
        if event_id not in self._lane_locks:
            self._lane_locks[event_id] = threading.Lock()
        return self._lane_locks[event_id]

    # ── Queries ──────────────────────────────────────────────

    def exists(self, participant_id: int, event_id: int) -> bool:
        """True if the pair holds a registration that is not cancelled."""
        return any(r.active and r.matches(participant_id, event_id) for r in self._records)

    def list_by_event(self, event_id: int) -> list[Registration]:
        """Confirmed registrations for an event, in log order."""
        return [r for r in self._records if r.confirmed and r.event_id == event_id]

    def list_by_participant(self, participant_id: int) -> list[Registration]:
        """Confirmed registrations held by a participant, in log order."""
        return [r for r in self._records if r.confirmed and r.participant_id == participant_id]

    def active_for_event(self, event_id: int) -> list[Registration]:
        return [r for r in self._records if r.active and r.event_id == event_id]

    def active_for_participant(self, participant_id: int) -> list[Registration]:
        return [r for r in self._records if r.active and r.participant_id == participant_id]

    def history(self, participant_id: int, event_id: int) -> list[Registration]:
        """Every record for the pair, tombstones included. The list index is the ordinal."""
        return [r for r in self._records if r.matches(participant_id, event_id)]

    def count(self) -> int:
        """Total records, cancelled ones included."""
        return len(self._records)

    # ── Mutations ────────────────────────────────────────────

    def register(
        self,
        participant_id: int,
        event_id: int,
        date: str | None = None,
    ) -> Registration:
        """Register a participant for an event and take one slot.

        Raises:
            ParticipantNotFoundError: If the participant does not exist.
            EventNotFoundError: If the event does not exist.
            NoCapacityError: If the event has no available slots.
            AlreadyRegisteredError: If the pair already holds an active registration.
        """
        with self._get_lane_lock(event_id):
            self._participants.get(participant_id)
            event = self._events.get(event_id)
            if event.available <= 0:
                raise NoCapacityError(event_id)
            if self.exists(participant_id, event_id):
                raise AlreadyRegisteredError(participant_id, event_id)

            registration = Registration(
                participant_id=participant_id,
                event_id=event_id,
                date=date or date_cls.today().isoformat(),
                status=RegistrationStatus.CONFIRMED,
            )
            self._records.append(registration)
            event.reserve()

        logger.info(
            "Registered participant %d for event %d (%d/%d slots left)",
            participant_id,
            event_id,
            event.available,
            event.capacity,
        )
        return registration

    def cancel(self, participant_id: int, event_id: int) -> bool:
        """Cancel the pair's confirmed registration and give its slot back.

        Returns False when there is nothing to cancel, whether the pair was
        never registered or is already cancelled.
        """
        with self._get_lane_lock(event_id):
            for registration in self._records:
                if registration.confirmed and registration.matches(participant_id, event_id):
                    self._tombstone(registration)
                    logger.info(
                        "Cancelled registration of participant %d for event %d",
                        participant_id,
                        event_id,
                    )
                    return True
        return False

    def cancel_all(self, registrations: list[Registration]) -> int:
        """Tombstone every given active record. Confirmed ones give their slot back."""
        cancelled = 0
        for registration in registrations:
            if not registration.active:
                continue
            with self._get_lane_lock(registration.event_id):
                self._tombstone(registration)
            cancelled += 1
        return cancelled

    def _tombstone(self, registration: Registration) -> None:
        held_slot = registration.confirmed
        registration.status = RegistrationStatus.CANCELLED
        if held_slot:
            event = self._events.find_by_id(registration.event_id)
            if event is not None:
                event.release()

    def restore(self, registration: Registration) -> None:
        """Append a persisted record as-is. Slot counts are not touched."""
        self._records.append(registration)
