"""Event store: insertion-ordered events and their slot bookkeeping."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from eventdesk.errors import EventNotFoundError, MalformedRecordError
from eventdesk.models import CATEGORY_MAX, DESCRIPTION_MAX, NAME_MAX, Event, check_date, clip
from eventdesk.sorting import sort_events_by_date

logger = logging.getLogger(__name__)


class EventStore:
    """Ordered collection of events owning the event id counter."""

    def __init__(self, next_id: int = 1) -> None:
        self._events: list[Event] = []
        self._next_id = next_id

    @property
    def next_id(self) -> int:
        return self._next_id

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, event_id: object) -> bool:
        return any(event.id == event_id for event in self._events)

    # ── CRUD ─────────────────────────────────────────────────

    def add(
        self,
        name: str,
        description: str,
        category: str,
        date: str,
        capacity: int,
    ) -> int:
        """Create an event with every slot available. Returns its id."""
        event = Event(
            id=self._next_id,
            name=name,
            description=description,
            category=category,
            date=date,
            capacity=capacity,
            available=capacity,
        )
        self._events.append(event)
        self._next_id += 1
        logger.info("Added event %d: %s (%s)", event.id, event.name, event.date)
        return event.id

    def restore(self, event: Event) -> None:
        """Insert a persisted event under its own id and advance the counter past it."""
        if event.id in self:
            raise MalformedRecordError(f"Duplicate event id {event.id}")
        self._events.append(event)
        self._next_id = max(self._next_id, event.id + 1)

    def find_by_id(self, event_id: int) -> Event | None:
        """Return an event by id, or None if not found."""
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def get(self, event_id: int) -> Event:
        """Return an event by id.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        event = self.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def remove(self, event_id: int) -> bool:
        """Unlink an event. Registrations that reference it are left alone."""
        for index, event in enumerate(self._events):
            if event.id == event_id:
                del self._events[index]
                logger.info("Removed event %d", event_id)
                return True
        return False

    def edit(
        self,
        event_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
        category: str | None = None,
        date: str | None = None,
        capacity: int | None = None,
    ) -> Event:
        """Apply the given fields; omitted fields keep their value.

        A capacity change moves ``available`` by the same delta, floored at 0.
        Outstanding registrations are not reconciled.
        """
        event = self.get(event_id)
        if capacity is not None and capacity < 0:
            raise ValueError("Capacity cannot be negative")
        if date is not None:
            check_date(date)
        if name is not None:
            event.name = clip(name, NAME_MAX)
        if description is not None:
            event.description = clip(description, DESCRIPTION_MAX)
        if category is not None:
            event.category = clip(category, CATEGORY_MAX)
        if date is not None:
            event.date = date
        if capacity is not None and capacity != event.capacity:
            event.resize(capacity)
        logger.info("Edited event %d", event_id)
        return event

    def list(self) -> list[Event]:
        """Events in current order (insertion order until sorted)."""
        return list(self._events)

    def count(self) -> int:
        return len(self._events)

    # ── Ordering ─────────────────────────────────────────────

    def sort_by_date(self) -> None:
        """Reorder events chronologically. Ids and records are untouched."""
        sort_events_by_date(self._events)
        logger.debug("Sorted %d events by date", len(self._events))
