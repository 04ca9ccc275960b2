"""Read-only queries across the stores."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from eventdesk.models import Event, Participant
    from eventdesk.stores import EventStore, ParticipantStore, RegistrationLog


@dataclass(frozen=True)
class SystemStats:
    """Totals over all three stores."""

    total_events: int
    total_participants: int
    total_registrations: int
    mean_registrations_per_event: float | None
    busiest_event: Event | None
    busiest_event_taken: int = 0


def events_by_category(events: EventStore, category: str) -> list[Event]:
    return [event for event in events if event.category == category]


def events_with_vacancies(events: EventStore) -> list[Event]:
    return [event for event in events if event.available > 0]


def participants_for_event(
    registrations: RegistrationLog,
    participants: ParticipantStore,
    event_id: int,
) -> list[Participant]:
    """Participants holding a confirmed registration for the event, in log order.

    Registrations whose participant has since been removed are left out.
    """
    result = []
    for registration in registrations.list_by_event(event_id):
        participant = participants.find_by_id(registration.participant_id)
        if participant is not None:
            result.append(participant)
    return result


def statistics(
    events: EventStore,
    participants: ParticipantStore,
    registrations: RegistrationLog,
) -> SystemStats:
    """Compute system totals.

    The registration total counts every record, tombstones included. The
    busiest event is ranked by taken slots (capacity minus available); the
    first event in current order wins a tie, and no event is reported while
    none has a taken slot.
    """
    total_events = events.count()
    total_registrations = registrations.count()

    mean = total_registrations / total_events if total_events else None

    busiest: Event | None = None
    busiest_taken = 0
    for event in events:
        if event.taken > busiest_taken:
            busiest = event
            busiest_taken = event.taken

    return SystemStats(
        total_events=total_events,
        total_participants=participants.count(),
        total_registrations=total_registrations,
        mean_registrations_per_event=mean,
        busiest_event=busiest,
        busiest_event_taken=busiest_taken,
    )
