"""In-memory record stores.

    EventStore        insertion-ordered events, chronological sort, slot counts
    ParticipantStore  ring of participants, iterated from its head
    RegistrationLog   append-only registrations, linked to both stores by id

Each store owns its id counter; ids are never reused within a run.
"""

from eventdesk.stores.events import EventStore
from eventdesk.stores.participants import ParticipantStore
from eventdesk.stores.registrations import RegistrationLog

__all__ = ["EventStore", "ParticipantStore", "RegistrationLog"]
