"""Participant store: a ring of participants with a designated head.

The ring is a flat list plus the index of its head. Traversal starts at the
head and wraps once around the list; new participants are inserted just
behind the head, i.e. at the end of traversal order. Callers only ever see
ordered iteration starting from the head.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from eventdesk.errors import MalformedRecordError, ParticipantNotFoundError
from eventdesk.models import EMAIL_MAX, NAME_MAX, PHONE_MAX, Participant, clip

logger = logging.getLogger(__name__)


class ParticipantStore:
    """Cyclic ordered collection of participants owning the participant id counter."""

    def __init__(self, next_id: int = 1) -> None:
        self._ring: list[Participant] = []
        self._head = 0
        self._next_id = next_id

    @property
    def next_id(self) -> int:
        return self._next_id

    def __iter__(self) -> Iterator[Participant]:
        for offset in range(len(self._ring)):
            yield self._ring[(self._head + offset) % len(self._ring)]

    def __len__(self) -> int:
        return len(self._ring)

    def __contains__(self, participant_id: object) -> bool:
        return self._index_of(participant_id) is not None

    # ── Ring maintenance ─────────────────────────────────────

    def _index_of(self, participant_id: object) -> int | None:
        for index, participant in enumerate(self._ring):
            if participant.id == participant_id:
                return index
        return None

    def _link(self, participant: Participant) -> None:
        """Insert behind the head, making it the last element of traversal."""
        if not self._ring:
            self._ring.append(participant)
            self._head = 0
            return
        self._ring.insert(self._head, participant)
        self._head += 1

    def _unlink(self, index: int) -> Participant:
        participant = self._ring.pop(index)
        if not self._ring:
            self._head = 0
        elif index < self._head:
            self._head -= 1
        elif self._head == len(self._ring):
            # The head was the last slot of the list; its successor wraps to 0.
            self._head = 0
        return participant

    # ── CRUD ─────────────────────────────────────────────────

    def add(self, name: str, email: str, phone: str) -> int:
        """Create a participant at the end of traversal order. Returns its id."""
        participant = Participant(id=self._next_id, name=name, email=email, phone=phone)
        self._link(participant)
        self._next_id += 1
        logger.info("Added participant %d: %s", participant.id, participant.name)
        return participant.id

    def restore(self, participant: Participant) -> None:
        """Insert a persisted participant under its own id and advance the counter past it."""
        if participant.id in self:
            raise MalformedRecordError(f"Duplicate participant id {participant.id}")
        self._link(participant)
        self._next_id = max(self._next_id, participant.id + 1)

    def find_by_id(self, participant_id: int) -> Participant | None:
        """Return a participant by id, or None if not found."""
        index = self._index_of(participant_id)
        return None if index is None else self._ring[index]

    def get(self, participant_id: int) -> Participant:
        """Return a participant by id.

        Raises:
            ParticipantNotFoundError: If the participant does not exist.
        """
        participant = self.find_by_id(participant_id)
        if participant is None:
            raise ParticipantNotFoundError(participant_id)
        return participant

    def remove(self, participant_id: int) -> bool:
        """Remove a participant. Removing the head promotes its successor."""
        index = self._index_of(participant_id)
        if index is None:
            return False
        self._unlink(index)
        logger.info("Removed participant %d", participant_id)
        return True

    def edit(
        self,
        participant_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> Participant:
        """Apply the given fields; omitted fields keep their value."""
        participant = self.get(participant_id)
        if name is not None:
            participant.name = clip(name, NAME_MAX)
        if email is not None:
            participant.email = clip(email, EMAIL_MAX)
        if phone is not None:
            participant.phone = clip(phone, PHONE_MAX)
        logger.info("Edited participant %d", participant_id)
        return participant

    def list(self) -> list[Participant]:
        """Every participant exactly once, starting from the head."""
        return [participant for participant in self]

    def count(self) -> int:
        return len(self._ring)
