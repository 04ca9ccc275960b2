"""Domain error codes for the record stores."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    PARTICIPANT_NOT_FOUND = "PARTICIPANT_NOT_FOUND"
    NO_CAPACITY = "NO_CAPACITY"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    MALFORMED_RECORD = "MALFORMED_RECORD"
    DANGLING_REFERENCE = "DANGLING_REFERENCE"
    ACTIVE_REGISTRATIONS = "ACTIVE_REGISTRATIONS"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """An id is absent from its store."""


class EventNotFoundError(NotFoundError):
    """Raised when an event id is not in the event store."""

    def __init__(self, event_id: int) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message=f"Event {event_id} not found",
        )
        self.event_id = event_id


class ParticipantNotFoundError(NotFoundError):
    """Raised when a participant id is not in the participant store."""

    def __init__(self, participant_id: int) -> None:
        super().__init__(
            code=ErrorCode.PARTICIPANT_NOT_FOUND,
            message=f"Participant {participant_id} not found",
        )
        self.participant_id = participant_id


class NoCapacityError(DomainError):
    """Raised when registering for an event with no available slots."""

    def __init__(self, event_id: int) -> None:
        super().__init__(
            code=ErrorCode.NO_CAPACITY,
            message=f"Event {event_id} has no available slots",
        )
        self.event_id = event_id


class AlreadyRegisteredError(DomainError):
    """Raised when the pair already holds an active registration."""

    def __init__(self, participant_id: int, event_id: int) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_REGISTERED,
            message=f"Participant {participant_id} is already registered for event {event_id}",
        )
        self.participant_id = participant_id
        self.event_id = event_id


class MalformedRecordError(DomainError):
    """Raised when a persisted row does not decode into its record."""

    def __init__(self, reason: str, row: list[str] | None = None) -> None:
        super().__init__(
            code=ErrorCode.MALFORMED_RECORD,
            message=reason,
        )
        self.row = row


class DanglingReferenceError(DomainError):
    """Raised when a registration row names a participant or event that is not loaded.

    Load absorbs this error and drops the row.
    """

    def __init__(self, participant_id: int, event_id: int) -> None:
        super().__init__(
            code=ErrorCode.DANGLING_REFERENCE,
            message=f"Registration references missing participant {participant_id} "
            f"or event {event_id}",
        )
        self.participant_id = participant_id
        self.event_id = event_id


class ActiveRegistrationsError(DomainError):
    """Raised when removing a record that active registrations still reference."""

    def __init__(self, kind: str, record_id: int, active: int) -> None:
        super().__init__(
            code=ErrorCode.ACTIVE_REGISTRATIONS,
            message=f"{kind.capitalize()} {record_id} has {active} active registration(s)",
        )
        self.record_id = record_id
        self.active = active
