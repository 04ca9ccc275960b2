"""Records held by the stores.

Records are mutable: the owning store edits them in place. Cross-store
links are plain integer ids, never object references, so a record can be
moved, re-sorted or removed without leaving stale pointers behind.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

NAME_MAX = 99
DESCRIPTION_MAX = 499
CATEGORY_MAX = 49
EMAIL_MAX = 99
PHONE_MAX = 19

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def clip(value: str, limit: int) -> str:
    """Truncate text to its field limit."""
    return value[:limit]


def check_date(value: str) -> str:
    """Return the date unchanged if it is a YYYY-MM-DD string, else raise ValueError."""
    if not _DATE_RE.fullmatch(value):
        raise ValueError(f"Date must be YYYY-MM-DD, got {value!r}")
    return value


class RegistrationStatus(IntEnum):
    """Registration state. The integer value is the persisted status code."""

    CONFIRMED = 0
    PENDING = 1  # never produced by any operation, kept for the file format
    CANCELLED = 2


@dataclass
class Event:
    """An event with a fixed number of slots."""

    id: int
    name: str
    description: str
    category: str
    date: str  # YYYY-MM-DD
    capacity: int
    available: int

    def __post_init__(self) -> None:
        self.name = clip(self.name, NAME_MAX)
        self.description = clip(self.description, DESCRIPTION_MAX)
        self.category = clip(self.category, CATEGORY_MAX)
        self.date = check_date(self.date)
        if self.capacity < 0:
            raise ValueError("Capacity cannot be negative")
        if not 0 <= self.available <= self.capacity:
            raise ValueError(
                f"Available slots must be within [0, {self.capacity}], got {self.available}"
            )

    @property
    def taken(self) -> int:
        return self.capacity - self.available

    def resize(self, capacity: int) -> None:
        """Change capacity, shifting availability by the same delta (floored at 0)."""
        if capacity < 0:
            raise ValueError("Capacity cannot be negative")
        delta = capacity - self.capacity
        self.capacity = capacity
        self.available = max(0, self.available + delta)

    def reserve(self) -> None:
        if self.available <= 0:
            raise ValueError(f"Event {self.id} has no available slots")
        self.available -= 1

    def release(self) -> None:
        # Capped: a shrunk capacity may already have absorbed the slot.
        self.available = min(self.capacity, self.available + 1)


@dataclass
class Participant:
    """A person who can register for events."""

    id: int
    name: str
    email: str
    phone: str

    def __post_init__(self) -> None:
        self.name = clip(self.name, NAME_MAX)
        self.email = clip(self.email, EMAIL_MAX)
        self.phone = clip(self.phone, PHONE_MAX)


@dataclass
class Registration:
    """Link between a participant and an event, by id."""

    participant_id: int
    event_id: int
    date: str  # YYYY-MM-DD
    status: RegistrationStatus = RegistrationStatus.CONFIRMED

    def __post_init__(self) -> None:
        self.date = check_date(self.date)

    @property
    def active(self) -> bool:
        return self.status != RegistrationStatus.CANCELLED

    @property
    def confirmed(self) -> bool:
        return self.status == RegistrationStatus.CONFIRMED

    def matches(self, participant_id: int, event_id: int) -> bool:
        return self.participant_id == participant_id and self.event_id == event_id
