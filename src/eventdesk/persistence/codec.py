"""Row codecs between records and CSV lines.

Text columns are always written double-quoted, with embedded quotes
doubled; integer and date columns are written bare. Lines are read back
with :mod:`csv`, so delimiters, quotes and newlines inside text survive a
round trip.
"""

from __future__ import annotations

import re

from eventdesk.errors import MalformedRecordError
from eventdesk.models import Event, Participant, Registration, RegistrationStatus, check_date

EVENT_HEADER = ["id", "nome", "descricao", "categoria", "data", "capacidade", "vagasDisponiveis"]
PARTICIPANT_HEADER = ["id", "nome", "email", "telefone"]
REGISTRATION_HEADER = ["idParticipante", "idEvento", "dataInscricao", "status"]

_NEEDS_QUOTES = re.compile(r'[",\r\n]')


def quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def _bare(value: str) -> str:
    """Write a bare column, quoting only if it would otherwise break the row."""
    return quote(value) if _NEEDS_QUOTES.search(value) else value


def _join(fields: list[str]) -> str:
    return ",".join(fields) + "\n"


def header_line(header: list[str]) -> str:
    return _join(header)


# ── Field parsing ────────────────────────────────────────────


def _expect_columns(row: list[str], header: list[str]) -> None:
    if len(row) != len(header):
        raise MalformedRecordError(
            f"Expected {len(header)} columns, got {len(row)}",
            row=row,
        )


def _int(row: list[str], value: str, column: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise MalformedRecordError(f"Column {column!r} is not an integer: {value!r}", row=row)


def _date(row: list[str], value: str, column: str) -> str:
    value = value.strip()
    try:
        return check_date(value)
    except ValueError:
        raise MalformedRecordError(
            f"Column {column!r} is not a YYYY-MM-DD date: {value!r}", row=row
        )


# ── Event ────────────────────────────────────────────────────


def encode_event(event: Event) -> str:
    return _join(
        [
            str(event.id),
            quote(event.name),
            quote(event.description),
            quote(event.category),
            _bare(event.date),
            str(event.capacity),
            str(event.available),
        ]
    )


def decode_event(row: list[str]) -> Event:
    _expect_columns(row, EVENT_HEADER)
    id_, name, description, category, date, capacity, available = row
    try:
        return Event(
            id=_int(row, id_, "id"),
            name=name,
            description=description,
            category=category,
            date=_date(row, date, "data"),
            capacity=_int(row, capacity, "capacidade"),
            available=_int(row, available, "vagasDisponiveis"),
        )
    except ValueError as e:
        raise MalformedRecordError(str(e), row=row) from e


# ── Participant ──────────────────────────────────────────────


def encode_participant(participant: Participant) -> str:
    return _join(
        [
            str(participant.id),
            quote(participant.name),
            quote(participant.email),
            quote(participant.phone),
        ]
    )


def decode_participant(row: list[str]) -> Participant:
    _expect_columns(row, PARTICIPANT_HEADER)
    id_, name, email, phone = row
    return Participant(id=_int(row, id_, "id"), name=name, email=email, phone=phone)


# ── Registration ─────────────────────────────────────────────


def encode_registration(registration: Registration) -> str:
    return _join(
        [
            str(registration.participant_id),
            str(registration.event_id),
            _bare(registration.date),
            str(int(registration.status)),
        ]
    )


def decode_registration(row: list[str]) -> Registration:
    _expect_columns(row, REGISTRATION_HEADER)
    participant_id, event_id, date, status = row
    code = _int(row, status, "status")
    try:
        status_value = RegistrationStatus(code)
    except ValueError:
        raise MalformedRecordError(f"Unknown registration status {code}", row=row)
    return Registration(
        participant_id=_int(row, participant_id, "idParticipante"),
        event_id=_int(row, event_id, "idEvento"),
        date=_date(row, date, "dataInscricao"),
        status=status_value,
    )
