"""Load-all / save-all over the three CSV files.

Load order matters: events and participants first, then registrations,
whose rows are resolved against the two stores already loaded. Rows that
fail to decode are skipped, and registration rows naming a missing
participant or event are dropped. Both are logged and counted in the
returned :class:`LoadReport` rather than raised.

I/O failures never propagate: a missing or unreadable file loads as an
empty collection, and a failed save is logged and reported as ``False``.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from eventdesk.errors import DanglingReferenceError, MalformedRecordError
from eventdesk.models import Registration
from eventdesk.persistence.codec import (
    EVENT_HEADER,
    PARTICIPANT_HEADER,
    REGISTRATION_HEADER,
    decode_event,
    decode_participant,
    decode_registration,
    encode_event,
    encode_participant,
    encode_registration,
    header_line,
)

if TYPE_CHECKING:
    from eventdesk.config import StorageConfig
    from eventdesk.stores import EventStore, ParticipantStore, RegistrationLog

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class DataPaths:
    """Locations of the three CSV files."""

    events: Path
    participants: Path
    registrations: Path

    @classmethod
    def in_dir(cls, data_dir: Path, storage: StorageConfig) -> DataPaths:
        return cls(
            events=data_dir / storage.events_file,
            participants=data_dir / storage.participants_file,
            registrations=data_dir / storage.registrations_file,
        )


@dataclass
class LoadReport:
    """What a load restored and what it had to leave behind."""

    events: int = 0
    participants: int = 0
    registrations: int = 0
    malformed: int = 0
    dangling: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return self.malformed + self.dangling


# ── Reading ──────────────────────────────────────────────────


def _read_rows(path: Path, header: list[str]) -> Iterator[list[str]]:
    """Yield the data rows of a CSV file. Missing or unreadable files yield nothing."""
    try:
        f = path.open(encoding="utf-8", newline="")
    except FileNotFoundError:
        logger.info("No data file at %s, starting empty", path)
        return
    except OSError as e:
        logger.warning("Cannot read %s: %s", path, e)
        return

    with f:
        reader = csv.reader(f)
        try:
            first = next(reader, None)
            if first is None:
                return
            if first != header:
                logger.warning("No header in %s, reading the first row as data", path)
                if first:
                    yield first
            for row in reader:
                if not row:
                    continue
                yield row
        except (csv.Error, UnicodeDecodeError) as e:
            logger.warning("Stopped reading %s at line %d: %s", path, reader.line_num, e)


def _load_rows(
    path: Path,
    header: list[str],
    decode: Callable[[list[str]], T],
    accept: Callable[[T], None],
    report: LoadReport,
) -> int:
    loaded = 0
    for row in _read_rows(path, header):
        try:
            accept(decode(row))
        except MalformedRecordError as e:
            report.malformed += 1
            report.errors.append(f"{path.name}: {e.message}")
            logger.warning("Skipping malformed row in %s: %s", path.name, e.message)
        except DanglingReferenceError as e:
            report.dangling += 1
            logger.warning("Dropping registration in %s: %s", path.name, e.message)
        else:
            loaded += 1
    return loaded


def _registration_acceptor(
    events: EventStore,
    participants: ParticipantStore,
    registrations: RegistrationLog,
) -> Callable[[Registration], None]:
    def accept(registration: Registration) -> None:
        if (
            registration.participant_id not in participants
            or registration.event_id not in events
        ):
            raise DanglingReferenceError(registration.participant_id, registration.event_id)
        if registration.active and registrations.exists(
            registration.participant_id, registration.event_id
        ):
            raise MalformedRecordError(
                f"Second active registration for participant {registration.participant_id} "
                f"and event {registration.event_id}"
            )
        registrations.restore(registration)

    return accept


def load_all(
    paths: DataPaths,
    events: EventStore,
    participants: ParticipantStore,
    registrations: RegistrationLog,
) -> LoadReport:
    """Populate the stores from disk, in dependency order."""
    report = LoadReport()
    report.events = _load_rows(paths.events, EVENT_HEADER, decode_event, events.restore, report)
    report.participants = _load_rows(
        paths.participants, PARTICIPANT_HEADER, decode_participant, participants.restore, report
    )
    report.registrations = _load_rows(
        paths.registrations,
        REGISTRATION_HEADER,
        decode_registration,
        _registration_acceptor(events, participants, registrations),
        report,
    )
    logger.info(
        "Loaded %d events, %d participants, %d registrations (%d skipped)",
        report.events,
        report.participants,
        report.registrations,
        report.skipped,
    )
    return report


# ── Writing ──────────────────────────────────────────────────


def _write_lines(path: Path, header: list[str], lines: Iterable[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(header_line(header))
        for line in lines:
            f.write(line)


def save_all(
    paths: DataPaths,
    events: EventStore,
    participants: ParticipantStore,
    registrations: RegistrationLog,
) -> bool:
    """Write every store to disk. Returns False if any file could not be written."""
    ok = True
    for path, header, lines in (
        (paths.events, EVENT_HEADER, (encode_event(e) for e in events)),
        (paths.participants, PARTICIPANT_HEADER, (encode_participant(p) for p in participants)),
        (
            paths.registrations,
            REGISTRATION_HEADER,
            (encode_registration(r) for r in registrations),
        ),
    ):
        try:
            _write_lines(path, header, lines)
        except OSError as e:
            logger.warning("Failed to save %s: %s", path, e)
            ok = False
    if ok:
        logger.info(
            "Saved %d events, %d participants, %d registrations",
            len(events),
            len(participants),
            len(registrations),
        )
    return ok
