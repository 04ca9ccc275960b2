"""Entry point: python -m eventdesk [stats|sort]

- No args / "stats": Load the data directory and print system statistics
- "sort":            Sort events by date and save them back
"""

from __future__ import annotations

import logging
import sys

from eventdesk.config import load_config
from eventdesk.core import EventDesk


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _open_desk() -> EventDesk:
    config = load_config()
    _setup_logging(config.log_level)
    desk = EventDesk(config)
    desk.load()
    return desk


def _run_stats() -> None:
    desk = _open_desk()
    stats = desk.stats()
    print(f"Events:        {stats.total_events}")
    print(f"Participants:  {stats.total_participants}")
    print(f"Registrations: {stats.total_registrations}")
    if stats.mean_registrations_per_event is not None:
        print(f"Mean per event: {stats.mean_registrations_per_event:.2f}")
    if stats.busiest_event is not None:
        event = stats.busiest_event
        print(f"Busiest event: {event.name} (ID: {event.id}) - {stats.busiest_event_taken} taken")


def _run_sort() -> None:
    desk = _open_desk()
    desk.sort_events()
    if not desk.save():
        sys.exit(1)
    for event in desk.events:
        print(f"{event.date}  {event.id:>4}  {event.name}")


def main() -> None:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "stats"

    if cmd == "stats":
        _run_stats()
    elif cmd == "sort":
        _run_sort()
    else:
        print("Usage: python -m eventdesk [stats|sort]")
        print("  stats  Print totals and the busiest event (default)")
        print("  sort   Sort events by date and save")
        sys.exit(1)


if __name__ == "__main__":
    main()
