"""EventDesk: owns the three stores and their lifecycle.

Responsibilities:
1. Build the stores with their id counters
2. Load every collection at startup, in dependency order
3. Apply the configured removal policy when an event or participant that
   active registrations still reference is removed
4. Save every collection at shutdown
"""

from __future__ import annotations

import logging

from eventdesk.config import REMOVAL_POLICIES, EventDeskConfig, RemovalPolicy
from eventdesk.errors import ActiveRegistrationsError
from eventdesk.persistence import DataPaths, LoadReport, load_all, save_all
from eventdesk.reports import SystemStats, statistics
from eventdesk.stores import EventStore, ParticipantStore, RegistrationLog

logger = logging.getLogger(__name__)


class EventDesk:
    """Facade over the event, participant and registration stores."""

    def __init__(self, config: EventDeskConfig) -> None:
        self.config = config
        self.paths = DataPaths.in_dir(config.data_dir, config.storage)
        self.events = EventStore()
        self.participants = ParticipantStore()
        self.registrations = RegistrationLog(self.events, self.participants)

    # ── Persistence ──────────────────────────────────────────

    def load(self) -> LoadReport:
        """Populate the (empty) stores from the data directory."""
        report = load_all(self.paths, self.events, self.participants, self.registrations)
        if report.dangling:
            logger.warning(
                "%d registration(s) referenced missing participants or events and were dropped",
                report.dangling,
            )
        return report

    def save(self) -> bool:
        return save_all(self.paths, self.events, self.participants, self.registrations)

    # ── Removal policy ───────────────────────────────────────

    def remove_event(self, event_id: int, policy: RemovalPolicy | None = None) -> bool:
        """Remove an event, honouring the removal policy for its active registrations.

        Under ``cascade`` the cancelled records stay in the log but still name
        the removed event, so the next load drops them as dangling.

        Raises:
            ActiveRegistrationsError: Under the ``reject`` policy, if the event
                still has active registrations.
            ValueError: If the policy is neither ``reject`` nor ``cascade``.
        """
        policy = self._resolve_policy(policy)
        if event_id not in self.events:
            return False
        active = self.registrations.active_for_event(event_id)
        if active:
            self._resolve_active("event", event_id, len(active), policy)
            self.registrations.cancel_all(active)
        return self.events.remove(event_id)

    def remove_participant(self, participant_id: int, policy: RemovalPolicy | None = None) -> bool:
        """Remove a participant, honouring the removal policy for their active registrations.

        Raises:
            ActiveRegistrationsError: Under the ``reject`` policy, if the
                participant still has active registrations.
            ValueError: If the policy is neither ``reject`` nor ``cascade``.
        """
        policy = self._resolve_policy(policy)
        if participant_id not in self.participants:
            return False
        active = self.registrations.active_for_participant(participant_id)
        if active:
            self._resolve_active("participant", participant_id, len(active), policy)
            self.registrations.cancel_all(active)
        return self.participants.remove(participant_id)

    def _resolve_policy(self, policy: RemovalPolicy | None) -> RemovalPolicy:
        policy = policy or self.config.removal_policy
        if policy not in REMOVAL_POLICIES:
            raise ValueError(
                f"removal_policy must be one of {REMOVAL_POLICIES}, got {policy!r}"
            )
        return policy

    def _resolve_active(
        self, kind: str, record_id: int, active: int, policy: RemovalPolicy
    ) -> None:
        if policy == "reject":
            raise ActiveRegistrationsError(kind, record_id, active)
        logger.info(
            "Cascading removal of %s %d: cancelling %d registration(s)", kind, record_id, active
        )

    # ── Queries ──────────────────────────────────────────────

    def sort_events(self) -> None:
        self.events.sort_by_date()

    def stats(self) -> SystemStats:
        return statistics(self.events, self.participants, self.registrations)
