"""Reminder scheduler: one reminder per registration for soon-starting events.

Run by an external scheduler or an operator at any frequency. Whether a
registration still needs a reminder is decided, and recorded, under the
event lock, so overlapping runs never send the same reminder twice.
"""

from collections.abc import Callable
from datetime import datetime, timedelta

from events.domain import (
    Actor,
    AuditAction,
    Event,
    Registration,
    ReminderIntent,
    Role,
)
from events.services.access import require_role
from events.services.audit_service import AuditTrail
from events.services.dispatch import ReminderDispatcher
from events.stores.interfaces import EventStore, RegistrationStore
from events.utils.clock import as_utc
from events.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_WINDOW = timedelta(hours=24)

EmailResolver = Callable[[str, str], str | None]


class ReminderService:
    """Scans published events and emits reminder intents."""

    def __init__(
        self,
        events: EventStore,
        registrations: RegistrationStore,
        audit: AuditTrail,
        dispatcher: ReminderDispatcher,
        clock: Callable[[], datetime],
        window: timedelta = DEFAULT_WINDOW,
        resolve_email: EmailResolver | None = None,
    ) -> None:
        self._events = events
        self._registrations = registrations
        self._audit = audit
        self._dispatcher = dispatcher
        self._clock = clock
        self._window = window
        self._resolve_email = resolve_email

    def run_reminders(self, actor: Actor | None, now: datetime | None = None) -> int:
        """Emit reminders for events starting within the window.

        Returns the number of intents handed to the dispatcher by this run.
        """
        actor = require_role(actor, Role.ADMIN, Role.SYSTEM)
        now = as_utc(now) if now is not None else self._clock()
        window_end = now + self._window

        sent = 0
        for event in self._events.list_events(actor.tenant_id):
            if not event.is_published:
                continue
            if not now <= event.start_date <= window_end:
                continue
            sent += self._remind(actor, event, now)

        logger.info("Reminder run complete", tenant_id=actor.tenant_id, sent=sent)
        return sent

    def _remind(self, actor: Actor, event: Event, now: datetime) -> int:
        due: list[Registration] = []
        with self._events.lock_event(event.tenant_id, event.id):
            for registration in self._registrations.list_registrations(event.tenant_id, event.id):
                if not registration.needs_reminder:
                    continue
                self._registrations.save_registration(registration.reminded(now))
                due.append(registration)

        sent = 0
        for registration in due:
            try:
                intent = ReminderIntent(
                    tenant_id=event.tenant_id,
                    event_id=event.id,
                    event_title=event.title,
                    member_id=registration.member_id,
                    member_email=self._email_for(event.tenant_id, registration.member_id),
                    start_date=event.start_date,
                    location=event.location,
                )
                self._dispatcher.dispatch(intent)
            except Exception:
                logger.exception(
                    "Reminder dispatch failed",
                    tenant_id=event.tenant_id,
                    event_id=str(event.id),
                    member_id=registration.member_id,
                )
                continue
            sent += 1
            self._audit.record(
                event.tenant_id,
                event.id,
                AuditAction.REGISTRATION_CREATED,
                actor.actor_id,
                {
                    "reminder": True,
                    "registration_id": str(registration.id),
                    "member_id": registration.member_id,
                    "run_at": now.isoformat(),
                },
            )
        return sent

    def _email_for(self, tenant_id: str, member_id: str) -> str | None:
        if self._resolve_email is None:
            return None
        return self._resolve_email(tenant_id, member_id)
