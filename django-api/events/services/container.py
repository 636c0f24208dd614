"""Wires services to the store backend named in settings."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import lru_cache

from django.conf import settings

from events.services.audit_service import AuditTrail
from events.services.dispatch import (
    DjangoReminderOutbox,
    InMemoryReminderOutbox,
    ReminderDispatcher,
)
from events.services.event_service import EventService
from events.services.registration_service import RegistrationService
from events.services.reminder_service import ReminderService
from events.stores.interfaces import AuditLog, EventStore, RegistrationStore
from events.utils.clock import utcnow


@dataclass(frozen=True)
class EventServices:
    catalog: EventService
    registrations: RegistrationService
    reminders: ReminderService
    audit: AuditTrail
    dispatcher: ReminderDispatcher


def build_services(
    events: EventStore,
    registrations: RegistrationStore,
    audit_log: AuditLog,
    dispatcher: ReminderDispatcher,
    clock: Callable[[], datetime] = utcnow,
    reminder_window: timedelta | None = None,
    default_page_size: int = 20,
    max_page_size: int = 100,
) -> EventServices:
    audit = AuditTrail(audit_log, clock)
    return EventServices(
        catalog=EventService(events, registrations, audit, clock),
        registrations=RegistrationService(
            events,
            registrations,
            audit,
            clock,
            default_page_size=default_page_size,
            max_page_size=max_page_size,
        ),
        reminders=ReminderService(
            events,
            registrations,
            audit,
            dispatcher,
            clock,
            window=reminder_window or timedelta(hours=24),
        ),
        audit=audit,
        dispatcher=dispatcher,
    )


def build_memory_services(**options) -> EventServices:
    from events.stores.memory_store import (
        InMemoryAuditLog,
        InMemoryEventStore,
        InMemoryRegistrationStore,
    )

    return build_services(
        InMemoryEventStore(),
        InMemoryRegistrationStore(),
        InMemoryAuditLog(),
        InMemoryReminderOutbox(),
        **options,
    )


def build_django_services(**options) -> EventServices:
    from events.stores.django_store import (
        DjangoAuditLog,
        DjangoEventStore,
        DjangoRegistrationStore,
    )

    return build_services(
        DjangoEventStore(),
        DjangoRegistrationStore(),
        DjangoAuditLog(),
        DjangoReminderOutbox(),
        **options,
    )


@lru_cache(maxsize=1)
def get_services() -> EventServices:
    """Process-wide services for the configured ``EVENTS_STORE_BACKEND``."""
    options = {
        "reminder_window": timedelta(hours=settings.EVENTS_REMINDER_WINDOW_HOURS),
        "default_page_size": settings.EVENTS_DEFAULT_PAGE_SIZE,
        "max_page_size": settings.EVENTS_MAX_PAGE_SIZE,
    }
    backend = settings.EVENTS_STORE_BACKEND
    if backend == "memory":
        return build_memory_services(**options)
    if backend == "django":
        return build_django_services(**options)
    raise ValueError(f"Unknown EVENTS_STORE_BACKEND: {backend!r}")
