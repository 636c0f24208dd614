from events.domain.actors import Actor, Role
from events.domain.models import (
    AuditAction,
    AuditRecord,
    Event,
    EventStatus,
    EventSummary,
    Page,
    Registration,
    RegistrationStatus,
    ReminderIntent,
)
from events.domain.value_objects import AuditRecordId, Capacity, EventId, Money, RegistrationId

__all__ = [
    "Actor",
    "Role",
    "Event",
    "EventStatus",
    "EventSummary",
    "Page",
    "Registration",
    "RegistrationStatus",
    "AuditAction",
    "AuditRecord",
    "ReminderIntent",
    "EventId",
    "RegistrationId",
    "AuditRecordId",
    "Money",
    "Capacity",
]
