"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Self

from events.domain.value_objects import (
    AuditRecordId,
    Capacity,
    EventId,
    Money,
    RegistrationId,
)


class EventStatus(Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class RegistrationStatus(Enum):
    CONFIRMED = "confirmed"


class AuditAction(Enum):
    """Closed set of audited domain actions."""

    EVENT_PUBLISHED = "event.published"
    CAPACITY_UPDATED = "event.capacity.updated"
    PRICING_UPDATED = "event.pricing.updated"
    REGISTRATION_CREATED = "event.registration.created"
    REGISTRATION_CANCELED = "event.registration.canceled"


def title_key(title: str) -> str:
    """Case-insensitive form used for per-tenant title uniqueness."""
    return title.strip().casefold()


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    tenant_id: str
    title: str
    start_date: datetime
    end_date: datetime
    created_at: datetime
    status: EventStatus = EventStatus.DRAFT
    description: str | None = None
    location: str | None = None
    capacity: Capacity | None = None
    price: Money | None = None
    currency: str | None = None

    @property
    def is_published(self) -> bool:
        return self.status is EventStatus.PUBLISHED

    @property
    def title_key(self) -> str:
        return title_key(self.title)

    def published(self) -> Self:
        return replace(self, status=EventStatus.PUBLISHED)

    def with_capacity(self, capacity: Capacity) -> Self:
        return replace(self, capacity=capacity)

    def with_pricing(self, price: Money, currency: str) -> Self:
        return replace(self, price=price, currency=currency)


@dataclass(frozen=True)
class Registration:
    """Domain representation of a live Registration."""

    id: RegistrationId
    tenant_id: str
    event_id: EventId
    member_id: str
    created_at: datetime
    status: RegistrationStatus = RegistrationStatus.CONFIRMED
    reminder_sent_at: datetime | None = None
    reminder_count: int = 0

    @property
    def needs_reminder(self) -> bool:
        return self.reminder_sent_at is None

    def reminded(self, at: datetime) -> Self:
        return replace(self, reminder_sent_at=at, reminder_count=self.reminder_count + 1)


@dataclass(frozen=True)
class AuditRecord:
    """Immutable fact about a completed mutation.

    ``sequence`` is assigned by the audit log at append time and is
    monotonically increasing within a tenant.
    """

    id: AuditRecordId
    tenant_id: str
    event_id: EventId
    action: AuditAction
    actor_id: str
    created_at: datetime
    meta: dict[str, Any] = field(default_factory=dict)
    sequence: int = 0


@dataclass(frozen=True)
class ReminderIntent:
    """Fire-once instruction for the reminder delivery collaborator."""

    tenant_id: str
    event_id: EventId
    event_title: str
    member_id: str
    member_email: str | None
    start_date: datetime
    location: str | None = None


@dataclass(frozen=True)
class EventSummary:
    """An event together with its live registration count."""

    event: Event
    registrations_count: int


@dataclass(frozen=True)
class Page:
    """One page of a listing."""

    items: tuple[EventSummary, ...]
    page: int
    page_size: int
    total_items: int
    total_pages: int
