"""Event service - all event catalog business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from collections.abc import Callable
from datetime import datetime

from events.domain import (
    Actor,
    AuditAction,
    Capacity,
    Event,
    EventId,
    EventStatus,
    EventSummary,
    Money,
    Role,
)
from events.domain.errors import (
    AlreadyPublishedError,
    ConflictError,
    EventNotFoundError,
    FieldIssue,
    InvalidStatusError,
    ValidationFailedError,
)
from events.services.access import parse_event_id, require_role
from events.services.audit_service import AuditTrail
from events.stores.interfaces import EventStore, RegistrationStore
from events.utils.clock import parse_timestamp
from events.utils.logging import get_logger

logger = get_logger(__name__)

_MUTABLE_STATUSES = (EventStatus.DRAFT, EventStatus.PUBLISHED)


def _read_timestamp(value: object, field: str, issues: list[FieldIssue]) -> datetime | None:
    if value is None or value == "":
        issues.append(FieldIssue(field, "required"))
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        issues.append(FieldIssue(field, "invalid"))
        return None


def _date_issues(event: Event) -> list[FieldIssue]:
    issues = []
    if not event.title.strip():
        issues.append(FieldIssue("title", "required"))
    if event.start_date >= event.end_date:
        issues.append(FieldIssue("date_range", "invalid_order"))
    return issues


class EventService:
    """Service for event catalog operations."""

    def __init__(
        self,
        events: EventStore,
        registrations: RegistrationStore,
        audit: AuditTrail,
        clock: Callable[[], datetime],
    ) -> None:
        self._events = events
        self._registrations = registrations
        self._audit = audit
        self._clock = clock

    def _require_event(self, tenant_id: str, event_id: EventId) -> Event:
        event = self._events.get_event(tenant_id, event_id)
        if event is None:
            raise EventNotFoundError(str(event_id))
        return event

    def create_event(
        self,
        actor: Actor | None,
        title: str | None,
        start_date: datetime | str | None,
        end_date: datetime | str | None,
        description: str | None = None,
        capacity: int | None = None,
        price: object = None,
        currency: str | None = None,
        location: str | None = None,
    ) -> Event:
        """Create a draft event.

        All field problems are collected before raising, including a
        case-insensitive title clash within the tenant. Creation is not
        audited.

        Raises:
            ValidationFailedError: With one FieldIssue per problem found.
        """
        actor = require_role(actor, Role.ADMIN)
        issues: list[FieldIssue] = []

        clean_title = title.strip() if isinstance(title, str) else ""
        if not clean_title:
            issues.append(FieldIssue("title", "required"))

        start = _read_timestamp(start_date, "start_date", issues)
        end = _read_timestamp(end_date, "end_date", issues)
        if start is not None and end is not None and start >= end:
            issues.append(FieldIssue("date_range", "invalid_order"))

        event_capacity = None
        if capacity is not None:
            try:
                event_capacity = Capacity(capacity)
            except ValueError:
                issues.append(FieldIssue("capacity", "invalid"))

        event_price = None
        if price is not None:
            try:
                event_price = Money.parse(price)
            except ValueError:
                issues.append(FieldIssue("price", "invalid"))

        if currency is not None and not (isinstance(currency, str) and currency.strip()):
            issues.append(FieldIssue("currency", "invalid"))

        if clean_title and self._events.title_taken(actor.tenant_id, clean_title):
            issues.append(FieldIssue("title", "duplicate"))

        if issues:
            logger.debug("Event rejected", tenant_id=actor.tenant_id, issues=len(issues))
            raise ValidationFailedError(issues)

        event = Event(
            id=EventId.new(),
            tenant_id=actor.tenant_id,
            title=clean_title,
            description=description,
            location=location,
            start_date=start,
            end_date=end,
            capacity=event_capacity,
            price=event_price,
            currency=currency.strip() if currency else None,
            created_at=self._clock(),
        )
        self._events.add_event(event)
        logger.info("Event created", tenant_id=actor.tenant_id, event_id=str(event.id))
        return event

    def publish_event(self, actor: Actor | None, event_id: str | EventId) -> Event:
        """Move a draft event to published. The transition is one-way.

        Raises:
            EventNotFoundError: If the event is not in the caller's tenant.
            AlreadyPublishedError: If the event is already published.
            ValidationFailedError: If the title or date range is invalid.
        """
        actor = require_role(actor, Role.ADMIN)
        event_id = parse_event_id(event_id)

        with self._events.lock_event(actor.tenant_id, event_id):
            event = self._require_event(actor.tenant_id, event_id)
            if event.is_published:
                raise AlreadyPublishedError()
            issues = _date_issues(event)
            if issues:
                raise ValidationFailedError(issues)
            published = event.published()
            self._events.save_event(published)

        self._audit.record(
            actor.tenant_id,
            event_id,
            AuditAction.EVENT_PUBLISHED,
            actor.actor_id,
            {"old_status": event.status.value, "new_status": published.status.value},
        )
        logger.info("Event published", tenant_id=actor.tenant_id, event_id=str(event_id))
        return published

    def update_capacity(
        self, actor: Actor | None, event_id: str | EventId, capacity: object
    ) -> Event:
        """Set a new capacity.

        The live registration count is read under the event lock so a
        concurrent registration cannot slip under the new bound.

        Raises:
            EventNotFoundError: If the event is not in the caller's tenant.
            ValidationFailedError: ``capacity/invalid`` or
                ``capacity/below_registrations``.
            InvalidStatusError: If the event is not draft or published.
            ConflictError: If the capacity is unchanged.
        """
        actor = require_role(actor, Role.ADMIN)
        event_id = parse_event_id(event_id)

        with self._events.lock_event(actor.tenant_id, event_id):
            event = self._require_event(actor.tenant_id, event_id)
            try:
                new_capacity = Capacity(capacity)
            except ValueError:
                raise ValidationFailedError(
                    [FieldIssue("capacity", "invalid")], "Invalid capacity"
                ) from None
            if event.status not in _MUTABLE_STATUSES:
                raise InvalidStatusError("Cannot update capacity")
            live = self._registrations.count_live(actor.tenant_id, event_id)
            if new_capacity.value < live:
                raise ValidationFailedError(
                    [FieldIssue("capacity", "below_registrations")],
                    "Capacity below registrations",
                )
            if event.capacity == new_capacity:
                raise ConflictError("Capacity unchanged")
            updated = event.with_capacity(new_capacity)
            self._events.save_event(updated)

        self._audit.record(
            actor.tenant_id,
            event_id,
            AuditAction.CAPACITY_UPDATED,
            actor.actor_id,
            {
                "old_capacity": event.capacity.value if event.capacity is not None else None,
                "new_capacity": new_capacity.value,
            },
        )
        logger.info(
            "Event capacity updated",
            tenant_id=actor.tenant_id,
            event_id=str(event_id),
            capacity=new_capacity.value,
        )
        return updated

    def update_pricing(
        self, actor: Actor | None, event_id: str | EventId, price: object, currency: object
    ) -> Event:
        """Set price and currency on an event that has not started yet.

        Raises:
            EventNotFoundError: If the event is not in the caller's tenant.
            InvalidStatusError: If the event is not draft or published.
            ConflictError: If the event has already started.
            ValidationFailedError: ``price/invalid`` and/or ``currency/required``.
        """
        actor = require_role(actor, Role.ADMIN)
        event_id = parse_event_id(event_id)

        with self._events.lock_event(actor.tenant_id, event_id):
            event = self._require_event(actor.tenant_id, event_id)
            if event.status not in _MUTABLE_STATUSES:
                raise InvalidStatusError("Cannot update pricing for this event")
            if event.start_date <= self._clock():
                raise ConflictError("Cannot update pricing for past events")

            issues = []
            new_price = None
            try:
                new_price = Money.parse(price)
            except ValueError:
                issues.append(FieldIssue("price", "invalid"))
            if not (isinstance(currency, str) and currency.strip()):
                issues.append(FieldIssue("currency", "required"))
            if issues:
                raise ValidationFailedError(issues)

            updated = event.with_pricing(new_price, currency.strip())
            self._events.save_event(updated)

        self._audit.record(
            actor.tenant_id,
            event_id,
            AuditAction.PRICING_UPDATED,
            actor.actor_id,
            {
                "old_price": str(event.price) if event.price is not None else None,
                "old_currency": event.currency,
                "new_price": str(updated.price),
                "new_currency": updated.currency,
            },
        )
        logger.info("Event pricing updated", tenant_id=actor.tenant_id, event_id=str(event_id))
        return updated

    def get_event(self, actor: Actor | None, event_id: str | EventId) -> EventSummary:
        """Return an event with its live registration count.

        Drafts are only visible to admins.
        """
        actor = require_role(actor, Role.ADMIN, Role.MEMBER)
        event_id = parse_event_id(event_id)
        event = self._require_event(actor.tenant_id, event_id)
        if not event.is_published and not actor.has_role(Role.ADMIN):
            raise EventNotFoundError(str(event_id))
        return EventSummary(event, self._registrations.count_live(actor.tenant_id, event_id))

    def list_events(self, actor: Actor | None) -> list[EventSummary]:
        """Return every event in the tenant, latest start first."""
        actor = require_role(actor, Role.ADMIN)
        events = sorted(
            self._events.list_events(actor.tenant_id),
            key=lambda event: event.start_date,
            reverse=True,
        )
        return [
            EventSummary(event, self._registrations.count_live(actor.tenant_id, event.id))
            for event in events
        ]
