"""Registration ledger: capacity-bounded, duplicate-free registrations."""

import math
from collections.abc import Callable
from datetime import datetime

from events.domain import (
    Actor,
    AuditAction,
    EventId,
    EventSummary,
    Page,
    Registration,
    RegistrationId,
    Role,
)
from events.domain.errors import (
    DuplicateRegistrationError,
    EventFullError,
    EventNotFoundError,
    ForbiddenError,
    InvalidStatusError,
    RegistrationNotFoundError,
)
from events.services.access import parse_event_id, require_role
from events.services.audit_service import AuditTrail
from events.stores.interfaces import EventStore, RegistrationStore
from events.utils.logging import get_logger

logger = get_logger(__name__)


def _target_member(actor: Actor, member_id: str | None) -> str:
    """Members act for themselves; only admins may name another member."""
    if not member_id or member_id == actor.actor_id:
        return actor.actor_id
    if not actor.has_role(Role.ADMIN):
        raise ForbiddenError(Role.ADMIN.value)
    return member_id


def _clamp(value: object, default: int, low: int, high: int | None = None) -> int:
    try:
        number = int(value) if value is not None else default
    except (TypeError, ValueError):
        number = default
    number = max(number, low)
    if high is not None:
        number = min(number, high)
    return number


class RegistrationService:
    """Service for registering members to published events."""

    def __init__(
        self,
        events: EventStore,
        registrations: RegistrationStore,
        audit: AuditTrail,
        clock: Callable[[], datetime],
        default_page_size: int = 20,
        max_page_size: int = 100,
    ) -> None:
        self._events = events
        self._registrations = registrations
        self._audit = audit
        self._clock = clock
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    def register(
        self, actor: Actor | None, event_id: str | EventId, member_id: str | None = None
    ) -> Registration:
        """Register a member (the caller by default) for a published event.

        The duplicate check, the capacity check and the insert happen under
        the event lock, so two callers racing for the last seat cannot both
        win.

        Raises:
            ForbiddenError: If a member names someone else as ``member_id``.
            EventNotFoundError: If the event is not in the caller's tenant.
            InvalidStatusError: If the event is not published.
            DuplicateRegistrationError: If the member is already registered.
            EventFullError: If the event is at capacity.
        """
        actor = require_role(actor, Role.MEMBER)
        event_id = parse_event_id(event_id)
        member_id = _target_member(actor, member_id)

        with self._events.lock_event(actor.tenant_id, event_id):
            event = self._events.get_event(actor.tenant_id, event_id)
            if event is None:
                raise EventNotFoundError(str(event_id))
            if not event.is_published:
                raise InvalidStatusError("Event not published")
            existing = self._registrations.get_registration(actor.tenant_id, event_id, member_id)
            if existing is not None:
                raise DuplicateRegistrationError()
            live = self._registrations.count_live(actor.tenant_id, event_id)
            if event.capacity is not None and not event.capacity.admits(live):
                raise EventFullError()
            registration = Registration(
                id=RegistrationId.new(),
                tenant_id=actor.tenant_id,
                event_id=event_id,
                member_id=member_id,
                created_at=self._clock(),
            )
            self._registrations.add_registration(registration)

        self._audit.record(
            actor.tenant_id,
            event_id,
            AuditAction.REGISTRATION_CREATED,
            actor.actor_id,
            {"registration_id": str(registration.id), "member_id": member_id},
        )
        logger.info(
            "Member registered",
            tenant_id=actor.tenant_id,
            event_id=str(event_id),
            member_id=member_id,
            live=live + 1,
        )
        return registration

    def cancel_registration(
        self, actor: Actor | None, event_id: str | EventId, member_id: str | None = None
    ) -> Registration:
        """Remove a member's registration, freeing its seat.

        Raises:
            ForbiddenError: If a member names someone else as ``member_id``.
            EventNotFoundError: If the event is not in the caller's tenant.
            RegistrationNotFoundError: If the member is not registered.
        """
        actor = require_role(actor, Role.MEMBER)
        event_id = parse_event_id(event_id)
        member_id = _target_member(actor, member_id)

        with self._events.lock_event(actor.tenant_id, event_id):
            if self._events.get_event(actor.tenant_id, event_id) is None:
                raise EventNotFoundError(str(event_id))
            removed = self._registrations.remove_registration(
                actor.tenant_id, event_id, member_id
            )
            if removed is None:
                raise RegistrationNotFoundError(str(event_id), member_id)

        self._audit.record(
            actor.tenant_id,
            event_id,
            AuditAction.REGISTRATION_CANCELED,
            actor.actor_id,
            {"registration_id": str(removed.id), "member_id": member_id},
        )
        logger.info(
            "Registration canceled",
            tenant_id=actor.tenant_id,
            event_id=str(event_id),
            member_id=member_id,
        )
        return removed

    def list_upcoming(
        self, actor: Actor | None, page: object = 1, page_size: object = None
    ) -> Page:
        """Return published events that have not started, soonest first.

        Events starting at the same instant keep their creation order.
        """
        actor = require_role(actor, Role.MEMBER, Role.ADMIN)
        page = _clamp(page, 1, 1)
        page_size = _clamp(page_size, self._default_page_size, 1, self._max_page_size)
        now = self._clock()

        upcoming = sorted(
            (
                event
                for event in self._events.list_events(actor.tenant_id)
                if event.is_published and event.start_date >= now
            ),
            key=lambda event: event.start_date,
        )
        start = (page - 1) * page_size
        items = tuple(
            EventSummary(event, self._registrations.count_live(actor.tenant_id, event.id))
            for event in upcoming[start : start + page_size]
        )
        return Page(
            items=items,
            page=page,
            page_size=page_size,
            total_items=len(upcoming),
            total_pages=max(1, math.ceil(len(upcoming) / page_size)),
        )
