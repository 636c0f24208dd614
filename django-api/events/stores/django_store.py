"""Django ORM implementation of the store interfaces.

Per-event serialization holds a process-local lock for the event and then
a row lock inside ``transaction.atomic``. SQLite ignores ``SELECT ... FOR
UPDATE``, so the process lock is what orders writers there; the database is
configured to open write transactions immediately. Uniqueness races are
settled by database constraints.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from django.db import IntegrityError, transaction

from events import models
from events.domain import (
    AuditAction,
    AuditRecord,
    AuditRecordId,
    Capacity,
    Event,
    EventId,
    EventStatus,
    Money,
    Registration,
    RegistrationId,
    RegistrationStatus,
)
from events.domain.errors import (
    DuplicateRegistrationError,
    FieldIssue,
    ValidationFailedError,
)
from events.domain.models import title_key
from events.stores.interfaces import AuditLog, EventStore, RegistrationStore
from events.utils.locks import KeyedLocks

_event_locks = KeyedLocks()


def _to_event(row: models.Event) -> Event:
    return Event(
        id=EventId(row.event_id),
        tenant_id=row.tenant_id,
        title=row.title,
        description=row.description,
        location=row.location,
        start_date=row.start_date,
        end_date=row.end_date,
        capacity=Capacity(row.capacity) if row.capacity is not None else None,
        price=Money(row.price) if row.price is not None else None,
        currency=row.currency,
        status=EventStatus(row.status),
        created_at=row.created_at,
    )


def _event_fields(event: Event) -> dict:
    return {
        "tenant_id": event.tenant_id,
        "title": event.title,
        "title_key": event.title_key,
        "description": event.description,
        "location": event.location,
        "start_date": event.start_date,
        "end_date": event.end_date,
        "capacity": event.capacity.value if event.capacity is not None else None,
        "price": event.price.amount if event.price is not None else None,
        "currency": event.currency,
        "status": event.status.value,
        "created_at": event.created_at,
    }


def _to_registration(row: models.Registration, event_id: EventId) -> Registration:
    return Registration(
        id=RegistrationId(row.registration_id),
        tenant_id=row.tenant_id,
        event_id=event_id,
        member_id=row.member_id,
        status=RegistrationStatus(row.status),
        reminder_sent_at=row.reminder_sent_at,
        reminder_count=row.reminder_count,
        created_at=row.created_at,
    )


def _to_audit_record(row: models.AuditEntry) -> AuditRecord:
    return AuditRecord(
        id=AuditRecordId(row.record_id),
        tenant_id=row.tenant_id,
        event_id=EventId(row.event_id),
        action=AuditAction(row.action),
        actor_id=row.actor_id,
        created_at=row.created_at,
        meta=row.meta,
        sequence=row.id,
    )


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    @contextmanager
    def lock_event(self, tenant_id: str, event_id: EventId) -> Iterator[None]:
        with _event_locks.hold((tenant_id, event_id)), transaction.atomic():
            list(
                models.Event.objects.select_for_update()
                .filter(tenant_id=tenant_id, event_id=event_id.value)
                .values_list("id", flat=True)
            )
            yield

    def add_event(self, event: Event) -> None:
        try:
            with transaction.atomic():
                models.Event.objects.create(event_id=event.id.value, **_event_fields(event))
        except IntegrityError as exc:
            raise ValidationFailedError([FieldIssue("title", "duplicate")]) from exc

    def save_event(self, event: Event) -> None:
        models.Event.objects.filter(
            tenant_id=event.tenant_id, event_id=event.id.value
        ).update(**_event_fields(event))

    def get_event(self, tenant_id: str, event_id: EventId) -> Event | None:
        row = models.Event.objects.filter(tenant_id=tenant_id, event_id=event_id.value).first()
        return _to_event(row) if row is not None else None

    def title_taken(self, tenant_id: str, title: str) -> bool:
        return models.Event.objects.filter(
            tenant_id=tenant_id, title_key=title_key(title)
        ).exists()

    def list_events(self, tenant_id: str) -> list[Event]:
        return [_to_event(row) for row in models.Event.objects.filter(tenant_id=tenant_id)]


class DjangoRegistrationStore(RegistrationStore):
    """Registration ledger using Django ORM."""

    def _rows(self, tenant_id: str, event_id: EventId):
        return models.Registration.objects.filter(
            tenant_id=tenant_id, event__tenant_id=tenant_id, event__event_id=event_id.value
        )

    def get_registration(
        self, tenant_id: str, event_id: EventId, member_id: str
    ) -> Registration | None:
        row = self._rows(tenant_id, event_id).filter(member_id=member_id).first()
        return _to_registration(row, event_id) if row is not None else None

    def add_registration(self, registration: Registration) -> None:
        event_pk = (
            models.Event.objects.filter(
                tenant_id=registration.tenant_id, event_id=registration.event_id.value
            )
            .values_list("id", flat=True)
            .get()
        )
        try:
            with transaction.atomic():
                models.Registration.objects.create(
                    registration_id=registration.id.value,
                    tenant_id=registration.tenant_id,
                    event_id=event_pk,
                    member_id=registration.member_id,
                    status=registration.status.value,
                    reminder_sent_at=registration.reminder_sent_at,
                    reminder_count=registration.reminder_count,
                    created_at=registration.created_at,
                )
        except IntegrityError as exc:
            raise DuplicateRegistrationError() from exc

    def save_registration(self, registration: Registration) -> None:
        models.Registration.objects.filter(registration_id=registration.id.value).update(
            reminder_sent_at=registration.reminder_sent_at,
            reminder_count=registration.reminder_count,
        )

    def remove_registration(
        self, tenant_id: str, event_id: EventId, member_id: str
    ) -> Registration | None:
        row = self._rows(tenant_id, event_id).filter(member_id=member_id).first()
        if row is None:
            return None
        registration = _to_registration(row, event_id)
        row.delete()
        return registration

    def count_live(self, tenant_id: str, event_id: EventId) -> int:
        return self._rows(tenant_id, event_id).count()

    def list_registrations(self, tenant_id: str, event_id: EventId) -> list[Registration]:
        return [_to_registration(row, event_id) for row in self._rows(tenant_id, event_id)]


class DjangoAuditLog(AuditLog):
    """Audit log table; the auto-increment key is the sequence."""

    def append(self, record: AuditRecord) -> AuditRecord:
        row = models.AuditEntry.objects.create(
            record_id=record.id.value,
            tenant_id=record.tenant_id,
            event_id=record.event_id.value,
            action=record.action.value,
            actor_id=record.actor_id,
            created_at=record.created_at,
            meta=record.meta,
        )
        return _to_audit_record(row)

    def list_records(
        self, tenant_id: str, event_id: EventId | None = None
    ) -> list[AuditRecord]:
        rows = models.AuditEntry.objects.filter(tenant_id=tenant_id)
        if event_id is not None:
            rows = rows.filter(event_id=event_id.value)
        return [_to_audit_record(row) for row in rows.order_by("id")]
