"""In-process implementation of the store interfaces.

Records are kept in dicts keyed by tenant and event so lookups never scan
other tenants' data. Locks are held per ``(tenant_id, event_id)`` for
registration work and per tenant for title uniqueness and audit ordering.
"""

from dataclasses import replace

from events.domain import AuditRecord, Event, EventId, Registration
from events.domain.errors import (
    DuplicateRegistrationError,
    FieldIssue,
    ValidationFailedError,
)
from events.domain.models import title_key
from events.stores.interfaces import AuditLog, EventStore, RegistrationStore
from events.utils.locks import KeyedLocks


class InMemoryEventStore(EventStore):
    """Event store backed by per-tenant dicts."""

    def __init__(self) -> None:
        self._events: dict[str, dict[EventId, Event]] = {}
        self._titles: dict[str, set[str]] = {}
        self._tenant_locks = KeyedLocks()
        self._event_locks = KeyedLocks()

    def lock_event(self, tenant_id: str, event_id: EventId):
        return self._event_locks.hold((tenant_id, event_id))

    def add_event(self, event: Event) -> None:
        with self._tenant_locks.hold(event.tenant_id):
            titles = self._titles.setdefault(event.tenant_id, set())
            if event.title_key in titles:
                raise ValidationFailedError([FieldIssue("title", "duplicate")])
            titles.add(event.title_key)
            self._events.setdefault(event.tenant_id, {})[event.id] = event

    def save_event(self, event: Event) -> None:
        with self._tenant_locks.hold(event.tenant_id):
            events = self._events.get(event.tenant_id, {})
            previous = events.get(event.id)
            if previous is None:
                raise KeyError(f"Unknown event {event.id}")
            if previous.title_key != event.title_key:
                titles = self._titles[event.tenant_id]
                titles.discard(previous.title_key)
                titles.add(event.title_key)
            events[event.id] = event

    def get_event(self, tenant_id: str, event_id: EventId) -> Event | None:
        with self._tenant_locks.hold(tenant_id):
            return self._events.get(tenant_id, {}).get(event_id)

    def title_taken(self, tenant_id: str, title: str) -> bool:
        with self._tenant_locks.hold(tenant_id):
            return title_key(title) in self._titles.get(tenant_id, set())

    def list_events(self, tenant_id: str) -> list[Event]:
        with self._tenant_locks.hold(tenant_id):
            return list(self._events.get(tenant_id, {}).values())


class InMemoryRegistrationStore(RegistrationStore):
    """Registration ledger keyed by ``(tenant_id, event_id)`` then member."""

    def __init__(self) -> None:
        self._ledger: dict[tuple[str, EventId], dict[str, Registration]] = {}
        self._locks = KeyedLocks()

    def _entries(self, tenant_id: str, event_id: EventId) -> dict[str, Registration]:
        return self._ledger.setdefault((tenant_id, event_id), {})

    def get_registration(
        self, tenant_id: str, event_id: EventId, member_id: str
    ) -> Registration | None:
        with self._locks.hold((tenant_id, event_id)):
            return self._entries(tenant_id, event_id).get(member_id)

    def add_registration(self, registration: Registration) -> None:
        key = (registration.tenant_id, registration.event_id)
        with self._locks.hold(key):
            entries = self._entries(*key)
            if registration.member_id in entries:
                raise DuplicateRegistrationError()
            entries[registration.member_id] = registration

    def save_registration(self, registration: Registration) -> None:
        key = (registration.tenant_id, registration.event_id)
        with self._locks.hold(key):
            entries = self._entries(*key)
            if registration.member_id not in entries:
                raise KeyError(f"Unknown registration {registration.id}")
            entries[registration.member_id] = registration

    def remove_registration(
        self, tenant_id: str, event_id: EventId, member_id: str
    ) -> Registration | None:
        with self._locks.hold((tenant_id, event_id)):
            return self._entries(tenant_id, event_id).pop(member_id, None)

    def count_live(self, tenant_id: str, event_id: EventId) -> int:
        with self._locks.hold((tenant_id, event_id)):
            return len(self._entries(tenant_id, event_id))

    def list_registrations(self, tenant_id: str, event_id: EventId) -> list[Registration]:
        with self._locks.hold((tenant_id, event_id)):
            return list(self._entries(tenant_id, event_id).values())


class InMemoryAuditLog(AuditLog):
    """Append-only list per tenant with a per-tenant sequence."""

    def __init__(self) -> None:
        self._records: dict[str, list[AuditRecord]] = {}
        self._locks = KeyedLocks()

    def append(self, record: AuditRecord) -> AuditRecord:
        with self._locks.hold(record.tenant_id):
            records = self._records.setdefault(record.tenant_id, [])
            record = replace(record, sequence=len(records) + 1)
            records.append(record)
            return record

    def list_records(
        self, tenant_id: str, event_id: EventId | None = None
    ) -> list[AuditRecord]:
        with self._locks.hold(tenant_id):
            records = list(self._records.get(tenant_id, []))
        if event_id is not None:
            records = [record for record in records if record.event_id == event_id]
        return records
