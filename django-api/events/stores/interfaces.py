"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Every read and write is
scoped by ``tenant_id``; a record that belongs to another tenant is
indistinguishable from one that does not exist.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from events.domain import AuditRecord, Event, EventId, Registration


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def lock_event(self, tenant_id: str, event_id: EventId) -> AbstractContextManager[None]:
        """Serialize read-then-write sequences against one event.

        Everything done inside the block (on this store and on the
        registration store) is linearizable with respect to other holders of
        the same event's lock. Locks never span events or tenants.
        """
        ...

    @abstractmethod
    def add_event(self, event: Event) -> None:
        """Insert a new event.

        Raises:
            ValidationFailedError: If the tenant already has an event with the
                same case-insensitive title.
        """
        ...

    @abstractmethod
    def save_event(self, event: Event) -> None:
        """Persist changes to an existing event."""
        ...

    @abstractmethod
    def get_event(self, tenant_id: str, event_id: EventId) -> Event | None:
        """Return an event by ID within the tenant, or None if not found."""
        ...

    @abstractmethod
    def title_taken(self, tenant_id: str, title: str) -> bool:
        """Check whether any event in the tenant already uses the title."""
        ...

    @abstractmethod
    def list_events(self, tenant_id: str) -> list[Event]:
        """Return the tenant's events in insertion order."""
        ...


class RegistrationStore(ABC):
    """Interface for the registration ledger.

    The live registration count is always derived from the stored records.
    """

    @abstractmethod
    def get_registration(
        self, tenant_id: str, event_id: EventId, member_id: str
    ) -> Registration | None:
        """Return the member's live registration, or None."""
        ...

    @abstractmethod
    def add_registration(self, registration: Registration) -> None:
        """Insert a live registration.

        Raises:
            DuplicateRegistrationError: If the member is already registered.
        """
        ...

    @abstractmethod
    def save_registration(self, registration: Registration) -> None:
        """Persist reminder bookkeeping on an existing registration."""
        ...

    @abstractmethod
    def remove_registration(
        self, tenant_id: str, event_id: EventId, member_id: str
    ) -> Registration | None:
        """Delete and return the member's registration, or None if absent."""
        ...

    @abstractmethod
    def count_live(self, tenant_id: str, event_id: EventId) -> int:
        """Return the number of live registrations for an event."""
        ...

    @abstractmethod
    def list_registrations(self, tenant_id: str, event_id: EventId) -> list[Registration]:
        """Return an event's live registrations in creation order."""
        ...


class AuditLog(ABC):
    """Append-only audit record log."""

    @abstractmethod
    def append(self, record: AuditRecord) -> AuditRecord:
        """Append a record and return it with its tenant sequence assigned."""
        ...

    @abstractmethod
    def list_records(
        self, tenant_id: str, event_id: EventId | None = None
    ) -> list[AuditRecord]:
        """Return the tenant's records in sequence order."""
        ...
