from events.stores.interfaces import AuditLog, EventStore, RegistrationStore

__all__ = ["AuditLog", "EventStore", "RegistrationStore"]
