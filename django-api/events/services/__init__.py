from events.services.audit_service import AuditTrail
from events.services.event_service import EventService
from events.services.registration_service import RegistrationService
from events.services.reminder_service import ReminderService

__all__ = ["AuditTrail", "EventService", "RegistrationService", "ReminderService"]
