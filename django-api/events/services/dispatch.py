"""Reminder delivery collaborators.

The engine only hands over ReminderIntent values; delivery, retries and
confirmation belong to whatever consumes the outbox.
"""

from abc import ABC, abstractmethod

from events.domain import ReminderIntent


class ReminderDispatcher(ABC):
    """Accepts reminder intents for delivery."""

    @abstractmethod
    def dispatch(self, intent: ReminderIntent) -> None:
        ...


class InMemoryReminderOutbox(ReminderDispatcher):
    """Collects intents in a list."""

    def __init__(self) -> None:
        self.intents: list[ReminderIntent] = []

    def dispatch(self, intent: ReminderIntent) -> None:
        self.intents.append(intent)


class DjangoReminderOutbox(ReminderDispatcher):
    """Queues intents in the reminder outbox table."""

    def dispatch(self, intent: ReminderIntent) -> None:
        from events.models import ReminderOutboxEntry

        ReminderOutboxEntry.objects.create(
            tenant_id=intent.tenant_id,
            event_id=intent.event_id.value,
            event_title=intent.event_title,
            member_id=intent.member_id,
            member_email=intent.member_email,
            start_date=intent.start_date,
            location=intent.location,
        )
