from events.handlers.views import (
    AuditRecordListView,
    EventCapacityView,
    EventDetailView,
    EventListView,
    EventPricingView,
    EventPublishView,
    EventRegistrationView,
    ReminderRunView,
    UpcomingEventListView,
)

__all__ = [
    "AuditRecordListView",
    "EventCapacityView",
    "EventDetailView",
    "EventListView",
    "EventPricingView",
    "EventPublishView",
    "EventRegistrationView",
    "ReminderRunView",
    "UpcomingEventListView",
]
