from django.urls import path

from events.handlers import (
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

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/upcoming", UpcomingEventListView.as_view(), name="event-upcoming"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/publish", EventPublishView.as_view(), name="event-publish"),
    path("events/<str:event_id>/capacity", EventCapacityView.as_view(), name="event-capacity"),
    path("events/<str:event_id>/pricing", EventPricingView.as_view(), name="event-pricing"),
    path(
        "events/<str:event_id>/register",
        EventRegistrationView.as_view(),
        name="event-register",
    ),
    path("audit", AuditRecordListView.as_view(), name="audit-list"),
    path(
        "internal/event-reminders/run",
        ReminderRunView.as_view(),
        name="event-reminders-run",
    ),
]
