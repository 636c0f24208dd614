"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and hand raw input to services
- Call services for business logic
- Map domain errors to HTTP responses (see handlers/errors.py)
- Never contain business logic
- Never expose internal error details
"""

from collections.abc import Mapping

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events.domain import Actor
from events.domain.errors import FieldIssue, ValidationFailedError
from events.handlers.serializers import (
    AuditRecordSerializer,
    EventSerializer,
    EventSummarySerializer,
    PageSerializer,
)
from events.services.container import EventServices, get_services
from events.utils.logging import clear_context


class EventsAPIView(APIView):
    """Base view exposing the caller and the configured services."""

    @property
    def actor(self) -> Actor | None:
        user = self.request.user
        return user if isinstance(user, Actor) else None

    @property
    def services(self) -> EventServices:
        return get_services()

    @property
    def body(self) -> Mapping:
        """The parsed JSON body; anything but an object is rejected."""
        data = self.request.data
        if not isinstance(data, Mapping):
            raise ValidationFailedError(
                [FieldIssue("body", "invalid")], "Request body must be a JSON object"
            )
        return data

    def finalize_response(self, request, response, *args, **kwargs):
        clear_context()
        return super().finalize_response(request, response, *args, **kwargs)


class EventListView(EventsAPIView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        summaries = self.services.catalog.list_events(self.actor)
        return Response({"events": EventSummarySerializer(summaries, many=True).data})

    def post(self, request: Request) -> Response:
        body = self.body
        event = self.services.catalog.create_event(
            self.actor,
            title=body.get("title"),
            start_date=body.get("start_date"),
            end_date=body.get("end_date"),
            description=body.get("description"),
            capacity=body.get("capacity"),
            price=body.get("price"),
            currency=body.get("currency"),
            location=body.get("location"),
        )
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class UpcomingEventListView(EventsAPIView):
    """Handler for GET /api/events/upcoming"""

    def get(self, request: Request) -> Response:
        page = self.services.registrations.list_upcoming(
            self.actor,
            page=request.query_params.get("page"),
            page_size=request.query_params.get("page_size"),
        )
        return Response(PageSerializer(page).data)


class EventDetailView(EventsAPIView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        summary = self.services.catalog.get_event(self.actor, event_id)
        return Response(EventSummarySerializer(summary).data)


class EventPublishView(EventsAPIView):
    """Handler for POST /api/events/{event_id}/publish"""

    def post(self, request: Request, event_id: str) -> Response:
        event = self.services.catalog.publish_event(self.actor, event_id)
        return Response(EventSerializer(event).data)


class EventCapacityView(EventsAPIView):
    """Handler for PATCH /api/events/{event_id}/capacity"""

    def patch(self, request: Request, event_id: str) -> Response:
        event = self.services.catalog.update_capacity(
            self.actor, event_id, self.body.get("capacity")
        )
        return Response(EventSerializer(event).data)


class EventPricingView(EventsAPIView):
    """Handler for PATCH /api/events/{event_id}/pricing"""

    def patch(self, request: Request, event_id: str) -> Response:
        event = self.services.catalog.update_pricing(
            self.actor,
            event_id,
            self.body.get("price"),
            self.body.get("currency"),
        )
        return Response(EventSerializer(event).data)


class EventRegistrationView(EventsAPIView):
    """Handler for POST/DELETE /api/events/{event_id}/register"""

    def post(self, request: Request, event_id: str) -> Response:
        registration = self.services.registrations.register(self.actor, event_id)
        return Response(
            {"registration_id": str(registration.id), "status": "registered"},
            status=status.HTTP_201_CREATED,
        )

    def delete(self, request: Request, event_id: str) -> Response:
        self.services.registrations.cancel_registration(self.actor, event_id)
        return Response({"status": "canceled"})


class AuditRecordListView(EventsAPIView):
    """Handler for GET /api/audit"""

    def get(self, request: Request) -> Response:
        records = self.services.audit.list_records(
            self.actor, request.query_params.get("event_id")
        )
        return Response({"records": AuditRecordSerializer(records, many=True).data})


class ReminderRunView(EventsAPIView):
    """Handler for POST /api/internal/event-reminders/run"""

    def post(self, request: Request) -> Response:
        sent = self.services.reminders.run_reminders(self.actor)
        return Response({"sent": sent})
