"""Serializers for transforming domain models to API responses."""

from rest_framework import serializers


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    event_id = serializers.CharField(source="id")
    tenant_id = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    location = serializers.CharField(allow_null=True)
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField()
    capacity = serializers.SerializerMethodField()
    price = serializers.SerializerMethodField()
    currency = serializers.CharField(allow_null=True)
    status = serializers.CharField(source="status.value")
    created_at = serializers.DateTimeField()

    def get_capacity(self, event) -> int | None:
        return event.capacity.value if event.capacity is not None else None

    def get_price(self, event) -> str | None:
        return str(event.price) if event.price is not None else None


class EventSummarySerializer(serializers.Serializer):
    """Serializer for an event with its live registration count."""

    def to_representation(self, instance) -> dict:
        data = EventSerializer(instance.event).data
        data["registrations_count"] = instance.registrations_count
        return data


class PageSerializer(serializers.Serializer):
    """Serializer for a page of event summaries."""

    items = EventSummarySerializer(many=True)
    page = serializers.IntegerField()
    page_size = serializers.IntegerField()
    total_items = serializers.IntegerField()
    total_pages = serializers.IntegerField()


class RegistrationSerializer(serializers.Serializer):
    """Serializer for Registration domain model."""

    registration_id = serializers.CharField(source="id")
    event_id = serializers.CharField()
    member_id = serializers.CharField()
    status = serializers.CharField(source="status.value")
    reminder_sent_at = serializers.DateTimeField(allow_null=True)
    reminder_count = serializers.IntegerField()
    created_at = serializers.DateTimeField()


class AuditRecordSerializer(serializers.Serializer):
    """Serializer for AuditRecord domain model."""

    id = serializers.CharField()
    sequence = serializers.IntegerField()
    event_id = serializers.CharField()
    action = serializers.CharField(source="action.value")
    actor_id = serializers.CharField()
    created_at = serializers.DateTimeField()
    meta = serializers.DictField()
