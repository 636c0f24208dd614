"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.core.serializers.json import DjangoJSONEncoder
from django.db import models


class Event(models.Model):
    """Persistence model for events."""

    class Status(models.TextChoices):
        DRAFT = "draft"
        PUBLISHED = "published"

    id = models.BigAutoField(primary_key=True)
    event_id = models.UUIDField(unique=True, default=uuid.uuid4, editable=False)
    tenant_id = models.CharField(max_length=64)
    title = models.CharField(max_length=255)
    title_key = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    capacity = models.PositiveIntegerField(blank=True, null=True)
    price = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True)
    currency = models.CharField(max_length=8, blank=True, null=True)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.DRAFT)
    created_at = models.DateTimeField()

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["tenant_id", "title_key"], name="event_unique_title_per_tenant"
            ),
        ]
        indexes = [
            models.Index(
                fields=["tenant_id", "status", "start_date"],
                name="event_tenant_status_start_idx",
            ),
        ]

    def __str__(self) -> str:
        return self.title


class Registration(models.Model):
    """Persistence model for live event registrations."""

    id = models.BigAutoField(primary_key=True)
    registration_id = models.UUIDField(unique=True, default=uuid.uuid4, editable=False)
    tenant_id = models.CharField(max_length=64)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="registrations")
    member_id = models.CharField(max_length=128)
    status = models.CharField(max_length=16, default="confirmed")
    reminder_sent_at = models.DateTimeField(blank=True, null=True)
    reminder_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField()

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["tenant_id", "event", "member_id"],
                name="registration_unique_member_per_event",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.member_id} - {self.event_id}"


class AuditEntry(models.Model):
    """Append-only audit record. The primary key doubles as the sequence."""

    id = models.BigAutoField(primary_key=True)
    record_id = models.UUIDField(unique=True, default=uuid.uuid4, editable=False)
    tenant_id = models.CharField(max_length=64)
    event_id = models.UUIDField()
    action = models.CharField(max_length=64)
    actor_id = models.CharField(max_length=128)
    created_at = models.DateTimeField()
    meta = models.JSONField(default=dict, encoder=DjangoJSONEncoder)

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=["tenant_id", "id"], name="audit_tenant_id_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.action} - {self.event_id}"


class ReminderOutboxEntry(models.Model):
    """Reminder intent queued for the delivery collaborator."""

    id = models.BigAutoField(primary_key=True)
    tenant_id = models.CharField(max_length=64)
    event_id = models.UUIDField()
    event_title = models.CharField(max_length=255)
    member_id = models.CharField(max_length=128)
    member_email = models.CharField(max_length=255, blank=True, null=True)
    start_date = models.DateTimeField()
    location = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.event_title} - {self.member_id}"
