"""Audit trail: records every successful mutation after it has committed."""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from events.domain import Actor, AuditAction, AuditRecord, AuditRecordId, EventId, Role
from events.services.access import parse_event_id, require_role
from events.stores.interfaces import AuditLog
from events.utils.logging import get_logger

logger = get_logger(__name__)


class AuditTrail:
    """Fire-and-forget writer over an AuditLog."""

    def __init__(self, log: AuditLog, clock: Callable[[], datetime]) -> None:
        self._log = log
        self._clock = clock

    def record(
        self,
        tenant_id: str,
        event_id: EventId,
        action: AuditAction,
        actor_id: str,
        meta: dict[str, Any] | None = None,
    ) -> AuditRecord | None:
        """Append an audit record.

        Never raises: a failed append is logged and ``None`` is returned so
        the mutation it describes stands.
        """
        record = AuditRecord(
            id=AuditRecordId.new(),
            tenant_id=tenant_id,
            event_id=event_id,
            action=action,
            actor_id=actor_id,
            created_at=self._clock(),
            meta=dict(meta or {}),
        )
        try:
            return self._log.append(record)
        except Exception:
            logger.exception(
                "Audit append failed",
                tenant_id=tenant_id,
                event_id=str(event_id),
                action=action.value,
            )
            return None

    def list_records(
        self, actor: Actor | None, event_id: str | EventId | None = None
    ) -> list[AuditRecord]:
        """Return the caller's tenant records in sequence order (admin only)."""
        actor = require_role(actor, Role.ADMIN)
        parsed = parse_event_id(event_id) if event_id is not None else None
        return self._log.list_records(actor.tenant_id, parsed)
