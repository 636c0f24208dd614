"""Role checks applied at the top of every service command."""

from events.domain import Actor, EventId, Role
from events.domain.errors import EventNotFoundError, ForbiddenError, UnauthorizedError


def require_role(actor: Actor | None, *roles: Role) -> Actor:
    """Return the actor if it holds any of ``roles``.

    Raises:
        UnauthorizedError: If there is no actor.
        ForbiddenError: If the actor holds none of the roles.
    """
    if actor is None:
        raise UnauthorizedError()
    if not actor.has_any_role(*roles):
        raise ForbiddenError(roles[0].value)
    return actor


def parse_event_id(event_id: str | EventId) -> EventId:
    """Parse an event ID; malformed IDs are reported as not found."""
    if isinstance(event_id, EventId):
        return event_id
    try:
        return EventId.from_string(str(event_id))
    except ValueError as exc:
        raise EventNotFoundError(str(event_id)) from exc
