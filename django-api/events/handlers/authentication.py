"""Actor resolution from gateway-supplied headers.

Identity is established upstream; this only turns the forwarded tenant,
actor and roles into an Actor for the services.
"""

from rest_framework.authentication import BaseAuthentication
from rest_framework.request import Request

from events.domain import Actor
from events.utils.logging import add_context

TENANT_HEADER = "HTTP_X_TENANT_ID"
ACTOR_HEADER = "HTTP_X_ACTOR_ID"
ROLES_HEADER = "HTTP_X_ROLES"


class HeaderActorAuthentication(BaseAuthentication):
    """Builds an Actor from X-Tenant-Id, X-Actor-Id and X-Roles."""

    def authenticate(self, request: Request) -> tuple[Actor, None] | None:
        tenant_id = request.META.get(TENANT_HEADER, "").strip()
        actor_id = request.META.get(ACTOR_HEADER, "").strip()
        if not tenant_id or not actor_id:
            return None
        roles = [role for role in request.META.get(ROLES_HEADER, "").split(",") if role.strip()]
        actor = Actor.of(tenant_id, actor_id, *roles)
        add_context(tenant_id=tenant_id, actor_id=actor_id)
        return actor, None

    def authenticate_header(self, request: Request) -> str:
        return "X-Actor-Id"
