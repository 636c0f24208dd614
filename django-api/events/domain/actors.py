"""The caller identity attached to every command."""

from dataclasses import dataclass
from enum import Enum
from typing import Self


class Role(Enum):
    ADMIN = "admin"
    MEMBER = "member"
    SYSTEM = "system"


@dataclass(frozen=True)
class Actor:
    """Resolved caller: which tenant, who, and with which roles.

    Role names are compared case-insensitively.
    """

    tenant_id: str
    actor_id: str
    roles: frozenset[str] = frozenset()

    @classmethod
    def of(cls, tenant_id: str, actor_id: str, *roles: Role | str) -> Self:
        names = frozenset(
            (role.value if isinstance(role, Role) else str(role)).strip().lower()
            for role in roles
        )
        return cls(tenant_id=tenant_id, actor_id=actor_id, roles=names)

    def has_role(self, role: Role) -> bool:
        return role.value in {name.lower() for name in self.roles}

    def has_any_role(self, *roles: Role) -> bool:
        return any(self.has_role(role) for role in roles)

    @property
    def is_authenticated(self) -> bool:
        return True
