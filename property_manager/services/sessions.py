"""Authenticated admin session and the role checks built on it."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import FrozenSet, Iterable, Optional

from property_manager.models.user import UserCredential
from property_manager.utils.errors import AuthError

ROLE_ADMIN = "admin"
ROLE_AGENT = "agent"
ROLE_PROPERTY_MANAGER = "property-manager"
OWNER_ROLES = frozenset({"property-owner", "property_owner", "propertyowner", "owner"})


def _fold(values: Iterable[str]) -> FrozenSet[str]:
    return frozenset(value.strip().lower() for value in values if value and value.strip())


@dataclass(frozen=True)
class SessionContext:
    """Who is acting, passed explicitly to the admin layer.

    ``roles`` and ``property_ids`` are compared case-insensitively.
    ``expires_at`` of None means the session does not expire.
    """
    user_id: str
    username: str
    roles: FrozenSet[str] = field(default_factory=frozenset)
    property_ids: FrozenSet[str] = field(default_factory=frozenset)
    expires_at: Optional[datetime] = None
    disabled: bool = False

    @classmethod
    def for_user(cls, user: UserCredential, expires_at: Optional[datetime] = None) -> "SessionContext":
        return cls(
            user_id=user.id,
            username=user.username,
            roles=_fold(user.roles),
            property_ids=_fold(user.property_ids),
            expires_at=expires_at,
            disabled=user.disabled,
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.now(timezone.utc)) >= self.expires_at

    def ensure_active(self, now: Optional[datetime] = None) -> None:
        if self.disabled:
            raise AuthError(f"User '{self.username}' is disabled")
        if self.is_expired(now):
            raise AuthError(f"Session for '{self.username}' has expired")

    def has_role(self, role: str) -> bool:
        return role.lower() in self.roles

    @property
    def is_admin(self) -> bool:
        return self.has_role(ROLE_ADMIN)

    @property
    def is_agent(self) -> bool:
        return self.has_role(ROLE_AGENT)

    @property
    def is_property_manager(self) -> bool:
        return self.has_role(ROLE_PROPERTY_MANAGER)

    @property
    def is_property_owner(self) -> bool:
        return bool(self.roles & OWNER_ROLES)

    def has_property_access(self, property_id: str) -> bool:
        return property_id.strip().lower() in self.property_ids

    def can_create(self) -> bool:
        return self.is_admin or self.is_agent or self.is_property_owner

    def can_edit(self, property_id: str) -> bool:
        """Update, archive, restore, publish and revert."""
        if self.is_admin:
            return True
        return (self.is_agent or self.is_property_owner) and self.has_property_access(property_id)

    def can_view(self, property_id: str) -> bool:
        if self.is_admin:
            return True
        if not (self.is_agent or self.is_property_manager or self.is_property_owner):
            return False
        return self.has_property_access(property_id)
