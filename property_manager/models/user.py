"""Admin user model - credentials and property claims stored in users.json."""

from typing import Optional
from pydantic import Field

from property_manager.models.base import RecordModel


class UserCredential(RecordModel):
    """Admin backend user."""
    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Login name (case-insensitive)")
    display_name: str = ""
    roles: list[str] = Field(default_factory=list, description="admin, agent, property-manager, property-owner")
    property_ids: list[str] = Field(default_factory=list, description="Properties this user may manage")
    email: Optional[str] = None
    phone: Optional[str] = None
    whats_app: Optional[str] = None
    viber: Optional[str] = None
    disabled: bool = False
    preferred_language: Optional[str] = None
    password_hash: str = ""
    password_salt: str = ""

    def has_role(self, role: str) -> bool:
        return any(candidate.lower() == role.lower() for candidate in self.roles)
