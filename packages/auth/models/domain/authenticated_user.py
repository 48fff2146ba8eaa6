from enum import StrEnum
from typing import List
from pydantic import BaseModel, ConfigDict


class UserRole(StrEnum):
    ADMIN = "admin"
    USER = "user"


# Admins always get the full set, whatever the sheet says
ADMIN_PERMISSIONS: List[str] = [
    "Dashboard",
    "Document",
    "Subscription",
    "Loan",
    "Calendar",
    "Master",
    "Settings",
]


class AuthenticatedUser(BaseModel):
    """User context passed through authentication dependencies"""

    user_id: str
    name: str
    role: UserRole = UserRole.USER
    permissions: List[str] = []

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def has_permission(self, permission: str) -> bool:
        return self.is_admin or permission in self.permissions
