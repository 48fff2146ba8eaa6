from packages.auth.models.domain.authenticated_user import (
    ADMIN_PERMISSIONS,
    AuthenticatedUser,
    UserRole,
)
from packages.auth.models.domain.session import Session

__all__ = [
    "ADMIN_PERMISSIONS",
    "AuthenticatedUser",
    "Session",
    "UserRole",
]
