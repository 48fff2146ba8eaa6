"""
Credential check against the remote ``Pass`` sheet.

Columns: A name, B username, C password, D role, E permissions, F deleted flag.
"""

from typing import Any, List, Optional, Sequence

from common.core.constants import SheetName
from common.core.exceptions import (
    InvalidCredentialsError,
    MissingCredentialsError,
    UserDeletedError,
)
from common.core.telemetry import get_logger, trace_span
from common.providers.sheets.factory import get_sheets_backend
from common.providers.sheets.interface import SheetsBackendInterface
from packages.auth.models.domain.authenticated_user import (
    ADMIN_PERMISSIONS,
    AuthenticatedUser,
    UserRole,
)

logger = get_logger(__name__)

NAME_COLUMN = 0
USERNAME_COLUMN = 1
PASSWORD_COLUMN = 2
ROLE_COLUMN = 3
PERMISSIONS_COLUMN = 4
DELETED_COLUMN = 5

DELETED_SENTINEL = "Deleted"


def _cell(row: Sequence[Any], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index])


def find_credentials_row(
    rows: Sequence[Sequence[Any]], username: str, password: str
) -> Optional[Sequence[Any]]:
    """First row whose trimmed username and password both equal the trimmed input."""
    username = username.strip()
    password = password.strip()
    for row in rows:
        if (
            _cell(row, USERNAME_COLUMN).strip() == username
            and _cell(row, PASSWORD_COLUMN).strip() == password
        ):
            return row
    return None


def parse_permissions(raw: str) -> List[str]:
    return [p.strip() for p in raw.split(",") if p.strip()]


def build_user(row: Sequence[Any]) -> AuthenticatedUser:
    """Derive role and permissions from a matched credentials row."""
    raw_role = _cell(row, ROLE_COLUMN).strip().lower() or UserRole.USER.value
    role = UserRole.ADMIN if raw_role == UserRole.ADMIN.value else UserRole.USER

    if role == UserRole.ADMIN:
        permissions = list(ADMIN_PERMISSIONS)
    else:
        permissions = parse_permissions(_cell(row, PERMISSIONS_COLUMN))

    return AuthenticatedUser(
        user_id=_cell(row, USERNAME_COLUMN),
        name=_cell(row, NAME_COLUMN).strip(),
        role=role,
        permissions=permissions,
    )


class CredentialService:
    """Checks a username/password pair against the credentials sheet."""

    def __init__(self, backend: SheetsBackendInterface):
        self.backend = backend

    @trace_span
    async def authenticate(self, username: str, password: str) -> AuthenticatedUser:
        """
        Authenticate a user.

        Args:
            username: Username as typed
            password: Password as typed

        Returns:
            The authenticated user with role and permissions

        Raises:
            MissingCredentialsError: If either field is empty (no network call)
            RemoteServiceError: If the credentials sheet could not be read
            InvalidCredentialsError: If no row matches
            UserDeletedError: If the matching row is flagged as deleted
        """
        if not username or not password:
            raise MissingCredentialsError("Please enter both username and password")

        rows = await self.backend.fetch_rows(
            SheetName.CREDENTIALS.value,
            {"username": username, "password": password},
        )

        # Skip header row
        row = find_credentials_row(rows[1:], username, password)
        if row is None:
            logger.info(f"Login rejected for {username.strip()}: no matching row")
            raise InvalidCredentialsError("Invalid username or password")

        if _cell(row, DELETED_COLUMN).strip() == DELETED_SENTINEL:
            logger.info(f"Login rejected for {username.strip()}: user deleted")
            raise UserDeletedError("User does not exist")

        user = build_user(row)
        logger.info(f"User {user.user_id} logged in with role {user.role}")
        return user


def get_credential_service() -> CredentialService:
    """Get credential service instance."""
    return CredentialService(get_sheets_backend())
