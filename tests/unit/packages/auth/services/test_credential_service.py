import pytest

from common.core.exceptions import (
    InvalidCredentialsError,
    MissingCredentialsError,
    RemoteServiceError,
    UserDeletedError,
)
from packages.auth.models.domain.authenticated_user import ADMIN_PERMISSIONS, UserRole
from packages.auth.services.credential_service import (
    CredentialService,
    build_user,
    find_credentials_row,
    parse_permissions,
)

HEADER = ["Name", "Username", "Password", "Role", "Permissions", "Status"]


@pytest.fixture
def credential_service(mock_backend):
    return CredentialService(mock_backend)


class TestFindCredentialsRow:
    def test_exact_trimmed_match(self):
        rows = [["Bob", " bob ", " pw ", "user", "", ""]]

        assert find_credentials_row(rows, "bob", "pw") is rows[0]
        assert find_credentials_row(rows, "  bob", "pw  ") is rows[0]

    def test_case_sensitive(self):
        rows = [["Bob", "bob", "pw", "user", "", ""]]

        assert find_credentials_row(rows, "Bob", "pw") is None
        assert find_credentials_row(rows, "bob", "PW") is None

    def test_first_match_wins(self):
        rows = [
            ["First", "bob", "pw", "user", "Document", ""],
            ["Second", "bob", "pw", "admin", "", ""],
        ]

        assert find_credentials_row(rows, "bob", "pw")[0] == "First"

    def test_non_string_cells(self):
        rows = [["Num", 1234, 5678, "user", "", ""]]

        assert find_credentials_row(rows, "1234", "5678") is rows[0]

    def test_short_rows_ignored(self):
        assert find_credentials_row([["only name"]], "bob", "pw") is None


class TestBuildUser:
    def test_admin_gets_fixed_permissions(self):
        user = build_user(["Ann", "ann", "pw", "Admin", "Document", ""])

        assert user.role == UserRole.ADMIN
        assert user.permissions == ADMIN_PERMISSIONS
        assert len(user.permissions) == 7

    def test_user_permissions_parsed(self):
        user = build_user([" Bob ", "bob", "pw", "user", "Document, , Calendar ,", ""])

        assert user.role == UserRole.USER
        assert user.name == "Bob"
        assert user.user_id == "bob"
        assert user.permissions == ["Document", "Calendar"]

    def test_missing_role_defaults_to_user(self):
        user = build_user(["Bob", "bob", "pw"])

        assert user.role == UserRole.USER
        assert user.permissions == []

    def test_parse_permissions_drops_empties(self):
        assert parse_permissions(" , ,") == []


class TestCredentialService:
    async def test_empty_fields_rejected_without_network(
        self, credential_service, mock_backend
    ):
        with pytest.raises(MissingCredentialsError):
            await credential_service.authenticate("", "pw")
        with pytest.raises(MissingCredentialsError):
            await credential_service.authenticate("bob", "")

        mock_backend.fetch_rows.assert_not_called()

    async def test_successful_login(self, credential_service, mock_backend):
        mock_backend.fetch_rows.return_value = [
            HEADER,
            ["Bob", "bob", "pw", "user", "Document", ""],
        ]

        user = await credential_service.authenticate("bob", "pw")

        assert user.user_id == "bob"
        assert user.has_permission("Document")
        assert not user.has_permission("Settings")
        mock_backend.fetch_rows.assert_awaited_once_with(
            "Pass", {"username": "bob", "password": "pw"}
        )

    async def test_header_row_is_not_a_credential(self, credential_service, mock_backend):
        mock_backend.fetch_rows.return_value = [HEADER]

        with pytest.raises(InvalidCredentialsError):
            await credential_service.authenticate("Username", "Password")

    async def test_no_match(self, credential_service, mock_backend):
        mock_backend.fetch_rows.return_value = [
            HEADER,
            ["Bob", "bob", "pw", "user", "", ""],
        ]

        with pytest.raises(InvalidCredentialsError, match="Invalid username or password"):
            await credential_service.authenticate("bob", "wrong")

    async def test_deleted_user(self, credential_service, mock_backend):
        mock_backend.fetch_rows.return_value = [
            HEADER,
            ["Bob", "bob", "pw", "user", "", " Deleted "],
        ]

        with pytest.raises(UserDeletedError, match="User does not exist"):
            await credential_service.authenticate("bob", "pw")

    async def test_deleted_flag_is_exact(self, credential_service, mock_backend):
        mock_backend.fetch_rows.return_value = [
            HEADER,
            ["Bob", "bob", "pw", "user", "", "deleted"],
        ]

        user = await credential_service.authenticate("bob", "pw")

        assert user.user_id == "bob"

    async def test_remote_failure_propagates(self, credential_service, mock_backend):
        mock_backend.fetch_rows.side_effect = RemoteServiceError("Server error: 500")

        with pytest.raises(RemoteServiceError):
            await credential_service.authenticate("bob", "pw")

        assert mock_backend.fetch_rows.await_count == 1
