from typing import List, Optional


class AppException(Exception):
    """Base application exception."""

    pass


class ConfigurationError(AppException):
    """Required configuration is missing or invalid."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = missing or []


class NotFoundError(AppException):
    """Resource not found exception."""

    pass


class ValidationError(AppException):
    """Validation error exception."""

    pass


class EntryLimitExceededError(ValidationError):
    """Raised when a document batch would grow past its entry limit."""

    pass


class RemoteServiceError(AppException):
    """The remote script endpoint failed, was unreachable or replied with garbage."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(AppException):
    """Base class for login rejections."""

    pass


class MissingCredentialsError(AuthenticationError):
    """Username or password was left empty."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """No credentials row matched."""

    pass


class UserDeletedError(AuthenticationError):
    """The matching credentials row is flagged as deleted."""

    pass


class PartialSubmissionError(AppException):
    """
    An insert failed part way through a document batch.

    Documents saved before the failure stay committed both remotely and in the
    local store; nothing is rolled back.
    """

    def __init__(self, message: str, failed_index: int, saved_documents: list):
        super().__init__(message)
        self.failed_index = failed_index
        self.saved_documents = saved_documents
