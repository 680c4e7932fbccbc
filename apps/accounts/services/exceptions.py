"""Domain-specific exceptions for accounts services."""

from apps.core.exceptions import NotFoundError


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserNotFoundError(AccountsServiceError, NotFoundError):
    """Raised when user does not exist."""
    pass
