"""Domain-specific exceptions for notes services."""

from apps.core.exceptions import (
    NotFoundError,
    ForbiddenError,
    BadRequestError,
)


class NotesServiceError(Exception):
    """Base exception for notes services."""
    pass


class NoteNotFoundError(NotesServiceError, NotFoundError):
    """Raised when a note does not exist."""
    pass


class NoteAccessDeniedError(NotesServiceError, ForbiddenError):
    """Raised when the caller's effective permission is too low."""
    pass


class ShareNotFoundError(NotesServiceError, NotFoundError):
    """Raised when a share id or token does not resolve to a share."""
    pass


class SelfShareError(NotesServiceError, BadRequestError):
    """Raised when the owner tries to share a note with themselves."""
    pass


class ShareRejectedError(NotesServiceError, BadRequestError):
    """Raised when accepting a share the recipient already rejected."""
    pass


class InvalidPermissionError(NotesServiceError, BadRequestError):
    """Raised when a permission string is not READ or WRITE."""
    pass


class GroupMembershipRequiredError(NotesServiceError, ForbiddenError):
    """Raised when creating or listing group notes without membership."""
    pass
