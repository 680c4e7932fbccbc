"""Domain-specific exceptions for friends services."""

from apps.core.exceptions import (
    NotFoundError,
    ForbiddenError,
    ConflictError,
    BadRequestError,
)


class FriendsServiceError(Exception):
    """Base exception for friends services."""
    pass


class FriendshipNotFoundError(FriendsServiceError, NotFoundError):
    """Raised when a friendship does not exist."""
    pass


class SelfFriendshipError(FriendsServiceError, BadRequestError):
    """Raised when a user invites themselves."""
    pass


class FriendshipExistsError(FriendsServiceError, ConflictError):
    """Raised when a relation between the two users already exists."""
    pass


class NotAddresseeError(FriendsServiceError, ForbiddenError):
    """Raised when someone other than the addressee accepts a request."""
    pass


class NotParticipantError(FriendsServiceError, ForbiddenError):
    """Raised when someone outside the relation tries to remove it."""
    pass
