"""
Domain-specific exceptions for groups app.

These exceptions represent business rule violations. Each one carries one of
the shared error kinds from apps.core.exceptions, which decides the HTTP
status it is reported with.
"""

from apps.core.exceptions import (
    NotFoundError,
    ForbiddenError,
    BadRequestError,
)


class GroupsServiceError(Exception):
    """Base exception for all groups service errors."""
    pass


class GroupNotFoundError(GroupsServiceError, NotFoundError):
    """Raised when a group does not exist."""
    pass


class NotMemberError(GroupsServiceError, ForbiddenError):
    """Raised when the requester is not a member of the group."""
    pass


class MemberNotFoundError(GroupsServiceError, NotFoundError):
    """Raised when the target user is not a member of the group."""
    pass


class InvitationNotFoundError(GroupsServiceError, NotFoundError):
    """Raised when an invitation does not exist or is addressed to someone else."""
    pass


class InviteeNotFoundError(GroupsServiceError, NotFoundError):
    """Raised when no user has the invited email address."""
    pass


class InvalidRoleError(GroupsServiceError, BadRequestError):
    """Raised when a role string does not name a group role."""
    pass


class OwnerCannotLeaveError(GroupsServiceError, BadRequestError):
    """Raised when a group owner tries to leave their group."""
    pass


class CannotChangeOwnRoleError(GroupsServiceError, BadRequestError):
    """Raised when the owner tries to change their own role."""
    pass


class CannotChangeOwnerRoleError(GroupsServiceError, ForbiddenError):
    """Raised when an admin attempts to change the owner's role."""
    pass


class CannotRemoveOwnerError(GroupsServiceError, ForbiddenError):
    """Raised when attempting to remove the group owner."""
    pass


class CannotRemoveAdminError(GroupsServiceError, ForbiddenError):
    """Raised when an admin attempts to remove another admin."""
    pass


class InsufficientPermissionsError(GroupsServiceError, ForbiddenError):
    """Raised when a user lacks required permissions for an action."""
    pass
