"""Domain-specific exceptions for moderation services."""

from apps.core.exceptions import NotFoundError, ForbiddenError, BadRequestError


class ModerationServiceError(Exception):
    """Base exception for moderation services."""
    pass


class TargetUserNotFoundError(ModerationServiceError, NotFoundError):
    """Raised when the moderated account does not exist."""
    pass


class InsufficientModerationRoleError(ModerationServiceError, ForbiddenError):
    """Raised when the actor's moderation role is too low."""
    pass


class ProtectedTargetError(ModerationServiceError, ForbiddenError):
    """Raised when the target is an ADMIN, or a MODERATOR acts on a peer."""
    pass


class InvalidRoleChangeError(ModerationServiceError, BadRequestError):
    """Raised when promoting or demoting an ADMIN."""
    pass


class ModeratedContentNotFoundError(ModerationServiceError, NotFoundError):
    """Raised when the note or group being moderated does not exist."""
    pass
