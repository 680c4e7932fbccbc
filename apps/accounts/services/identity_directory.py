"""
Identity directory service.

Read-only lookups of (id, email, display name) for verified callers and for
users referenced by email in invitations and shares.
"""

from dataclasses import dataclass
from typing import Iterable
from uuid import UUID

from django.contrib.auth import get_user_model

from .exceptions import UserNotFoundError

User = get_user_model()

DEFAULT_DISPLAY_NAME = 'User'


@dataclass(frozen=True)
class Identity:
    """Public identity of a user as seen by the other services."""

    id: UUID
    email: str
    display_name: str


def get_identity(user) -> Identity:
    """Build the identity triple for a user instance."""
    return Identity(
        id=user.id,
        email=user.email,
        display_name=user.get_display_name(),
    )


def get_user_by_id(*, user_id: UUID) -> User:
    """
    Get an active user by ID.

    Raises:
        UserNotFoundError: If user does not exist
    """
    try:
        return User.objects.get(id=user_id, is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")


def get_user_by_email(*, email: str) -> User:
    """
    Get an active user by email address (case-insensitive).

    Raises:
        UserNotFoundError: If no user has this email
    """
    try:
        return User.objects.get(email__iexact=email.strip(), is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError("User with the given email does not exist")


def get_identities(*, user_ids: Iterable[UUID]) -> dict[UUID, Identity]:
    """
    Resolve many user IDs at once.

    Unknown IDs are simply absent from the result; callers fall back to
    DEFAULT_DISPLAY_NAME for them.
    """
    users = User.objects.filter(id__in=set(user_ids))
    return {user.id: get_identity(user) for user in users}
