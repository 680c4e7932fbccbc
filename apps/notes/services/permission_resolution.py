"""
Permission resolution - effective access of a user to a note.

The resolver itself is a pure function over already-fetched facts; the
helpers below it gather those facts from storage.
"""

from typing import Optional
from uuid import UUID

from apps.accounts.models import User
from apps.groups.models import GroupMembership
from apps.notes.models import (
    Note,
    NoteShare,
    NotePermission,
    SharePermission,
    ShareStatus,
)

from .exceptions import NoteAccessDeniedError


def resolve_permission(
    *,
    note_owner_id: UUID,
    user_id: UUID,
    is_group_member: bool,
    share: Optional[NoteShare]
) -> Optional[NotePermission]:
    """
    Combine ownership, group membership and sharing into one permission.

    Candidates:
    1. Owner of the note -> OWNER
    2. Member of the note's group -> WRITE (there is no read-only group role)
    3. ACCEPTED share for the user's email -> the share's permission

    The highest candidate wins (OWNER > WRITE > READ). None means no access.

    Args:
        note_owner_id: ID of the note's owner
        user_id: ID of the user asking
        is_group_member: Whether the note is group-scoped and user is a member
        share: Share addressed to the user's email, if any

    Returns:
        Effective NotePermission, or None when access is denied
    """
    if str(note_owner_id) == str(user_id):
        return NotePermission.OWNER

    candidates = []

    if is_group_member:
        candidates.append(NotePermission.WRITE)

    if share is not None and share.status == ShareStatus.ACCEPTED:
        candidates.append(SharePermission(share.permission).as_note_permission)

    if not candidates:
        return None

    return max(candidates, key=lambda permission: permission.rank)


def find_share_for_email(*, note_id: UUID, email: str) -> Optional[NoteShare]:
    return (
        NoteShare.objects
        .filter(note_id=note_id, recipient_email__iexact=email.strip())
        .first()
    )


def get_effective_permission(*, note: Note, user: User) -> Optional[NotePermission]:
    """Gather the resolver's inputs for (note, user) and resolve them."""
    if note.owner_id == user.id:
        return NotePermission.OWNER

    is_member = (
        note.group_id is not None
        and GroupMembership.objects.filter(group_id=note.group_id, user=user).exists()
    )
    share = find_share_for_email(note_id=note.id, email=user.email)

    return resolve_permission(
        note_owner_id=note.owner_id,
        user_id=user.id,
        is_group_member=is_member,
        share=share,
    )


def require_permission(
    *,
    note: Note,
    user: User,
    minimum: NotePermission
) -> NotePermission:
    """
    Ensure the user has at least `minimum` on the note.

    Returns:
        The effective permission

    Raises:
        NoteAccessDeniedError: If the effective permission is lower
    """
    permission = get_effective_permission(note=note, user=user)
    if permission is None or not permission.at_least(minimum):
        raise NoteAccessDeniedError("You do not have access to this note")
    return permission
