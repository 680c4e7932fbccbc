"""
Note management service.

Minimal content operations around the authorization core: every read and
write goes through the permission resolver, and deletion cascades to the
note's shares and votes.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.groups.models import GroupMembership
from apps.notes.models import Note, NoteShare, NoteVote, NotePermission

from .exceptions import (
    NoteNotFoundError,
    NoteAccessDeniedError,
    GroupMembershipRequiredError,
)
from .permission_resolution import (
    find_share_for_email,
    get_effective_permission,
    require_permission,
)
from .vote_management import annotate_votes

logger = logging.getLogger(__name__)


def get_note_by_id(*, note_id: UUID) -> Note:
    """
    Get a note by ID.

    Raises:
        NoteNotFoundError: If note doesn't exist
    """
    try:
        return Note.objects.get(id=note_id)
    except Note.DoesNotExist:
        raise NoteNotFoundError(f"Note with ID {note_id} not found")


def get_note_for_user(*, note_id: UUID, user: User) -> tuple[Note, NotePermission]:
    """
    Get a note the user can read, with its vote state attached.

    Returns:
        Tuple of (Note, effective permission)

    Raises:
        NoteNotFoundError: If note doesn't exist
        NoteAccessDeniedError: If the user has no access
    """
    note = get_note_by_id(note_id=note_id)
    permission = require_permission(note=note, user=user, minimum=NotePermission.READ)
    annotate_votes([note], user)
    return note, permission


@transaction.atomic
def create_note(
    *,
    owner: User,
    title: str,
    content: str = '',
    group_id: Optional[UUID] = None
) -> Note:
    """
    Create a private note, or a group note when group_id is given.

    Raises:
        GroupMembershipRequiredError: If owner is not a member of the group
    """
    if group_id is not None:
        if not GroupMembership.objects.filter(group_id=group_id, user=owner).exists():
            raise GroupMembershipRequiredError("You must be a member of this group")

    note = Note.objects.create(
        owner=owner,
        group_id=group_id,
        title=title,
        content=content or ''
    )
    logger.info("Note %s created by %s", note.id, owner.id)
    return note


@transaction.atomic
def update_note(
    *,
    note_id: UUID,
    user: User,
    title: Optional[str] = None,
    content: Optional[str] = None
) -> Note:
    """
    Update a note's title and content (WRITE or better).

    Raises:
        NoteNotFoundError: If note doesn't exist
        NoteAccessDeniedError: If the user cannot write
    """
    try:
        note = Note.objects.select_for_update().get(id=note_id)
    except Note.DoesNotExist:
        raise NoteNotFoundError(f"Note with ID {note_id} not found")

    require_permission(note=note, user=user, minimum=NotePermission.WRITE)

    update_fields = ['updated_at']
    if title is not None:
        note.title = title
        update_fields.append('title')
    if content is not None:
        note.content = content
        update_fields.append('content')

    note.save(update_fields=update_fields)
    return note


def list_my_notes(*, user: User) -> list[Note]:
    """Private (non-group) notes owned by the user, with votes."""
    notes = Note.objects.filter(owner=user, group__isnull=True)
    return annotate_votes(notes, user)


def list_group_notes(*, group_id: UUID, user: User) -> list[Note]:
    """
    Notes of a group, newest first (members only).

    Raises:
        GroupMembershipRequiredError: If user is not a member
    """
    if not GroupMembership.objects.filter(group_id=group_id, user=user).exists():
        raise GroupMembershipRequiredError("You must be a member of this group")

    notes = Note.objects.filter(group_id=group_id).order_by('-created_at')
    return annotate_votes(notes, user)


def purge_note(note: Note) -> None:
    """
    Delete a note with its shares and votes.

    Must run inside a transaction.
    """
    NoteShare.objects.filter(note=note).delete()
    NoteVote.objects.filter(note=note).delete()
    note.delete()


@transaction.atomic
def delete_note(*, note_id: UUID, user: User) -> bool:
    """
    Delete a note, or drop it from the caller's shared list.

    The owner deletes the note and everything attached to it. A recipient
    holding a share removes only their own share.

    Returns:
        True if the note was deleted, False if only the share was removed

    Raises:
        NoteNotFoundError: If note doesn't exist
        NoteAccessDeniedError: If user is neither owner nor share recipient
    """
    try:
        note = Note.objects.select_for_update().get(id=note_id)
    except Note.DoesNotExist:
        raise NoteNotFoundError(f"Note with ID {note_id} not found")

    if get_effective_permission(note=note, user=user) == NotePermission.OWNER:
        purge_note(note)
        logger.info("Note %s deleted by owner %s", note_id, user.id)
        return True

    share = find_share_for_email(note_id=note.id, email=user.email)
    if share is None:
        raise NoteAccessDeniedError("You do not have access to this note")

    share.delete()
    logger.info("User %s removed shared note %s from their list", user.id, note_id)
    return False
