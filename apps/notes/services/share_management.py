"""
Share management service.

Token-addressed, permission-leveled sharing of one note with one recipient
email. Sharing is idempotent per recipient: a second share to the same
email updates the existing row instead of creating another.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.notes.models import Note, NoteShare, SharePermission, ShareStatus

from .exceptions import (
    NoteNotFoundError,
    NoteAccessDeniedError,
    ShareNotFoundError,
    SelfShareError,
    ShareRejectedError,
    InvalidPermissionError,
)
from .permission_resolution import find_share_for_email
from .share_notification import send_share_invitation
from .vote_management import annotate_votes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SharedNote:
    """A note shared with the caller, as listed in "shared with me"."""

    id: UUID
    title: str
    content: str
    created_at: datetime
    owner_id: UUID
    permission: str
    status: str
    token: str
    vote_count: int
    voted_by_me: bool


def generate_share_token() -> str:
    return secrets.token_urlsafe(32)


def build_share_url(token: str) -> str:
    return f"{settings.SHARE_ACCEPT_URL}?token={token}"


def parse_share_permission(value) -> SharePermission:
    """
    Raises:
        InvalidPermissionError: If value is not READ or WRITE
    """
    try:
        return SharePermission.parse(value)
    except ValueError:
        raise InvalidPermissionError(f"Invalid permission. Must be one of: {list(SharePermission.values)}")


def normalize_email(email: str) -> str:
    return email.strip().lower()


@transaction.atomic
def create_share(
    *,
    note_id: UUID,
    owner: User,
    recipient_email: str,
    permission='READ',
    notify: bool = True
) -> str:
    """
    Share a note with a recipient email (owner only).

    If the recipient already has a share, its permission is overwritten and
    a REJECTED share is re-opened as PENDING; the token is kept. Otherwise a
    new PENDING share with a fresh token is created.

    Args:
        note_id: UUID of the note
        owner: Note owner
        recipient_email: Email of the recipient (may not have an account)
        permission: 'READ' or 'WRITE'
        notify: Send an invitation email after commit

    Returns:
        Capability URL embedding the share token

    Raises:
        NoteNotFoundError: If note doesn't exist
        NoteAccessDeniedError: If owner does not own the note
        InvalidPermissionError: If permission is not READ or WRITE
        SelfShareError: If recipient_email is the owner's own email
    """
    try:
        note = Note.objects.get(id=note_id)
    except Note.DoesNotExist:
        raise NoteNotFoundError(f"Note with ID {note_id} not found")

    if note.owner_id != owner.id:
        raise NoteAccessDeniedError("Only the note owner can share it")

    share_permission = parse_share_permission(permission)
    email = normalize_email(recipient_email)

    if owner.email.lower() == email:
        raise SelfShareError("You cannot share a note with yourself")

    share = _get_share_for_update(note=note, email=email)

    if share is None:
        try:
            with transaction.atomic():
                share = NoteShare.objects.create(
                    note=note,
                    owner=owner,
                    recipient_email=email,
                    permission=share_permission,
                    status=ShareStatus.PENDING,
                    token=generate_share_token(),
                )
        except IntegrityError:
            # A concurrent request created the share first; update it instead
            logger.debug("Concurrent share of note %s to %s, updating in place", note.id, email)
            share = _get_share_for_update(note=note, email=email)

    if share.permission != share_permission or share.status == ShareStatus.REJECTED:
        share.permission = share_permission
        if share.status == ShareStatus.REJECTED:
            share.status = ShareStatus.PENDING
        share.save(update_fields=['permission', 'status', 'updated_at'])

    share_url = build_share_url(share.token)
    logger.info("Note %s shared with %s (%s)", note.id, email, share_permission)

    if notify:
        transaction.on_commit(lambda: send_share_invitation(
            recipient_email=email,
            sender_email=owner.email,
            note_title=note.title,
            share_url=share_url,
            permission=share_permission.value,
        ))

    return share_url


def _get_share_for_update(*, note: Note, email: str) -> Optional[NoteShare]:
    return (
        NoteShare.objects
        .select_for_update()
        .filter(note=note, recipient_email=email)
        .first()
    )


def _get_share_by_token(token: str) -> NoteShare:
    try:
        return (
            NoteShare.objects
            .select_for_update()
            .get(token=token)
        )
    except NoteShare.DoesNotExist:
        raise ShareNotFoundError("Invalid share token")


@transaction.atomic
def accept_share(*, token: str, recipient: User) -> NoteShare:
    """
    Redeem a share token.

    The token alone is the capability; the redeeming user becomes the
    recipient.

    Raises:
        ShareNotFoundError: If token doesn't resolve to a share
        ShareRejectedError: If the share was rejected (must be re-shared)
    """
    share = _get_share_by_token(token)

    if share.status == ShareStatus.REJECTED:
        raise ShareRejectedError("This share was rejected. Ask the owner to share it again.")

    share.recipient = recipient
    share.status = ShareStatus.ACCEPTED
    share.save(update_fields=['recipient', 'status', 'updated_at'])

    logger.info("Share %s accepted by %s", share.id, recipient.id)
    return share


@transaction.atomic
def reject_share(*, token: str, recipient: User) -> NoteShare:
    """
    Decline a share token.

    Only a new create_share call re-opens a rejected share.

    Raises:
        ShareNotFoundError: If token doesn't resolve to a share
    """
    share = _get_share_by_token(token)

    share.recipient = None
    share.status = ShareStatus.REJECTED
    share.save(update_fields=['recipient', 'status', 'updated_at'])

    logger.info("Share %s rejected by %s", share.id, recipient.id)
    return share


@transaction.atomic
def update_share_permission(*, share_id: UUID, new_permission) -> NoteShare:
    """
    Overwrite a share's permission.

    The caller must have checked that the requester owns the note
    (see get_share_for_owner).

    Raises:
        ShareNotFoundError: If share doesn't exist
        InvalidPermissionError: If new_permission is not READ or WRITE
    """
    permission = parse_share_permission(new_permission)

    try:
        share = NoteShare.objects.select_for_update().get(id=share_id)
    except NoteShare.DoesNotExist:
        raise ShareNotFoundError(f"Share with ID {share_id} not found")

    share.permission = permission
    share.save(update_fields=['permission', 'updated_at'])
    return share


@transaction.atomic
def revoke_share(*, share_id: UUID) -> None:
    """
    Delete a share.

    The caller must have checked that the requester owns the note.

    Raises:
        ShareNotFoundError: If share doesn't exist
    """
    deleted, _ = NoteShare.objects.filter(id=share_id).delete()
    if not deleted:
        raise ShareNotFoundError(f"Share with ID {share_id} not found")
    logger.info("Share %s revoked", share_id)


def get_share_for_owner(*, share_id: UUID, owner: User) -> NoteShare:
    """
    Get a share on a note the user owns.

    Raises:
        ShareNotFoundError: If share doesn't exist
        NoteAccessDeniedError: If user does not own the shared note
    """
    try:
        share = NoteShare.objects.select_related('note').get(id=share_id)
    except NoteShare.DoesNotExist:
        raise ShareNotFoundError(f"Share with ID {share_id} not found")

    if share.note.owner_id != owner.id:
        raise NoteAccessDeniedError("Only the note owner can manage its shares")

    return share


def find_share(*, note_id: UUID, email: str) -> Optional[NoteShare]:
    return find_share_for_email(note_id=note_id, email=email)


def list_shares(*, note_id: UUID) -> QuerySet[NoteShare]:
    return NoteShare.objects.filter(note_id=note_id).order_by('created_at')


def list_shared_with_me(*, email: str, user: User) -> list[SharedNote]:
    """
    Notes shared with the email, excluding rejected shares.

    Each entry carries the caller's vote state for the note.
    """
    shares = list(
        NoteShare.objects
        .filter(recipient_email__iexact=email.strip())
        .exclude(status=ShareStatus.REJECTED)
        .select_related('note')
        .order_by('created_at')
    )
    annotate_votes([share.note for share in shares], user)

    return [
        SharedNote(
            id=share.note.id,
            title=share.note.title,
            content=share.note.content,
            created_at=share.note.created_at,
            owner_id=share.owner_id,
            permission=share.permission,
            status=share.status,
            token=share.token,
            vote_count=share.note.vote_count,
            voted_by_me=share.note.voted_by_me,
        )
        for share in shares
    ]
