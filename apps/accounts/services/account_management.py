"""Account management service."""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import Q
from django.contrib.auth import get_user_model

from apps.friends.models import Friendship
from apps.groups.models import Group, GroupMembership, GroupInvitation, GroupRole
from apps.groups.services.group_management import purge_group
from apps.moderation.models import UserModerationRecord
from apps.notes.models import Note, NoteShare, NoteVote
from apps.notes.services.note_management import purge_note

from .exceptions import UserNotFoundError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def delete_user_account(*, user_id: UUID) -> None:
    """
    Hard-delete an account and everything that depends on it.

    Order: groups the user owns, remaining memberships and invitations,
    owned notes, shares addressed to the user, votes, friendships, the
    moderation record, then the user.

    Args:
        user_id: User's ID

    Raises:
        UserNotFoundError: If user doesn't exist
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(id=user_id)
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    owned_groups = Group.objects.filter(
        memberships__user=user,
        memberships__role=GroupRole.OWNER
    )
    for group in list(owned_groups):
        purge_group(group)

    GroupMembership.objects.filter(user=user).delete()
    GroupInvitation.objects.filter(Q(invitee=user) | Q(inviter=user)).delete()

    for note in list(Note.objects.filter(owner=user)):
        purge_note(note)

    NoteShare.objects.filter(
        Q(recipient=user) | Q(recipient_email__iexact=user.email)
    ).delete()
    NoteVote.objects.filter(user=user).delete()

    Friendship.objects.filter(
        Q(requester=user) | Q(addressee_email__iexact=user.email)
    ).delete()

    UserModerationRecord.objects.filter(user=user).delete()

    user.delete()
    logger.info("Account %s deleted", user_id)
