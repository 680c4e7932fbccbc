"""
Invite management service.

Handles the group invitation workflow: invite by email, list pending
invitations, accept or reject. Invitations are single-use.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError

from apps.accounts.models import User
from apps.accounts.services.exceptions import UserNotFoundError
from apps.accounts.services.identity_directory import (
    DEFAULT_DISPLAY_NAME,
    get_identities,
    get_user_by_email,
)
from apps.groups.models import GroupInvitation, GroupMembership, GroupRole

from .exceptions import (
    InvitationNotFoundError,
    InviteeNotFoundError,
    InsufficientPermissionsError,
)
from .membership_management import get_requester_membership

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingInvitation:
    invitation_id: UUID
    group_id: UUID
    group_name: str
    inviter_name: str
    sent_at: datetime


@transaction.atomic
def invite_user_by_email(
    *,
    group_id: UUID,
    requester: User,
    target_email: str
) -> Optional[GroupInvitation]:
    """
    Invite a user to a group by email (owner or admin only).

    Inviting someone who is already a member or already invited is a
    silent no-op so that retries are safe.

    Args:
        group_id: UUID of the group
        requester: User sending the invitation
        target_email: Email of the user to invite

    Returns:
        Created GroupInvitation, or None if nothing had to be done

    Raises:
        NotMemberError: If requester is not a member
        InsufficientPermissionsError: If requester is a plain member
        InviteeNotFoundError: If no user has target_email
    """
    membership = get_requester_membership(group_id=group_id, user=requester)
    if not membership.group_role.at_least(GroupRole.ADMIN):
        raise InsufficientPermissionsError("Only group owners and admins can invite members")

    try:
        invitee = get_user_by_email(email=target_email)
    except UserNotFoundError:
        raise InviteeNotFoundError("User with the given email does not exist")

    if GroupMembership.objects.filter(group_id=group_id, user=invitee).exists():
        return None
    if GroupInvitation.objects.filter(group_id=group_id, invitee=invitee).exists():
        return None

    try:
        with transaction.atomic():
            invitation = GroupInvitation.objects.create(
                group_id=group_id,
                inviter=requester,
                invitee=invitee
            )
    except IntegrityError:
        # Concurrent duplicate invitation, the other request won
        logger.debug("Duplicate invitation for %s to group %s ignored", invitee.id, group_id)
        return None

    logger.info("User %s invited %s to group %s", requester.id, invitee.id, group_id)
    return invitation


def get_user_invitations(*, user: User) -> list[PendingInvitation]:
    """List pending invitations addressed to the user."""
    invitations = list(
        GroupInvitation.objects
        .filter(invitee=user)
        .select_related('group')
        .order_by('-created_at')
    )
    inviters = get_identities(user_ids=[inv.inviter_id for inv in invitations])

    result = []
    for invitation in invitations:
        inviter = inviters.get(invitation.inviter_id)
        result.append(PendingInvitation(
            invitation_id=invitation.id,
            group_id=invitation.group_id,
            group_name=invitation.group.name,
            inviter_name=inviter.display_name if inviter else DEFAULT_DISPLAY_NAME,
            sent_at=invitation.created_at,
        ))
    return result


@transaction.atomic
def respond_to_invitation(
    *,
    invitation_id: UUID,
    user: User,
    accept: bool
) -> Optional[GroupMembership]:
    """
    Accept or reject an invitation.

    The invitation is deleted either way. Invitations addressed to someone
    else are reported as missing.

    Args:
        invitation_id: UUID of the invitation
        user: Invitee responding
        accept: True to join the group, False to decline

    Returns:
        New GroupMembership when accepted, otherwise None

    Raises:
        InvitationNotFoundError: If invitation doesn't exist for this user
    """
    try:
        invitation = (
            GroupInvitation.objects
            .select_for_update()
            .get(id=invitation_id, invitee=user)
        )
    except GroupInvitation.DoesNotExist:
        raise InvitationNotFoundError("Invitation not found")

    membership = None
    if accept:
        membership, _ = GroupMembership.objects.get_or_create(
            group_id=invitation.group_id,
            user=user,
            defaults={'role': GroupRole.MEMBER}
        )
        logger.info("User %s joined group %s", user.id, invitation.group_id)

    invitation.delete()
    return membership
