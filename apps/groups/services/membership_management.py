"""
Membership management service.

Handles leaving and removing members under the OWNER/ADMIN/MEMBER hierarchy.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.groups.models import GroupMembership, GroupRole

from .exceptions import (
    NotMemberError,
    MemberNotFoundError,
    OwnerCannotLeaveError,
    CannotRemoveOwnerError,
    CannotRemoveAdminError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def get_member_role(*, group_id: UUID, user_id: UUID) -> Optional[GroupRole]:
    """Return the user's role in the group, or None if not a member."""
    role = (
        GroupMembership.objects
        .filter(group_id=group_id, user_id=user_id)
        .values_list('role', flat=True)
        .first()
    )
    return GroupRole(role) if role else None


def is_group_member(*, group_id: UUID, user_id: UUID) -> bool:
    return GroupMembership.objects.filter(group_id=group_id, user_id=user_id).exists()


def get_requester_membership(*, group_id: UUID, user: User, lock: bool = False) -> GroupMembership:
    """
    Get the requester's own membership.

    Raises:
        NotMemberError: If user is not a member of the group
    """
    queryset = GroupMembership.objects.all()
    if lock:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(group_id=group_id, user=user)
    except GroupMembership.DoesNotExist:
        raise NotMemberError("You are not a member of this group")


def get_target_membership(*, group_id: UUID, user_id: UUID) -> GroupMembership:
    """
    Get and lock the membership of the user being acted upon.

    Raises:
        MemberNotFoundError: If user is not a member of the group
    """
    try:
        return (
            GroupMembership.objects
            .select_for_update()
            .get(group_id=group_id, user_id=user_id)
        )
    except GroupMembership.DoesNotExist:
        raise MemberNotFoundError("User is not a member of this group")


@transaction.atomic
def remove_member(
    *,
    group_id: UUID,
    requester: User,
    target_user_id: UUID
) -> None:
    """
    Remove a member from a group, or leave it when requester is the target.

    Rules:
    - Leaving: everyone but the OWNER may leave
    - Removing others: MEMBERs cannot remove anyone
    - Nobody can remove the OWNER
    - Only the OWNER can remove an ADMIN

    Args:
        group_id: UUID of the group
        requester: User performing the removal
        target_user_id: UUID of the user to remove

    Raises:
        NotMemberError: If requester is not a member
        MemberNotFoundError: If target is not a member
        OwnerCannotLeaveError: If the owner tries to leave
        InsufficientPermissionsError: If requester is a plain member
        CannotRemoveOwnerError: If target is the owner
        CannotRemoveAdminError: If an admin tries to remove another admin
    """
    requester_membership = get_requester_membership(group_id=group_id, user=requester)
    target = get_target_membership(group_id=group_id, user_id=target_user_id)

    if target.user_id == requester.id:
        if target.group_role == GroupRole.OWNER:
            raise OwnerCannotLeaveError(
                "Group owner cannot leave. Transfer ownership or delete the group."
            )
        target.delete()
        logger.info("User %s left group %s", requester.id, group_id)
        return

    requester_role = requester_membership.group_role
    target_role = target.group_role

    if requester_role == GroupRole.MEMBER:
        raise InsufficientPermissionsError("Only group owners and admins can remove members")

    if target_role == GroupRole.OWNER:
        raise CannotRemoveOwnerError("Cannot remove the group owner")

    if requester_role == GroupRole.ADMIN and target_role == GroupRole.ADMIN:
        raise CannotRemoveAdminError("Admins cannot remove other admins")

    target.delete()
    logger.info("User %s removed from group %s by %s", target_user_id, group_id, requester.id)


def get_group_members(*, group_id: UUID) -> QuerySet[GroupMembership]:
    """Get all memberships of a group with their users."""
    return (
        GroupMembership.objects
        .filter(group_id=group_id)
        .select_related('user')
        .order_by('joined_at')
    )
