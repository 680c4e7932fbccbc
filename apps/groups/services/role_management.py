"""
Role management service.

Handles member role updates, including ownership transfer.
"""

import logging
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.groups.models import GroupMembership, GroupRole

from .exceptions import (
    InvalidRoleError,
    CannotChangeOwnRoleError,
    CannotChangeOwnerRoleError,
    InsufficientPermissionsError,
)
from .membership_management import (
    get_requester_membership,
    get_target_membership,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def change_role(
    *,
    group_id: UUID,
    requester: User,
    target_user_id: UUID,
    new_role: str
) -> GroupMembership:
    """
    Change a member's role (owner or admin only).

    Granting OWNER transfers ownership: the current owner is demoted to
    ADMIN in the same transaction so the group keeps exactly one owner.

    Args:
        group_id: UUID of the group
        requester: User performing the update
        target_user_id: UUID of the member whose role changes
        new_role: 'OWNER', 'ADMIN' or 'MEMBER' (case-insensitive)

    Returns:
        Updated GroupMembership instance

    Raises:
        NotMemberError: If requester is not a member
        InsufficientPermissionsError: If requester is a plain member, or
            a non-owner tries to grant OWNER
        MemberNotFoundError: If target is not a member
        InvalidRoleError: If new_role is not a group role
        CannotChangeOwnerRoleError: If an admin tries to modify the owner
        CannotChangeOwnRoleError: If the owner tries to change their own role
    """
    requester_membership = get_requester_membership(group_id=group_id, user=requester, lock=True)
    requester_role = requester_membership.group_role

    if not requester_role.at_least(GroupRole.ADMIN):
        raise InsufficientPermissionsError("Only group owners and admins can change roles")

    target = get_target_membership(group_id=group_id, user_id=target_user_id)

    try:
        role = GroupRole.parse(new_role)
    except ValueError:
        raise InvalidRoleError(f"Invalid role. Must be one of: {list(GroupRole.values)}")

    if role == GroupRole.OWNER and requester_role != GroupRole.OWNER:
        raise InsufficientPermissionsError("Only the owner can grant the OWNER role")

    if requester_role == GroupRole.ADMIN and target.group_role == GroupRole.OWNER:
        raise CannotChangeOwnerRoleError("Admins cannot change the owner's role")

    if target.id == requester_membership.id and requester_role == GroupRole.OWNER:
        raise CannotChangeOwnRoleError(
            "The owner cannot change their own role. Grant OWNER to another member instead."
        )

    if role == GroupRole.OWNER:
        requester_membership.role = GroupRole.ADMIN
        requester_membership.save(update_fields=['role'])
        logger.info(
            "Ownership of group %s transferred from %s to %s",
            group_id, requester.id, target_user_id
        )

    target.role = role
    target.save(update_fields=['role'])
    logger.info("User %s is now %s in group %s", target_user_id, role, group_id)

    return target
