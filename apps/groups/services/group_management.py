"""
Group management service.

Handles group creation, details, updates and cascading deletion.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.accounts.services.identity_directory import (
    DEFAULT_DISPLAY_NAME,
    get_identities,
)
from apps.groups.models import Group, GroupMembership, GroupInvitation, GroupRole
from apps.notes.models import Note
from apps.notes.services.note_management import purge_note

from .exceptions import (
    GroupNotFoundError,
    NotMemberError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupMemberDetail:
    """Membership row joined with the member's identity."""

    id: UUID
    group_id: UUID
    user_id: UUID
    role: GroupRole
    joined_at: datetime
    display_name: str
    email: str


@dataclass(frozen=True)
class GroupDetails:
    group: Group
    members: list[GroupMemberDetail]


@dataclass(frozen=True)
class UserGroup:
    """A group as seen by one of its members."""

    group: Group
    my_role: GroupRole
    joined_at: datetime


def create_group(
    *,
    creator: User,
    name: str,
    description: str = ''
) -> Group:
    """
    Create a new group and add the creator as owner.

    Both rows are written in one transaction so a group never exists
    without its OWNER membership.

    Args:
        creator: User who will own the group
        name: Group name
        description: Optional group description

    Returns:
        Created Group instance
    """
    with transaction.atomic():
        group = Group.objects.create(
            name=name,
            description=description or ''
        )
        GroupMembership.objects.create(
            user=creator,
            group=group,
            role=GroupRole.OWNER
        )

    logger.info("Group %s created by user %s", group.id, creator.id)
    return group


def get_group_by_id(*, group_id: UUID) -> Group:
    """
    Get a group by ID.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    try:
        return Group.objects.get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")


def get_group_details(*, group_id: UUID, requester: User) -> GroupDetails:
    """
    Get a group with its enriched member list (members only).

    Membership is checked before existence, so non-members learn nothing
    about the group.

    Raises:
        NotMemberError: If requester is not a member
        GroupNotFoundError: If group doesn't exist
    """
    if not GroupMembership.objects.filter(group_id=group_id, user=requester).exists():
        raise NotMemberError("You do not have access to this group")

    group = get_group_by_id(group_id=group_id)

    memberships = list(
        GroupMembership.objects
        .filter(group=group)
        .order_by('joined_at')
    )
    identities = get_identities(user_ids=[m.user_id for m in memberships])

    members = []
    for membership in memberships:
        identity = identities.get(membership.user_id)
        members.append(GroupMemberDetail(
            id=membership.id,
            group_id=membership.group_id,
            user_id=membership.user_id,
            role=membership.group_role,
            joined_at=membership.joined_at,
            display_name=identity.display_name if identity else DEFAULT_DISPLAY_NAME,
            email=identity.email if identity else '',
        ))

    return GroupDetails(group=group, members=members)


def get_user_groups(*, user: User) -> list[UserGroup]:
    """List the groups a user belongs to, with the user's role in each."""
    memberships = (
        GroupMembership.objects
        .filter(user=user)
        .select_related('group')
        .order_by('joined_at')
    )
    return [
        UserGroup(group=m.group, my_role=m.group_role, joined_at=m.joined_at)
        for m in memberships
    ]


@transaction.atomic
def update_group(
    *,
    group_id: UUID,
    requester: User,
    name: Optional[str] = None,
    description: Optional[str] = None
) -> Group:
    """
    Update group name and description (owner or admin only).

    Raises:
        GroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If requester is not owner or admin
    """
    try:
        group = (
            Group.objects
            .select_for_update()
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not group.is_admin(requester):
        raise InsufficientPermissionsError("Only group owners and admins can update the group")

    update_fields = ['updated_at']

    if name is not None:
        group.name = name
        update_fields.append('name')

    if description is not None:
        group.description = description
        update_fields.append('description')

    group.save(update_fields=update_fields)

    return group


def purge_group(group: Group) -> None:
    """
    Delete a group and everything that depends on it.

    Order: invitations, group notes (with their shares and votes),
    memberships, then the group itself. Must run inside a transaction.
    """
    GroupInvitation.objects.filter(group=group).delete()

    for note in Note.objects.filter(group=group):
        purge_note(note)

    GroupMembership.objects.filter(group=group).delete()
    group.delete()


@transaction.atomic
def delete_group(*, group_id: UUID, requester: User) -> None:
    """
    Delete a group (owner only).

    Raises:
        GroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If requester is not the owner
    """
    try:
        group = (
            Group.objects
            .select_for_update()
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if group.get_user_role(requester) != GroupRole.OWNER:
        raise InsufficientPermissionsError("Only the group owner can delete the group")

    purge_group(group)
    logger.info("Group %s deleted by user %s", group_id, requester.id)
