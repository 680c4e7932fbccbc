"""
Moderation service.

Bans, warnings, the MODERATOR role and removal of any note or group.
Roles are ordered USER < MODERATOR < ADMIN; ADMIN is only ever granted
out-of-band (see the set_moderation_role management command) and cannot be
acted upon here.

Every function takes an optional ``registry``; the database-backed
ModerationRegistry is used when none is given.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Count

from apps.accounts.models import User
from apps.accounts.services.account_management import delete_user_account
from apps.groups.models import Group, GroupMembership, GroupRole
from apps.groups.services.group_management import purge_group
from apps.moderation.models import ModerationRole, UserModerationRecord
from apps.notes.models import Note
from apps.notes.services.note_management import purge_note

from .exceptions import (
    TargetUserNotFoundError,
    InsufficientModerationRoleError,
    ProtectedTargetError,
    InvalidRoleChangeError,
    ModeratedContentNotFoundError,
)
from .registry import ModerationRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserModerationSummary:
    user_id: UUID
    email: str
    display_name: str
    role: ModerationRole
    is_banned: bool
    warning_count: int


@dataclass(frozen=True)
class ModeratedNoteSummary:
    note_id: UUID
    title: str
    content: str
    created_at: datetime
    author_name: str
    group_name: Optional[str]
    is_group_note: bool


@dataclass(frozen=True)
class ModeratedGroupMember:
    display_name: str
    email: str
    role: GroupRole


@dataclass(frozen=True)
class ModeratedGroupSummary:
    group_id: UUID
    name: str
    description: str
    owner_name: Optional[str]
    owner_email: Optional[str]
    member_count: int
    note_count: int
    created_at: datetime
    members: list[ModeratedGroupMember]


def _registry(registry: Optional[ModerationRegistry]) -> ModerationRegistry:
    return registry if registry is not None else ModerationRegistry()


def _require_moderator(actor: User, registry: ModerationRegistry) -> ModerationRole:
    role = registry.get_role(actor.id)
    if not role.at_least(ModerationRole.MODERATOR):
        raise InsufficientModerationRoleError("Moderator role required")
    return role


def _require_admin(actor: User, registry: ModerationRegistry) -> None:
    if not registry.is_admin(actor.id):
        raise InsufficientModerationRoleError("Admin role required")


def _get_target(target_id: UUID) -> User:
    try:
        return User.objects.get(id=target_id)
    except User.DoesNotExist:
        raise TargetUserNotFoundError(f"User with ID {target_id} not found")


def _get_moderatable_record(
    *,
    target_id: UUID,
    actor: User,
    registry: ModerationRegistry
) -> UserModerationRecord:
    """
    Run the shared moderator guards and return the target's record.

    Raises:
        InsufficientModerationRoleError: If actor is below MODERATOR
        TargetUserNotFoundError: If target doesn't exist
        ProtectedTargetError: If target is an ADMIN
    """
    _require_moderator(actor, registry)
    _get_target(target_id)

    if registry.is_admin(target_id):
        raise ProtectedTargetError("Admins cannot be moderated")

    return registry.get_or_create_record(target_id)


@transaction.atomic
def toggle_ban(
    *,
    target_id: UUID,
    actor: User,
    registry: Optional[ModerationRegistry] = None
) -> UserModerationRecord:
    """
    Ban or unban a user.

    Moderators may not ban other moderators; only an admin can.

    Returns:
        Updated moderation record

    Raises:
        InsufficientModerationRoleError: If actor is below MODERATOR
        TargetUserNotFoundError: If target doesn't exist
        ProtectedTargetError: If target is an ADMIN, or both are moderators
    """
    registry = _registry(registry)
    record = _get_moderatable_record(target_id=target_id, actor=actor, registry=registry)

    actor_role = registry.get_role(actor.id)
    if actor_role == ModerationRole.MODERATOR and record.moderation_role == ModerationRole.MODERATOR:
        raise ProtectedTargetError("Moderators cannot ban other moderators")

    record.is_banned = not record.is_banned
    registry.save_record(record, ['is_banned'])

    logger.info(
        "User %s %s by %s",
        target_id, 'banned' if record.is_banned else 'unbanned', actor.id
    )
    return record


@transaction.atomic
def add_warning(
    *,
    target_id: UUID,
    actor: User,
    registry: Optional[ModerationRegistry] = None
) -> UserModerationRecord:
    """
    Raises:
        InsufficientModerationRoleError: If actor is below MODERATOR
        TargetUserNotFoundError: If target doesn't exist
        ProtectedTargetError: If target is an ADMIN
    """
    registry = _registry(registry)
    record = _get_moderatable_record(target_id=target_id, actor=actor, registry=registry)

    record.warning_count += 1
    registry.save_record(record, ['warning_count'])

    logger.info("User %s warned by %s (%d warnings)", target_id, actor.id, record.warning_count)
    return record


@transaction.atomic
def remove_warning(
    *,
    target_id: UUID,
    actor: User,
    registry: Optional[ModerationRegistry] = None
) -> UserModerationRecord:
    """Decrement the warning count, never below zero. Same guards as add_warning."""
    registry = _registry(registry)
    record = _get_moderatable_record(target_id=target_id, actor=actor, registry=registry)

    if record.warning_count > 0:
        record.warning_count -= 1
        registry.save_record(record, ['warning_count'])

    return record


def _set_role(
    *,
    target_id: UUID,
    actor: User,
    role: ModerationRole,
    registry: ModerationRegistry
) -> UserModerationRecord:
    _require_admin(actor, registry)
    _get_target(target_id)

    if registry.is_admin(target_id):
        raise InvalidRoleChangeError("The ADMIN role cannot be changed through moderation")

    record = registry.get_or_create_record(target_id)
    record.role = role
    registry.save_record(record, ['role'])

    logger.info("User %s set to %s by %s", target_id, role, actor.id)
    return record


@transaction.atomic
def promote_to_moderator(
    *,
    target_id: UUID,
    actor: User,
    registry: Optional[ModerationRegistry] = None
) -> UserModerationRecord:
    """
    Raises:
        InsufficientModerationRoleError: If actor is not an ADMIN
        TargetUserNotFoundError: If target doesn't exist
        InvalidRoleChangeError: If target is an ADMIN
    """
    return _set_role(
        target_id=target_id,
        actor=actor,
        role=ModerationRole.MODERATOR,
        registry=_registry(registry),
    )


@transaction.atomic
def demote_to_user(
    *,
    target_id: UUID,
    actor: User,
    registry: Optional[ModerationRegistry] = None
) -> UserModerationRecord:
    """Same guards as promote_to_moderator."""
    return _set_role(
        target_id=target_id,
        actor=actor,
        role=ModerationRole.USER,
        registry=_registry(registry),
    )


@transaction.atomic
def delete_user(
    *,
    target_id: UUID,
    actor: User,
    registry: Optional[ModerationRegistry] = None
) -> None:
    """
    Hard-delete an account and everything it owns.

    Raises:
        InsufficientModerationRoleError: If actor is not an ADMIN
        TargetUserNotFoundError: If target doesn't exist
        ProtectedTargetError: If target is an ADMIN
    """
    registry = _registry(registry)
    _require_admin(actor, registry)
    _get_target(target_id)

    if registry.is_admin(target_id):
        raise ProtectedTargetError("Admins cannot be deleted")

    delete_user_account(user_id=target_id)
    logger.info("User %s deleted by %s", target_id, actor.id)


def list_users_with_records(
    *,
    actor: User,
    registry: Optional[ModerationRegistry] = None
) -> list[UserModerationSummary]:
    """
    Every account with its moderation standing (moderator+ only).

    Raises:
        InsufficientModerationRoleError: If actor is below MODERATOR
    """
    registry = _registry(registry)
    _require_moderator(actor, registry)

    records = registry.list_records()
    summaries = []
    for user in User.objects.order_by('created_at'):
        record = records.get(user.id)
        summaries.append(UserModerationSummary(
            user_id=user.id,
            email=user.email,
            display_name=user.get_display_name(),
            role=record.moderation_role if record else ModerationRole.USER,
            is_banned=record.is_banned if record else False,
            warning_count=record.warning_count if record else 0,
        ))
    return summaries


def list_all_notes(
    *,
    actor: User,
    registry: Optional[ModerationRegistry] = None
) -> list[ModeratedNoteSummary]:
    """
    Every note in the system, newest first (moderator+ only).

    Raises:
        InsufficientModerationRoleError: If actor is below MODERATOR
    """
    _require_moderator(actor, _registry(registry))

    notes = Note.objects.select_related('owner', 'group').order_by('-created_at')
    return [
        ModeratedNoteSummary(
            note_id=note.id,
            title=note.title,
            content=note.content,
            created_at=note.created_at,
            author_name=note.owner.get_display_name(),
            group_name=note.group.name if note.group_id else None,
            is_group_note=note.is_group_note,
        )
        for note in notes
    ]


def list_all_groups(
    *,
    actor: User,
    registry: Optional[ModerationRegistry] = None
) -> list[ModeratedGroupSummary]:
    """
    Every group with its owner, counts and member list (moderator+ only).

    Raises:
        InsufficientModerationRoleError: If actor is below MODERATOR
    """
    _require_moderator(actor, _registry(registry))

    groups = (
        Group.objects
        .annotate(
            member_count=Count('memberships', distinct=True),
            note_count=Count('notes', distinct=True),
        )
        .order_by('-created_at')
    )

    members_by_group = {}
    memberships = GroupMembership.objects.select_related('user').order_by('joined_at')
    for membership in memberships:
        members_by_group.setdefault(membership.group_id, []).append(membership)

    summaries = []
    for group in groups:
        memberships = members_by_group.get(group.id, [])
        owner = next(
            (m.user for m in memberships if m.group_role == GroupRole.OWNER),
            None
        )
        summaries.append(ModeratedGroupSummary(
            group_id=group.id,
            name=group.name,
            description=group.description,
            owner_name=owner.get_display_name() if owner else None,
            owner_email=owner.email if owner else None,
            member_count=group.member_count,
            note_count=group.note_count,
            created_at=group.created_at,
            members=[
                ModeratedGroupMember(
                    display_name=m.user.get_display_name(),
                    email=m.user.email,
                    role=m.group_role,
                )
                for m in memberships
            ],
        ))
    return summaries


@transaction.atomic
def delete_note_as_moderator(
    *,
    note_id: UUID,
    actor: User,
    registry: Optional[ModerationRegistry] = None
) -> None:
    """
    Remove any note with its shares and votes, regardless of ownership.

    Raises:
        InsufficientModerationRoleError: If actor is below MODERATOR
        ModeratedContentNotFoundError: If note doesn't exist
    """
    _require_moderator(actor, _registry(registry))

    try:
        note = Note.objects.select_for_update().get(id=note_id)
    except Note.DoesNotExist:
        raise ModeratedContentNotFoundError(f"Note with ID {note_id} not found")

    purge_note(note)
    logger.info("Note %s removed by moderator %s", note_id, actor.id)


@transaction.atomic
def delete_group_as_moderator(
    *,
    group_id: UUID,
    actor: User,
    registry: Optional[ModerationRegistry] = None
) -> None:
    """
    Remove any group with its invitations, notes and memberships.

    Raises:
        InsufficientModerationRoleError: If actor is below MODERATOR
        ModeratedContentNotFoundError: If group doesn't exist
    """
    _require_moderator(actor, _registry(registry))

    try:
        group = Group.objects.select_for_update().get(id=group_id)
    except Group.DoesNotExist:
        raise ModeratedContentNotFoundError(f"Group with ID {group_id} not found")

    purge_group(group)
    logger.info("Group %s removed by moderator %s", group_id, actor.id)
