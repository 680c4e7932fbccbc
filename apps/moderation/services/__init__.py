"""
Moderation services.

This package contains:
- ModerationRegistry (read predicates and record storage)
- Moderation actions: ban, warnings, moderator role, account deletion
- Content overview and removal of any note or group
"""

from .exceptions import (
    ModerationServiceError,
    TargetUserNotFoundError,
    InsufficientModerationRoleError,
    ProtectedTargetError,
    InvalidRoleChangeError,
    ModeratedContentNotFoundError,
)
from .registry import ModerationRegistry
from .moderation import (
    UserModerationSummary,
    ModeratedNoteSummary,
    ModeratedGroupSummary,
    ModeratedGroupMember,
    toggle_ban,
    add_warning,
    remove_warning,
    promote_to_moderator,
    demote_to_user,
    delete_user,
    list_users_with_records,
    list_all_notes,
    list_all_groups,
    delete_note_as_moderator,
    delete_group_as_moderator,
)

__all__ = [
    # Exceptions
    'ModerationServiceError',
    'TargetUserNotFoundError',
    'InsufficientModerationRoleError',
    'ProtectedTargetError',
    'InvalidRoleChangeError',
    'ModeratedContentNotFoundError',

    # Registry
    'ModerationRegistry',

    # Moderation
    'UserModerationSummary',
    'ModeratedNoteSummary',
    'ModeratedGroupSummary',
    'ModeratedGroupMember',
    'toggle_ban',
    'add_warning',
    'remove_warning',
    'promote_to_moderator',
    'demote_to_user',
    'delete_user',
    'list_users_with_records',
    'list_all_notes',
    'list_all_groups',
    'delete_note_as_moderator',
    'delete_group_as_moderator',
]
