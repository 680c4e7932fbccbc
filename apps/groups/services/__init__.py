"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations run in a single transaction.
"""

from .exceptions import (
    GroupsServiceError,
    GroupNotFoundError,
    NotMemberError,
    MemberNotFoundError,
    InvitationNotFoundError,
    InviteeNotFoundError,
    InvalidRoleError,
    OwnerCannotLeaveError,
    CannotChangeOwnRoleError,
    CannotChangeOwnerRoleError,
    CannotRemoveOwnerError,
    CannotRemoveAdminError,
    InsufficientPermissionsError,
)

from .group_management import (
    GroupDetails,
    GroupMemberDetail,
    UserGroup,
    create_group,
    get_group_by_id,
    get_group_details,
    get_user_groups,
    update_group,
    delete_group,
    purge_group,
)

from .membership_management import (
    get_member_role,
    is_group_member,
    remove_member,
    get_group_members,
)

from .role_management import (
    change_role,
)

from .invite_management import (
    PendingInvitation,
    invite_user_by_email,
    get_user_invitations,
    respond_to_invitation,
)


__all__ = [
    # Exceptions
    'GroupsServiceError',
    'GroupNotFoundError',
    'NotMemberError',
    'MemberNotFoundError',
    'InvitationNotFoundError',
    'InviteeNotFoundError',
    'InvalidRoleError',
    'OwnerCannotLeaveError',
    'CannotChangeOwnRoleError',
    'CannotChangeOwnerRoleError',
    'CannotRemoveOwnerError',
    'CannotRemoveAdminError',
    'InsufficientPermissionsError',

    # Group Management
    'GroupDetails',
    'GroupMemberDetail',
    'UserGroup',
    'create_group',
    'get_group_by_id',
    'get_group_details',
    'get_user_groups',
    'update_group',
    'delete_group',
    'purge_group',

    # Membership Management
    'get_member_role',
    'is_group_member',
    'remove_member',
    'get_group_members',

    # Role Management
    'change_role',

    # Invite Management
    'PendingInvitation',
    'invite_user_by_email',
    'get_user_invitations',
    'respond_to_invitation',
]
