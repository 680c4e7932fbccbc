"""
Notes services - Business logic layer.

This package contains:
- Permission resolution (effective access of a user to a note)
- Note management with cascading deletion
- Share management (token-based sharing workflow)
- Vote management (vote toggle)
"""

from .exceptions import (
    NotesServiceError,
    NoteNotFoundError,
    NoteAccessDeniedError,
    ShareNotFoundError,
    SelfShareError,
    ShareRejectedError,
    InvalidPermissionError,
    GroupMembershipRequiredError,
)

from .permission_resolution import (
    resolve_permission,
    get_effective_permission,
    require_permission,
)

from .note_management import (
    get_note_by_id,
    get_note_for_user,
    create_note,
    update_note,
    list_my_notes,
    list_group_notes,
    delete_note,
    purge_note,
)

from .share_management import (
    SharedNote,
    create_share,
    accept_share,
    reject_share,
    update_share_permission,
    revoke_share,
    get_share_for_owner,
    find_share,
    list_shares,
    list_shared_with_me,
)

from .vote_management import (
    VoteState,
    toggle_vote,
    get_vote_state,
    annotate_votes,
)

__all__ = [
    # Exceptions
    'NotesServiceError',
    'NoteNotFoundError',
    'NoteAccessDeniedError',
    'ShareNotFoundError',
    'SelfShareError',
    'ShareRejectedError',
    'InvalidPermissionError',
    'GroupMembershipRequiredError',

    # Permission resolution
    'resolve_permission',
    'get_effective_permission',
    'require_permission',

    # Note management
    'get_note_by_id',
    'get_note_for_user',
    'create_note',
    'update_note',
    'list_my_notes',
    'list_group_notes',
    'delete_note',
    'purge_note',

    # Share management
    'SharedNote',
    'create_share',
    'accept_share',
    'reject_share',
    'update_share_permission',
    'revoke_share',
    'get_share_for_owner',
    'find_share',
    'list_shares',
    'list_shared_with_me',

    # Vote management
    'VoteState',
    'toggle_vote',
    'get_vote_state',
    'annotate_votes',
]
