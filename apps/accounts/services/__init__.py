"""
Services for the identity directory.

Account deletion lives in ``account_management`` and is imported from there
directly; it orchestrates the groups, notes and friends services.
"""

from .exceptions import (
    AccountsServiceError,
    UserNotFoundError,
)
from .identity_directory import (
    Identity,
    get_identity,
    get_user_by_id,
    get_user_by_email,
    get_identities,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserNotFoundError',
    # Identity directory
    'Identity',
    'get_identity',
    'get_user_by_id',
    'get_user_by_email',
    'get_identities',
]
