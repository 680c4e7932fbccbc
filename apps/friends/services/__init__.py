"""Friends services - friend request workflow."""

from .exceptions import (
    FriendsServiceError,
    FriendshipNotFoundError,
    SelfFriendshipError,
    FriendshipExistsError,
    NotAddresseeError,
    NotParticipantError,
)
from .friendship_management import (
    invite,
    accept,
    remove,
    list_mine,
)

__all__ = [
    # Exceptions
    'FriendsServiceError',
    'FriendshipNotFoundError',
    'SelfFriendshipError',
    'FriendshipExistsError',
    'NotAddresseeError',
    'NotParticipantError',
    # Services
    'invite',
    'accept',
    'remove',
    'list_mine',
]
