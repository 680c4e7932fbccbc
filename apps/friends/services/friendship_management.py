"""
Friendship management service.

Peer-to-peer connection requests: invite by email, accept, remove. Removing
a pending request is how it gets rejected.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.friends.models import Friendship, FriendshipStatus, make_pair_key

from .exceptions import (
    FriendshipNotFoundError,
    SelfFriendshipError,
    FriendshipExistsError,
    NotAddresseeError,
    NotParticipantError,
)

logger = logging.getLogger(__name__)


def find_existing_relation(*, requester: User, target_email: str) -> QuerySet[Friendship]:
    """Relations between requester and target_email, in either direction."""
    target_email = target_email.strip()
    return Friendship.objects.filter(
        Q(pair_key=make_pair_key(requester.email, target_email))
        | Q(requester=requester, addressee_email__iexact=target_email)
        | Q(requester_email__iexact=target_email, addressee_email__iexact=requester.email)
    )


@transaction.atomic
def invite(*, requester: User, target_email: str) -> Friendship:
    """
    Send a friend request to an email address.

    Args:
        requester: User sending the request
        target_email: Email of the addressee

    Returns:
        Created Friendship with status PENDING

    Raises:
        SelfFriendshipError: If target_email is the requester's own email
        FriendshipExistsError: If a relation already exists in either direction
    """
    target_email = target_email.strip().lower()

    if requester.email.lower() == target_email:
        raise SelfFriendshipError("You cannot invite yourself")

    if find_existing_relation(requester=requester, target_email=target_email).exists():
        raise FriendshipExistsError("A friend request or friendship already exists")

    try:
        with transaction.atomic():
            friendship = Friendship.objects.create(
                requester=requester,
                requester_email=requester.email,
                addressee_email=target_email,
                status=FriendshipStatus.PENDING,
            )
    except IntegrityError:
        raise FriendshipExistsError("A friend request or friendship already exists")

    logger.info("Friend request %s sent by %s", friendship.id, requester.id)
    return friendship


def _get_friendship_for_update(friendship_id: UUID) -> Friendship:
    try:
        return Friendship.objects.select_for_update().get(id=friendship_id)
    except Friendship.DoesNotExist:
        raise FriendshipNotFoundError("Friendship not found")


@transaction.atomic
def accept(*, friendship_id: UUID, accepter_email: str) -> Friendship:
    """
    Accept a friend request (addressee only).

    Raises:
        FriendshipNotFoundError: If friendship doesn't exist
        NotAddresseeError: If accepter is not the addressee
    """
    friendship = _get_friendship_for_update(friendship_id)

    if not friendship.is_addressee(accepter_email):
        raise NotAddresseeError("This friend request is not addressed to you")

    friendship.status = FriendshipStatus.ACCEPTED
    friendship.save(update_fields=['status', 'pair_key'])

    logger.info("Friend request %s accepted", friendship.id)
    return friendship


@transaction.atomic
def remove(*, friendship_id: UUID, caller: User) -> None:
    """
    Reject a pending request or end a friendship (either participant).

    Raises:
        FriendshipNotFoundError: If friendship doesn't exist
        NotParticipantError: If caller is neither requester nor addressee
    """
    friendship = _get_friendship_for_update(friendship_id)

    if not friendship.involves(caller.id, caller.email):
        raise NotParticipantError("You are not part of this friendship")

    friendship.delete()
    logger.info("Friendship %s removed by %s", friendship_id, caller.id)


def list_mine(*, user: User) -> QuerySet[Friendship]:
    """Relations the user sent (by id) or received (by email)."""
    return (
        Friendship.objects
        .filter(Q(requester=user) | Q(addressee_email__iexact=user.email))
        .order_by('-created_at')
    )
