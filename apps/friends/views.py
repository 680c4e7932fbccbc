from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.core.permissions import IsNotBanned
from .serializers import FriendshipSerializer, FriendInviteSerializer
from .services import invite, accept, remove, list_mine


@extend_schema(
    methods=['GET'],
    responses={200: FriendshipSerializer(many=True)},
    description="Friend requests and friendships of the current user.",
    tags=['friends'],
)
@extend_schema(
    methods=['POST'],
    request=FriendInviteSerializer,
    responses={201: FriendshipSerializer},
    description="Send a friend request to an email.",
    tags=['friends'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsNotBanned])
def friendships(request):
    if request.method == 'GET':
        return Response(FriendshipSerializer(list_mine(user=request.user), many=True).data)

    serializer = FriendInviteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    friendship = invite(requester=request.user, target_email=serializer.validated_data['email'])
    return Response(FriendshipSerializer(friendship).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=None,
    responses={200: FriendshipSerializer},
    description="Accept a friend request addressed to the current user.",
    tags=['friends'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsNotBanned])
def accept_friendship(request, friendship_id):
    friendship = accept(friendship_id=friendship_id, accepter_email=request.user.email)
    return Response(FriendshipSerializer(friendship).data)


@extend_schema(
    responses={204: None},
    description="Reject a pending request or unfriend.",
    tags=['friends'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsNotBanned])
def remove_friendship(request, friendship_id):
    remove(friendship_id=friendship_id, caller=request.user)
    return Response(status=status.HTTP_204_NO_CONTENT)
