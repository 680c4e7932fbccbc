from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.core.permissions import IsNotBanned
from .permissions import IsModerator
from .serializers import (
    ModerationRecordSerializer,
    UserModerationSummarySerializer,
    ModeratedNoteSerializer,
    ModeratedGroupSerializer,
)
from .services import (
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

MODERATION_PERMISSIONS = [IsAuthenticated, IsNotBanned, IsModerator]


@extend_schema(
    responses={200: UserModerationSummarySerializer(many=True)},
    description="Every account with its moderation role, ban flag and warning count.",
    tags=['moderation'],
)
@api_view(['GET'])
@permission_classes(MODERATION_PERMISSIONS)
def list_users(request):
    users = list_users_with_records(actor=request.user)
    return Response(UserModerationSummarySerializer(users, many=True).data)


@extend_schema(
    request=None,
    responses={200: ModerationRecordSerializer},
    description="Ban or unban a user (moderator+; moderators cannot ban moderators).",
    tags=['moderation'],
)
@api_view(['POST'])
@permission_classes(MODERATION_PERMISSIONS)
def ban_user(request, user_id):
    record = toggle_ban(target_id=user_id, actor=request.user)
    return Response(ModerationRecordSerializer(record).data)


@extend_schema(
    request=None,
    responses={200: ModerationRecordSerializer},
    description="Add a warning (moderator+).",
    tags=['moderation'],
)
@api_view(['POST'])
@permission_classes(MODERATION_PERMISSIONS)
def warn_user(request, user_id):
    record = add_warning(target_id=user_id, actor=request.user)
    return Response(ModerationRecordSerializer(record).data)


@extend_schema(
    request=None,
    responses={200: ModerationRecordSerializer},
    description="Remove a warning, never below zero (moderator+).",
    tags=['moderation'],
)
@api_view(['POST'])
@permission_classes(MODERATION_PERMISSIONS)
def unwarn_user(request, user_id):
    record = remove_warning(target_id=user_id, actor=request.user)
    return Response(ModerationRecordSerializer(record).data)


@extend_schema(
    request=None,
    responses={200: ModerationRecordSerializer},
    description="Grant the MODERATOR role (admin only).",
    tags=['moderation'],
)
@api_view(['POST'])
@permission_classes(MODERATION_PERMISSIONS)
def promote_user(request, user_id):
    record = promote_to_moderator(target_id=user_id, actor=request.user)
    return Response(ModerationRecordSerializer(record).data)


@extend_schema(
    request=None,
    responses={200: ModerationRecordSerializer},
    description="Reset a user to the USER role (admin only).",
    tags=['moderation'],
)
@api_view(['POST'])
@permission_classes(MODERATION_PERMISSIONS)
def demote_user(request, user_id):
    record = demote_to_user(target_id=user_id, actor=request.user)
    return Response(ModerationRecordSerializer(record).data)


@extend_schema(
    responses={204: None},
    description="Hard-delete an account with everything it owns (admin only).",
    tags=['moderation'],
)
@api_view(['DELETE'])
@permission_classes(MODERATION_PERMISSIONS)
def delete_user_view(request, user_id):
    delete_user(target_id=user_id, actor=request.user)
    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    responses={200: ModeratedNoteSerializer(many=True)},
    description="Every note with its author and group (moderator+).",
    tags=['moderation'],
)
@api_view(['GET'])
@permission_classes(MODERATION_PERMISSIONS)
def list_notes(request):
    notes = list_all_notes(actor=request.user)
    return Response(ModeratedNoteSerializer(notes, many=True).data)


@extend_schema(
    responses={204: None},
    description="Remove any note with its shares and votes (moderator+).",
    tags=['moderation'],
)
@api_view(['DELETE'])
@permission_classes(MODERATION_PERMISSIONS)
def delete_note_view(request, note_id):
    delete_note_as_moderator(note_id=note_id, actor=request.user)
    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    responses={200: ModeratedGroupSerializer(many=True)},
    description="Every group with owner, member and note counts (moderator+).",
    tags=['moderation'],
)
@api_view(['GET'])
@permission_classes(MODERATION_PERMISSIONS)
def list_groups(request):
    groups = list_all_groups(actor=request.user)
    return Response(ModeratedGroupSerializer(groups, many=True).data)


@extend_schema(
    responses={204: None},
    description="Remove any group with its notes, memberships and invitations (moderator+).",
    tags=['moderation'],
)
@api_view(['DELETE'])
@permission_classes(MODERATION_PERMISSIONS)
def delete_group_view(request, group_id):
    delete_group_as_moderator(group_id=group_id, actor=request.user)
    return Response(status=status.HTTP_204_NO_CONTENT)
