from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.core.constants import UUID_PATTERN
from apps.core.permissions import IsNotBanned

from .models import NotePermission
from .serializers import (
    NoteSerializer,
    NoteDetailSerializer,
    NoteCreateSerializer,
    NoteUpdateSerializer,
    NoteShareSerializer,
    ShareCreateSerializer,
    ShareUpdateSerializer,
    ShareUrlSerializer,
    SharedNoteSerializer,
    VoteStateSerializer,
)

from apps.notes.services import (
    get_note_for_user,
    create_note,
    update_note,
    list_my_notes,
    delete_note,
    require_permission,
    get_note_by_id,
    toggle_vote,
    create_share,
    accept_share,
    reject_share,
    update_share_permission,
    revoke_share,
    get_share_for_owner,
    list_shares,
    list_shared_with_me,
)


class NoteViewSet(viewsets.ViewSet):
    """
    ViewSet for notes.

    Every read and write is checked by the permission resolver inside the
    services.

    list: Get the caller's private notes
    create: Create a private or group note
    retrieve: Get a note with the caller's effective permission
    update: Update a note (WRITE)
    partial_update: Partially update a note (WRITE)
    destroy: Delete a note (owner), or drop it from the shared list
    """

    permission_classes = [IsAuthenticated, IsNotBanned]
    lookup_value_regex = UUID_PATTERN

    @extend_schema(responses={200: NoteSerializer(many=True)}, tags=['notes'])
    def list(self, request):
        notes = list_my_notes(user=request.user)
        return Response(NoteSerializer(notes, many=True).data)

    @extend_schema(request=NoteCreateSerializer, responses={201: NoteSerializer}, tags=['notes'])
    def create(self, request):
        serializer = NoteCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        note = create_note(
            owner=request.user,
            title=serializer.validated_data['title'],
            content=serializer.validated_data['content'],
            group_id=serializer.validated_data['group_id']
        )
        return Response(NoteSerializer(note).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: NoteDetailSerializer}, tags=['notes'])
    def retrieve(self, request, pk=None):
        note, permission = get_note_for_user(note_id=pk, user=request.user)
        serializer = NoteDetailSerializer(note, context={'permission': permission})
        return Response(serializer.data)

    @extend_schema(request=NoteUpdateSerializer, responses={200: NoteSerializer}, tags=['notes'])
    def update(self, request, pk=None):
        serializer = NoteUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        note = update_note(
            note_id=pk,
            user=request.user,
            title=serializer.validated_data.get('title'),
            content=serializer.validated_data.get('content')
        )
        return Response(NoteSerializer(note).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(responses={204: None}, tags=['notes'])
    def destroy(self, request, pk=None):
        delete_note(note_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: VoteStateSerializer}, tags=['notes'])
    @action(detail=True, methods=['post'])
    def vote(self, request, pk=None):
        """Toggle the caller's vote (READ required)."""
        note = get_note_by_id(note_id=pk)
        require_permission(note=note, user=request.user, minimum=NotePermission.READ)

        state = toggle_vote(note_id=note.id, user=request.user)
        return Response(VoteStateSerializer(state).data)

    @extend_schema(request=ShareCreateSerializer, responses={201: ShareUrlSerializer}, tags=['notes'])
    @action(detail=True, methods=['post'])
    def share(self, request, pk=None):
        """Share the note with an email (owner only)."""
        serializer = ShareCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        share_url = create_share(
            note_id=pk,
            owner=request.user,
            recipient_email=serializer.validated_data['email'],
            permission=serializer.validated_data['permission']
        )
        return Response({'share_url': share_url}, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: NoteShareSerializer(many=True)}, tags=['notes'])
    @action(detail=True, methods=['get'])
    def shares(self, request, pk=None):
        """List the note's shares (owner only)."""
        note = get_note_by_id(note_id=pk)
        require_permission(note=note, user=request.user, minimum=NotePermission.OWNER)

        return Response(NoteShareSerializer(list_shares(note_id=note.id), many=True).data)


@extend_schema(
    responses={200: SharedNoteSerializer(many=True)},
    description="Notes shared with the current user's email, rejected shares excluded.",
    tags=['notes'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsNotBanned])
def shared_with_me(request):
    notes = list_shared_with_me(email=request.user.email, user=request.user)
    return Response(SharedNoteSerializer(notes, many=True).data)


@extend_schema(
    request=None,
    responses={200: NoteShareSerializer},
    description="Redeem a share token.",
    tags=['notes'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsNotBanned])
def accept_share_view(request, token):
    share = accept_share(token=token, recipient=request.user)
    return Response(NoteShareSerializer(share).data)


@extend_schema(
    request=None,
    responses={200: NoteShareSerializer},
    description="Decline a share token.",
    tags=['notes'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsNotBanned])
def reject_share_view(request, token):
    share = reject_share(token=token, recipient=request.user)
    return Response(NoteShareSerializer(share).data)


@extend_schema(
    request=ShareUpdateSerializer,
    responses={200: NoteShareSerializer, 204: None},
    description="Change a share's permission or revoke it (note owner only).",
    tags=['notes'],
)
@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsNotBanned])
def share_detail(request, share_id):
    share = get_share_for_owner(share_id=share_id, owner=request.user)

    if request.method == 'DELETE':
        revoke_share(share_id=share.id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = ShareUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    share = update_share_permission(
        share_id=share.id,
        new_permission=serializer.validated_data['permission']
    )
    return Response(NoteShareSerializer(share).data)
