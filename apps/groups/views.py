from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.core.permissions import IsNotBanned
from apps.core.constants import UUID_PATTERN
from apps.notes.serializers import NoteSerializer
from apps.notes.services import list_group_notes

from .serializers import (
    GroupSerializer,
    GroupCreateSerializer,
    GroupUpdateSerializer,
    UserGroupSerializer,
    GroupDetailsSerializer,
    GroupMembershipSerializer,
    GroupInvitationSerializer,
    PendingInvitationSerializer,
    InviteUserSerializer,
    ChangeRoleSerializer,
    RespondInvitationSerializer,
)

from apps.groups.services import (
    create_group,
    get_group_details,
    get_user_groups,
    update_group,
    delete_group,
    remove_member,
    change_role,
    invite_user_by_email,
    get_user_invitations,
    respond_to_invitation,
)


class GroupViewSet(viewsets.ViewSet):
    """
    ViewSet for groups.

    All business logic is handled by services.
    Views are thin HTTP handlers only; service errors are turned into
    responses by the project exception handler.

    list: Get all groups (user is member of)
    create: Create a new group
    retrieve: Get a group with its members (members only)
    update: Update a group (admin only)
    partial_update: Partially update a group (admin only)
    destroy: Delete a group (owner only)
    """

    permission_classes = [IsAuthenticated, IsNotBanned]
    lookup_value_regex = UUID_PATTERN

    @extend_schema(responses={200: UserGroupSerializer(many=True)}, tags=['groups'])
    def list(self, request):
        """Groups the current user belongs to, with their role."""
        groups = get_user_groups(user=request.user)
        return Response(UserGroupSerializer(groups, many=True).data)

    @extend_schema(request=GroupCreateSerializer, responses={201: GroupSerializer}, tags=['groups'])
    def create(self, request):
        """Create a new group."""
        serializer = GroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = create_group(
            creator=request.user,
            name=serializer.validated_data['name'],
            description=serializer.validated_data.get('description', '')
        )

        return Response(GroupSerializer(group).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: GroupDetailsSerializer}, tags=['groups'])
    def retrieve(self, request, pk=None):
        """Get group details with enriched member list."""
        details = get_group_details(group_id=pk, requester=request.user)
        return Response(GroupDetailsSerializer(details).data)

    @extend_schema(request=GroupUpdateSerializer, responses={200: GroupSerializer}, tags=['groups'])
    def update(self, request, pk=None):
        serializer = GroupUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = update_group(
            group_id=pk,
            requester=request.user,
            name=serializer.validated_data.get('name'),
            description=serializer.validated_data.get('description')
        )
        return Response(GroupSerializer(group).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(responses={204: None}, tags=['groups'])
    def destroy(self, request, pk=None):
        """Delete a group with its notes, memberships and invitations."""
        delete_group(group_id=pk, requester=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=InviteUserSerializer,
        responses={201: GroupInvitationSerializer, 200: None},
        tags=['groups'],
    )
    @action(detail=True, methods=['post'])
    def invite(self, request, pk=None):
        """Invite a user by email (admin only). Already invited or member is a no-op."""
        serializer = InviteUserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invitation = invite_user_by_email(
            group_id=pk,
            requester=request.user,
            target_email=serializer.validated_data['email']
        )

        if invitation is None:
            return Response({'message': 'User is already a member or invited'})

        return Response(
            GroupInvitationSerializer(invitation).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=ChangeRoleSerializer, responses={200: GroupMembershipSerializer}, tags=['groups'])
    @action(detail=True, methods=['post'])
    def change_role(self, request, pk=None):
        """Change a member's role (admin only; granting OWNER transfers ownership)."""
        serializer = ChangeRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        membership = change_role(
            group_id=pk,
            requester=request.user,
            target_user_id=serializer.validated_data['user_id'],
            new_role=serializer.validated_data['role']
        )
        return Response(GroupMembershipSerializer(membership).data)

    @extend_schema(responses={204: None}, tags=['groups'])
    @action(detail=True, methods=['delete'], url_path=rf"members/(?P<user_id>{UUID_PATTERN})")
    def remove_member(self, request, pk=None, user_id=None):
        """Remove a member, or leave the group when user_id is the caller."""
        remove_member(group_id=pk, requester=request.user, target_user_id=user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: NoteSerializer(many=True)}, tags=['groups'])
    @action(detail=True, methods=['get'])
    def notes(self, request, pk=None):
        """Notes of the group (members only)."""
        notes = list_group_notes(group_id=pk, user=request.user)
        return Response(NoteSerializer(notes, many=True).data)


@extend_schema(
    responses={200: PendingInvitationSerializer(many=True)},
    description="Get pending group invitations addressed to the current user.",
    tags=['groups'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsNotBanned])
def my_invitations(request):
    invitations = get_user_invitations(user=request.user)
    return Response(PendingInvitationSerializer(invitations, many=True).data)


@extend_schema(
    request=RespondInvitationSerializer,
    responses={200: GroupMembershipSerializer, 204: None},
    description="Accept or reject a group invitation.",
    tags=['groups'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsNotBanned])
def respond_invitation(request, invitation_id):
    serializer = RespondInvitationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    membership = respond_to_invitation(
        invitation_id=invitation_id,
        user=request.user,
        accept=serializer.validated_data['accept']
    )

    if membership is None:
        return Response(status=status.HTTP_204_NO_CONTENT)
    return Response(GroupMembershipSerializer(membership).data)
