from rest_framework import serializers
from .models import Group, GroupMembership, GroupInvitation


class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups."""

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'description',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class GroupCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating groups."""

    class Meta:
        model = Group
        fields = ['name', 'description']


class GroupUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    description = serializers.CharField(allow_blank=True, required=False)


class UserGroupSerializer(serializers.Serializer):
    """A group as listed for one of its members."""

    id = serializers.UUIDField(source='group.id')
    name = serializers.CharField(source='group.name')
    description = serializers.CharField(source='group.description')
    created_at = serializers.DateTimeField(source='group.created_at')
    my_role = serializers.CharField()
    joined_at = serializers.DateTimeField()


class GroupMemberDetailSerializer(serializers.Serializer):
    """Member row enriched with identity."""

    id = serializers.UUIDField()
    user_id = serializers.UUIDField()
    role = serializers.CharField()
    joined_at = serializers.DateTimeField()
    display_name = serializers.CharField()
    email = serializers.EmailField()


class GroupDetailsSerializer(serializers.Serializer):
    group = GroupSerializer()
    members = GroupMemberDetailSerializer(many=True)


class GroupMembershipSerializer(serializers.ModelSerializer):
    """Serializer for group memberships."""

    class Meta:
        model = GroupMembership
        fields = ['id', 'user', 'group', 'role', 'joined_at']
        read_only_fields = fields


class GroupInvitationSerializer(serializers.ModelSerializer):

    class Meta:
        model = GroupInvitation
        fields = ['id', 'group', 'inviter', 'invitee', 'created_at']
        read_only_fields = fields


class PendingInvitationSerializer(serializers.Serializer):
    """Invitation as shown to the invitee."""

    invitation_id = serializers.UUIDField()
    group_id = serializers.UUIDField()
    group_name = serializers.CharField()
    inviter_name = serializers.CharField()
    sent_at = serializers.DateTimeField()


class InviteUserSerializer(serializers.Serializer):
    """Serializer for inviting a user by email."""

    email = serializers.EmailField(required=True)


class ChangeRoleSerializer(serializers.Serializer):
    """
    Serializer for changing a member's role.

    The role stays a free string; unknown roles are rejected by the service.
    """

    user_id = serializers.UUIDField(required=True)
    role = serializers.CharField(max_length=20, required=True)


class RespondInvitationSerializer(serializers.Serializer):
    accept = serializers.BooleanField(required=True)
