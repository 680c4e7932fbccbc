from rest_framework import serializers
from .models import UserModerationRecord


class ModerationRecordSerializer(serializers.ModelSerializer):

    class Meta:
        model = UserModerationRecord
        fields = ['user', 'role', 'is_banned', 'warning_count', 'updated_at']
        read_only_fields = fields


class UserModerationSummarySerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    email = serializers.EmailField()
    display_name = serializers.CharField()
    role = serializers.CharField()
    is_banned = serializers.BooleanField()
    warning_count = serializers.IntegerField()


class ModeratedNoteSerializer(serializers.Serializer):
    note_id = serializers.UUIDField()
    title = serializers.CharField()
    content = serializers.CharField()
    created_at = serializers.DateTimeField()
    author_name = serializers.CharField()
    group_name = serializers.CharField(allow_null=True)
    is_group_note = serializers.BooleanField()


class ModeratedGroupMemberSerializer(serializers.Serializer):
    display_name = serializers.CharField()
    email = serializers.EmailField()
    role = serializers.CharField()


class ModeratedGroupSerializer(serializers.Serializer):
    group_id = serializers.UUIDField()
    name = serializers.CharField()
    description = serializers.CharField()
    owner_name = serializers.CharField(allow_null=True)
    owner_email = serializers.EmailField(allow_null=True)
    member_count = serializers.IntegerField()
    note_count = serializers.IntegerField()
    created_at = serializers.DateTimeField()
    members = ModeratedGroupMemberSerializer(many=True)
