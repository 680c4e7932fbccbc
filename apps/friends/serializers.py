from rest_framework import serializers
from .models import Friendship


class FriendshipSerializer(serializers.ModelSerializer):

    class Meta:
        model = Friendship
        fields = [
            'id',
            'requester',
            'requester_email',
            'addressee_email',
            'status',
            'created_at',
        ]
        read_only_fields = fields


class FriendInviteSerializer(serializers.Serializer):
    email = serializers.EmailField()
