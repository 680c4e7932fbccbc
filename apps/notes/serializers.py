from rest_framework import serializers
from .models import Note, NoteShare


class NoteSerializer(serializers.ModelSerializer):
    """Note with the caller's vote state (set by annotate_votes)."""

    vote_count = serializers.SerializerMethodField()
    voted_by_me = serializers.SerializerMethodField()

    class Meta:
        model = Note
        fields = [
            'id',
            'owner',
            'group',
            'title',
            'content',
            'vote_count',
            'voted_by_me',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_vote_count(self, obj):
        return getattr(obj, 'vote_count', 0)

    def get_voted_by_me(self, obj):
        return getattr(obj, 'voted_by_me', False)


class NoteDetailSerializer(NoteSerializer):
    """Note with the caller's effective permission."""

    permission = serializers.SerializerMethodField()

    class Meta(NoteSerializer.Meta):
        fields = NoteSerializer.Meta.fields + ['permission']
        read_only_fields = fields

    def get_permission(self, obj):
        return self.context.get('permission')


class NoteCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    content = serializers.CharField(allow_blank=True, default='')
    group_id = serializers.UUIDField(allow_null=True, default=None)


class NoteUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255, required=False)
    content = serializers.CharField(allow_blank=True, required=False)


class NoteShareSerializer(serializers.ModelSerializer):
    """Share as seen by the note owner."""

    class Meta:
        model = NoteShare
        fields = [
            'id',
            'note',
            'recipient_email',
            'recipient',
            'permission',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ShareCreateSerializer(serializers.Serializer):
    """
    Share a note with an email.

    Permission is validated by the service so unknown values map to the
    same error as everywhere else.
    """

    email = serializers.EmailField()
    permission = serializers.CharField(max_length=10, default='READ')


class ShareUpdateSerializer(serializers.Serializer):
    permission = serializers.CharField(max_length=10)


class ShareUrlSerializer(serializers.Serializer):
    share_url = serializers.CharField()


class SharedNoteSerializer(serializers.Serializer):
    """Entry of the "shared with me" list."""

    id = serializers.UUIDField()
    title = serializers.CharField()
    content = serializers.CharField()
    created_at = serializers.DateTimeField()
    owner_id = serializers.UUIDField()
    permission = serializers.CharField()
    status = serializers.CharField()
    token = serializers.CharField()
    vote_count = serializers.IntegerField()
    voted_by_me = serializers.BooleanField()


class VoteStateSerializer(serializers.Serializer):
    vote_count = serializers.IntegerField()
    voted_by_me = serializers.BooleanField()
