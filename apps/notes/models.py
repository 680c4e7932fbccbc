from django.db import models
import uuid


class NotePermission(models.TextChoices):
    """Effective access to a note, highest first: OWNER > WRITE > READ."""

    OWNER = 'OWNER', 'Owner'
    WRITE = 'WRITE', 'Write'
    READ = 'READ', 'Read'

    @property
    def rank(self) -> int:
        return NOTE_PERMISSION_RANKS[self]

    def at_least(self, other: 'NotePermission') -> bool:
        return self.rank >= NotePermission(other).rank


NOTE_PERMISSION_RANKS = {
    NotePermission.READ: 1,
    NotePermission.WRITE: 2,
    NotePermission.OWNER: 3,
}


class SharePermission(models.TextChoices):
    """Permission a share can grant; OWNER is never shareable."""

    READ = 'READ', 'Read'
    WRITE = 'WRITE', 'Write'

    @property
    def as_note_permission(self) -> NotePermission:
        return NotePermission(self.value)

    @classmethod
    def parse(cls, value: str) -> 'SharePermission':
        """Case-insensitive lookup; raises ValueError for unknown permissions."""
        return cls(str(value).strip().upper())


class ShareStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    ACCEPTED = 'ACCEPTED', 'Accepted'
    REJECTED = 'REJECTED', 'Rejected'


class Note(models.Model):
    """Content unit; private when group is null, group-scoped otherwise."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='notes')
    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='notes'
    )
    title = models.CharField(max_length=255)
    content = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'notes'
        indexes = [
            models.Index(fields=['owner', 'created_at']),
            models.Index(fields=['group', 'created_at']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    @property
    def is_group_note(self):
        return self.group_id is not None


class NoteShare(models.Model):
    """
    Token capability granting READ or WRITE on one note to one recipient.

    The recipient is addressed by email and may not have an account yet;
    recipient is filled in when the token is redeemed.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    note = models.ForeignKey(Note, on_delete=models.CASCADE, related_name='shares')
    owner = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='created_shares')
    recipient_email = models.EmailField(max_length=255)
    recipient = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='received_shares'
    )
    permission = models.CharField(max_length=10, choices=SharePermission.choices, default=SharePermission.READ)
    status = models.CharField(max_length=10, choices=ShareStatus.choices, default=ShareStatus.PENDING)
    token = models.CharField(max_length=64, unique=True, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'note_shares'
        constraints = [
            models.UniqueConstraint(fields=['note', 'recipient_email'], name='uniq_note_share_recipient'),
        ]
        indexes = [
            models.Index(fields=['recipient_email', 'status']),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.note.title} -> {self.recipient_email} ({self.permission}, {self.status})"

    @property
    def is_accepted(self):
        return self.status == ShareStatus.ACCEPTED


class NoteVote(models.Model):
    """A user's vote on a note; the row's existence is the vote."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    note = models.ForeignKey(Note, on_delete=models.CASCADE, related_name='votes')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='note_votes')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'note_votes'
        constraints = [
            models.UniqueConstraint(fields=['note', 'user'], name='uniq_note_vote'),
        ]

    def __str__(self):
        return f"{self.user.email} voted {self.note.title}"
