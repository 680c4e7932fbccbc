from django.db import models


class ModerationRole(models.TextChoices):
    """Account-wide roles, lowest first: USER < MODERATOR < ADMIN."""

    USER = 'USER', 'User'
    MODERATOR = 'MODERATOR', 'Moderator'
    ADMIN = 'ADMIN', 'Admin'

    @property
    def rank(self) -> int:
        return MODERATION_ROLE_RANKS[self]

    def at_least(self, other: 'ModerationRole') -> bool:
        return self.rank >= ModerationRole(other).rank


MODERATION_ROLE_RANKS = {
    ModerationRole.USER: 1,
    ModerationRole.MODERATOR: 2,
    ModerationRole.ADMIN: 3,
}


class UserModerationRecord(models.Model):
    """Per-account moderation standing, created on first moderation action."""

    user = models.OneToOneField(
        'accounts.User',
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='moderation_record'
    )
    role = models.CharField(max_length=20, choices=ModerationRole.choices, default=ModerationRole.USER)
    is_banned = models.BooleanField(default=False)
    warning_count = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_moderation_records'
        indexes = [
            models.Index(fields=['role']),
            models.Index(fields=['is_banned']),
        ]

    def __str__(self):
        return f"{self.user.email} ({self.role})"

    @property
    def moderation_role(self) -> ModerationRole:
        return ModerationRole(self.role)
