from django.db import models
import uuid


class GroupRole(models.TextChoices):
    """Group roles, highest first: OWNER > ADMIN > MEMBER."""

    OWNER = 'OWNER', 'Owner'
    ADMIN = 'ADMIN', 'Admin'
    MEMBER = 'MEMBER', 'Member'

    @property
    def rank(self) -> int:
        return GROUP_ROLE_RANKS[self]

    def at_least(self, other: 'GroupRole') -> bool:
        return self.rank >= GroupRole(other).rank

    @classmethod
    def parse(cls, value: str) -> 'GroupRole':
        """Case-insensitive lookup; raises ValueError for unknown roles."""
        return cls(str(value).strip().upper())


GROUP_ROLE_RANKS = {
    GroupRole.MEMBER: 1,
    GroupRole.ADMIN: 2,
    GroupRole.OWNER: 3,
}


class Group(models.Model):
    """Named collection of users with role-based membership."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'groups'
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def has_member(self, user):
        return self.memberships.filter(user=user).exists()

    def get_user_role(self, user):
        try:
            return GroupRole(self.memberships.get(user=user).role)
        except GroupMembership.DoesNotExist:
            return None

    def is_admin(self, user):
        role = self.get_user_role(user)
        return role is not None and role.at_least(GroupRole.ADMIN)

    def get_owner_membership(self):
        return self.memberships.select_related('user').filter(role=GroupRole.OWNER).first()


class GroupMembership(models.Model):
    """User membership in a group with role."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='group_memberships')
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='memberships')
    role = models.CharField(max_length=20, choices=GroupRole.choices, default=GroupRole.MEMBER)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'group_memberships'
        unique_together = [['user', 'group']]
        indexes = [
            models.Index(fields=['group', 'role']),
            models.Index(fields=['user', 'joined_at']),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_display_name()} in {self.group.name} ({self.role})"

    @property
    def group_role(self) -> GroupRole:
        return GroupRole(self.role)


class GroupInvitation(models.Model):
    """Pending, single-use offer to join a group, addressed to one user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='invitations')
    inviter = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='sent_group_invitations')
    invitee = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='group_invitations')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'group_invitations'
        constraints = [
            models.UniqueConstraint(fields=['group', 'invitee'], name='uniq_group_invitation'),
        ]
        indexes = [
            models.Index(fields=['invitee', 'created_at']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Invitation to {self.group.name} for {self.invitee.email}"
