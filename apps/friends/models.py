from django.db import models
import uuid


class FriendshipStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    ACCEPTED = 'ACCEPTED', 'Accepted'


def make_pair_key(first_email: str, second_email: str) -> str:
    """Direction-independent key for the relation between two emails."""
    emails = sorted([first_email.strip().lower(), second_email.strip().lower()])
    return '|'.join(emails)


class Friendship(models.Model):
    """
    Social connection between two identities.

    The requester is a known user; the addressee is identified by email only
    and may not have an account yet.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    requester = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='sent_friendships')
    requester_email = models.EmailField(max_length=255)
    addressee_email = models.EmailField(max_length=255, db_index=True)
    pair_key = models.CharField(max_length=512, unique=True, editable=False)
    status = models.CharField(max_length=10, choices=FriendshipStatus.choices, default=FriendshipStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'friendships'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.requester_email} -> {self.addressee_email} ({self.status})"

    def save(self, *args, **kwargs):
        self.pair_key = make_pair_key(self.requester_email, self.addressee_email)
        super().save(*args, **kwargs)

    def is_addressee(self, email: str) -> bool:
        return self.addressee_email.lower() == email.strip().lower()

    def involves(self, user_id, email: str) -> bool:
        return self.requester_id == user_id or self.is_addressee(email)
