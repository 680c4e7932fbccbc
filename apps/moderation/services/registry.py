"""
Moderation registry.

Read and write access to per-account moderation standing. Services receive a
registry instance instead of querying UserModerationRecord directly, so an
in-memory implementation can be swapped in.

Users without a record are plain, unbanned USERs.
"""

from typing import Optional
from uuid import UUID

from apps.moderation.models import ModerationRole, UserModerationRecord


class ModerationRegistry:
    """Database-backed registry."""

    def get_record(self, user_id: UUID) -> Optional[UserModerationRecord]:
        return UserModerationRecord.objects.filter(user_id=user_id).first()

    def get_or_create_record(self, user_id: UUID) -> UserModerationRecord:
        """Get the record locked for update, creating a default one if missing."""
        record, _ = (
            UserModerationRecord.objects
            .select_for_update()
            .get_or_create(user_id=user_id)
        )
        return record

    def save_record(self, record: UserModerationRecord, update_fields: list[str]) -> None:
        record.save(update_fields=update_fields + ['updated_at'])

    def delete_record(self, user_id: UUID) -> None:
        UserModerationRecord.objects.filter(user_id=user_id).delete()

    def list_records(self) -> dict[UUID, UserModerationRecord]:
        return {record.user_id: record for record in UserModerationRecord.objects.all()}

    # Read predicates

    def get_role(self, user_id: UUID) -> ModerationRole:
        record = self.get_record(user_id)
        if record is None:
            return ModerationRole.USER
        return record.moderation_role

    def is_admin(self, user_id: UUID) -> bool:
        return self.get_role(user_id) == ModerationRole.ADMIN

    def is_at_least_moderator(self, user_id: UUID) -> bool:
        return self.get_role(user_id).at_least(ModerationRole.MODERATOR)

    def is_banned(self, user_id: UUID) -> bool:
        record = self.get_record(user_id)
        return record is not None and record.is_banned

    def get_warning_count(self, user_id: UUID) -> int:
        record = self.get_record(user_id)
        return record.warning_count if record else 0
