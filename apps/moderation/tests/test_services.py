import uuid

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from apps.accounts.models import User
from apps.groups.models import Group, GroupInvitation, GroupMembership, GroupRole
from apps.moderation.models import ModerationRole, UserModerationRecord
from apps.moderation.services import (
    ModerationRegistry,
    toggle_ban,
    add_warning,
    remove_warning,
    promote_to_moderator,
    demote_to_user,
    delete_user,
    list_users_with_records,
    list_all_notes,
    list_all_groups,
    delete_note_as_moderator,
    delete_group_as_moderator,
    TargetUserNotFoundError,
    InsufficientModerationRoleError,
    ProtectedTargetError,
    InvalidRoleChangeError,
    ModeratedContentNotFoundError,
)
from apps.notes.models import Note, NoteShare, NoteVote


class InMemoryRegistry(ModerationRegistry):
    """Registry keeping records in a dict instead of the database."""

    def __init__(self, roles=None):
        self.records = {}
        for user_id, role in (roles or {}).items():
            self.records[user_id] = UserModerationRecord(user_id=user_id, role=role)

    def get_record(self, user_id):
        return self.records.get(user_id)

    def get_or_create_record(self, user_id):
        if user_id not in self.records:
            self.records[user_id] = UserModerationRecord(user_id=user_id)
        return self.records[user_id]

    def save_record(self, record, update_fields):
        self.records[record.user_id] = record

    def delete_record(self, user_id):
        self.records.pop(user_id, None)

    def list_records(self):
        return dict(self.records)


@pytest.mark.django_db
class TestRegistry:

    def test_user_without_record_is_plain_user(self, regular_user):
        registry = ModerationRegistry()

        assert registry.get_role(regular_user.id) == ModerationRole.USER
        assert registry.is_banned(regular_user.id) is False
        assert registry.get_warning_count(regular_user.id) == 0
        assert registry.get_record(regular_user.id) is None

    def test_role_predicates(self, site_admin, moderator):
        registry = ModerationRegistry()

        assert registry.is_admin(site_admin.id)
        assert registry.is_at_least_moderator(site_admin.id)
        assert registry.is_at_least_moderator(moderator.id)
        assert not registry.is_admin(moderator.id)


@pytest.mark.django_db
class TestBan:

    def test_moderator_cannot_ban_moderator(self, moderator, other_moderator):
        with pytest.raises(ProtectedTargetError):
            toggle_ban(target_id=other_moderator.id, actor=moderator)

        assert not ModerationRegistry().is_banned(other_moderator.id)

    def test_admin_toggles_moderator_ban(self, site_admin, other_moderator):
        record = toggle_ban(target_id=other_moderator.id, actor=site_admin)
        assert record.is_banned is True

        record = toggle_ban(target_id=other_moderator.id, actor=site_admin)
        assert record.is_banned is False

    def test_moderator_bans_user(self, moderator, regular_user):
        toggle_ban(target_id=regular_user.id, actor=moderator)

        record = UserModerationRecord.objects.get(user=regular_user)
        assert record.is_banned is True
        assert record.role == ModerationRole.USER

    def test_admin_is_protected(self, moderator, site_admin):
        with pytest.raises(ProtectedTargetError):
            toggle_ban(target_id=site_admin.id, actor=moderator)

    def test_plain_user_cannot_ban(self, regular_user, moderator):
        with pytest.raises(InsufficientModerationRoleError):
            toggle_ban(target_id=moderator.id, actor=regular_user)

    def test_unknown_target(self, moderator):
        with pytest.raises(TargetUserNotFoundError):
            toggle_ban(target_id=uuid.uuid4(), actor=moderator)


@pytest.mark.django_db
class TestWarnings:

    def test_add_and_remove(self, moderator, regular_user):
        add_warning(target_id=regular_user.id, actor=moderator)
        record = add_warning(target_id=regular_user.id, actor=moderator)
        assert record.warning_count == 2

        record = remove_warning(target_id=regular_user.id, actor=moderator)
        assert record.warning_count == 1

    def test_remove_never_goes_below_zero(self, moderator, regular_user):
        record = remove_warning(target_id=regular_user.id, actor=moderator)

        assert record.warning_count == 0
        assert ModerationRegistry().get_warning_count(regular_user.id) == 0

    def test_moderator_may_warn_moderator(self, moderator, other_moderator):
        record = add_warning(target_id=other_moderator.id, actor=moderator)

        assert record.warning_count == 1

    def test_admin_cannot_be_warned(self, site_admin, moderator):
        with pytest.raises(ProtectedTargetError):
            add_warning(target_id=site_admin.id, actor=moderator)


@pytest.mark.django_db
class TestRoles:

    def test_admin_promotes_and_demotes(self, site_admin, regular_user):
        record = promote_to_moderator(target_id=regular_user.id, actor=site_admin)
        assert record.role == ModerationRole.MODERATOR
        assert ModerationRegistry().is_at_least_moderator(regular_user.id)

        record = demote_to_user(target_id=regular_user.id, actor=site_admin)
        assert record.role == ModerationRole.USER

    def test_moderator_cannot_promote(self, moderator, regular_user):
        with pytest.raises(InsufficientModerationRoleError):
            promote_to_moderator(target_id=regular_user.id, actor=moderator)

    def test_admin_role_cannot_be_changed(self, site_admin):
        other_admin = User.objects.create_user(email='admin2@test.com', password='x')
        UserModerationRecord.objects.create(user=other_admin, role=ModerationRole.ADMIN)

        with pytest.raises(InvalidRoleChangeError):
            demote_to_user(target_id=other_admin.id, actor=site_admin)


@pytest.mark.django_db
class TestDeleteUser:

    def test_admin_deletes_user_and_owned_content(self, site_admin, regular_user):
        group = Group.objects.create(name='Owned')
        GroupMembership.objects.create(group=group, user=regular_user, role=GroupRole.OWNER)
        Note.objects.create(owner=regular_user, title='Mine')

        delete_user(target_id=regular_user.id, actor=site_admin)

        assert not User.objects.filter(id=regular_user.id).exists()
        assert not Group.objects.filter(id=group.id).exists()
        assert not Note.objects.exists()

    def test_moderator_cannot_delete(self, moderator, regular_user):
        with pytest.raises(InsufficientModerationRoleError):
            delete_user(target_id=regular_user.id, actor=moderator)

    def test_admin_cannot_be_deleted(self, site_admin):
        with pytest.raises(ProtectedTargetError):
            delete_user(target_id=site_admin.id, actor=site_admin)

    def test_unknown_target(self, site_admin):
        with pytest.raises(TargetUserNotFoundError):
            delete_user(target_id=uuid.uuid4(), actor=site_admin)


@pytest.mark.django_db
class TestListUsers:

    def test_lists_everyone_with_defaults(self, moderator, regular_user):
        summaries = {s.email: s for s in list_users_with_records(actor=moderator)}

        assert summaries['mod1@test.com'].role == ModerationRole.MODERATOR
        assert summaries['user@test.com'].role == ModerationRole.USER
        assert summaries['user@test.com'].is_banned is False

    def test_plain_user_cannot_list(self, regular_user):
        with pytest.raises(InsufficientModerationRoleError):
            list_users_with_records(actor=regular_user)


@pytest.mark.django_db
class TestContentModeration:

    @pytest.fixture
    def club(self, regular_user, other_moderator):
        group = Group.objects.create(name='Book Club', description='Monthly reads')
        GroupMembership.objects.create(group=group, user=regular_user, role=GroupRole.OWNER)
        GroupMembership.objects.create(group=group, user=other_moderator, role=GroupRole.MEMBER)
        return group

    def test_list_all_notes(self, moderator, regular_user, club):
        Note.objects.create(owner=regular_user, title='Private')
        Note.objects.create(owner=regular_user, group=club, title='Reading list')

        summaries = {s.title: s for s in list_all_notes(actor=moderator)}

        assert summaries['Private'].is_group_note is False
        assert summaries['Private'].group_name is None
        assert summaries['Reading list'].is_group_note is True
        assert summaries['Reading list'].group_name == 'Book Club'
        assert summaries['Reading list'].author_name == 'Regular User'

    def test_list_all_groups(self, moderator, regular_user, club):
        Note.objects.create(owner=regular_user, group=club, title='Reading list')
        Note.objects.create(owner=regular_user, title='Private')

        [summary] = list_all_groups(actor=moderator)

        assert summary.name == 'Book Club'
        assert summary.owner_email == 'user@test.com'
        assert summary.owner_name == 'Regular User'
        assert summary.member_count == 2
        assert summary.note_count == 1
        assert {(m.email, m.role) for m in summary.members} == {
            ('user@test.com', GroupRole.OWNER),
            ('mod2@test.com', GroupRole.MEMBER),
        }

    def test_group_without_owner_is_listed(self, moderator):
        Group.objects.create(name='Orphan')

        [summary] = list_all_groups(actor=moderator)

        assert summary.owner_name is None
        assert summary.member_count == 0
        assert summary.members == []

    def test_plain_user_cannot_list_content(self, regular_user):
        with pytest.raises(InsufficientModerationRoleError):
            list_all_notes(actor=regular_user)
        with pytest.raises(InsufficientModerationRoleError):
            list_all_groups(actor=regular_user)

    def test_delete_note(self, moderator, regular_user, other_moderator):
        note = Note.objects.create(owner=regular_user, title='Spam')
        NoteShare.objects.create(
            note=note, owner=regular_user, recipient_email=other_moderator.email, token='spam-token'
        )
        NoteVote.objects.create(note=note, user=other_moderator)

        delete_note_as_moderator(note_id=note.id, actor=moderator)

        assert not Note.objects.exists()
        assert not NoteShare.objects.exists()
        assert not NoteVote.objects.exists()

    def test_delete_group(self, moderator, regular_user, other_moderator, site_admin, club):
        Note.objects.create(owner=regular_user, group=club, title='Reading list')
        GroupInvitation.objects.create(group=club, inviter=regular_user, invitee=site_admin)

        delete_group_as_moderator(group_id=club.id, actor=moderator)

        assert not Group.objects.exists()
        assert not GroupMembership.objects.exists()
        assert not GroupInvitation.objects.exists()
        assert not Note.objects.exists()
        assert User.objects.filter(id=regular_user.id).exists()

    def test_delete_missing_content(self, moderator):
        with pytest.raises(ModeratedContentNotFoundError):
            delete_note_as_moderator(note_id=uuid.uuid4(), actor=moderator)
        with pytest.raises(ModeratedContentNotFoundError):
            delete_group_as_moderator(group_id=uuid.uuid4(), actor=moderator)

    def test_plain_user_cannot_delete_content(self, regular_user):
        note = Note.objects.create(owner=regular_user, title='Mine')

        with pytest.raises(InsufficientModerationRoleError):
            delete_note_as_moderator(note_id=note.id, actor=regular_user)

        assert Note.objects.filter(id=note.id).exists()


@pytest.mark.django_db
class TestInjectedRegistry:
    """Services work against any registry, not just the database one."""

    def test_ban_with_in_memory_registry(self, db):
        actor = User.objects.create_user(email='m@test.com', password='x')
        target = User.objects.create_user(email='t@test.com', password='x')
        registry = InMemoryRegistry({actor.id: ModerationRole.ADMIN, target.id: ModerationRole.MODERATOR})

        toggle_ban(target_id=target.id, actor=actor, registry=registry)

        assert registry.is_banned(target.id) is True
        assert not UserModerationRecord.objects.exists()

    def test_guards_use_injected_roles(self, db):
        actor = User.objects.create_user(email='m@test.com', password='x')
        target = User.objects.create_user(email='t@test.com', password='x')
        registry = InMemoryRegistry({actor.id: ModerationRole.MODERATOR})

        with pytest.raises(InsufficientModerationRoleError):
            promote_to_moderator(target_id=target.id, actor=actor, registry=registry)

        add_warning(target_id=target.id, actor=actor, registry=registry)
        assert registry.get_warning_count(target.id) == 1


@pytest.mark.django_db
class TestSetModerationRoleCommand:

    def test_grants_admin(self, regular_user):
        call_command('set_moderation_role', 'USER@test.com', 'admin')

        assert ModerationRegistry().is_admin(regular_user.id)

    def test_unknown_email(self, db):
        with pytest.raises(CommandError):
            call_command('set_moderation_role', 'ghost@test.com', 'ADMIN')
