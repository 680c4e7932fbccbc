"""
Service layer unit tests for groups app.

Tests cover:
- Group lifecycle and cascading deletion
- Role hierarchy and ownership transfer
- Member removal rules
- Invitation workflow
"""

import pytest
from uuid import uuid4

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupInvitation, GroupRole
from apps.notes.models import Note, NoteShare, NoteVote
from apps.groups.services import (
    create_group,
    get_group_by_id,
    get_group_details,
    get_user_groups,
    update_group,
    delete_group,
    remove_member,
    change_role,
    invite_user_by_email,
    get_user_invitations,
    respond_to_invitation,
    get_member_role,
    is_group_member,
)
from apps.groups.services.exceptions import (
    GroupNotFoundError,
    NotMemberError,
    MemberNotFoundError,
    InvitationNotFoundError,
    InviteeNotFoundError,
    InvalidRoleError,
    OwnerCannotLeaveError,
    CannotChangeOwnRoleError,
    CannotChangeOwnerRoleError,
    CannotRemoveOwnerError,
    CannotRemoveAdminError,
    InsufficientPermissionsError,
)
from apps.core.exceptions import ForbiddenError, NotFoundError, BadRequestError


def owner_count(group):
    return GroupMembership.objects.filter(group=group, role=GroupRole.OWNER).count()


# =============================================================================
# Group Management Service Tests
# =============================================================================

@pytest.mark.django_db
class TestGroupManagement:
    """Tests for group_management.py service functions."""

    def test_create_group_success(self, group_owner):
        """Creating a group also creates owner membership."""
        group = create_group(
            creator=group_owner,
            name="Test Group",
            description="Test description"
        )

        assert group.name == "Test Group"
        assert group.description == "Test description"

        membership = GroupMembership.objects.get(group=group, user=group_owner)
        assert membership.role == GroupRole.OWNER
        assert owner_count(group) == 1

    def test_get_group_by_id_not_found(self):
        """Raises GroupNotFoundError if group doesn't exist."""
        with pytest.raises(GroupNotFoundError):
            get_group_by_id(group_id=uuid4())

    def test_get_group_details_enriches_members(self, group_with_members, group_owner):
        details = get_group_details(group_id=group_with_members.id, requester=group_owner)

        assert details.group.id == group_with_members.id
        assert len(details.members) == 3
        by_email = {m.email: m for m in details.members}
        assert by_email['owner@example.com'].display_name == 'Group Owner'
        assert by_email['owner@example.com'].role == GroupRole.OWNER
        assert by_email['member@example.com'].role == GroupRole.MEMBER

    def test_get_group_details_requires_membership(self, group, group_other_user):
        with pytest.raises(NotMemberError):
            get_group_details(group_id=group.id, requester=group_other_user)

    def test_get_user_groups(self, group_with_members, member_user, group_other_user):
        groups = get_user_groups(user=member_user)

        assert len(groups) == 1
        assert groups[0].group.id == group_with_members.id
        assert groups[0].my_role == GroupRole.MEMBER
        assert get_user_groups(user=group_other_user) == []

    def test_update_group_by_admin(self, group_with_members, admin_user):
        updated = update_group(
            group_id=group_with_members.id,
            requester=admin_user,
            name="Renamed"
        )

        assert updated.name == "Renamed"
        assert updated.description == 'Notes for the monthly book'

    def test_update_group_by_member_forbidden(self, group_with_members, member_user):
        with pytest.raises(InsufficientPermissionsError):
            update_group(group_id=group_with_members.id, requester=member_user, name="Nope")

    def test_delete_group_cascades(self, group_with_members, group_owner, member_user, group_other_user):
        note = Note.objects.create(owner=member_user, group=group_with_members, title="Chapter 1")
        NoteShare.objects.create(
            note=note,
            owner=member_user,
            recipient_email='other@example.com',
            token='tok-delete-group',
        )
        NoteVote.objects.create(note=note, user=group_owner)
        GroupInvitation.objects.create(
            group=group_with_members,
            inviter=group_owner,
            invitee=group_other_user
        )

        delete_group(group_id=group_with_members.id, requester=group_owner)

        assert not Group.objects.filter(id=group_with_members.id).exists()
        assert not GroupMembership.objects.filter(group_id=group_with_members.id).exists()
        assert not GroupInvitation.objects.filter(group_id=group_with_members.id).exists()
        assert not Note.objects.filter(id=note.id).exists()
        assert not NoteShare.objects.filter(note_id=note.id).exists()
        assert not NoteVote.objects.filter(note_id=note.id).exists()

    def test_delete_group_by_admin_forbidden(self, group_with_members, admin_user):
        with pytest.raises(InsufficientPermissionsError):
            delete_group(group_id=group_with_members.id, requester=admin_user)

        assert Group.objects.filter(id=group_with_members.id).exists()

    def test_delete_group_not_found(self, group_owner):
        with pytest.raises(GroupNotFoundError):
            delete_group(group_id=uuid4(), requester=group_owner)

    def test_membership_read_helpers(self, group_with_members, admin_user, group_other_user):
        assert get_member_role(group_id=group_with_members.id, user_id=admin_user.id) == GroupRole.ADMIN
        assert get_member_role(group_id=group_with_members.id, user_id=group_other_user.id) is None
        assert is_group_member(group_id=group_with_members.id, user_id=admin_user.id)
        assert not is_group_member(group_id=group_with_members.id, user_id=group_other_user.id)


# =============================================================================
# Role Management Service Tests
# =============================================================================

@pytest.mark.django_db
class TestRoleManagement:
    """Tests for change_role()."""

    def test_owner_promotes_member_to_admin(self, group_with_members, group_owner, member_user):
        membership = change_role(
            group_id=group_with_members.id,
            requester=group_owner,
            target_user_id=member_user.id,
            new_role='ADMIN'
        )

        assert membership.role == GroupRole.ADMIN
        assert group_with_members.get_user_role(member_user) == GroupRole.ADMIN

    def test_role_is_case_insensitive(self, group_with_members, group_owner, member_user):
        membership = change_role(
            group_id=group_with_members.id,
            requester=group_owner,
            target_user_id=member_user.id,
            new_role='admin'
        )

        assert membership.role == GroupRole.ADMIN

    def test_member_cannot_change_roles(self, group_with_members, member_user, admin_user):
        with pytest.raises(InsufficientPermissionsError):
            change_role(
                group_id=group_with_members.id,
                requester=member_user,
                target_user_id=admin_user.id,
                new_role='MEMBER'
            )

    def test_non_member_cannot_change_roles(self, group_with_members, group_other_user, member_user):
        with pytest.raises(NotMemberError):
            change_role(
                group_id=group_with_members.id,
                requester=group_other_user,
                target_user_id=member_user.id,
                new_role='ADMIN'
            )

    def test_target_must_be_member(self, group_with_members, group_owner, group_other_user):
        with pytest.raises(MemberNotFoundError):
            change_role(
                group_id=group_with_members.id,
                requester=group_owner,
                target_user_id=group_other_user.id,
                new_role='ADMIN'
            )

    def test_unknown_role_is_bad_request(self, group_with_members, group_owner, member_user):
        with pytest.raises(InvalidRoleError) as exc_info:
            change_role(
                group_id=group_with_members.id,
                requester=group_owner,
                target_user_id=member_user.id,
                new_role='SUPERUSER'
            )

        assert isinstance(exc_info.value, BadRequestError)

    def test_admin_cannot_grant_owner(self, group_with_members, admin_user, member_user):
        with pytest.raises(InsufficientPermissionsError):
            change_role(
                group_id=group_with_members.id,
                requester=admin_user,
                target_user_id=member_user.id,
                new_role='OWNER'
            )

    def test_admin_cannot_change_owner(self, group_with_members, admin_user, group_owner):
        with pytest.raises(CannotChangeOwnerRoleError):
            change_role(
                group_id=group_with_members.id,
                requester=admin_user,
                target_user_id=group_owner.id,
                new_role='MEMBER'
            )

        assert group_with_members.get_user_role(group_owner) == GroupRole.OWNER

    def test_owner_cannot_change_own_role(self, group_with_members, group_owner):
        with pytest.raises(CannotChangeOwnRoleError):
            change_role(
                group_id=group_with_members.id,
                requester=group_owner,
                target_user_id=group_owner.id,
                new_role='MEMBER'
            )

        assert owner_count(group_with_members) == 1

    def test_granting_owner_transfers_ownership(self, group_with_members, group_owner, member_user):
        change_role(
            group_id=group_with_members.id,
            requester=group_owner,
            target_user_id=member_user.id,
            new_role='OWNER'
        )

        assert group_with_members.get_user_role(member_user) == GroupRole.OWNER
        assert group_with_members.get_user_role(group_owner) == GroupRole.ADMIN
        assert owner_count(group_with_members) == 1

    def test_admin_can_demote_self(self, group_with_members, admin_user):
        membership = change_role(
            group_id=group_with_members.id,
            requester=admin_user,
            target_user_id=admin_user.id,
            new_role='MEMBER'
        )

        assert membership.role == GroupRole.MEMBER


# =============================================================================
# Membership Management Service Tests
# =============================================================================

@pytest.mark.django_db
class TestRemoveMember:
    """Tests for remove_member()."""

    def test_member_can_leave(self, group_with_members, member_user):
        remove_member(
            group_id=group_with_members.id,
            requester=member_user,
            target_user_id=member_user.id
        )

        assert not group_with_members.has_member(member_user)

    def test_leave_matches_id_regardless_of_case(self, group_with_members, member_user):
        remove_member(
            group_id=group_with_members.id,
            requester=member_user,
            target_user_id=str(member_user.id).upper()
        )

        assert not group_with_members.has_member(member_user)

    def test_owner_cannot_leave(self, group_with_members, group_owner):
        with pytest.raises(OwnerCannotLeaveError):
            remove_member(
                group_id=group_with_members.id,
                requester=group_owner,
                target_user_id=group_owner.id
            )

        assert owner_count(group_with_members) == 1

    def test_member_cannot_remove_others(self, group_with_members, member_user, admin_user):
        with pytest.raises(InsufficientPermissionsError):
            remove_member(
                group_id=group_with_members.id,
                requester=member_user,
                target_user_id=admin_user.id
            )

    def test_admin_removes_member(self, group_with_members, admin_user, member_user):
        remove_member(
            group_id=group_with_members.id,
            requester=admin_user,
            target_user_id=member_user.id
        )

        assert not group_with_members.has_member(member_user)

    def test_admin_cannot_remove_admin(self, group_with_members, admin_user):
        other_admin = User.objects.create_user(email='admin2@example.com', password='x')
        GroupMembership.objects.create(user=other_admin, group=group_with_members, role=GroupRole.ADMIN)

        with pytest.raises(CannotRemoveAdminError):
            remove_member(
                group_id=group_with_members.id,
                requester=admin_user,
                target_user_id=other_admin.id
            )

    def test_owner_removes_admin(self, group_with_members, group_owner, admin_user):
        remove_member(
            group_id=group_with_members.id,
            requester=group_owner,
            target_user_id=admin_user.id
        )

        assert not group_with_members.has_member(admin_user)

    def test_nobody_removes_owner(self, group_with_members, admin_user, group_owner):
        with pytest.raises(CannotRemoveOwnerError) as exc_info:
            remove_member(
                group_id=group_with_members.id,
                requester=admin_user,
                target_user_id=group_owner.id
            )

        assert isinstance(exc_info.value, ForbiddenError)

    def test_requester_must_be_member(self, group_with_members, group_other_user, member_user):
        with pytest.raises(NotMemberError):
            remove_member(
                group_id=group_with_members.id,
                requester=group_other_user,
                target_user_id=member_user.id
            )

    def test_target_must_be_member(self, group_with_members, group_owner, group_other_user):
        with pytest.raises(MemberNotFoundError) as exc_info:
            remove_member(
                group_id=group_with_members.id,
                requester=group_owner,
                target_user_id=group_other_user.id
            )

        assert isinstance(exc_info.value, NotFoundError)


# =============================================================================
# Invitation Service Tests
# =============================================================================

@pytest.mark.django_db
class TestInvitations:
    """Tests for invite_management.py service functions."""

    def test_invite_creates_invitation(self, group, group_owner, group_other_user):
        invitation = invite_user_by_email(
            group_id=group.id,
            requester=group_owner,
            target_email='OTHER@example.com'
        )

        assert invitation is not None
        assert invitation.invitee == group_other_user
        assert invitation.inviter == group_owner

    def test_duplicate_invitation_is_noop(self, group, group_owner, group_other_user):
        invite_user_by_email(group_id=group.id, requester=group_owner, target_email=group_other_user.email)
        second = invite_user_by_email(group_id=group.id, requester=group_owner, target_email=group_other_user.email)

        assert second is None
        assert GroupInvitation.objects.filter(group=group, invitee=group_other_user).count() == 1

    def test_inviting_member_is_noop(self, group_with_members, group_owner, member_user):
        result = invite_user_by_email(
            group_id=group_with_members.id,
            requester=group_owner,
            target_email=member_user.email
        )

        assert result is None
        assert not GroupInvitation.objects.filter(group=group_with_members).exists()

    def test_unknown_invitee(self, group, group_owner):
        with pytest.raises(InviteeNotFoundError):
            invite_user_by_email(group_id=group.id, requester=group_owner, target_email='ghost@example.com')

    def test_member_cannot_invite(self, group_with_members, member_user, group_other_user):
        with pytest.raises(InsufficientPermissionsError):
            invite_user_by_email(
                group_id=group_with_members.id,
                requester=member_user,
                target_email=group_other_user.email
            )

    def test_get_user_invitations(self, group, group_owner, group_other_user):
        invite_user_by_email(group_id=group.id, requester=group_owner, target_email=group_other_user.email)

        invitations = get_user_invitations(user=group_other_user)

        assert len(invitations) == 1
        assert invitations[0].group_name == 'Reading Club'
        assert invitations[0].inviter_name == 'Group Owner'

    def test_accept_invitation(self, group, group_owner, group_other_user):
        invitation = invite_user_by_email(group_id=group.id, requester=group_owner, target_email=group_other_user.email)

        membership = respond_to_invitation(invitation_id=invitation.id, user=group_other_user, accept=True)

        assert membership.role == GroupRole.MEMBER
        assert GroupMembership.objects.filter(group=group, user=group_other_user).count() == 1
        assert not GroupInvitation.objects.filter(group=group, invitee=group_other_user).exists()

    def test_reject_invitation(self, group, group_owner, group_other_user):
        invitation = invite_user_by_email(group_id=group.id, requester=group_owner, target_email=group_other_user.email)

        result = respond_to_invitation(invitation_id=invitation.id, user=group_other_user, accept=False)

        assert result is None
        assert not group.has_member(group_other_user)
        assert not GroupInvitation.objects.filter(id=invitation.id).exists()

    def test_cannot_respond_to_someone_elses_invitation(self, group, group_owner, group_other_user, member_user):
        invitation = invite_user_by_email(group_id=group.id, requester=group_owner, target_email=group_other_user.email)

        with pytest.raises(InvitationNotFoundError):
            respond_to_invitation(invitation_id=invitation.id, user=member_user, accept=True)

        assert GroupInvitation.objects.filter(id=invitation.id).exists()


# =============================================================================
# End-to-end scenario
# =============================================================================

@pytest.mark.django_db
def test_invite_promote_and_protect_owner():
    """Creator owns the group, invitee joins, is promoted, and cannot remove the owner."""
    alice = User.objects.create_user(email='a@test.com', password='x')
    bob = User.objects.create_user(email='b@test.com', password='x')

    group = create_group(creator=alice, name='G')
    invitation = invite_user_by_email(group_id=group.id, requester=alice, target_email='b@test.com')
    respond_to_invitation(invitation_id=invitation.id, user=bob, accept=True)
    assert group.get_user_role(bob) == GroupRole.MEMBER

    change_role(group_id=group.id, requester=alice, target_user_id=bob.id, new_role='ADMIN')
    assert group.get_user_role(bob) == GroupRole.ADMIN

    with pytest.raises(ForbiddenError):
        remove_member(group_id=group.id, requester=bob, target_user_id=alice.id)

    assert owner_count(group) == 1
