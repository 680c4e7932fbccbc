import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole
from apps.notes.models import Note, NoteShare, SharePermission, ShareStatus


def client_for(user):
    """Return an API client authenticated as user."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def note_owner(db):
    return User.objects.create_user(
        email='alice@example.com',
        password='TestPass123!',
        display_name='Alice',
    )


@pytest.fixture
def reader(db):
    return User.objects.create_user(
        email='bob@example.com',
        password='TestPass123!',
        display_name='Bob',
    )


@pytest.fixture
def stranger(db):
    return User.objects.create_user(
        email='mallory@example.com',
        password='TestPass123!',
        display_name='Mallory',
    )


@pytest.fixture
def owner_client(note_owner):
    return client_for(note_owner)


@pytest.fixture
def reader_client(reader):
    return client_for(reader)


@pytest.fixture
def stranger_client(stranger):
    return client_for(stranger)


@pytest.fixture
def note(note_owner):
    """Private note owned by Alice."""
    return Note.objects.create(
        owner=note_owner,
        title='Shopping list',
        content='Milk, eggs',
    )


@pytest.fixture
def study_group(note_owner, reader):
    """Group with Alice as owner and Bob as member."""
    group = Group.objects.create(name='Study Group')
    GroupMembership.objects.create(group=group, user=note_owner, role=GroupRole.OWNER)
    GroupMembership.objects.create(group=group, user=reader, role=GroupRole.MEMBER)
    return group


@pytest.fixture
def group_note(note_owner, study_group):
    return Note.objects.create(
        owner=note_owner,
        group=study_group,
        title='Lecture 3',
        content='Graphs',
    )


@pytest.fixture
def accepted_share(note, note_owner, reader):
    """READ share of Alice's note, already accepted by Bob."""
    return NoteShare.objects.create(
        note=note,
        owner=note_owner,
        recipient_email=reader.email,
        recipient=reader,
        permission=SharePermission.READ,
        status=ShareStatus.ACCEPTED,
        token='accepted-token',
    )
