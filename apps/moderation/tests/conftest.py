import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.moderation.models import ModerationRole, UserModerationRecord


def client_for(user):
    """Return an API client authenticated as user."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


def make_user(email, display_name, role=None):
    user = User.objects.create_user(email=email, password='TestPass123!', display_name=display_name)
    if role is not None:
        UserModerationRecord.objects.create(user=user, role=role)
    return user


@pytest.fixture
def site_admin(db):
    return make_user('admin@test.com', 'Site Admin', ModerationRole.ADMIN)


@pytest.fixture
def moderator(db):
    return make_user('mod1@test.com', 'Moderator One', ModerationRole.MODERATOR)


@pytest.fixture
def other_moderator(db):
    return make_user('mod2@test.com', 'Moderator Two', ModerationRole.MODERATOR)


@pytest.fixture
def regular_user(db):
    return make_user('user@test.com', 'Regular User')


@pytest.fixture
def admin_client(site_admin):
    return client_for(site_admin)


@pytest.fixture
def moderator_client(moderator):
    return client_for(moderator)


@pytest.fixture
def regular_client(regular_user):
    return client_for(regular_user)
