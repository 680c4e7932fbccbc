import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User


def client_for(user):
    """Return an API client authenticated as user."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def user_one(db):
    return User.objects.create_user(
        email='u1@test.com',
        password='TestPass123!',
        display_name='User One',
    )


@pytest.fixture
def user_two(db):
    return User.objects.create_user(
        email='u2@test.com',
        password='TestPass123!',
        display_name='User Two',
    )


@pytest.fixture
def outsider(db):
    return User.objects.create_user(
        email='outsider@test.com',
        password='TestPass123!',
        display_name='Outsider',
    )


@pytest.fixture
def user_one_client(user_one):
    return client_for(user_one)


@pytest.fixture
def user_two_client(user_two):
    return client_for(user_two)


@pytest.fixture
def outsider_client(outsider):
    return client_for(outsider)
