"""Shared pytest fixtures and configuration."""

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from accounts.authentication import create_token
from tests.utils.factories import create_draft, create_user


@pytest.fixture(autouse=True)
def listing_settings(settings):
    """Deterministic settings for every test."""
    settings.SUPPORTED_LOCALES = ['en', 'nl', 'fr']
    settings.TERMS_REQUIRED_DOMAINS = ['domakin.nl', 'localhost']
    settings.FRONTEND_URL = 'https://frontend.test'
    settings.JWT_SECRET_KEY = 'test-jwt-secret'
    settings.JWT_ALGORITHM = 'HS256'
    settings.OPENAI_API_KEY = 'sk-test'
    settings.STRIPE_SECRET_KEY = 'sk_test'
    settings.GITHUB_API_TOKEN = 'gh-test'
    settings.GITHUB_WEBHOOK_TOKEN = 'hook-test'
    settings.GITHUB_SITEMAP_OWNER = 'owner'
    settings.GITHUB_SITEMAP_REPO = 'frontend'
    return settings


@pytest.fixture
def user(db):
    return create_user()


@pytest.fixture
def other_user(db):
    return create_user()


@pytest.fixture
def admin_user(db):
    return get_user_model().objects.create_user(
        username='admin', email='admin@example.com', password='pass1234', is_staff=True,
    )


@pytest.fixture
def api_client():
    """Anonymous API client."""
    return APIClient()


def _client_for(user):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {create_token(user.pk)}")
    return client


@pytest.fixture
def auth_client(user):
    return _client_for(user)


@pytest.fixture
def other_client(other_user):
    return _client_for(other_user)


@pytest.fixture
def admin_client_jwt(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def draft(user):
    """A draft owned by ``user`` that has passed every step."""
    return create_draft(user=user)
