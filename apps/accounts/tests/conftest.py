import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, AuthProvider
from config.secrets import SecretNotFoundError, SecretResolver


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return an email/password user."""
    return User.objects.create_user(
        email='test@example.com',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def inactive_user(db):
    """Create and return a deactivated user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        display_name='Inactive User',
        is_active=False,
    )


@pytest.fixture
def google_user(db):
    """Create and return a user who signed up with Google (no password)."""
    return User.objects.create_user(
        email='social@example.com',
        display_name='Social User',
        auth_provider=AuthProvider.GOOGLE,
        provider_subject='google-sub-123',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


class StaticSecretBackend:
    """Secret backend serving a fixed dict."""

    def __init__(self, values):
        self.values = values

    def fetch(self, name, version='latest'):
        if name not in self.values:
            raise SecretNotFoundError(name)
        return self.values[name]


@pytest.fixture
def provider_secret(settings):
    """Configure the provider callback secret and return it."""
    secret = 'callback-secret'
    settings.SECRETS = SecretResolver(
        StaticSecretBackend({'PROVIDER_CALLBACK_SECRET': secret}),
        cache_seconds=0,
    )
    return secret
