import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import Profile
from apps.accounts.services import register_user, complete_onboarding


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    user = register_user(email='owner@example.com', password='TestPass123!')
    complete_onboarding(user=user, business_name='Mama Put Kitchen')
    return user


@pytest.fixture
def admin_user(db):
    user = register_user(email='admin@mifimnpay.com.ng', password='AdminPass123!')
    Profile.objects.filter(user=user).update(is_admin=True, business_name='MifimnPay HQ')
    return user


@pytest.fixture
def authenticated_client(user):
    """Return an API client authenticated as an ordinary business."""
    return _client_for(user)


@pytest.fixture
def admin_client(admin_user):
    """Return an API client authenticated as a back-office admin."""
    return _client_for(admin_user)


@pytest.fixture
def recipients():
    return [
        {'id': '1', 'business_name': 'Mama Put Kitchen', 'auth_email': 'owner@example.com'},
        {'id': '2', 'business_name': 'Bola Stores', 'auth_email': 'bola@example.com'},
    ]


@pytest.fixture
def failing_email_backend(settings):
    settings.EMAIL_BACKEND = 'apps.campaigns.tests.backends.FailingEmailBackend'
