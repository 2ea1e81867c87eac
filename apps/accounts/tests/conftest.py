import io

import pytest
from PIL import Image
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, Profile
from apps.accounts.services import register_user


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
    """Freshly registered user whose profile still has the default name."""
    return register_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    user = register_user(email='inactive@example.com', password='TestPass123!')
    user.is_active = False
    user.save()
    return user


@pytest.fixture
def other_user(db):
    """Create and return another test user."""
    return register_user(email='otheruser@example.com', password='OtherPass123!')


@pytest.fixture
def admin_user(db):
    """User flagged as back-office admin on their profile."""
    user = register_user(email='admin@mifimnpay.com.ng', password='AdminPass123!')
    Profile.objects.filter(user=user).update(is_admin=True)
    return User.objects.get(id=user.id)


@pytest.fixture
def authenticated_client(user):
    """Return an authenticated API client using JWT."""
    return _client_for(user)


@pytest.fixture
def admin_client(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def logo_file():
    """Small PNG upload."""
    buffer = io.BytesIO()
    Image.new('RGB', (32, 32), '#22c55e').save(buffer, format='PNG')
    return SimpleUploadedFile('Logo.PNG', buffer.getvalue(), content_type='image/png')


@pytest.fixture
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path)
    return tmp_path
