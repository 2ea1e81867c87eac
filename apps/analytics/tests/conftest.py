import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import Profile
from apps.accounts.services import register_user, update_business_profile
from apps.receipts.services import create_receipt


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
    """Fully set-up business."""
    user = register_user(email='owner@example.com', password='TestPass123!')
    update_business_profile(
        user=user,
        business_name='Mama Put Kitchen',
        business_phone='08031234567',
    )
    Profile.objects.filter(user=user).update(logo_url='/media/business-logos/logo.png')
    return user


@pytest.fixture
def other_user(db):
    """Business that never finished onboarding."""
    return register_user(email='other@example.com', password='OtherPass123!')


@pytest.fixture
def admin_user(db):
    user = register_user(email='admin@mifimnpay.com.ng', password='AdminPass123!')
    Profile.objects.filter(user=user).update(is_admin=True)
    user.refresh_from_db()
    return user


@pytest.fixture
def authenticated_client(user):
    """Return an API client authenticated as the business owner."""
    return _client_for(user)


@pytest.fixture
def admin_client(admin_user):
    """Return an API client authenticated as a back-office admin."""
    return _client_for(admin_user)


@pytest.fixture
def receipt_items():
    return [
        {'name': 'Jollof Rice', 'qty': 2, 'price': 500},
        {'name': 'Chicken', 'qty': 1, 'price': 1000},
    ]


@pytest.fixture
def receipts(user, receipt_items):
    """Three receipts for two customers, totalling 2100 + 2000 + 500."""
    return [
        create_receipt(user=user, items=receipt_items, customer_name='Ada', shipping=200, discount=100),
        create_receipt(user=user, items=receipt_items, customer_name='Bola'),
        create_receipt(user=user, items=[{'name': 'Tea', 'qty': 1, 'price': 500}], customer_name='Ada'),
    ]
