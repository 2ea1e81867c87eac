import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.services import register_user, complete_onboarding
from apps.receipts.services import create_receipt


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Business owner who has finished onboarding."""
    user = register_user(email='owner@example.com', password='TestPass123!')
    complete_onboarding(user=user, business_name='Mama Put Kitchen', business_phone='08031234567')
    return user


@pytest.fixture
def other_user(db):
    """A second business."""
    user = register_user(email='other@example.com', password='OtherPass123!')
    complete_onboarding(user=user, business_name='Other Shop')
    return user


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def receipt_items():
    return [
        {'name': 'Jollof Rice', 'qty': 2, 'price': 500},
        {'name': 'Chicken', 'qty': 1, 'price': 1000},
    ]


@pytest.fixture
def receipt(user, receipt_items):
    """A saved receipt: subtotal 2000, shipping 200, discount 100."""
    return create_receipt(
        user=user,
        items=receipt_items,
        customer_name='Ada Obi',
        shipping=200,
        discount=100,
    )


@pytest.fixture
def other_receipt(other_user, receipt_items):
    return create_receipt(user=other_user, items=receipt_items, customer_name='Stranger')
