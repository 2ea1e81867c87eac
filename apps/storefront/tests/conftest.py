import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.services import register_user, update_business_profile
from apps.storefront.services import create_menu_item


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Business with a public store link."""
    user = register_user(email='owner@example.com', password='TestPass123!')
    update_business_profile(
        user=user,
        business_name='Mama Put Kitchen',
        tagline='Hot food daily',
        currency='₦ (NGN)',
        slug='mama-put',
    )
    return user


@pytest.fixture
def other_user(db):
    return register_user(email='other@example.com', password='OtherPass123!')


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def menu_items(user):
    return [
        create_menu_item(user=user, name='Jollof Rice', price=1500, description='With plantain'),
        create_menu_item(user=user, name='Pepper Soup', price='2000'),
    ]


@pytest.fixture
def other_item(other_user):
    return create_menu_item(user=other_user, name='Secret', price=10)
