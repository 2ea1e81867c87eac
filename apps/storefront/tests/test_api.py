import pytest
from django.urls import reverse
from rest_framework import status
from apps.storefront.models import MenuItem


# =============================================================================
# Price List Tests
# =============================================================================

@pytest.mark.django_db
class TestMenuItemAPI:
    """Tests for /api/menu-items/"""

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('storefront:menu-item-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_own_items(self, authenticated_client, menu_items, other_item):
        response = authenticated_client.get(reverse('storefront:menu-item-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [i['name'] for i in response.data] == ['Jollof Rice', 'Pepper Soup']

    def test_create_item(self, authenticated_client, user):
        data = {'name': 'Moi Moi', 'price': '700.00'}
        response = authenticated_client.post(reverse('storefront:menu-item-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Moi Moi'
        assert MenuItem.objects.filter(user=user, name='Moi Moi').exists()

    def test_update_item(self, authenticated_client, menu_items):
        url = reverse('storefront:menu-item-detail', kwargs={'pk': menu_items[1].id})
        response = authenticated_client.patch(url, {'price': '2500.00'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['price'] == '2500.00'

    def test_cannot_touch_other_users_item(self, authenticated_client, other_item):
        url = reverse('storefront:menu-item-detail', kwargs={'pk': other_item.id})

        assert authenticated_client.patch(url, {'name': 'x'}, format='json').status_code == status.HTTP_404_NOT_FOUND
        assert authenticated_client.delete(url).status_code == status.HTTP_404_NOT_FOUND

    def test_delete_item(self, authenticated_client, menu_items):
        url = reverse('storefront:menu-item-detail', kwargs={'pk': menu_items[0].id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not MenuItem.objects.filter(id=menu_items[0].id).exists()

    def test_sync(self, authenticated_client, menu_items):
        data = {'items': [
            {'id': str(menu_items[0].id), 'name': 'Jollof Rice', 'price': 1600},
            {'id': 'new-1', 'name': 'Zobo', 'price': 300},
        ]}
        response = authenticated_client.post(reverse('storefront:menu-item-sync'), data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert [i['name'] for i in response.data] == ['Jollof Rice', 'Pepper Soup', 'Zobo']
        assert response.data[0]['price'] == '1600.00'

    def test_sync_rejects_price_too_large(self, authenticated_client, menu_items):
        data = {'items': [{'id': 'new-1', 'name': 'Zobo', 'price': '1e30'}]}
        response = authenticated_client.post(reverse('storefront:menu-item-sync'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not MenuItem.objects.filter(name='Zobo').exists()


# =============================================================================
# Public Storefront Tests
# =============================================================================

@pytest.mark.django_db
class TestPublicStorefront:

    def test_storefront_is_public(self, api_client, menu_items):
        url = reverse('storefront:storefront-detail', kwargs={'slug': 'mama-put'})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['profile']['business_name'] == 'Mama Put Kitchen'
        assert response.data['profile']['currency_symbol'] == '₦'
        assert response.data['url'].endswith('/m/mama-put')
        assert [i['name'] for i in response.data['items']] == ['Jollof Rice', 'Pepper Soup']

    def test_unknown_slug(self, api_client, db):
        url = reverse('storefront:storefront-detail', kwargs={'slug': 'missing'})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_public_route(self, api_client, menu_items):
        response = api_client.get('/m/mama-put')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['profile']['slug'] == 'mama-put'

    def test_qr_code(self, api_client, user):
        url = reverse('storefront:storefront-qr', kwargs={'slug': 'mama-put'})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'image/png'
        assert response.content.startswith(b'\x89PNG')
