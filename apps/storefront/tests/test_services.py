from decimal import Decimal

import pytest
from django.test import override_settings

from apps.accounts.models import Profile
from apps.receipts.exceptions import AmountOutOfRangeError
from apps.storefront.exceptions import (
    StorefrontNotFoundError,
    MenuItemNotFoundError,
    StorefrontLinkMissingError,
)
from apps.storefront.models import MenuItem
from apps.storefront.services import (
    create_menu_item,
    update_menu_item,
    delete_menu_item,
    sync_menu,
    get_storefront,
    currency_symbol,
    storefront_url,
    storefront_qr_png,
)


@pytest.mark.django_db
class TestMenuItems:

    def test_update_own_item(self, user, menu_items):
        item = update_menu_item(user=user, item_id=menu_items[0].id, price='1800')

        assert item.price == Decimal('1800')
        assert item.name == 'Jollof Rice'

    def test_price_too_large(self, user):
        with pytest.raises(AmountOutOfRangeError):
            create_menu_item(user=user, name='Gold', price='1e30')

        assert not MenuItem.objects.filter(user=user, name='Gold').exists()

    def test_cannot_update_other_users_item(self, user, other_item):
        with pytest.raises(MenuItemNotFoundError):
            update_menu_item(user=user, item_id=other_item.id, name='Mine now')

    def test_cannot_delete_other_users_item(self, user, other_item):
        with pytest.raises(MenuItemNotFoundError):
            delete_menu_item(user=user, item_id=other_item.id)

        assert MenuItem.objects.filter(id=other_item.id).exists()


@pytest.mark.django_db
class TestSyncMenu:

    def test_inserts_new_and_updates_existing(self, user, menu_items):
        items = sync_menu(user=user, items=[
            {'id': str(menu_items[0].id), 'name': 'Jollof Rice', 'price': 1700, 'description': ''},
            {'id': 'new-1700000000000', 'name': 'Zobo', 'price': '300', 'description': 'Chilled'},
            {'name': 'Puff Puff', 'price': 'abc'},
        ])

        assert [i.name for i in items] == ['Jollof Rice', 'Pepper Soup', 'Zobo', 'Puff Puff']
        assert items[0].price == Decimal('1700')
        assert items[2].description == 'Chilled'
        assert items[3].price == Decimal('0')

    def test_unknown_id_rolls_back(self, user, other_item):
        with pytest.raises(MenuItemNotFoundError):
            sync_menu(user=user, items=[
                {'name': 'Fresh item', 'price': 100},
                {'id': str(other_item.id), 'name': 'Hijack', 'price': 1},
            ])

        assert not MenuItem.objects.filter(user=user).exists()


@pytest.mark.django_db
class TestStorefront:

    def test_get_storefront(self, user, menu_items, other_item):
        storefront = get_storefront('mama-put')

        assert storefront['profile'].user == user
        assert [i.name for i in storefront['items']] == ['Jollof Rice', 'Pepper Soup']

    def test_unknown_slug(self, db):
        with pytest.raises(StorefrontNotFoundError):
            get_storefront('nobody-here')

    @pytest.mark.parametrize('currency, expected', [
        ('₦ (NGN)', '₦'),
        ('$', '$'),
        ('', '₦'),
    ])
    def test_currency_symbol(self, currency, expected):
        assert currency_symbol(Profile(currency=currency)) == expected

    @override_settings(SITE_URL='https://shop.example.com')
    def test_storefront_url(self, user):
        assert storefront_url(user.profile) == 'https://shop.example.com/m/mama-put'

    def test_storefront_url_requires_slug(self, other_user):
        with pytest.raises(StorefrontLinkMissingError):
            storefront_url(other_user.profile)

    def test_qr_png(self, user):
        assert storefront_qr_png(user.profile).startswith(b'\x89PNG')
