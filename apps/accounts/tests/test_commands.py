import pytest
from django.core.management import call_command

from apps.accounts.models import User, Profile
from apps.storefront.models import MenuItem


@pytest.mark.django_db
class TestCreateSampleData:

    def test_creates_accounts_and_menus(self):
        call_command('create_sample_data')

        assert User.objects.count() == 4
        assert Profile.objects.get(user__email='admin@example.com').is_admin is True
        assert Profile.objects.get(slug='mama-put').business_name == 'Mama Put Kitchen'
        assert MenuItem.objects.count() == 5

    def test_is_idempotent(self):
        call_command('create_sample_data')
        call_command('create_sample_data')

        assert User.objects.count() == 4
        assert MenuItem.objects.count() == 5

    def test_clear(self):
        call_command('create_sample_data')
        call_command('create_sample_data', '--clear')

        assert User.objects.count() == 4
        assert MenuItem.objects.count() == 5
