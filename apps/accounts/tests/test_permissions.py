"""Tests for the back-office permission class."""
import pytest
from unittest.mock import Mock
from django.contrib.auth.models import AnonymousUser
from apps.accounts.models import User
from apps.accounts.permissions import IsPlatformAdmin


def _request_for(user):
    request = Mock()
    request.user = user
    return request


@pytest.mark.django_db
class TestIsPlatformAdmin:

    def test_admin_profile_allowed(self, admin_user):
        assert IsPlatformAdmin().has_permission(_request_for(admin_user), Mock()) is True

    def test_regular_user_denied(self, user):
        assert IsPlatformAdmin().has_permission(_request_for(user), Mock()) is False

    def test_anonymous_denied(self):
        assert IsPlatformAdmin().has_permission(_request_for(AnonymousUser()), Mock()) is False

    def test_superuser_allowed_without_profile(self):
        superuser = User.objects.create_superuser(email='root@example.com', password='RootPass123!')

        assert IsPlatformAdmin().has_permission(_request_for(superuser), Mock()) is True

    def test_user_without_profile_denied(self):
        bare = User.objects.create_user(email='bare@example.com', password='BarePass123!')

        assert IsPlatformAdmin().has_permission(_request_for(bare), Mock()) is False
