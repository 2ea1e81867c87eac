"""Sign-in for business accounts."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Check an email/password pair and stamp last_login.

    Email matching ignores case, so "Owner@Shop.com" signs in the account
    registered as "owner@shop.com". The row is locked while last_login is
    written.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: The account has been deactivated
    """
    email = (email or '').strip()
    user = User.objects.select_for_update().filter(email__iexact=email).first()

    if user is None or not user.check_password(password):
        logger.warning("Failed sign-in for %s", email)
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        logger.warning("Sign-in refused for deactivated account %s", user.id)
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    logger.info("User %s signed in", user.id)
    return user
