"""Account signup."""

import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from apps.accounts.models import Profile
from .exceptions import UserRegistrationError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(*, email: str, password: str, display_name: str = "") -> User:
    """
    Create a business account.

    The user and a default Profile ("My Business", ₦, default theme) are
    written together, so every account can open the dashboard and generator
    straight away and is sent to onboarding on first sign-in.

    Raises:
        UserRegistrationError: Email already registered or missing
    """
    email = (email or '').strip()
    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("An account with this email already exists")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            display_name=display_name or ''
        )
        Profile.objects.create(user=user)
    except (IntegrityError, ValueError) as e:
        raise UserRegistrationError(f"Registration failed: {e}")

    logger.info("Registered user %s", user.id)
    return user
