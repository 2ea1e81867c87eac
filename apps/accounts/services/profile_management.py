"""
Business profile service.

Covers onboarding, the settings form, logo uploads, storefront slugs and the
post-login redirect decision.
"""

import logging
import os
import re

from django.core.files.storage import default_storage
from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.models import User, Profile, DEFAULT_BUSINESS_NAME
from .exceptions import (
    MissingBusinessNameError,
    SlugUnavailableError,
    LogoUploadError,
)

logger = logging.getLogger(__name__)

LOGO_DIRECTORY = 'business-logos'

EDITABLE_FIELDS = (
    'business_name',
    'business_phone',
    'business_email',
    'tagline',
    'address',
    'footer_message',
    'currency',
    'theme_color',
    'slug',
)


def get_profile(user: User) -> Profile:
    """Return the user's profile, creating a default one for legacy accounts."""
    profile, _ = Profile.objects.get_or_create(user=user)
    return profile


def clean_slug(value) -> str:
    """
    Normalise a user-chosen storefront slug.

    Lowercases and trims, drops anything that is not a word character,
    whitespace or a hyphen, then collapses runs of whitespace, underscores
    and hyphens into a single hyphen.

        >>> clean_slug('  Mama Put__Kitchen!! ')
        'mama-put-kitchen'
    """
    slug = (value or '').lower().strip()
    slug = re.sub(r'[^\w\s-]', '', slug)
    slug = re.sub(r'[\s_-]+', '-', slug)
    return slug


def resolve_landing_route(user: User) -> str:
    """
    Decide where a freshly signed-in user should land.

    Admins go to the back-office, users who never named their business go
    to onboarding, everyone else to the dashboard.
    """
    profile = get_profile(user)
    if profile.is_admin:
        return '/admin'
    if not profile.has_business_name:
        return '/onboarding'
    return '/dashboard'


@transaction.atomic
def complete_onboarding(
    *,
    user: User,
    business_name: str,
    business_phone: str = '',
    currency: str = '',
) -> Profile:
    """
    Save the first-run business details.

    Raises:
        MissingBusinessNameError: If business_name is blank
    """
    business_name = (business_name or '').strip()
    if not business_name:
        raise MissingBusinessNameError('Business name is required')

    profile = get_profile(user)
    profile.business_name = business_name
    profile.business_phone = business_phone or ''
    if currency:
        profile.currency = currency
    profile.save(update_fields=['business_name', 'business_phone', 'currency', 'updated_at'])

    logger.info("Onboarding completed for user %s", user.id)
    return profile


def update_business_profile(*, user: User, **fields) -> Profile:
    """
    Apply the settings form to the user's profile.

    Only known profile fields are written; the slug is cleaned and an empty
    slug clears the storefront address.

    Raises:
        SlugUnavailableError: If another profile already uses the slug
    """
    profile = get_profile(user)
    changed = []

    for name in EDITABLE_FIELDS:
        if name not in fields:
            continue
        value = fields[name]
        if name == 'slug':
            value = clean_slug(value) or None
        elif value is None:
            value = ''
        setattr(profile, name, value)
        changed.append(name)

    if not changed:
        return profile

    profile.updated_at = timezone.now()
    try:
        with transaction.atomic():
            profile.save(update_fields=changed + ['updated_at'])
    except IntegrityError:
        raise SlugUnavailableError(f"The store link '{profile.slug}' is already taken")

    logger.info("Profile updated for user %s (%s)", user.id, ', '.join(changed))
    return profile


def upload_logo(*, user: User, logo_file) -> str:
    """
    Store an uploaded logo and point the profile at its public URL.

    Files go to ``business-logos/<user_id>/logo-<timestamp><ext>``.

    Returns:
        The public URL of the stored file

    Raises:
        LogoUploadError: If the storage backend rejects the file
    """
    _, ext = os.path.splitext(getattr(logo_file, 'name', '') or '')
    stamp = int(timezone.now().timestamp() * 1000)
    path = f"{LOGO_DIRECTORY}/{user.id}/logo-{stamp}{ext.lower()}"

    try:
        saved_path = default_storage.save(path, logo_file)
    except OSError as e:
        logger.error("Logo upload failed for user %s: %s", user.id, e)
        raise LogoUploadError(f"Logo upload failed: {e}")

    url = default_storage.url(saved_path)

    profile = get_profile(user)
    profile.logo_url = url
    profile.save(update_fields=['logo_url', 'updated_at'])

    logger.info("Logo stored for user %s at %s", user.id, saved_path)
    return url


def check_profile_completeness(profile: Profile) -> dict:
    """
    Report which branding fields are still missing.

    A profile is incomplete when the business name is empty or still the
    default, the phone number is empty, or no logo has been uploaded.
    """
    missing = []
    if not profile.has_business_name:
        missing.append('business_name')
    if not profile.business_phone:
        missing.append('business_phone')
    if not profile.logo_url:
        missing.append('logo_url')

    return {
        'is_complete': not missing,
        'missing': missing,
    }


def list_profiles():
    """All business profiles for the back-office, newest accounts first."""
    return (
        Profile.objects
        .select_related('user')
        .order_by('-user__created_at')
    )
