"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    MissingBusinessNameError,
    SlugUnavailableError,
    LogoUploadError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .profile_management import (
    get_profile,
    clean_slug,
    resolve_landing_route,
    complete_onboarding,
    update_business_profile,
    upload_logo,
    check_profile_completeness,
    list_profiles,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'MissingBusinessNameError',
    'SlugUnavailableError',
    'LogoUploadError',
    # Services
    'register_user',
    'authenticate_user',
    'get_profile',
    'clean_slug',
    'resolve_landing_route',
    'complete_onboarding',
    'update_business_profile',
    'upload_logo',
    'check_profile_completeness',
    'list_profiles',
]
