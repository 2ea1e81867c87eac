"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class MissingBusinessNameError(AccountsServiceError):
    """Raised when onboarding is submitted without a business name."""
    pass


class SlugUnavailableError(AccountsServiceError):
    """Raised when another business already owns the storefront slug."""
    pass


class LogoUploadError(AccountsServiceError):
    """Raised when a logo file cannot be stored."""
    pass
