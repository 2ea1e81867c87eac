"""
Domain exceptions for storefront app.
"""
from rest_framework.exceptions import APIException


class StorefrontServiceError(Exception):
    """Base exception for storefront service errors."""
    pass


class StorefrontNotFoundError(APIException):
    """No business uses this store link."""
    status_code = 404
    default_detail = 'Storefront not found.'
    default_code = 'storefront_not_found'


class MenuItemNotFoundError(APIException):
    """Menu item not found (or owned by someone else)."""
    status_code = 404
    default_detail = 'Menu item not found.'
    default_code = 'menu_item_not_found'


class StorefrontLinkMissingError(StorefrontServiceError):
    """Raised when a QR code is requested for a profile without a slug."""
    pass
