"""
Domain exceptions for receipts app.

Service errors are plain exceptions; the API-facing ones carry their HTTP
status as DRF APIException subclasses.
"""
from rest_framework.exceptions import APIException


class ReceiptServiceError(Exception):
    """Base exception for receipt service errors."""
    pass


class EmptyReceiptError(ReceiptServiceError):
    """Raised when a receipt has no line items."""
    pass


class ReceiptNumberConflictError(ReceiptServiceError):
    """Raised when no free receipt number could be allocated."""
    pass


class ReceiptRenderError(ReceiptServiceError):
    """Raised when the receipt image cannot be produced."""
    pass


class ReceiptNotFoundError(APIException):
    """Receipt not found (or owned by someone else)."""
    status_code = 404
    default_detail = 'Receipt not found.'
    default_code = 'receipt_not_found'


class AmountOutOfRangeError(ReceiptServiceError):
    """Raised when a money value does not fit the stored amount columns."""
    pass
