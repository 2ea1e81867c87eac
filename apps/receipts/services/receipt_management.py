"""
Receipt lifecycle service.

Handles saving generated receipts to history, deleting them, and the
history search.
"""

import logging
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.db.models import Q
from django.utils import timezone

from apps.accounts.models import User, Profile
from apps.receipts.models import (
    Receipt,
    PaymentMethod,
    ReceiptStatus,
    DEFAULT_CUSTOMER_NAME,
)
from ..exceptions import (
    EmptyReceiptError,
    ReceiptNumberConflictError,
    ReceiptNotFoundError,
)
from .calculations import calculate_totals, to_decimal
from .numbering import next_receipt_number

logger = logging.getLogger(__name__)

RECEIPT_DATE_FORMAT = '%d/%m/%Y'


def normalize_items(items) -> list:
    """
    Clean line items for storage.

    qty and price are coerced to numbers (non-numeric becomes 0) and every
    item gets a string id.
    """
    cleaned = []
    for position, item in enumerate(items or [], start=1):
        qty = to_decimal(item.get('qty'))
        price = to_decimal(item.get('price'))
        cleaned.append({
            'id': str(item.get('id') or position),
            'name': (item.get('name') or '').strip(),
            'qty': _json_number(qty),
            'price': _json_number(price),
        })
    return cleaned


def create_receipt(
    *,
    user: User,
    items: list,
    customer_name: str = '',
    discount=None,
    shipping=None,
    payment_method: str = PaymentMethod.TRANSFER,
    status: str = ReceiptStatus.PAID,
    note: str = '',
    receipt_date: str = '',
    currency: Optional[str] = None,
    max_retries: int = 3,
) -> Receipt:
    """
    Save a receipt to the business's history.

    The receipt number is allocated here, currency defaults to the profile
    currency, and the totals are computed server-side from the items.

    Args:
        user: Business owner issuing the receipt
        items: Line items [{'name', 'qty', 'price'}, ...]
        customer_name: Blank becomes 'Guest Customer'
        discount: Subtracted from the subtotal
        shipping: Added to the subtotal
        payment_method: Transfer, Cash or POS
        status: Paid or Pending
        note: Optional free text printed on the receipt
        receipt_date: Display date; defaults to today (dd/mm/yyyy)
        currency: Currency symbol; defaults to the profile currency
        max_retries: Attempts to allocate a free receipt number

    Returns:
        Created Receipt instance

    Raises:
        EmptyReceiptError: If there are no line items
        ReceiptNumberConflictError: If numbering keeps colliding
    """
    if not items:
        raise EmptyReceiptError('A receipt needs at least one item')

    cleaned_items = normalize_items(items)
    totals = calculate_totals(cleaned_items, shipping=shipping, discount=discount)

    for attempt in range(max_retries):
        try:
            with transaction.atomic():
                # Lock the profile so concurrent saves for one business number sequentially
                profile, _ = Profile.objects.select_for_update().get_or_create(user=user)

                receipt = Receipt.objects.create(
                    user=user,
                    receipt_number=next_receipt_number(user),
                    customer_name=(customer_name or '').strip() or DEFAULT_CUSTOMER_NAME,
                    items=cleaned_items,
                    currency=currency or profile.currency,
                    subtotal=totals['subtotal'],
                    discount=totals['discount'],
                    shipping=totals['shipping'],
                    total_amount=totals['total'],
                    payment_method=payment_method,
                    status=status,
                    note=note or '',
                    receipt_date=receipt_date or timezone.localdate().strftime(RECEIPT_DATE_FORMAT),
                )
        except IntegrityError:
            logger.warning(
                "Receipt number collision for user %s (attempt %d)", user.id, attempt + 1
            )
            continue

        logger.info(
            "Saved receipt #%s for user %s (%s)",
            receipt.receipt_number, user.id, receipt.amount
        )
        return receipt

    raise ReceiptNumberConflictError(
        f"Could not allocate a receipt number after {max_retries} attempts"
    )


def get_receipt(*, user: User, receipt_id: UUID) -> Receipt:
    """
    Fetch one of the user's receipts.

    Raises:
        ReceiptNotFoundError: If it does not exist or belongs to someone else
    """
    try:
        return Receipt.objects.get(id=receipt_id, user=user)
    except (Receipt.DoesNotExist, ValidationError):
        raise ReceiptNotFoundError()


@transaction.atomic
def delete_receipt(*, user: User, receipt_id: UUID) -> None:
    """
    Remove a receipt from history. Only the owner may delete it.

    Raises:
        ReceiptNotFoundError: If it does not exist or belongs to someone else
    """
    deleted, _ = Receipt.objects.filter(id=receipt_id, user=user).delete()
    if not deleted:
        raise ReceiptNotFoundError()

    logger.info("Deleted receipt %s for user %s", receipt_id, user.id)


def search_receipts(*, user: User, term: str = ''):
    """
    The user's receipt history, newest first.

    A search term matches the customer name case-insensitively, or appears
    anywhere in the receipt number.
    """
    receipts = Receipt.objects.filter(user=user).order_by('-created_at')

    term = (term or '').strip()
    if term:
        receipts = receipts.filter(
            Q(customer_name__icontains=term) |
            Q(receipt_number__contains=term)
        )

    return receipts


def _json_number(value):
    if value == value.to_integral_value():
        return int(value)
    return float(value)
