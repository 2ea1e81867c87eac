"""
Receipt services.

Public API:
    - calculations: calculate_totals, format_amount, to_amount
    - numbering: next_receipt_number
    - receipt_management: create_receipt, get_receipt, delete_receipt, search_receipts
    - rendering: render_receipt_image, receipt_context, build_share_link
"""

from .calculations import calculate_totals, format_amount, to_decimal, to_amount
from .numbering import next_receipt_number
from .receipt_management import (
    create_receipt,
    get_receipt,
    delete_receipt,
    search_receipts,
)
from .rendering import render_receipt_image, receipt_context, build_share_link

__all__ = [
    'calculate_totals',
    'format_amount',
    'to_decimal',
    'to_amount',
    'next_receipt_number',
    'create_receipt',
    'get_receipt',
    'delete_receipt',
    'search_receipts',
    'render_receipt_image',
    'receipt_context',
    'build_share_link',
]
