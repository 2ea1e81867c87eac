"""
Storefront services.

Business owners keep a price list of menu items; anyone can read it at the
public store link ``/m/<slug>``, which is also printed as a QR code.
"""

import io
import logging
from typing import Optional
from uuid import UUID

import qrcode
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction

from apps.accounts.models import User, Profile, DEFAULT_CURRENCY
from apps.receipts.services.calculations import to_amount
from .exceptions import (
    StorefrontNotFoundError,
    MenuItemNotFoundError,
    StorefrontLinkMissingError,
)
from .models import MenuItem

logger = logging.getLogger(__name__)

# Client-side placeholder ids for rows that have not been saved yet
NEW_ITEM_PREFIX = 'new'


# =============================================================================
# Menu items
# =============================================================================

def create_menu_item(*, user: User, name: str = '', price=0, description: str = '') -> MenuItem:
    """Add a product to the user's price list."""
    item = MenuItem.objects.create(
        user=user,
        name=(name or '').strip(),
        price=to_amount(price),
        description=description or '',
    )
    logger.info("Menu item %s created for user %s", item.id, user.id)
    return item


def update_menu_item(
    *,
    user: User,
    item_id: UUID,
    name: Optional[str] = None,
    price=None,
    description: Optional[str] = None,
) -> MenuItem:
    """
    Edit one of the user's products. Fields left as None are unchanged.

    Raises:
        MenuItemNotFoundError: If the item does not belong to the user
    """
    try:
        item = MenuItem.objects.get(id=item_id, user=user)
    except (MenuItem.DoesNotExist, ValidationError):
        raise MenuItemNotFoundError()

    if name is not None:
        item.name = name.strip()
    if price is not None:
        item.price = to_amount(price)
    if description is not None:
        item.description = description
    item.save()

    return item


def delete_menu_item(*, user: User, item_id: UUID) -> None:
    """
    Remove a product from the price list.

    Raises:
        MenuItemNotFoundError: If the item does not belong to the user
    """
    deleted, _ = MenuItem.objects.filter(id=item_id, user=user).delete()
    if not deleted:
        raise MenuItemNotFoundError()

    logger.info("Menu item %s deleted for user %s", item_id, user.id)


@transaction.atomic
def sync_menu(*, user: User, items: list) -> list:
    """
    Save the whole price list form in one go.

    Rows without an id (or with a client-side ``new-...`` placeholder) are
    inserted; rows with an id update the matching item. Rows missing from
    the payload are left alone.

    Returns:
        The user's menu items after the sync, oldest first

    Raises:
        MenuItemNotFoundError: If an id does not belong to the user
    """
    created = updated = 0

    for row in items:
        item_id = row.get('id')
        if not item_id or str(item_id).startswith(NEW_ITEM_PREFIX):
            create_menu_item(
                user=user,
                name=row.get('name', ''),
                price=row.get('price', 0),
                description=row.get('description', ''),
            )
            created += 1
        else:
            update_menu_item(
                user=user,
                item_id=item_id,
                name=row.get('name', ''),
                price=row.get('price', 0),
                description=row.get('description', ''),
            )
            updated += 1

    logger.info("Price list synced for user %s: %d created, %d updated", user.id, created, updated)
    return list(MenuItem.objects.filter(user=user).order_by('created_at'))


def list_menu_items(user: User):
    return MenuItem.objects.filter(user=user).order_by('created_at')


# =============================================================================
# Public storefront
# =============================================================================

def get_storefront(slug: str) -> dict:
    """
    Look up a public storefront by its slug.

    Returns:
        {'profile': Profile, 'items': [MenuItem, ...]} with items oldest first

    Raises:
        StorefrontNotFoundError: If no profile uses the slug
    """
    try:
        profile = Profile.objects.select_related('user').get(slug=slug)
    except Profile.DoesNotExist:
        raise StorefrontNotFoundError()

    return {
        'profile': profile,
        'items': list(list_menu_items(profile.user)),
    }


def currency_symbol(profile: Profile) -> str:
    """
    Symbol shown next to prices: the first token of the currency setting.

        '₦ (NGN)' -> '₦'
    """
    parts = (profile.currency or '').split()
    return parts[0] if parts else DEFAULT_CURRENCY


def storefront_url(profile: Profile) -> str:
    """Public address of the storefront, e.g. https://mifimnpay.com.ng/m/mama-put."""
    if not profile.slug:
        raise StorefrontLinkMissingError('Set a store link before sharing your storefront')
    return f"{settings.SITE_URL}/m/{profile.slug}"


def storefront_qr_png(profile: Profile) -> bytes:
    """
    QR code pointing at the storefront, as PNG bytes.

    Error correction level M, which survives light smudging on printed
    counter cards.

    Raises:
        StorefrontLinkMissingError: If the profile has no slug
    """
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(storefront_url(profile))
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format='PNG')
    return buffer.getvalue()
