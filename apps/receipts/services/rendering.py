"""
Receipt image rendering.

Draws the branded receipt card with Pillow and returns PNG bytes: theme
accent bar, logo badge, billing block, item table, totals, payment details
and footer. An uploaded logo fills the badge; without one the badge shows
the first letter of the business name. Previews for anonymous visitors
carry a "PREVIEW ONLY" overlay.
"""

import io
import logging
import textwrap
from urllib.parse import quote, unquote

from django.conf import settings
from django.core.exceptions import SuspiciousFileOperation
from django.core.files.storage import default_storage
from PIL import Image, ImageColor, ImageDraw, ImageFont, ImageOps

from apps.accounts.models import Profile, DEFAULT_THEME_COLOR
from apps.receipts.models import Receipt, DEFAULT_CUSTOMER_NAME
from ..exceptions import ReceiptRenderError
from .calculations import calculate_totals, format_amount, line_total, to_decimal

logger = logging.getLogger(__name__)

WIDTH = 600
PADDING = 40
MIN_HEIGHT = 800
ACCENT_HEIGHT = 12
BADGE_SIZE = 96

# Characters per line before wrapping
ITEM_NAME_WIDTH = 30
NOTE_WIDTH = 48

WHITE = (255, 255, 255)
INK = (24, 24, 27)
MUTED = (161, 161, 170)
SOFT = (113, 113, 122)
RULE = (244, 244, 245)
PANEL = (250, 250, 250)

WATERMARK_TEXT = 'PREVIEW ONLY'
WATERMARK_ALPHA = 26
SHARE_MESSAGE = 'Please find your receipt attached.'


def receipt_context(receipt: Receipt) -> dict:
    """Receipt fields in the shape render_receipt_image expects."""
    return {
        'receipt_number': receipt.receipt_number,
        'customer_name': receipt.customer_name,
        'receipt_date': receipt.receipt_date,
        'currency': receipt.currency,
        'items': receipt.items,
        'shipping': receipt.shipping,
        'discount': receipt.discount,
        'payment_method': receipt.payment_method,
        'status': receipt.status,
        'note': receipt.note,
    }


def render_receipt_image(data: dict, profile: Profile, watermark: bool = False) -> bytes:
    """
    Render a receipt to PNG.

    Args:
        data: Receipt fields (see receipt_context); totals are recomputed
            from the items so the image always matches the arithmetic.
        profile: Issuing business; supplies name, phone, colour and footer.
        watermark: Overlay "PREVIEW ONLY" across the card.

    Returns:
        PNG-encoded image bytes

    Raises:
        ReceiptRenderError: If Pillow fails to draw or encode the image
    """
    try:
        image = _ReceiptCanvas(data, profile).draw()
        if watermark:
            image = _apply_watermark(image)

        buffer = io.BytesIO()
        image.convert('RGB').save(buffer, format='PNG')
        return buffer.getvalue()
    except (OSError, ValueError) as e:
        logger.error("Receipt render failed for profile %s: %s", profile.pk, e)
        raise ReceiptRenderError(f"Could not render receipt: {e}") from e


def build_share_link(receipt: Receipt) -> str:
    """WhatsApp share URL carrying a short message about the receipt."""
    business = receipt.user.profile.business_name if hasattr(receipt.user, 'profile') else ''
    message = f"Receipt #{receipt.receipt_number}"
    if business:
        message += f" from {business}"
    message += f" ({receipt.amount}). {SHARE_MESSAGE}"
    return f"https://wa.me/?text={quote(message, safe='')}"


def theme_rgb(color) -> tuple:
    """Parse a theme colour, falling back to the default when it is invalid."""
    try:
        return ImageColor.getrgb(color or DEFAULT_THEME_COLOR)[:3]
    except ValueError:
        return ImageColor.getrgb(DEFAULT_THEME_COLOR)[:3]


def _font(size):
    return ImageFont.load_default(size=size)


def _wrap(text, width):
    lines = []
    for paragraph in str(text).splitlines() or ['']:
        lines.extend(textwrap.wrap(paragraph, width) or [''])
    return lines


def load_logo(logo_url):
    """
    Open an uploaded logo from default storage, cropped square to the badge.

    Returns None when the URL is not a stored upload or cannot be read.
    """
    media_url = settings.MEDIA_URL
    if not logo_url or not media_url or not logo_url.startswith(media_url):
        return None

    name = unquote(logo_url[len(media_url):])
    try:
        with default_storage.open(name) as handle:
            logo = Image.open(handle)
            logo.load()
    except (OSError, SuspiciousFileOperation) as e:
        logger.warning("Logo %s could not be loaded: %s", logo_url, e)
        return None

    return ImageOps.fit(logo.convert('RGB'), (BADGE_SIZE, BADGE_SIZE))


class _ReceiptCanvas:
    """Lays out one receipt top to bottom on a white card."""

    def __init__(self, data, profile):
        self.data = data
        self.profile = profile
        self.accent = theme_rgb(profile.theme_color)
        self.currency = data.get('currency') or profile.currency
        self.items = data.get('items') or []
        self.item_lines = [_wrap(item.get('name') or 'Item Name', ITEM_NAME_WIDTH) for item in self.items]
        note = data.get('note')
        self.note_lines = _wrap(note, NOTE_WIDTH) if note else []
        self.totals = calculate_totals(
            self.items,
            shipping=data.get('shipping'),
            discount=data.get('discount'),
        )
        self.image = Image.new('RGB', (WIDTH, self._height()), WHITE)
        self.draw_ctx = ImageDraw.Draw(self.image)
        self.y = 0

    def _height(self):
        height = 560 + sum(36 + 28 * len(lines) for lines in self.item_lines)
        if self.note_lines:
            height += 56 + 24 * len(self.note_lines)
        return max(height, MIN_HEIGHT)

    def draw(self):
        self._accent_bar()
        self._header()
        self._billing()
        self._items()
        self._totals()
        self._payment()
        self._footer()
        return self.image

    def _text(self, xy, text, size, fill=INK, anchor='la'):
        self.draw_ctx.text(xy, str(text), font=_font(size), fill=fill, anchor=anchor)

    def _rule(self):
        self.draw_ctx.line(
            [(PADDING, self.y), (WIDTH - PADDING, self.y)], fill=RULE, width=2
        )

    def _money(self, value):
        return format_amount(self.currency, value)

    def _accent_bar(self):
        self.draw_ctx.rectangle([(0, 0), (WIDTH, ACCENT_HEIGHT)], fill=self.accent)
        self.y = ACCENT_HEIGHT + PADDING

    def _header(self):
        left = (WIDTH - BADGE_SIZE) // 2
        logo = load_logo(self.profile.logo_url)
        if logo is not None:
            mask = Image.new('L', (BADGE_SIZE, BADGE_SIZE), 0)
            ImageDraw.Draw(mask).ellipse([(0, 0), (BADGE_SIZE - 1, BADGE_SIZE - 1)], fill=255)
            self.image.paste(logo, (left, self.y), mask)
        else:
            box = [(left, self.y), (left + BADGE_SIZE, self.y + BADGE_SIZE)]
            self.draw_ctx.ellipse(box, fill=self.accent)
            self._text(
                (WIDTH // 2, self.y + BADGE_SIZE // 2),
                self.profile.logo_letter, 40, fill=WHITE, anchor='mm'
            )
        self.y += BADGE_SIZE + 20

        name = (self.profile.business_name or 'Business Name').upper()
        self._text((WIDTH // 2, self.y), name, 28, anchor='mt')
        self.y += 36
        if self.profile.business_phone:
            self._text((WIDTH // 2, self.y), self.profile.business_phone, 20, fill=SOFT, anchor='mt')
            self.y += 28
        self.y += 12
        self._rule()
        self.y += 28

    def _billing(self):
        right = WIDTH - PADDING
        self._text((PADDING, self.y), 'BILLED TO', 18, fill=MUTED)
        self._text((right, self.y), 'RECEIPT NO.', 18, fill=MUTED, anchor='ra')
        self.y += 26

        customer = self.data.get('customer_name') or DEFAULT_CUSTOMER_NAME
        self._text((PADDING, self.y), customer, 22)
        self._text((right, self.y), self.data.get('receipt_number') or '', 22, anchor='ra')
        self.y += 30
        self._text((right, self.y), self.data.get('receipt_date') or '', 18, fill=MUTED, anchor='ra')
        self.y += 44

    def _items(self):
        right = WIDTH - PADDING
        self._text((PADDING, self.y), 'DESCRIPTION', 18, fill=MUTED)
        self._text((right, self.y), 'TOTAL', 18, fill=MUTED, anchor='ra')
        self.y += 28
        self._rule()
        self.y += 16

        for item, lines in zip(self.items, self.item_lines):
            self._text((right, self.y), self._money(line_total(item)), 22, anchor='ra')
            for line in lines:
                self._text((PADDING, self.y), line, 22)
                self.y += 28
            detail = f"{to_decimal(item.get('qty')).normalize():f} x {self._money(item.get('price'))}"
            self._text((PADDING, self.y), detail, 18, fill=MUTED)
            self.y += 36
        self.y += 8

    def _totals(self):
        right = WIDTH - PADDING
        self._rule()
        self.y += 20

        rows = [('SUBTOTAL', self._money(self.totals['subtotal']))]
        if self.totals['shipping']:
            rows.append(('SHIPPING', self._money(self.totals['shipping'])))
        if self.totals['discount']:
            rows.append(('DISCOUNT', '-' + self._money(self.totals['discount'])))

        for label, value in rows:
            self._text((PADDING + 8, self.y), label, 18, fill=MUTED)
            self._text((right - 8, self.y), value, 20, fill=SOFT, anchor='ra')
            self.y += 32

        self.y += 8
        panel = [(PADDING, self.y), (right, self.y + 64)]
        self.draw_ctx.rounded_rectangle(panel, radius=20, fill=PANEL)
        middle = self.y + 32
        self._text((PADDING + 24, middle), 'TOTAL PAID', 22, fill=SOFT, anchor='lm')
        self._text((right - 24, middle), self._money(self.totals['total']), 34, fill=self.accent, anchor='rm')
        self.y += 88

    def _payment(self):
        right = WIDTH - PADDING
        method = self.data.get('payment_method') or ''
        status = self.data.get('status') or ''
        self._text((PADDING, self.y), f"PAYMENT: {method}".upper(), 18, fill=SOFT)
        self._text((right, self.y), f"STATUS: {status}".upper(), 18, fill=SOFT, anchor='ra')
        self.y += 36

        if self.note_lines:
            self._text((PADDING, self.y), 'NOTE', 18, fill=MUTED)
            self.y += 24
            for line in self.note_lines:
                self._text((PADDING, self.y), line, 18, fill=SOFT)
                self.y += 24
            self.y += 32

    def _footer(self):
        self.y = max(self.y + 24, self.image.height - 90)
        footer = self.profile.footer_message or 'Thank you for your patronage'
        self._text((WIDTH // 2, self.y), footer.upper(), 16, fill=MUTED, anchor='mt')
        self._text((WIDTH // 2, self.y + 26), 'GENERATED BY MIFIMNPAY', 14, fill=(212, 212, 216), anchor='mt')


def _apply_watermark(image):
    """Tile faint, tilted "PREVIEW ONLY" rows over the whole card."""
    base = image.convert('RGBA')
    layer = Image.new('RGBA', (base.width * 2, base.height * 2), (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    font = _font(56)

    step = 160
    for row, top in enumerate(range(0, layer.height, step)):
        offset = (row % 2) * 180
        for left in range(-offset, layer.width, 520):
            draw.text((left, top), WATERMARK_TEXT, font=font, fill=INK + (WATERMARK_ALPHA,))

    layer = layer.rotate(15, resample=Image.BICUBIC)
    left = (layer.width - base.width) // 2
    top = (layer.height - base.height) // 2
    layer = layer.crop((left, top, left + base.width, top + base.height))
    return Image.alpha_composite(base, layer)
