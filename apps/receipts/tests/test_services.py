import io
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from apps.receipts.exceptions import EmptyReceiptError, ReceiptNotFoundError
from apps.accounts.models import Profile
from apps.accounts.services import upload_logo
from apps.receipts.models import Receipt, DEFAULT_CUSTOMER_NAME
from apps.receipts.services import (
    create_receipt,
    get_receipt,
    delete_receipt,
    search_receipts,
    next_receipt_number,
    render_receipt_image,
    receipt_context,
    build_share_link,
)

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


@pytest.mark.django_db
class TestNextReceiptNumber:

    def test_first_receipt_is_001(self, user):
        assert next_receipt_number(user) == '001'

    def test_counts_up_from_highest(self, user, receipt_items):
        create_receipt(user=user, items=receipt_items)
        create_receipt(user=user, items=receipt_items)

        assert next_receipt_number(user) == '003'

    def test_numbering_is_per_business(self, user, other_user, receipt_items):
        create_receipt(user=other_user, items=receipt_items)

        assert next_receipt_number(user) == '001'


@pytest.mark.django_db
class TestCreateReceipt:

    def test_stores_computed_totals(self, receipt):
        assert receipt.receipt_number == '001'
        assert receipt.subtotal == Decimal('2000.00')
        assert receipt.shipping == Decimal('200.00')
        assert receipt.discount == Decimal('100.00')
        assert receipt.total_amount == Decimal('2100.00')
        assert receipt.amount == '₦2,100'

    def test_defaults_from_profile(self, user, receipt_items):
        profile = user.profile
        profile.currency = '$'
        profile.save()

        receipt = create_receipt(user=user, items=receipt_items, customer_name='  ')

        assert receipt.currency == '$'
        assert receipt.customer_name == DEFAULT_CUSTOMER_NAME
        assert receipt.receipt_date

    def test_item_values_are_normalised(self, user):
        receipt = create_receipt(
            user=user,
            items=[{'name': ' Suya ', 'qty': '2', 'price': 'abc'}],
        )

        assert receipt.items == [{'id': '1', 'name': 'Suya', 'qty': 2, 'price': 0}]
        assert receipt.total_amount == Decimal('0.00')

    def test_requires_items(self, user):
        with pytest.raises(EmptyReceiptError):
            create_receipt(user=user, items=[])


@pytest.mark.django_db
class TestGetReceipt:

    def test_owner_gets_receipt(self, user, receipt):
        assert get_receipt(user=user, receipt_id=receipt.id) == receipt

    def test_other_user_gets_not_found(self, other_user, receipt):
        with pytest.raises(ReceiptNotFoundError):
            get_receipt(user=other_user, receipt_id=receipt.id)

    def test_malformed_id_is_not_found(self, user):
        with pytest.raises(ReceiptNotFoundError):
            get_receipt(user=user, receipt_id='not-a-uuid')


@pytest.mark.django_db
class TestDeleteReceipt:

    def test_owner_can_delete(self, user, receipt):
        delete_receipt(user=user, receipt_id=receipt.id)

        assert not Receipt.objects.filter(id=receipt.id).exists()

    def test_other_user_cannot_delete(self, other_user, receipt):
        with pytest.raises(ReceiptNotFoundError):
            delete_receipt(user=other_user, receipt_id=receipt.id)

        assert Receipt.objects.filter(id=receipt.id).exists()


@pytest.mark.django_db
class TestSearchReceipts:

    @pytest.fixture
    def history(self, user, receipt_items):
        return [
            create_receipt(user=user, items=receipt_items, customer_name='Ada Obi'),
            create_receipt(user=user, items=receipt_items, customer_name='Bola Ade'),
            create_receipt(user=user, items=receipt_items, customer_name='Chidi'),
        ]

    def test_newest_first(self, user, history):
        numbers = list(search_receipts(user=user).values_list('receipt_number', flat=True))

        assert numbers == ['003', '002', '001']

    def test_customer_name_is_case_insensitive(self, user, history):
        results = search_receipts(user=user, term='ADA')

        assert [r.customer_name for r in results] == ['Ada Obi']

    def test_receipt_number_substring(self, user, history):
        results = search_receipts(user=user, term='02')

        assert [r.receipt_number for r in results] == ['002']

    def test_only_own_receipts(self, user, history, other_receipt):
        assert search_receipts(user=user, term='Stranger').count() == 0


@pytest.mark.django_db
class TestRendering:

    def test_renders_png(self, user, receipt):
        content = render_receipt_image(receipt_context(receipt), user.profile)

        assert content.startswith(PNG_SIGNATURE)

    def test_watermark_changes_output(self, user, receipt):
        data = receipt_context(receipt)

        plain = render_receipt_image(data, user.profile)
        marked = render_receipt_image(data, user.profile, watermark=True)

        assert marked.startswith(PNG_SIGNATURE)
        assert plain != marked

    def test_invalid_theme_color_falls_back(self, user, receipt):
        profile = user.profile
        profile.theme_color = 'not-a-colour'

        content = render_receipt_image(receipt_context(receipt), profile)

        assert content.startswith(PNG_SIGNATURE)

    def test_share_link(self, receipt):
        url = build_share_link(receipt)

        assert url.startswith('https://wa.me/?text=')
        assert 'Mama%20Put%20Kitchen' in url
        assert '%23001' in url


def _png_size(content):
    return Image.open(io.BytesIO(content)).size


@pytest.mark.django_db
class TestRenderingLogo:

    # Badge circle spans y 52..148 on the 600px card; (300, 100) is its centre
    BADGE_CENTRE = (300, 100)

    @pytest.fixture
    def media_root(self, settings, tmp_path):
        settings.MEDIA_ROOT = str(tmp_path)
        return tmp_path

    @pytest.fixture
    def red_logo(self):
        buffer = io.BytesIO()
        Image.new('RGB', (200, 120), (255, 0, 0)).save(buffer, format='PNG')
        return SimpleUploadedFile('logo.png', buffer.getvalue(), content_type='image/png')

    def test_uploaded_logo_fills_badge(self, user, receipt, media_root, red_logo):
        upload_logo(user=user, logo_file=red_logo)
        profile = Profile.objects.get(user=user)

        content = render_receipt_image(receipt_context(receipt), profile)

        image = Image.open(io.BytesIO(content)).convert('RGB')
        assert image.getpixel(self.BADGE_CENTRE) == (255, 0, 0)

    def test_missing_logo_falls_back_to_letter(self, user, receipt, media_root):
        profile = Profile.objects.get(user=user)
        profile.logo_url = '/media/business-logos/gone/logo-1.png'
        profile.theme_color = '#09090b'

        content = render_receipt_image(receipt_context(receipt), profile)

        assert content.startswith(PNG_SIGNATURE)
        image = Image.open(io.BytesIO(content)).convert('RGB')
        assert image.getpixel(self.BADGE_CENTRE) != (255, 0, 0)

    def test_external_logo_url_falls_back_to_letter(self, user, receipt):
        profile = Profile.objects.get(user=user)
        profile.logo_url = 'https://cdn.example.com/logo.png'

        content = render_receipt_image(receipt_context(receipt), profile)

        assert content.startswith(PNG_SIGNATURE)


@pytest.mark.django_db
class TestRenderingWrap:

    @pytest.fixture
    def data(self, receipt):
        data = receipt_context(receipt)
        data['note'] = ''
        return data

    def _items(self, name):
        return [{'name': name, 'qty': 1, 'price': 500} for _ in range(10)]

    def test_long_item_names_grow_the_card(self, user, data):
        data['items'] = self._items('Jollof Rice')
        short = _png_size(render_receipt_image(data, user.profile))

        data['items'] = self._items('Jollof rice with fried plantain, coleslaw and grilled chicken')
        long = _png_size(render_receipt_image(data, user.profile))

        assert long[0] == short[0] == 600
        assert long[1] > short[1]

    def test_long_note_grows_the_card(self, user, data):
        data['items'] = self._items('Jollof Rice')
        data['note'] = 'Thanks!'
        short = _png_size(render_receipt_image(data, user.profile))

        data['note'] = 'Thanks for your order. ' * 12
        long = _png_size(render_receipt_image(data, user.profile))

        assert long[1] > short[1]

    def test_unbroken_name_is_split(self, user, data):
        data['items'] = self._items('X' * 120)

        content = render_receipt_image(data, user.profile)

        assert content.startswith(PNG_SIGNATURE)
        assert _png_size(content)[1] > 560 + 64 * 10
