from rest_framework import serializers
from .exceptions import AmountOutOfRangeError
from .models import Receipt, PaymentMethod, ReceiptStatus
from .services.calculations import calculate_totals


# =============================================================================
# Input Serializers
# =============================================================================

class ReceiptItemSerializer(serializers.Serializer):
    """
    One line item as typed into the generator.

    qty and price are kept as raw form values; anything non-numeric counts
    as zero when totals are computed.
    """

    id = serializers.CharField(max_length=64, required=False, allow_blank=True)
    name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    qty = serializers.JSONField(required=False, default=0)
    price = serializers.JSONField(required=False, default=0)


class ReceiptCreateSerializer(serializers.Serializer):
    """
    Validate receipt form data.

    Fields:
        customer_name (str): Blank becomes 'Guest Customer'
        items (list): At least one line item
        shipping, discount: Numeric strings or numbers
        payment_method (str): Transfer, Cash or POS
        status (str): Paid or Pending
        note (str): Optional note
        receipt_date (str): Display date, defaults to today
    """

    customer_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')
    items = ReceiptItemSerializer(many=True)
    shipping = serializers.JSONField(required=False, default=0)
    discount = serializers.JSONField(required=False, default=0)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.TRANSFER)
    status = serializers.ChoiceField(choices=ReceiptStatus.choices, default=ReceiptStatus.PAID)
    note = serializers.CharField(max_length=1000, required=False, allow_blank=True, default='')
    receipt_date = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError('Add at least one item')
        return value

    def validate(self, attrs):
        try:
            calculate_totals(attrs['items'], shipping=attrs.get('shipping'), discount=attrs.get('discount'))
        except AmountOutOfRangeError as e:
            raise serializers.ValidationError({'items': str(e)})
        return attrs


class ReceiptPreviewSerializer(ReceiptCreateSerializer):
    """Receipt form data plus the header fields an unsaved preview needs."""

    receipt_number = serializers.CharField(max_length=20, required=False, allow_blank=True, default='001')
    currency = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    business_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')
    business_phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    theme_color = serializers.RegexField(
        regex=r'^#[0-9a-fA-F]{6}$', required=False, allow_blank=True, default=''
    )


class ReceiptFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for the receipt history.

    Query Parameters:
        search (str): Customer name or receipt number fragment
    """

    search = serializers.CharField(max_length=150, required=False, allow_blank=True)


# =============================================================================
# Output Serializers
# =============================================================================

class ReceiptSerializer(serializers.ModelSerializer):
    """Full receipt as stored in history."""

    amount = serializers.CharField(read_only=True)

    class Meta:
        model = Receipt
        fields = [
            'id',
            'receipt_number',
            'customer_name',
            'items',
            'currency',
            'subtotal',
            'discount',
            'shipping',
            'total_amount',
            'amount',
            'payment_method',
            'status',
            'note',
            'receipt_date',
            'created_at',
        ]
        read_only_fields = fields


class ReceiptListSerializer(serializers.ModelSerializer):
    """Compact receipt row for history lists."""

    amount = serializers.CharField(read_only=True)

    class Meta:
        model = Receipt
        fields = [
            'id',
            'receipt_number',
            'customer_name',
            'total_amount',
            'amount',
            'status',
            'created_at',
        ]
        read_only_fields = fields


class NextReceiptNumberSerializer(serializers.Serializer):
    receipt_number = serializers.CharField()


class ShareLinkSerializer(serializers.Serializer):
    url = serializers.URLField()
