from rest_framework import serializers
from apps.accounts.models import Profile
from apps.receipts.exceptions import AmountOutOfRangeError
from apps.receipts.services.calculations import to_amount
from .models import MenuItem
from .services import currency_symbol


# =============================================================================
# Input Serializers
# =============================================================================

class MenuItemInputSerializer(serializers.Serializer):
    """
    One row of the price list form.

    Fields:
        id (str): Existing item id; omit or send 'new-...' for new rows
        name (str): Product name
        price (decimal): Price, non-numeric counts as 0
        description (str): Optional description
    """

    id = serializers.CharField(max_length=64, required=False, allow_blank=True)
    name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    price = serializers.JSONField(required=False, default=0)
    description = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_price(self, value):
        try:
            to_amount(value)
        except AmountOutOfRangeError as e:
            raise serializers.ValidationError(str(e))
        return value


class MenuSyncSerializer(serializers.Serializer):
    items = MenuItemInputSerializer(many=True)


# =============================================================================
# Output Serializers
# =============================================================================

class MenuItemSerializer(serializers.ModelSerializer):
    """Menu item for the owner's settings page and the public store."""

    class Meta:
        model = MenuItem
        fields = ['id', 'name', 'price', 'description', 'created_at']
        read_only_fields = ['id', 'created_at']


class StorefrontProfileSerializer(serializers.ModelSerializer):
    """Public subset of the business profile."""

    logo_letter = serializers.CharField(read_only=True)
    currency_symbol = serializers.SerializerMethodField()

    class Meta:
        model = Profile
        fields = [
            'business_name',
            'tagline',
            'business_phone',
            'address',
            'logo_url',
            'logo_letter',
            'theme_color',
            'currency',
            'currency_symbol',
            'slug',
        ]
        read_only_fields = fields

    def get_currency_symbol(self, obj):
        return currency_symbol(obj)


class StorefrontSerializer(serializers.Serializer):
    profile = StorefrontProfileSerializer()
    items = MenuItemSerializer(many=True)
    url = serializers.CharField()
