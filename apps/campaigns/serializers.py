from rest_framework import serializers
from .models import Campaign
from .services import SEGMENTS


# =============================================================================
# Input Serializers
# =============================================================================

class RecipientInputSerializer(serializers.Serializer):
    """One selected recipient, as listed by campaign-recipients."""

    id = serializers.CharField(required=False, allow_blank=True)
    business_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')
    auth_email = serializers.EmailField()


class DispatchCampaignSerializer(serializers.Serializer):
    """
    Validate the compose form.

    Fields use the camelCase names the back-office sends:
        subject (str): Email subject
        messageBody (str): Plain-text message
        recipients (list): Selected recipients, at least one
        flyerUrl (str): Optional flyer image URL
    """

    subject = serializers.CharField(max_length=200)
    messageBody = serializers.CharField()
    recipients = RecipientInputSerializer(many=True, allow_empty=False)
    flyerUrl = serializers.URLField(max_length=500, required=False, allow_blank=True, allow_null=True)

    def validate_subject(self, value):
        if '\n' in value or '\r' in value:
            raise serializers.ValidationError('Subject must be a single line')
        return value


class SegmentQuerySerializer(serializers.Serializer):
    """
    Query Parameters:
        segment (str): all, frequent or inactive (default all)
    """

    segment = serializers.ChoiceField(choices=SEGMENTS, required=False, default='all')


# =============================================================================
# Output Serializers
# =============================================================================

class CampaignRecipientSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    business_name = serializers.CharField()
    auth_email = serializers.EmailField()
    is_frequent = serializers.BooleanField()
    last_active = serializers.DateTimeField(allow_null=True)


class CampaignRecipientsResponseSerializer(serializers.Serializer):
    segment = serializers.CharField()
    count = serializers.IntegerField()
    results = CampaignRecipientSerializer(many=True)


class CampaignSerializer(serializers.ModelSerializer):
    sent_by = serializers.EmailField(source='sent_by.email', read_only=True, default=None)

    class Meta:
        model = Campaign
        fields = ['id', 'subject', 'message_body', 'flyer_url', 'recipient_count', 'sent_by', 'created_at']
        read_only_fields = fields


class DispatchSuccessSerializer(serializers.Serializer):
    success = serializers.BooleanField()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
