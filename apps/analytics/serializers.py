"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter and body validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    DaysQuerySerializer - Validates the look-back window
    ChartQuerySerializer - Validates sales chart parameters
    PageViewInputSerializer - Validates a recorded page view

Response Serializers:
    DashboardResponseSerializer - Business dashboard headline numbers
    ChartResponseSerializer - Sales chart points
    AdminStatsSerializer - Platform-wide counters
    TrendsResponseSerializer - Daily platform growth
    SiteActivitySummarySerializer - Page views and sessions
"""

from rest_framework import serializers
from apps.receipts.serializers import ReceiptListSerializer
from .analytics import GRANULARITIES
from .models import SiteActivity


# =============================================================================
# Input Serializers
# =============================================================================

class DaysQuerySerializer(serializers.Serializer):
    """
    Validate the look-back window.

    Query Parameters:
        days (int): Number of days to cover, 1-365 (default 7)
    """

    days = serializers.IntegerField(
        required=False,
        default=7,
        min_value=1,
        max_value=365,
        help_text='Number of days to cover'
    )


class ChartQuerySerializer(DaysQuerySerializer):
    """
    Validate sales chart parameters.

    Query Parameters:
        days (int): Number of days to cover (default 7)
        granularity (str): 'day' or 'hour' (default 'day')
    """

    granularity = serializers.ChoiceField(
        choices=GRANULARITIES,
        required=False,
        default='day',
    )


class PageViewInputSerializer(serializers.Serializer):
    """Body of POST /api/analytics/activity/."""
    path = serializers.CharField(max_length=500)


# =============================================================================
# Response Serializers
# =============================================================================

class DashboardResponseSerializer(serializers.Serializer):
    """Response serializer for the business dashboard."""
    total_sales = serializers.DecimalField(max_digits=16, decimal_places=2)
    total_sales_display = serializers.CharField()
    receipt_count = serializers.IntegerField()
    unique_customers = serializers.IntegerField()
    recent_receipts = ReceiptListSerializer(many=True)


class ChartPointSerializer(serializers.Serializer):
    """Nested serializer for a single chart point."""
    name = serializers.CharField()
    date = serializers.DateField(required=False)
    hour = serializers.IntegerField(required=False)
    amount = serializers.DecimalField(max_digits=16, decimal_places=2)


class ChartResponseSerializer(serializers.Serializer):
    days = serializers.IntegerField()
    granularity = serializers.CharField()
    points = ChartPointSerializer(many=True)


class AdminStatsSerializer(serializers.Serializer):
    """Response serializer for platform-wide counters."""
    total_users = serializers.IntegerField()
    total_receipts = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=16, decimal_places=2)
    verified_businesses = serializers.IntegerField()


class TrendPointSerializer(serializers.Serializer):
    day = serializers.CharField()
    date = serializers.DateField()
    receipt_count = serializers.IntegerField()
    user_growth = serializers.IntegerField()


class TrendsResponseSerializer(serializers.Serializer):
    days = serializers.IntegerField()
    results = TrendPointSerializer(many=True)


class ActivityDaySerializer(serializers.Serializer):
    day = serializers.CharField()
    date = serializers.DateField()
    page_views = serializers.IntegerField()
    unique_sessions = serializers.IntegerField()


class TopPathSerializer(serializers.Serializer):
    path = serializers.CharField()
    views = serializers.IntegerField()


class SiteActivitySummarySerializer(serializers.Serializer):
    """Response serializer for site activity."""
    days = ActivityDaySerializer(many=True)
    top_paths = TopPathSerializer(many=True)
    total_page_views = serializers.IntegerField()
    total_sessions = serializers.IntegerField()


class SiteActivitySerializer(serializers.ModelSerializer):
    class Meta:
        model = SiteActivity
        fields = ['id', 'path', 'session_bucket', 'created_at']
        read_only_fields = fields


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
