from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.accounts.permissions import IsPlatformAdmin
from apps.accounts.services import get_profile
from apps.receipts.serializers import ReceiptListSerializer
from apps.receipts.services import format_amount
from .analytics import AnalyticsQueries
from .tracking import record_page_view
from .serializers import (
    # Input serializers
    DaysQuerySerializer,
    ChartQuerySerializer,
    PageViewInputSerializer,
    # Response serializers
    DashboardResponseSerializer,
    ChartResponseSerializer,
    AdminStatsSerializer,
    TrendsResponseSerializer,
    SiteActivitySummarySerializer,
    SiteActivitySerializer,
    ErrorSerializer,
)
from .exceptions import AnalyticsServiceError


DAYS_PARAMETER = OpenApiParameter('days', OpenApiTypes.INT, description='Number of days to cover', default=7)


# =============================================================================
# Business dashboard
# =============================================================================

@extend_schema(
    responses={200: DashboardResponseSerializer},
    description="Headline numbers for the current business: total sales, receipts issued, unique customers and the five newest receipts.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Business dashboard summary - thin HTTP handler."""
    stats = AnalyticsQueries.dashboard_stats(request.user)
    currency = get_profile(request.user).currency

    return Response({
        'total_sales': stats['total_sales'],
        'total_sales_display': format_amount(currency, stats['total_sales']),
        'receipt_count': stats['receipt_count'],
        'unique_customers': stats['unique_customers'],
        'recent_receipts': ReceiptListSerializer(stats['recent_receipts'], many=True).data,
    })


@extend_schema(
    parameters=[
        DAYS_PARAMETER,
        OpenApiParameter('granularity', OpenApiTypes.STR, description="Bucket size: 'day' or 'hour'", default='day'),
    ],
    responses={
        200: ChartResponseSerializer,
        400: ErrorSerializer,
    },
    description="Sales totals over time for the dashboard chart.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def sales_chart(request):
    """Sales chart data - thin HTTP handler."""
    query_serializer = ChartQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        points = AnalyticsQueries.sales_chart(
            request.user,
            days=params['days'],
            granularity=params['granularity']
        )
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'days': params['days'],
        'granularity': params['granularity'],
        'points': points,
    })


@extend_schema(
    request=PageViewInputSerializer,
    responses={201: SiteActivitySerializer, 400: ErrorSerializer},
    description="Record a page view. Works for anonymous visitors too.",
    tags=['analytics'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def track_page_view(request):
    """Record one page view - thin HTTP handler."""
    input_serializer = PageViewInputSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)

    try:
        activity = record_page_view(request.user, input_serializer.validated_data['path'])
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(SiteActivitySerializer(activity).data, status=status.HTTP_201_CREATED)


# =============================================================================
# Back-office
# =============================================================================

@extend_schema(
    responses={200: AdminStatsSerializer, 403: ErrorSerializer},
    description="Platform-wide counters: users, receipts, revenue and fully set-up businesses.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_stats(request):
    """Back-office overview numbers - thin HTTP handler."""
    return Response(AnalyticsQueries.admin_stats())


@extend_schema(
    parameters=[DAYS_PARAMETER],
    responses={200: TrendsResponseSerializer, 403: ErrorSerializer},
    description="Receipts issued and users joined per day.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def platform_trends(request):
    """Daily platform growth - thin HTTP handler."""
    query_serializer = DaysQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    days = query_serializer.validated_data['days']

    return Response({
        'days': days,
        'results': AnalyticsQueries.platform_trends(days=days),
    })


@extend_schema(
    parameters=[DAYS_PARAMETER],
    responses={200: SiteActivitySummarySerializer, 403: ErrorSerializer},
    description="Page views, unique sessions and top pages per day.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def site_activity(request):
    """Site activity summary - thin HTTP handler."""
    query_serializer = DaysQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    return Response(
        AnalyticsQueries.site_activity_summary(days=query_serializer.validated_data['days'])
    )
