"""
Analytics Module
=================

Read-only queries behind the business dashboard and the admin back-office:
sales totals, sales charts, platform-wide counters, growth trends and site
activity.

Functions:
    bucket_by_day: Group (timestamp, amount) records by calendar day.
    bucket_by_hour: Group (timestamp, amount) records by hour of day.

Classes:
    AnalyticsQueries: Static methods for dashboard and admin queries.

Example:
    Sales chart for the last week::

        from apps.analytics.analytics import AnalyticsQueries

        points = AnalyticsQueries.sales_chart(user, days=7)
        for point in points:
            print(point['name'], point['amount'])
        # 05 Mar 2100.00
        # 06 Mar 4500.00

Note:
    Dates are bucketed in the project's local time zone (TIME_ZONE), so a
    receipt issued at 00:30 in Lagos lands on that Lagos day.
"""

from collections import OrderedDict, Counter
from datetime import datetime, time, timedelta
from decimal import Decimal

from django.db.models import Sum, Count
from django.db.models.functions import Coalesce
from django.utils import timezone

from apps.accounts.models import User, Profile, DEFAULT_BUSINESS_NAME
from apps.receipts.models import Receipt
from apps.receipts.services.calculations import to_decimal
from .exceptions import InvalidGranularityError
from .models import SiteActivity

DAY_LABEL_FORMAT = '%d %b'
GRANULARITIES = ('day', 'hour')
RECENT_RECEIPTS_LIMIT = 5
TOP_PATHS_LIMIT = 5


def bucket_by_day(records, date_format=DAY_LABEL_FORMAT):
    """
    Sum amounts per calendar day in a single pass.

    Buckets are keyed by local date, so days a year apart that share a
    label stay separate.

    Args:
        records: Iterable of (timestamp, amount) pairs. Non-numeric amounts
            count as zero.
        date_format: strftime format used as the bucket label.

    Returns:
        list[dict]: ``{'name': label, 'date': date, 'amount': Decimal}`` in
        the order each day is first seen. The amounts add up to the sum of
        the records.

    Example:
        >>> bucket_by_day([(mon_9am, 500), (mon_5pm, 200), (tue_noon, 100)])
        [{'name': '03 Mar', 'date': date(2025, 3, 3), 'amount': Decimal('700')},
         {'name': '04 Mar', 'date': date(2025, 3, 4), 'amount': Decimal('100')}]
    """
    buckets = OrderedDict()
    for timestamp, amount in records:
        day = _local_day(timestamp)
        buckets[day] = buckets.get(day, Decimal('0')) + to_decimal(amount)

    return [
        {'name': day.strftime(date_format), 'date': day, 'amount': amount}
        for day, amount in buckets.items()
    ]


def bucket_by_hour(records):
    """
    Sum amounts per hour of day (0..23), regardless of date.

    Returns:
        list[dict]: 24 entries ``{'name': 'HH:00', 'hour': h, 'amount': Decimal}``,
        empty hours included.
    """
    totals = [Decimal('0')] * 24
    for timestamp, amount in records:
        totals[timezone.localtime(timestamp).hour] += to_decimal(amount)

    return [
        {'name': f'{hour:02d}:00', 'hour': hour, 'amount': amount}
        for hour, amount in enumerate(totals)
    ]


def _window_start(days):
    """Midnight (local) at the start of a window of `days` calendar days ending today."""
    today = timezone.localdate()
    first_day = today - timedelta(days=days - 1)
    return timezone.make_aware(datetime.combine(first_day, time.min)), first_day


def _local_day(timestamp):
    return timezone.localtime(timestamp).date()


def complete_profiles():
    """Profiles with a real business name, a phone number and a logo."""
    return (
        Profile.objects
        .exclude(business_name__in=['', DEFAULT_BUSINESS_NAME])
        .exclude(business_phone='')
        .exclude(logo_url='')
    )


class AnalyticsQueries:
    """
    Queries for analytics endpoints.

    Methods:
        dashboard_stats: Headline numbers for one business.
        sales_chart: Sales over time for one business.
        admin_stats: Platform-wide counters.
        platform_trends: Daily receipts and sign-ups across the platform.
        site_activity_summary: Page views and sessions per day.

    Note:
        All methods return plain dictionaries or lists so views can hand
        them straight to Response.
    """

    @staticmethod
    def dashboard_stats(user):
        """
        Headline numbers for a business dashboard.

        Returns:
            dict: A dictionary containing:
                - total_sales (Decimal): Sum of all receipt totals.
                - receipt_count (int): Number of receipts issued.
                - unique_customers (int): Distinct customer names billed.
                - recent_receipts (list[Receipt]): Five newest receipts.
        """
        receipts = Receipt.objects.filter(user=user)

        totals = receipts.aggregate(
            total_sales=Coalesce(Sum('total_amount'), Decimal('0.00')),
            receipt_count=Count('id'),
            unique_customers=Count('customer_name', distinct=True),
        )

        return {
            'total_sales': totals['total_sales'],
            'receipt_count': totals['receipt_count'],
            'unique_customers': totals['unique_customers'],
            'recent_receipts': list(receipts.order_by('-created_at')[:RECENT_RECEIPTS_LIMIT]),
        }

    @staticmethod
    def sales_chart(user, days=7, granularity='day'):
        """
        Sales totals over the last `days` days.

        Args:
            user: Business owner.
            days (int): Look-back window in days.
            granularity (str): 'day' for one point per calendar day with
                sales, 'hour' for 24 hour-of-day points.

        Raises:
            InvalidGranularityError: For any other granularity.
        """
        if granularity not in GRANULARITIES:
            raise InvalidGranularityError(
                f"Invalid granularity: '{granularity}'. Valid options: {', '.join(GRANULARITIES)}"
            )

        since = timezone.now() - timedelta(days=days)
        records = (
            Receipt.objects
            .filter(user=user, created_at__gte=since)
            .order_by('created_at')
            .values_list('created_at', 'total_amount')
        )

        if granularity == 'hour':
            return bucket_by_hour(records)
        return bucket_by_day(records)

    @staticmethod
    def admin_stats():
        """
        Platform-wide counters for the back-office overview.

        Returns:
            dict: total_users, total_receipts, total_revenue and
            verified_businesses (profiles that are fully set up).
        """
        receipts = Receipt.objects.aggregate(
            total_receipts=Count('id'),
            total_revenue=Coalesce(Sum('total_amount'), Decimal('0.00')),
        )

        return {
            'total_users': User.objects.count(),
            'total_receipts': receipts['total_receipts'],
            'total_revenue': receipts['total_revenue'],
            'verified_businesses': complete_profiles().count(),
        }

    @staticmethod
    def platform_trends(days=7):
        """
        Receipts issued and users joined per day, oldest day first.

        Every day in the window is present, including days with no activity.

        Returns:
            list[dict]: ``{'day', 'date', 'receipt_count', 'user_growth'}``
        """
        since, first_day = _window_start(days)

        receipt_days = Counter(
            _local_day(ts) for ts in
            Receipt.objects.filter(created_at__gte=since).values_list('created_at', flat=True)
        )
        signup_days = Counter(
            _local_day(ts) for ts in
            User.objects.filter(created_at__gte=since).values_list('created_at', flat=True)
        )

        trends = []
        for offset in range(days):
            day = first_day + timedelta(days=offset)
            trends.append({
                'day': day.strftime(DAY_LABEL_FORMAT),
                'date': day,
                'receipt_count': receipt_days.get(day, 0),
                'user_growth': signup_days.get(day, 0),
            })
        return trends

    @staticmethod
    def site_activity_summary(days=7):
        """
        Page views and unique sessions per day, plus the most visited paths.

        A session is a distinct (user, session bucket) pair; anonymous
        visitors share one session per bucket.

        Returns:
            dict: A dictionary containing:
                - days (list[dict]): ``{'day', 'date', 'page_views', 'unique_sessions'}``
                  for every day in the window.
                - top_paths (list[dict]): ``{'path', 'views'}``, most viewed first.
                - total_page_views (int)
                - total_sessions (int)
        """
        since, first_day = _window_start(days)
        rows = SiteActivity.objects.filter(created_at__gte=since).values_list(
            'created_at', 'user_id', 'session_bucket', 'path'
        )

        views_per_day = Counter()
        sessions_per_day = {}
        all_sessions = set()
        path_counts = Counter()

        for created_at, user_id, bucket, path in rows:
            day = _local_day(created_at)
            views_per_day[day] += 1
            sessions_per_day.setdefault(day, set()).add((user_id, bucket))
            all_sessions.add((user_id, bucket))
            path_counts[path] += 1

        per_day = []
        for offset in range(days):
            day = first_day + timedelta(days=offset)
            per_day.append({
                'day': day.strftime(DAY_LABEL_FORMAT),
                'date': day,
                'page_views': views_per_day.get(day, 0),
                'unique_sessions': len(sessions_per_day.get(day, ())),
            })

        return {
            'days': per_day,
            'top_paths': [
                {'path': path, 'views': views}
                for path, views in path_counts.most_common(TOP_PATHS_LIMIT)
            ],
            'total_page_views': sum(views_per_day.values()),
            'total_sessions': len(all_sessions),
        }
