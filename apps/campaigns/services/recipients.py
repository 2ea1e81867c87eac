"""Who a campaign can be sent to, and the admin's quick filters."""

from django.conf import settings
from django.db.models import Count, Max

from apps.accounts.models import Profile
from .exceptions import InvalidSegmentError

SEGMENTS = ('all', 'frequent', 'inactive')


def get_campaign_recipients() -> list:
    """
    Every business, newest account first, with its engagement flags.

    Returns:
        list[dict]: ``{'id', 'business_name', 'auth_email', 'is_frequent',
        'last_active'}`` where ``is_frequent`` means at least
        FREQUENT_CUSTOMER_THRESHOLD receipts and ``last_active`` is the
        latest page view or receipt (None if there is neither).
    """
    threshold = settings.FREQUENT_CUSTOMER_THRESHOLD

    profiles = (
        Profile.objects
        .select_related('user')
        .annotate(
            receipt_count=Count('user__receipts', distinct=True),
            last_receipt_at=Max('user__receipts__created_at'),
            last_visit_at=Max('user__site_activity__created_at'),
        )
        .order_by('-user__created_at')
    )

    recipients = []
    for profile in profiles:
        seen = [t for t in (profile.last_receipt_at, profile.last_visit_at) if t is not None]
        recipients.append({
            'id': profile.user_id,
            'business_name': profile.business_name,
            'auth_email': profile.user.email,
            'is_frequent': profile.receipt_count >= threshold,
            'last_active': max(seen) if seen else None,
        })
    return recipients


def filter_recipients(recipients, segment='all') -> list:
    """
    Apply one of the admin quick filters.

    all: everyone; frequent: is_frequent; inactive: never active.

    Raises:
        InvalidSegmentError: For any other segment name
    """
    if segment == 'all':
        return list(recipients)
    if segment == 'frequent':
        return [r for r in recipients if r['is_frequent']]
    if segment == 'inactive':
        return [r for r in recipients if not r['last_active']]

    raise InvalidSegmentError(
        f"Invalid segment: '{segment}'. Valid options: {', '.join(SEGMENTS)}"
    )
