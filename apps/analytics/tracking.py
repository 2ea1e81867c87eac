"""
Page view tracking.

Each view is stored with a session bucket: its timestamp floored to
SESSION_BUCKET_MINUTES, so views by one user inside the same window count
as one session.
"""

import logging
from datetime import datetime, timezone as dt_timezone

from django.conf import settings
from django.utils import timezone

from .exceptions import InvalidPathError
from .models import SiteActivity

logger = logging.getLogger(__name__)

MAX_PATH_LENGTH = 500


def session_bucket_for(moment, minutes=None):
    """
    Floor a timestamp to the start of its session window (UTC).

        >>> session_bucket_for(datetime(2025, 3, 5, 10, 47, tzinfo=utc), minutes=30)
        datetime(2025, 3, 5, 10, 30, tzinfo=utc)
    """
    minutes = minutes or settings.SESSION_BUCKET_MINUTES
    width = minutes * 60
    seconds = int(moment.timestamp())
    return datetime.fromtimestamp(seconds - seconds % width, tz=dt_timezone.utc)


def record_page_view(user, path, at=None):
    """
    Store one page view.

    Args:
        user: Signed-in user, or None / AnonymousUser for visitors.
        path: Page path such as '/dashboard'.
        at: When the view happened; defaults to now.

    Raises:
        InvalidPathError: If path is blank
    """
    path = (path or '').strip()
    if not path:
        raise InvalidPathError('Page path is required')

    at = at or timezone.now()
    if timezone.is_naive(at):
        at = timezone.make_aware(at)

    if user is not None and not user.is_authenticated:
        user = None

    activity = SiteActivity.objects.create(
        user=user,
        path=path[:MAX_PATH_LENGTH],
        session_bucket=session_bucket_for(at),
        created_at=at,
    )
    logger.debug("Page view %s recorded for %s", activity.path, user.id if user else 'anonymous')
    return activity
