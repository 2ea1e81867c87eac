"""
Domain exceptions for analytics app.

Exception Hierarchy:
    AnalyticsServiceError (base)
    ├── InvalidGranularityError
    └── InvalidPathError

Usage:
    from apps.analytics.exceptions import InvalidGranularityError

    if granularity not in GRANULARITIES:
        raise InvalidGranularityError(f"Invalid granularity: {granularity}")
"""


class AnalyticsServiceError(Exception):
    """
    Base exception for all analytics service errors.

        try:
            data = AnalyticsQueries.sales_chart(user, granularity='week')
        except AnalyticsServiceError as e:
            return Response({'error': str(e)}, status=400)
    """

    pass


class InvalidGranularityError(AnalyticsServiceError):
    """
    Raised when a chart granularity other than day or hour is requested.
    """

    pass


class InvalidPathError(AnalyticsServiceError):
    """Raised when a page view is recorded without a path."""

    pass
