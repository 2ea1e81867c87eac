"""
Domain exceptions for campaigns app.

Exception Hierarchy:
    CampaignServiceError (base)
    ├── InvalidSegmentError
    ├── InvalidSubjectError
    ├── NoRecipientsError
    └── CampaignDispatchError
"""


class CampaignServiceError(Exception):
    """Base exception for campaign service errors."""
    pass


class InvalidSegmentError(CampaignServiceError):
    """Raised when recipients are filtered by an unknown segment."""
    pass


class InvalidSubjectError(CampaignServiceError):
    """Raised when the subject cannot be used as an email header."""
    pass


class NoRecipientsError(CampaignServiceError):
    """Raised when a campaign is dispatched to nobody."""
    pass


class CampaignDispatchError(CampaignServiceError):
    """
    Raised when the email provider rejects the batch.

    The whole dispatch fails; nothing is retried.
    """
    pass
