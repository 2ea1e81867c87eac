from .exceptions import (
    CampaignServiceError,
    InvalidSegmentError,
    InvalidSubjectError,
    NoRecipientsError,
    CampaignDispatchError,
)
from .recipients import SEGMENTS, get_campaign_recipients, filter_recipients
from .dispatch import render_campaign_html, build_campaign_message, dispatch_campaign

__all__ = [
    # Exceptions
    'CampaignServiceError',
    'InvalidSegmentError',
    'InvalidSubjectError',
    'NoRecipientsError',
    'CampaignDispatchError',
    # Recipients
    'SEGMENTS',
    'get_campaign_recipients',
    'filter_recipients',
    # Dispatch
    'render_campaign_html',
    'build_campaign_message',
    'dispatch_campaign',
]
