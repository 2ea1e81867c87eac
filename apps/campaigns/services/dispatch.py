"""
Campaign email dispatch.

Each recipient gets their own personalised HTML email; the whole batch is
handed to the configured email backend in a single call.
"""

import logging
from typing import Optional

from django.conf import settings
from django.core.mail import BadHeaderError, EmailMultiAlternatives, get_connection
from django.template.loader import render_to_string

from apps.campaigns.models import Campaign
from .exceptions import NoRecipientsError, InvalidSubjectError, CampaignDispatchError

logger = logging.getLogger(__name__)

HTML_TEMPLATE = 'campaigns/email/campaign.html'
TEXT_TEMPLATE = 'campaigns/email/campaign.txt'


def _context(business_name, message_body, recipient_email, flyer_url):
    return {
        'business_name': business_name or 'there',
        'message_body': message_body,
        'recipient_email': recipient_email,
        'flyer_url': flyer_url or '',
        'site_url': settings.SITE_URL,
    }


def render_campaign_html(
    business_name: str,
    message_body: str,
    recipient_email: str,
    flyer_url: Optional[str] = None,
) -> str:
    """
    Branded HTML body for one recipient.

    All user-supplied text is escaped; newlines in the message become <br>.
    The flyer image is included only when a URL is given.
    """
    return render_to_string(
        HTML_TEMPLATE,
        _context(business_name, message_body, recipient_email, flyer_url)
    )


def build_campaign_message(subject, message_body, recipient, flyer_url=None):
    """One EmailMultiAlternatives (plain text + HTML) for a recipient dict."""
    context = _context(
        recipient.get('business_name'), message_body, recipient['auth_email'], flyer_url
    )

    message = EmailMultiAlternatives(
        subject=subject,
        body=render_to_string(TEXT_TEMPLATE, context),
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[recipient['auth_email']],
        reply_to=list(settings.CAMPAIGN_REPLY_TO) or None,
    )
    message.attach_alternative(render_to_string(HTML_TEMPLATE, context), 'text/html')
    return message


def dispatch_campaign(
    *,
    subject: str,
    message_body: str,
    recipients: list,
    flyer_url: Optional[str] = None,
    sent_by=None,
) -> Campaign:
    """
    Send a campaign to the selected recipients.

    Args:
        subject: Email subject line
        message_body: Plain-text message; newlines are kept as line breaks
        recipients: Dicts with 'auth_email' and 'business_name'
        flyer_url: Optional image shown above the footer
        sent_by: Admin user who sent it

    Returns:
        Campaign audit record

    Raises:
        NoRecipientsError: If recipients is empty
        InvalidSubjectError: If the subject contains a line break
        CampaignDispatchError: If the email backend fails; nothing is
            retried and no Campaign is recorded
    """
    if not recipients:
        raise NoRecipientsError('Select at least one recipient')
    if '\n' in subject or '\r' in subject:
        raise InvalidSubjectError('Subject must be a single line')

    messages = [
        build_campaign_message(subject, message_body, recipient, flyer_url)
        for recipient in recipients
    ]

    connection = get_connection(fail_silently=False)
    try:
        connection.send_messages(messages)
    except BadHeaderError as e:
        raise InvalidSubjectError(str(e)) from e
    except OSError as e:
        logger.error("Campaign '%s' failed for %d recipients: %s", subject, len(messages), e)
        raise CampaignDispatchError(str(e)) from e

    campaign = Campaign.objects.create(
        subject=subject,
        message_body=message_body,
        flyer_url=flyer_url or '',
        recipient_count=len(messages),
        sent_by=sent_by if sent_by is not None and sent_by.is_authenticated else None,
    )

    logger.info("Campaign %s '%s' sent to %d recipients", campaign.id, subject, len(messages))
    return campaign
