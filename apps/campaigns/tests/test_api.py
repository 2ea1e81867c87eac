import pytest
from django.core import mail
from django.urls import reverse
from rest_framework import status
from apps.campaigns.models import Campaign


DISPATCH_URL = '/api/admin/dispatch-campaign'


@pytest.fixture
def payload(recipients):
    return {
        'subject': 'Big news',
        'messageBody': 'Hello there\nWe have news.',
        'recipients': recipients,
        'flyerUrl': None,
    }


# =============================================================================
# Dispatch Tests
# =============================================================================

@pytest.mark.django_db
class TestDispatchCampaignAPI:
    """Tests for POST /api/admin/dispatch-campaign"""

    def test_url(self):
        assert reverse('backoffice:dispatch-campaign') == DISPATCH_URL

    def test_success(self, admin_client, payload):
        response = admin_client.post(DISPATCH_URL, payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'success': True}
        assert len(mail.outbox) == 2
        assert Campaign.objects.get().recipient_count == 2

    def test_trailing_slash_route(self, admin_client, payload):
        response = admin_client.post(reverse('backoffice:dispatch-campaign-slash'), payload, format='json')

        assert response.status_code == status.HTTP_200_OK

    def test_provider_error(self, admin_client, payload, failing_email_backend):
        response = admin_client.post(DISPATCH_URL, payload, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'error': 'API key is invalid'}
        assert Campaign.objects.count() == 0

    def test_get_not_allowed(self, admin_client):
        response = admin_client.get(DISPATCH_URL)

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED

    @pytest.mark.parametrize('missing', ['subject', 'messageBody', 'recipients'])
    def test_malformed_input(self, admin_client, payload, missing):
        payload.pop(missing)

        response = admin_client.post(DISPATCH_URL, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert len(mail.outbox) == 0

    def test_empty_recipients(self, admin_client, payload):
        payload['recipients'] = []

        response = admin_client.post(DISPATCH_URL, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_subject_with_line_break(self, admin_client, payload):
        payload['subject'] = 'Hello\nBcc: x@example.com'

        response = admin_client.post(DISPATCH_URL, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'subject' in response.data
        assert len(mail.outbox) == 0
        assert Campaign.objects.count() == 0

    def test_invalid_recipient_email(self, admin_client, payload):
        payload['recipients'] = [{'business_name': 'X', 'auth_email': 'not-an-email'}]

        response = admin_client.post(DISPATCH_URL, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_requires_admin(self, authenticated_client, payload):
        response = authenticated_client.post(DISPATCH_URL, payload, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert len(mail.outbox) == 0

    def test_requires_authentication(self, api_client, payload):
        response = api_client.post(DISPATCH_URL, payload, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Recipients & History Tests
# =============================================================================

@pytest.mark.django_db
class TestCampaignRecipientsAPI:
    """Tests for GET /api/admin/campaign-recipients/"""

    def test_all(self, admin_client, user):
        response = admin_client.get(reverse('backoffice:campaign-recipients'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['segment'] == 'all'
        assert response.data['count'] == 2
        emails = {r['auth_email'] for r in response.data['results']}
        assert emails == {'owner@example.com', 'admin@mifimnpay.com.ng'}

    def test_inactive(self, admin_client, user):
        response = admin_client.get(reverse('backoffice:campaign-recipients'), {'segment': 'inactive'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2

    def test_invalid_segment(self, admin_client):
        response = admin_client.get(reverse('backoffice:campaign-recipients'), {'segment': 'vip'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_history(self, admin_client, payload, admin_user):
        admin_client.post(DISPATCH_URL, payload, format='json')

        response = admin_client.get(reverse('backoffice:campaign-history'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['subject'] == 'Big news'
        assert response.data[0]['sent_by'] == admin_user.email
