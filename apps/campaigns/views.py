from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.accounts.permissions import IsPlatformAdmin
from .models import Campaign
from .serializers import (
    DispatchCampaignSerializer,
    SegmentQuerySerializer,
    CampaignRecipientSerializer,
    CampaignRecipientsResponseSerializer,
    CampaignSerializer,
    DispatchSuccessSerializer,
    ErrorSerializer,
)
from .services import (
    get_campaign_recipients,
    filter_recipients,
    dispatch_campaign as send_campaign,
    CampaignServiceError,
    CampaignDispatchError,
)

CAMPAIGN_HISTORY_LIMIT = 50


@extend_schema(
    parameters=[
        OpenApiParameter('segment', OpenApiTypes.STR, description="'all', 'frequent' or 'inactive'", default='all'),
    ],
    responses={200: CampaignRecipientsResponseSerializer, 403: ErrorSerializer},
    description="Businesses a campaign can be sent to, with engagement flags.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def campaign_recipients(request):
    """Recipient picker for the compose screen - thin HTTP handler."""
    query_serializer = SegmentQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    segment = query_serializer.validated_data['segment']

    recipients = filter_recipients(get_campaign_recipients(), segment)

    return Response({
        'segment': segment,
        'count': len(recipients),
        'results': CampaignRecipientSerializer(recipients, many=True).data,
    })


@extend_schema(
    responses={200: CampaignSerializer(many=True), 403: ErrorSerializer},
    description="Recently dispatched campaigns, newest first.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def campaign_history(request):
    campaigns = Campaign.objects.select_related('sent_by')[:CAMPAIGN_HISTORY_LIMIT]
    return Response(CampaignSerializer(campaigns, many=True).data)


@extend_schema(
    request=DispatchCampaignSerializer,
    responses={
        200: DispatchSuccessSerializer,
        400: ErrorSerializer,
        500: ErrorSerializer,
    },
    description="Send a branded HTML email to every selected recipient. Any provider error fails the whole batch.",
    tags=['admin'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def dispatch_campaign(request):
    """
    Send a campaign - thin HTTP handler.

    POST /api/admin/dispatch-campaign
    Body: {"subject", "messageBody", "recipients": [{"business_name", "auth_email"}], "flyerUrl"}
    """
    input_serializer = DispatchCampaignSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)
    data = input_serializer.validated_data

    try:
        send_campaign(
            subject=data['subject'],
            message_body=data['messageBody'],
            recipients=data['recipients'],
            flyer_url=data.get('flyerUrl'),
            sent_by=request.user,
        )
    except CampaignDispatchError as e:
        return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    except CampaignServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'success': True})
