from django.http import HttpResponse
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiTypes
from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response

from apps.accounts.models import Profile
from apps.accounts.services import get_profile
from .exceptions import (
    EmptyReceiptError,
    AmountOutOfRangeError,
    ReceiptNumberConflictError,
    ReceiptRenderError,
)
from .models import Receipt
from .serializers import (
    ReceiptSerializer,
    ReceiptListSerializer,
    ReceiptCreateSerializer,
    ReceiptPreviewSerializer,
    ReceiptFilterSerializer,
    NextReceiptNumberSerializer,
    ShareLinkSerializer,
)
from .services import (
    create_receipt,
    get_receipt,
    delete_receipt,
    search_receipts,
    next_receipt_number,
    render_receipt_image,
    receipt_context,
    build_share_link,
)


class ReceiptPagination(PageNumberPagination):
    """Receipt history pagination."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _png_response(content, filename, inline=False):
    response = HttpResponse(content, content_type='image/png')
    disposition = 'inline' if inline else 'attachment'
    response['Content-Disposition'] = f'{disposition}; filename="{filename}"'
    return response


class ReceiptViewSet(mixins.ListModelMixin,
                     mixins.RetrieveModelMixin,
                     mixins.CreateModelMixin,
                     mixins.DestroyModelMixin,
                     viewsets.GenericViewSet):
    """
    Receipt history for the signed-in business.

    list: History, newest first (?search= filters by customer or number)
    create: Save a generated receipt
    retrieve: One receipt
    destroy: Delete a receipt
    """

    serializer_class = ReceiptSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ReceiptPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_permissions(self):
        if self.action == 'preview':
            return [AllowAny()]
        return super().get_permissions()

    def get_queryset(self):
        if self.action != 'list':
            return Receipt.objects.filter(user=self.request.user)

        filter_serializer = ReceiptFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return search_receipts(
            user=self.request.user,
            term=filter_serializer.validated_data.get('search', '')
        )

    def get_serializer_class(self):
        if self.action == 'list':
            return ReceiptListSerializer
        if self.action == 'create':
            return ReceiptCreateSerializer
        if self.action == 'preview':
            return ReceiptPreviewSerializer
        return ReceiptSerializer

    @extend_schema(
        parameters=[OpenApiParameter('search', OpenApiTypes.STR, description='Customer name or receipt number')],
        tags=['receipts'],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=ReceiptCreateSerializer, responses={201: ReceiptSerializer}, tags=['receipts'])
    def create(self, request, *args, **kwargs):
        """
        Save a receipt to history.

        POST /api/receipts/
        """
        serializer = ReceiptCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            receipt = create_receipt(user=request.user, **serializer.validated_data)
        except (EmptyReceiptError, AmountOutOfRangeError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except ReceiptNumberConflictError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(ReceiptSerializer(receipt).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        """
        Delete a receipt.

        DELETE /api/receipts/{id}/
        """
        delete_receipt(user=request.user, receipt_id=kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: NextReceiptNumberSerializer}, tags=['receipts'])
    @action(detail=False, methods=['get'], url_path='next-number')
    def next_number(self, request):
        """
        Number the generator should print on the next receipt.

        GET /api/receipts/next-number/
        """
        return Response({'receipt_number': next_receipt_number(request.user)})

    @extend_schema(responses={(200, 'image/png'): OpenApiTypes.BINARY}, tags=['receipts'])
    @action(detail=True, methods=['get'])
    def image(self, request, pk=None):
        """
        Download a saved receipt as PNG.

        GET /api/receipts/{id}/image/
        """
        receipt = get_receipt(user=request.user, receipt_id=pk)
        try:
            content = render_receipt_image(receipt_context(receipt), get_profile(request.user))
        except ReceiptRenderError as e:
            return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return _png_response(content, f'receipt-{receipt.receipt_number}.png')

    @extend_schema(responses={200: ShareLinkSerializer}, tags=['receipts'])
    @action(detail=True, methods=['get'])
    def share(self, request, pk=None):
        """
        WhatsApp share link for a saved receipt.

        GET /api/receipts/{id}/share/
        """
        receipt = get_receipt(user=request.user, receipt_id=pk)
        return Response({'url': build_share_link(receipt)})

    @extend_schema(
        request=ReceiptPreviewSerializer,
        responses={(200, 'image/png'): OpenApiTypes.BINARY},
        tags=['receipts'],
    )
    @action(detail=False, methods=['post'])
    def preview(self, request):
        """
        Render a receipt without saving it.

        Visitors who are not signed in get the "PREVIEW ONLY" watermark.

        POST /api/receipts/preview/
        """
        serializer = ReceiptPreviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if request.user.is_authenticated:
            profile = get_profile(request.user)
        else:
            # Unsaved profile carrying whatever branding the visitor typed in
            profile = Profile(
                business_name=data['business_name'],
                business_phone=data['business_phone'],
            )
            if data['theme_color']:
                profile.theme_color = data['theme_color']

        try:
            content = render_receipt_image(
                data,
                profile,
                watermark=not request.user.is_authenticated
            )
        except AmountOutOfRangeError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except ReceiptRenderError as e:
            return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return _png_response(content, 'receipt-preview.png', inline=True)
