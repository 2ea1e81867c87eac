from django.http import HttpResponse
from drf_spectacular.utils import extend_schema, OpenApiTypes
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response

from .exceptions import StorefrontLinkMissingError
from .models import MenuItem
from .serializers import (
    MenuItemSerializer,
    MenuSyncSerializer,
    StorefrontSerializer,
)
from .services import (
    create_menu_item,
    update_menu_item,
    delete_menu_item,
    sync_menu,
    list_menu_items,
    get_storefront,
    storefront_url,
    storefront_qr_png,
)


class MenuItemViewSet(viewsets.ModelViewSet):
    """
    Price list management for the signed-in business.

    list: Items oldest first
    create/update/destroy: Single-item edits
    sync: Save the whole price list form
    """

    serializer_class = MenuItemSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        return list_menu_items(self.request.user)

    def perform_create(self, serializer):
        serializer.instance = create_menu_item(user=self.request.user, **serializer.validated_data)

    def perform_update(self, serializer):
        serializer.instance = update_menu_item(
            user=self.request.user,
            item_id=serializer.instance.id,
            **serializer.validated_data
        )

    def destroy(self, request, *args, **kwargs):
        delete_menu_item(user=request.user, item_id=kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=MenuSyncSerializer, responses={200: MenuItemSerializer(many=True)}, tags=['storefront'])
    @action(detail=False, methods=['post'])
    def sync(self, request):
        """
        Insert new rows and update existing ones.

        POST /api/menu-items/sync/
        Body: {"items": [{"id": "new-1", "name": "...", "price": 500}, ...]}
        """
        serializer = MenuSyncSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        items = sync_menu(user=request.user, items=serializer.validated_data['items'])
        return Response(MenuItemSerializer(items, many=True).data)


def _storefront_payload(slug):
    storefront = get_storefront(slug)
    return StorefrontSerializer({
        'profile': storefront['profile'],
        'items': storefront['items'],
        'url': storefront_url(storefront['profile']),
    }).data


@extend_schema(responses={200: StorefrontSerializer}, tags=['storefront'])
@api_view(['GET'])
@permission_classes([AllowAny])
def storefront_detail(request, slug):
    """
    Public price list for a business.

    GET /api/storefront/<slug>/
    """
    return Response(_storefront_payload(slug))


@extend_schema(responses={(200, 'image/png'): OpenApiTypes.BINARY}, tags=['storefront'])
@api_view(['GET'])
@permission_classes([AllowAny])
def storefront_qr(request, slug):
    """
    QR code of the public store link.

    GET /api/storefront/<slug>/qr/
    """
    profile = get_storefront(slug)['profile']
    try:
        content = storefront_qr_png(profile)
    except StorefrontLinkMissingError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    response = HttpResponse(content, content_type='image/png')
    response['Content-Disposition'] = f'inline; filename="store-{slug}.png"'
    return response


@extend_schema(responses={200: StorefrontSerializer}, tags=['storefront'])
@api_view(['GET'])
@permission_classes([AllowAny])
def public_storefront(request, slug):
    """
    Storefront at its public address.

    GET /m/<slug>
    """
    return Response(_storefront_payload(slug))
