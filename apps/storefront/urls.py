from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'storefront'

router = DefaultRouter()
router.register(r'menu-items', views.MenuItemViewSet, basename='menu-item')

urlpatterns = [
    # GET    /api/menu-items/             - Own price list
    # POST   /api/menu-items/             - Add item
    # PATCH  /api/menu-items/{id}/        - Edit item
    # DELETE /api/menu-items/{id}/        - Remove item
    # POST   /api/menu-items/sync/        - Save whole price list

    # Public storefront
    path('storefront/<str:slug>/', views.storefront_detail, name='storefront-detail'),
    path('storefront/<str:slug>/qr/', views.storefront_qr, name='storefront-qr'),

    path('', include(router.urls)),
]
