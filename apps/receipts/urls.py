from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'receipts'

router = DefaultRouter()
router.register(r'', views.ReceiptViewSet, basename='receipt')

urlpatterns = [
    # GET    /api/receipts/                - History (?search=)
    # POST   /api/receipts/                - Save receipt
    # GET    /api/receipts/next-number/    - Next receipt number
    # POST   /api/receipts/preview/        - PNG preview, not saved
    # GET    /api/receipts/{id}/           - Receipt detail
    # DELETE /api/receipts/{id}/           - Delete receipt
    # GET    /api/receipts/{id}/image/     - PNG download
    # GET    /api/receipts/{id}/share/     - WhatsApp link
    path('', include(router.urls)),
]
