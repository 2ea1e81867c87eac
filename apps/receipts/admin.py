from django.contrib import admin
from .models import Receipt


@admin.register(Receipt)
class ReceiptAdmin(admin.ModelAdmin):
    """Read-mostly view of issued receipts across all businesses."""

    list_display = [
        'receipt_number',
        'customer_name',
        'user',
        'amount',
        'payment_method',
        'status',
        'created_at',
    ]
    list_filter = ['status', 'payment_method', 'created_at']
    search_fields = ['receipt_number', 'customer_name', 'user__email', 'user__profile__business_name']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    readonly_fields = ['id', 'subtotal', 'total_amount', 'created_at']
    raw_id_fields = ['user']

    fieldsets = (
        ('Receipt', {
            'fields': ('id', 'user', 'receipt_number', 'receipt_date', 'customer_name')
        }),
        ('Items & Totals', {
            'fields': ('items', 'currency', 'subtotal', 'shipping', 'discount', 'total_amount')
        }),
        ('Payment', {
            'fields': ('payment_method', 'status', 'note')
        }),
        ('Timestamps', {
            'fields': ('created_at',),
            'classes': ('collapse',),
        }),
    )
