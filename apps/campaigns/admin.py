from django.contrib import admin
from .models import Campaign


@admin.register(Campaign)
class CampaignAdmin(admin.ModelAdmin):
    list_display = ['subject', 'recipient_count', 'sent_by', 'created_at']
    search_fields = ['subject', 'message_body']
    list_filter = ['created_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    readonly_fields = ['id', 'subject', 'message_body', 'flyer_url', 'recipient_count', 'sent_by', 'created_at']

    def has_add_permission(self, request):
        # Campaigns are only created by dispatching them
        return False
