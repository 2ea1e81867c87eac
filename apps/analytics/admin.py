from django.contrib import admin
from .models import SiteActivity


@admin.register(SiteActivity)
class SiteActivityAdmin(admin.ModelAdmin):
    list_display = ['path', 'user', 'session_bucket', 'created_at']
    list_filter = ['created_at']
    search_fields = ['path', 'user__email']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    raw_id_fields = ['user']
    readonly_fields = ['id', 'user', 'path', 'session_bucket', 'created_at']
