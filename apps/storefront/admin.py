from django.contrib import admin
from .models import MenuItem


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'price', 'user', 'created_at']
    search_fields = ['name', 'description', 'user__email', 'user__profile__business_name']
    list_filter = ['created_at']
    ordering = ['user', 'created_at']
    raw_id_fields = ['user']
    readonly_fields = ['id', 'created_at']
