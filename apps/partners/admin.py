"""
Partners App - Admin Configuration
"""
from django.contrib import admin

from .models import Provider


@admin.register(Provider)
class ProviderAdmin(admin.ModelAdmin):
    list_display = ['name', 'ruc', 'address', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name', 'ruc']
    ordering = ['name']
