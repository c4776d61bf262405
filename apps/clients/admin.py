from django.contrib import admin

from .models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ['doc_number', 'display_name', 'client_type', 'doc_type', 'phone', 'deleted_at']
    list_filter = ['client_type', 'doc_type']
    search_fields = ['doc_number', 'business_name', 'first_name', 'paternal_surname']
    readonly_fields = ['created_by', 'updated_by', 'deleted_by', 'created_at', 'updated_at', 'deleted_at']
