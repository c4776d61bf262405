from django.contrib import admin

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'unit_measure', 'is_active', 'created_by', 'created_at']
    list_filter = ['is_active', 'unit_measure']
    search_fields = ['code', 'name']
    readonly_fields = ['code', 'created_by', 'created_at', 'updated_at']
