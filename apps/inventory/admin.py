from django.contrib import admin

from .models import InventoryMovement, ProductStock


@admin.register(ProductStock)
class ProductStockAdmin(admin.ModelAdmin):
    list_display = ['product', 'branch', 'stock_current', 'min_stock', 'reorder_point', 'last_update']
    list_filter = ['branch']
    search_fields = ['product__code', 'product__name']
    readonly_fields = ['stock_current', 'last_update']


@admin.register(InventoryMovement)
class InventoryMovementAdmin(admin.ModelAdmin):
    list_display = ['created_at', 'branch', 'product', 'type', 'concept', 'quantity', 'balance_after', 'user']
    list_filter = ['type', 'concept', 'branch']
    search_fields = ['product__code', 'product__name', 'document_number', 'reason']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
