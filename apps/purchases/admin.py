from django.contrib import admin

from .models import PurchaseInvoice, PurchasePayment, PurchaseQuotation, PurchaseRequest


class PurchaseQuotationInline(admin.TabularInline):
    model = PurchaseQuotation
    extra = 0
    readonly_fields = ['file', 'file_name', 'is_selected', 'created_at']


@admin.register(PurchaseRequest)
class PurchaseRequestAdmin(admin.ModelAdmin):
    list_display = ['number', 'branch', 'requester', 'estimated_total', 'currency', 'status', 'created_at']
    list_filter = ['status', 'currency', 'branch']
    search_fields = ['description', 'requester__username']
    readonly_fields = ['status', 'reviewed_by', 'reviewed_at', 'created_at', 'updated_at']
    inlines = [PurchaseQuotationInline]

    def has_delete_permission(self, request, obj=None):
        return False


class PurchasePaymentInline(admin.TabularInline):
    model = PurchasePayment
    extra = 0
    readonly_fields = ['voucher_number', 'file', 'payment_date', 'status', 'observation']


@admin.register(PurchaseInvoice)
class PurchaseInvoiceAdmin(admin.ModelAdmin):
    list_display = ['invoice_number', 'provider', 'request', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['invoice_number', 'provider__ruc', 'provider__name']
    readonly_fields = ['status', 'reviewed_by', 'reviewed_at', 'created_at']
    inlines = [PurchasePaymentInline]


@admin.register(PurchasePayment)
class PurchasePaymentAdmin(admin.ModelAdmin):
    list_display = ['voucher_number', 'invoice', 'payment_date', 'status']
    list_filter = ['status']
    search_fields = ['voucher_number', 'invoice__invoice_number']
    readonly_fields = ['status', 'reviewed_by', 'reviewed_at', 'created_at']
