from rest_framework import serializers

from .models import PurchaseInvoice, PurchasePayment, PurchaseQuotation, PurchaseRequest


class PurchaseQuotationSerializer(serializers.ModelSerializer):
    class Meta:
        model = PurchaseQuotation
        fields = ['id', 'file', 'file_name', 'is_selected', 'created_at']


class PurchasePaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = PurchasePayment
        fields = ['id', 'voucher_number', 'file', 'payment_date', 'status', 'observation']


class PurchaseInvoiceSerializer(serializers.ModelSerializer):
    provider_ruc = serializers.ReadOnlyField(source='provider.ruc')
    provider_name = serializers.ReadOnlyField(source='provider.name')
    vouchers = PurchasePaymentSerializer(many=True, read_only=True)

    class Meta:
        model = PurchaseInvoice
        fields = ['id', 'invoice_number', 'provider_ruc', 'provider_name', 'file', 'status', 'observation', 'vouchers']


class PurchaseRequestSerializer(serializers.ModelSerializer):
    number = serializers.ReadOnlyField()
    branch_name = serializers.ReadOnlyField(source='branch.name')
    requester_name = serializers.ReadOnlyField(source='requester.username')
    invoice_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = PurchaseRequest
        fields = [
            'id', 'number', 'branch', 'branch_name', 'requester_name', 'description',
            'estimated_total', 'currency', 'issue_date', 'status', 'approval_comment',
            'invoice_count', 'created_at'
        ]


class PurchaseRequestDetailSerializer(PurchaseRequestSerializer):
    quotations = PurchaseQuotationSerializer(many=True, read_only=True)
    invoices = PurchaseInvoiceSerializer(many=True, read_only=True)

    class Meta(PurchaseRequestSerializer.Meta):
        fields = PurchaseRequestSerializer.Meta.fields + ['quotations', 'invoices']


class ApproveSerializer(serializers.Serializer):
    comment = serializers.CharField(required=False, allow_blank=True, default='')
    selected_quotation_id = serializers.IntegerField(required=False, allow_null=True, default=None)


class RejectSerializer(serializers.Serializer):
    reason = serializers.CharField(allow_blank=True)


class CompleteSerializer(serializers.Serializer):
    purchased = serializers.BooleanField(required=False, default=False)
