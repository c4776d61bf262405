from rest_framework import serializers

from .models import InventoryMovement, ProductStock


class ProductStockSerializer(serializers.ModelSerializer):
    branch_name = serializers.ReadOnlyField(source='branch.name')
    product_code = serializers.ReadOnlyField(source='product.code')
    product_name = serializers.ReadOnlyField(source='product.name')
    unit_measure = serializers.ReadOnlyField(source='product.unit_measure')
    status = serializers.CharField(source='status_code', read_only=True)

    class Meta:
        model = ProductStock
        fields = [
            'id', 'branch', 'branch_name', 'product', 'product_code', 'product_name',
            'unit_measure', 'stock_current', 'min_stock', 'reorder_point', 'status', 'last_update'
        ]


class InventoryMovementSerializer(serializers.ModelSerializer):
    username = serializers.ReadOnlyField(source='user.username')

    class Meta:
        model = InventoryMovement
        fields = [
            'id', 'type', 'concept', 'quantity', 'unit_measure', 'balance_after',
            'document_number', 'reason', 'username', 'created_at'
        ]


class AdjustmentSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.DecimalField(max_digits=12, decimal_places=4)
    movement_type = serializers.CharField()
    reason = serializers.CharField()
    branch_id = serializers.IntegerField(required=False, allow_null=True, default=None)
