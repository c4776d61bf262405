from rest_framework import serializers

from .models import Product


class ProductSerializer(serializers.ModelSerializer):
    created_by_name = serializers.ReadOnlyField(source='created_by.username')

    class Meta:
        model = Product
        fields = [
            'id', 'code', 'name', 'description', 'unit_measure',
            'is_active', 'created_by_name', 'created_at'
        ]
        read_only_fields = ['code', 'is_active', 'created_at']
