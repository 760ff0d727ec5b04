# apps/inventory/serializers.py
from rest_framework import serializers

from .models import InventoryItem, InventoryLog


class InventoryItemSerializer(serializers.ModelSerializer):
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = InventoryItem
        fields = [
            'id', 'branch', 'name', 'category', 'sku', 'supplier',
            'quantity', 'unit', 'low_stock_threshold', 'expiry_date',
            'cost_per_unit', 'last_restocked', 'is_low_stock',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'branch', 'last_restocked', 'created_at', 'updated_at']
        extra_kwargs = {'quantity': {'required': True}}
        # restock merges by name; uniqueness is enforced by the database
        validators = []


class ConsumeSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True)


class InventoryLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = InventoryLog
        fields = ['id', 'item', 'item_name', 'action', 'quantity_change', 'performed_by', 'notes', 'created_at']
        read_only_fields = fields
