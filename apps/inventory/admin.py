from django.contrib import admin

from .models import InventoryItem, InventoryLog


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ('name', 'branch', 'category', 'quantity', 'unit', 'low_stock_threshold')
    list_filter = ('category', 'branch')
    search_fields = ('name', 'sku')


@admin.register(InventoryLog)
class InventoryLogAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'item_name', 'action', 'quantity_change', 'performed_by', 'branch')
    list_filter = ('action',)
