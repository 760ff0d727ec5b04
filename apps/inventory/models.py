# apps/inventory/models.py
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models.functions import Lower

from core.constants import InventoryAction, InventoryCategory
from core.mixins.audit_fields import AuditFieldsMixin
from core.mixins.tenant_fields import BranchScopedModel


class InventoryItem(BranchScopedModel, AuditFieldsMixin):
    """Stock of one item at one branch. Names are unique per branch, case-insensitive."""

    name = models.CharField(max_length=200)
    category = models.CharField(max_length=20, choices=InventoryCategory.choices, default=InventoryCategory.CONSUMABLE)
    sku = models.CharField(max_length=100, blank=True)
    supplier = models.CharField(max_length=200, blank=True)

    # Stock levels, changed through atomic increments
    quantity = models.PositiveIntegerField(default=0)
    unit = models.CharField(max_length=20, default='pcs')

    low_stock_threshold = models.PositiveIntegerField(default=10)
    expiry_date = models.DateField(null=True, blank=True)

    cost_per_unit = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0'), validators=[MinValueValidator(0)]
    )
    last_restocked = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'inventory_items'
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(
                Lower('name'), 'clinic', 'branch',
                name='unique_inventory_name_per_branch',
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.quantity} {self.unit})"

    @property
    def is_low_stock(self):
        return self.quantity <= self.low_stock_threshold


class InventoryLog(BranchScopedModel):
    """Every stock movement, kept even when the item is deleted."""

    item = models.ForeignKey(InventoryItem, on_delete=models.SET_NULL, null=True, related_name='logs')
    item_name = models.CharField(max_length=200)
    action = models.CharField(max_length=20, choices=InventoryAction.choices)
    quantity_change = models.IntegerField()
    performed_by = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, related_name='+')
    notes = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'inventory_logs'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.action} {self.quantity_change:+d} {self.item_name}"
