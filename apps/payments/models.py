# apps/payments/models.py
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from core.constants import PaymentMethod
from core.mixins.audit_fields import AuditFieldsMixin
from core.mixins.tenant_fields import BranchScopedModel


class Payment(BranchScopedModel, AuditFieldsMixin):
    """Money received from a patient; receipt number is unique per clinic."""

    patient = models.ForeignKey('patients.Patient', on_delete=models.PROTECT, related_name='payments')
    invoice = models.ForeignKey(
        'billing.Invoice',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='payments',
    )

    amount = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0.01'))])
    method = models.CharField(max_length=20, choices=PaymentMethod.choices, default=PaymentMethod.CASH)
    transaction_id = models.CharField(max_length=100, blank=True, help_text="e.g. UPI reference")
    date = models.DateTimeField()

    receipt_number = models.CharField(max_length=20, editable=False)
    notes = models.TextField(blank=True)

    class Meta:
        db_table = 'payments'
        ordering = ['-date', '-id']
        constraints = [
            models.UniqueConstraint(fields=['clinic', 'receipt_number'], name='unique_receipt_per_clinic'),
        ]
        indexes = [
            models.Index(fields=['clinic', 'branch', 'date']),
            models.Index(fields=['patient', 'date']),
        ]

    def __str__(self):
        return f"{self.receipt_number}: {self.amount} ({self.method})"
