# apps/billing/models.py
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from core.constants import ExpenseCategory, InvoiceStatus, PaymentMethod
from core.mixins.audit_fields import AuditFieldsMixin
from core.mixins.tenant_fields import BranchScopedModel


class Invoice(BranchScopedModel, AuditFieldsMixin):
    """Bill for a patient's treatments; number is unique per clinic (INV-00001...)."""

    patient = models.ForeignKey('patients.Patient', on_delete=models.PROTECT, related_name='invoices')
    # Primary doctor, used for commission reports
    doctor = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='invoices',
    )

    invoice_number = models.CharField(max_length=20, editable=False)

    # Financials
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    final_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    # Only changed through atomic increments when payments are recorded
    paid_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'), editable=False)

    status = models.CharField(max_length=20, choices=InvoiceStatus.choices, default=InvoiceStatus.UNPAID)
    due_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True)

    class Meta:
        db_table = 'invoices'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['clinic', 'invoice_number'], name='unique_invoice_number_per_clinic'),
        ]
        indexes = [
            models.Index(fields=['clinic', 'branch', 'status']),
        ]

    def __str__(self):
        return f"{self.invoice_number} - {self.final_amount}"

    @property
    def balance(self):
        return self.final_amount - self.paid_amount


class InvoiceItem(models.Model):
    invoice = models.ForeignKey(Invoice, on_delete=models.CASCADE, related_name='items')
    treatment = models.ForeignKey(
        'patients.TreatmentItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='invoice_items',
    )

    procedure_name = models.CharField(max_length=200)
    cost = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    # Snapshot so later commission changes do not rewrite history
    doctor_commission_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0'))

    class Meta:
        db_table = 'invoice_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.procedure_name} ({self.cost})"


class Expense(BranchScopedModel, AuditFieldsMixin):
    title = models.CharField(max_length=200)
    category = models.CharField(max_length=20, choices=ExpenseCategory.choices)
    amount = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.BANK_TRANSFER,
    )
    vendor = models.CharField(max_length=200, blank=True)
    date = models.DateField()
    notes = models.TextField(blank=True)

    class Meta:
        db_table = 'expenses'
        ordering = ['-date', '-id']
        indexes = [
            models.Index(fields=['clinic', 'branch', 'date']),
        ]

    def __str__(self):
        return f"{self.title}: {self.amount}"
