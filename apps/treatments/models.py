from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.mixins.audit_fields import AuditFieldsMixin
from core.mixins.tenant_fields import ClinicScopedModel


class Procedure(ClinicScopedModel, AuditFieldsMixin):
    """Billable procedure of the clinic's catalog (RCT-01, SCL-01...)."""

    code = models.CharField(max_length=30)
    name = models.CharField(max_length=200)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    # Doctor commission (0-100%)
    commission = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0'),
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'procedures'
        ordering = ['code']
        constraints = [
            models.UniqueConstraint(fields=['clinic', 'code'], name='unique_procedure_code_per_clinic'),
        ]

    def __str__(self):
        return f"{self.code} - {self.name}"
