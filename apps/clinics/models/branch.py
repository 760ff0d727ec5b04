# apps/clinics/models/branch.py
from django.db import models

from core.mixins.audit_fields import AuditFieldsMixin
from core.tenancy import TenantManager


class Branch(AuditFieldsMixin, models.Model):
    """
    Physical clinic location. Codes are unique per clinic (BID-001...).
    """
    branch_scoped = False

    clinic = models.ForeignKey(
        "clinics.Clinic",
        on_delete=models.PROTECT,
        related_name="branches",
        editable=False,
    )

    name = models.CharField(max_length=200)
    code = models.CharField(max_length=20, editable=False)

    address = models.TextField(blank=True)
    phone = models.CharField(max_length=20, blank=True)
    chair_count = models.PositiveIntegerField(default=1)

    is_active = models.BooleanField(default=True)

    objects = TenantManager()

    class Meta:
        db_table = "branches"
        verbose_name_plural = "Branches"
        ordering = ["code"]
        constraints = [
            models.UniqueConstraint(
                fields=["clinic", "code"],
                name="unique_branch_code_per_clinic",
            )
        ]
        indexes = [
            models.Index(fields=["clinic", "is_active"]),
        ]

    def __str__(self):
        return f"{self.name} ({self.code})"
