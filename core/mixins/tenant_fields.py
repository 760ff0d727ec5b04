# core/mixins/tenant_fields.py
from django.db import models

from core.tenancy import TenantManager


class ClinicScopedModel(models.Model):
    """Owned by a clinic; visible from every branch of it"""
    branch_scoped = False

    clinic = models.ForeignKey(
        'clinics.Clinic',
        on_delete=models.PROTECT,
        related_name='+',
        editable=False,
    )

    objects = TenantManager()

    class Meta:
        abstract = True


class BranchScopedModel(ClinicScopedModel):
    """Owned by a clinic branch; bound to it for life"""
    branch_scoped = True

    branch = models.ForeignKey(
        'clinics.Branch',
        on_delete=models.PROTECT,
        related_name='+',
        editable=False,
    )

    class Meta:
        abstract = True
