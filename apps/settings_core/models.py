# apps/settings_core/models.py
from django.core.exceptions import ValidationError
from django.db import models

from core.constants import PermissionKey, Role
from core.mixins.audit_fields import AuditFieldsMixin
from core.mixins.tenant_fields import ClinicScopedModel


def validate_permission_keys(value):
    if not isinstance(value, list):
        raise ValidationError("Permissions must be a list.")
    unknown = sorted(set(value) - set(PermissionKey.values))
    if unknown:
        raise ValidationError(f"Unknown permission keys: {', '.join(map(str, unknown))}")


class RolePermissionConfig(ClinicScopedModel, AuditFieldsMixin):
    """
    Permission keys granted to a role inside one clinic.
    Keys come from the closed PermissionKey set.
    """
    role = models.CharField(max_length=20, choices=Role.choices)
    permissions = models.JSONField(default=list, blank=True, validators=[validate_permission_keys])

    class Meta:
        db_table = "role_permission_configs"
        ordering = ["role"]
        constraints = [
            models.UniqueConstraint(fields=["clinic", "role"], name="unique_role_config_per_clinic"),
        ]

    def __str__(self):
        return f"{self.role}: {len(self.permissions)} permissions"
