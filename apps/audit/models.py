# apps/audit/models.py
from django.core.exceptions import PermissionDenied
from django.db import models

from core.mixins.tenant_fields import ClinicScopedModel


class AuditLog(ClinicScopedModel):
    """
    Append-only record of privileged operations inside a clinic.
    """
    branch = models.ForeignKey(
        "clinics.Branch",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    user = models.ForeignKey("accounts.User", on_delete=models.SET_NULL, null=True, related_name="+")
    user_name = models.CharField(max_length=150, blank=True)

    action = models.CharField(max_length=50, db_index=True)
    entity = models.CharField(max_length=50)
    entity_id = models.CharField(max_length=64, blank=True)
    details = models.TextField(blank=True)

    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "audit_logs"
        verbose_name = "Audit Log"
        verbose_name_plural = "Audit Logs"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["clinic", "created_at"]),
            models.Index(fields=["entity", "entity_id"]),
        ]

    def __str__(self):
        return f"{self.id} | {self.action} | {self.entity}:{self.entity_id}"

    # ============================
    # IMMUTABILITY ENFORCEMENT
    # ============================

    def save(self, *args, **kwargs):
        if self.pk:
            raise PermissionDenied("AuditLog is immutable (update forbidden)")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise PermissionDenied("AuditLog cannot be deleted")
