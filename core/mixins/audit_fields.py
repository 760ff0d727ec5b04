# core/mixins/audit_fields.py
from django.db import models


class AuditFieldsMixin(models.Model):
    """
    Row bookkeeping: timestamps plus the staff member who created and
    last changed the row. Accounts may be deleted, the rows stay.
    """
    created_at = models.DateTimeField(auto_now_add=True, editable=False)
    updated_at = models.DateTimeField(auto_now=True, editable=False)

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        editable=False,
        related_name='+',
    )
    updated_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        editable=False,
        related_name='+',
    )

    class Meta:
        abstract = True
