from django.db import models

from core.constants import AppointmentStatus
from core.mixins.audit_fields import AuditFieldsMixin
from core.mixins.tenant_fields import BranchScopedModel


class Appointment(BranchScopedModel, AuditFieldsMixin):
    """Chair booking at a branch"""

    patient = models.ForeignKey(
        'patients.Patient',
        on_delete=models.CASCADE,
        related_name='appointments'
    )
    doctor = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='appointments'
    )

    # Display helpers
    title = models.CharField(max_length=200, blank=True)
    phone = models.CharField(max_length=20, blank=True)

    type = models.CharField(max_length=200, help_text="Procedure, e.g. Root Canal")
    start = models.DateTimeField()
    end = models.DateTimeField()
    chair = models.PositiveIntegerField(default=1)

    status = models.CharField(max_length=20, choices=AppointmentStatus.choices, default=AppointmentStatus.SCHEDULED)
    notes = models.TextField(blank=True)

    class Meta:
        db_table = 'appointments'
        ordering = ['start']
        indexes = [
            models.Index(fields=['clinic', 'branch', 'start']),
            models.Index(fields=['doctor', 'start']),
        ]

    def __str__(self):
        return f"{self.title or self.patient_id} @ {self.start:%Y-%m-%d %H:%M}"
