# apps/prescriptions/models.py
from django.db import models

from core.mixins.audit_fields import AuditFieldsMixin
from core.mixins.tenant_fields import BranchScopedModel, ClinicScopedModel


class Drug(ClinicScopedModel, AuditFieldsMixin):
    """Clinic drug catalog with prescribing defaults."""

    name = models.CharField(max_length=200, help_text="e.g. Augmentin 625")
    type = models.CharField(max_length=50, default='Tablet')
    generic_name = models.CharField(max_length=200, blank=True)
    default_dosage = models.CharField(max_length=50, blank=True, help_text="e.g. 1-0-1")
    default_duration = models.CharField(max_length=50, blank=True, help_text="e.g. 5 Days")
    instruction = models.CharField(max_length=200, blank=True, help_text="e.g. After Food")

    class Meta:
        db_table = 'drugs'
        ordering = ['name']

    def __str__(self):
        return self.name


class Prescription(BranchScopedModel, AuditFieldsMixin):
    patient = models.ForeignKey('patients.Patient', on_delete=models.CASCADE, related_name='prescriptions')
    doctor = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='prescriptions')
    appointment = models.ForeignKey(
        'appointments.Appointment',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='prescriptions',
    )

    # [{drug_name, dosage, duration, instruction, type}, ...]
    medications = models.JSONField(default=list)
    notes = models.TextField(blank=True)
    date = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'prescriptions'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"Prescription {self.pk} for {self.patient_id}"

    @property
    def total_medicines(self):
        return len(self.medications)
