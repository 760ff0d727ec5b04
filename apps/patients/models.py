# apps/patients/models.py
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.constants import Gender, NoteType, TreatmentStatus
from core.mixins.audit_fields import AuditFieldsMixin
from core.mixins.tenant_fields import BranchScopedModel


class Patient(BranchScopedModel, AuditFieldsMixin):
    """Patient registered at a branch. Code is unique per clinic (PID-1001...)."""

    BLOOD_GROUP_CHOICES = [
        (group, group) for group in ('A+', 'A-', 'B+', 'B-', 'O+', 'O-', 'AB+', 'AB-', 'Unknown')
    ]
    COMMUNICATION_CHOICES = [('WhatsApp', 'WhatsApp'), ('SMS', 'SMS'), ('Email', 'Email')]

    code = models.CharField(max_length=20, editable=False)

    # Identity
    full_name = models.CharField(max_length=150, db_index=True)
    mobile = models.CharField(max_length=20, db_index=True)
    email = models.EmailField(blank=True)
    age = models.PositiveIntegerField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=Gender.choices, default=Gender.MALE)
    blood_group = models.CharField(max_length=10, choices=BLOOD_GROUP_CHOICES, blank=True)
    address = models.TextField(blank=True)

    # Emergency contact
    emergency_contact = models.CharField(max_length=20, blank=True)
    emergency_relation = models.CharField(max_length=50, blank=True)

    # Clinic info
    assigned_doctor = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_patients',
    )
    referred_by = models.CharField(max_length=50, blank=True)
    communication = models.CharField(max_length=10, choices=COMMUNICATION_CHOICES, default='WhatsApp')

    # Clinical
    primary_concern = models.TextField(blank=True)
    pain_level = models.PositiveSmallIntegerField(
        default=0, validators=[MinValueValidator(0), MaxValueValidator(10)]
    )
    medical_conditions = models.JSONField(default=list, blank=True)
    allergies = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    last_visit = models.DateTimeField(null=True, blank=True)

    # Attachments (opaque URLs)
    photo = models.CharField(max_length=500, blank=True)
    xrays = models.JSONField(default=list, blank=True)

    is_active = models.BooleanField(default=True)

    # Financials, only changed through atomic increments
    total_cost = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'), editable=False)
    total_paid = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'), editable=False)

    class Meta:
        db_table = 'patients'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['clinic', 'code'], name='unique_patient_code_per_clinic'),
        ]
        indexes = [
            models.Index(fields=['clinic', 'branch', 'is_active']),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.code})"

    @property
    def wallet_balance(self):
        return self.total_cost - self.total_paid


class TreatmentItem(AuditFieldsMixin, models.Model):
    """Line of a patient's treatment plan; scoped through its patient."""

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='treatment_items')
    doctor = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='treatment_items',
    )

    tooth = models.CharField(max_length=20, blank=True)
    procedure = models.CharField(max_length=200)
    cost = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    status = models.CharField(max_length=20, choices=TreatmentStatus.choices, default=TreatmentStatus.PROPOSED)
    date = models.DateTimeField(auto_now_add=True)
    is_billed = models.BooleanField(default=False)

    class Meta:
        db_table = 'treatment_items'
        ordering = ['date', 'id']

    def __str__(self):
        return f"{self.procedure} [{self.status}]"


class ClinicalNote(BranchScopedModel, AuditFieldsMixin):
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='clinical_notes')
    doctor = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='clinical_notes',
        editable=False,
    )
    doctor_name = models.CharField(max_length=150, blank=True, editable=False)

    visit_date = models.DateTimeField(null=True, blank=True)
    type = models.CharField(max_length=20, choices=NoteType.choices, default=NoteType.CONSULTATION)
    content = models.TextField()
    tags = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = 'clinical_notes'
        ordering = ['-visit_date', '-id']

    def __str__(self):
        return f"{self.type} note for {self.patient_id}"
