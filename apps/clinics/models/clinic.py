# apps/clinics/models/clinic.py
from django.db import models
from core.mixins.audit_fields import AuditFieldsMixin


class Clinic(AuditFieldsMixin, models.Model):
    """
    Top-level tenant (a dental practice organization).
    Created once at registration, never deleted through the API.
    """

    code = models.CharField(max_length=20, unique=True, editable=False)

    # Legal details
    name = models.CharField(max_length=255)
    legal_name = models.CharField(max_length=255, blank=True)
    registration_number = models.CharField(max_length=100, blank=True)
    gstin = models.CharField(max_length=20, blank=True)

    # Contact
    phone = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)
    website = models.CharField(max_length=255, blank=True)

    # Location
    address = models.TextField(blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    zip_code = models.CharField(max_length=20, blank=True)

    # Branding
    logo = models.CharField(max_length=500, blank=True)
    primary_color = models.CharField(max_length=20, default='#0f172a')

    class Meta:
        db_table = "clinics"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.code})"
