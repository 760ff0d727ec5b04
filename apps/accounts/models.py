# apps/accounts/models.py

from django.db import models
from django.contrib.auth.models import (
    AbstractBaseUser,
    PermissionsMixin,
    BaseUserManager
)

from core.constants import Role, UserStatus
from core.mixins.audit_fields import AuditFieldsMixin
from core.tenancy import TenantQuerySet


class UserManager(BaseUserManager.from_queryset(TenantQuerySet)):
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Email is required")

        has_clinic = extra_fields.get("clinic") or extra_fields.get("clinic_id")
        if not has_clinic and not extra_fields.get("is_superuser"):
            raise ValueError("Clinic is required for staff users")

        email = self.normalize_email(email)
        default_branch = extra_fields.get("default_branch")

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)

        if default_branch is not None:
            user.allowed_branches.add(default_branch)
        return user

    def create_superuser(self, email, password, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("status", UserStatus.ACTIVE)

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin, AuditFieldsMixin):
    """
    Staff member of exactly one clinic.

    Only platform superusers may exist without a clinic; they are not
    tenant members and can not resolve a request context.
    """
    branch_scoped = False

    clinic = models.ForeignKey(
        "clinics.Clinic",
        on_delete=models.PROTECT,
        related_name="users",
        null=True,
        blank=True,
    )

    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=150)
    phone = models.CharField(max_length=20, blank=True)

    role = models.CharField(max_length=20, choices=Role.choices, default=Role.DOCTOR)
    status = models.CharField(max_length=10, choices=UserStatus.choices, default=UserStatus.PENDING)
    must_change_password = models.BooleanField(default=False)

    # Branch access
    default_branch = models.ForeignKey(
        "clinics.Branch",
        on_delete=models.SET_NULL,
        related_name="+",
        null=True,
        blank=True,
    )
    allowed_branches = models.ManyToManyField(
        "clinics.Branch",
        related_name="staff",
        blank=True,
    )

    # Doctors only
    commission_percentage = models.DecimalField(max_digits=5, decimal_places=2, default=0)

    is_staff = models.BooleanField(default=False)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["full_name"]

    class Meta:
        db_table = "users"
        ordering = ["full_name"]
        indexes = [
            models.Index(fields=["clinic", "role"]),
        ]

    def __str__(self):
        return self.email

    @property
    def is_active(self):
        return self.status != UserStatus.INACTIVE

    @property
    def is_administrator(self):
        return self.role == Role.ADMINISTRATOR

    def set_default_branch(self, branch):
        """Default branch is always part of the allowed set."""
        self.default_branch = branch
        self.save(update_fields=["default_branch", "updated_at"])
        if branch is not None:
            self.allowed_branches.add(branch)
