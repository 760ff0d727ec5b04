# apps/accounts/services.py

import logging

from django.db import transaction
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.clinics.models import Clinic
from apps.clinics.services.branch_service import next_clinic_code
from apps.settings_core.services import ensure_default_permissions
from core.constants import Role, UserStatus

logger = logging.getLogger(__name__)


def issue_tokens(user):
    refresh = RefreshToken.for_user(user)
    return {
        "refresh": str(refresh),
        "access": str(refresh.access_token),
    }


@transaction.atomic
def register_clinic(*, clinic_name, full_name, email, password, phone=""):
    """
    Sign-up: new clinic, its default permission map and its first
    Administrator. The administrator starts without any branch and
    operates clinic-wide until one is created.
    """
    clinic = Clinic.objects.create(code=next_clinic_code(), name=clinic_name, phone=phone)
    ensure_default_permissions(clinic.pk)

    admin = User.objects.create_user(
        email=email,
        password=password,
        full_name=full_name,
        clinic=clinic,
        role=Role.ADMINISTRATOR,
        status=UserStatus.ACTIVE,
    )
    Clinic.objects.filter(pk=clinic.pk).update(created_by=admin)

    logger.info(f"Clinic {clinic.code} registered by {admin.email}")
    return clinic, admin
