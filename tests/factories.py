from apps.accounts.models import User
from apps.clinics.models import Branch, Clinic
from apps.clinics.services.branch_service import next_branch_code, next_clinic_code
from apps.patients.models import Patient
from apps.patients.services import next_patient_code
from apps.settings_core.services import ensure_default_permissions
from core.constants import Role, UserStatus

PASSWORD = "secret-pass-1"


def make_clinic(name="Smile Dental"):
    clinic = Clinic.objects.create(code=next_clinic_code(), name=name)
    ensure_default_permissions(clinic.pk)
    return clinic


def make_branch(clinic, name="Main"):
    return Branch.objects.create(clinic=clinic, code=next_branch_code(clinic.pk), name=name)


def make_user(clinic, email, role=Role.DOCTOR, default_branch=None, allowed=(), **extra):
    extra.setdefault("full_name", email.split("@")[0].title())
    extra.setdefault("status", UserStatus.ACTIVE)
    user = User.objects.create_user(
        email=email,
        password=PASSWORD,
        clinic=clinic,
        role=role,
        default_branch=default_branch,
        **extra,
    )
    if allowed:
        user.allowed_branches.add(*allowed)
    return user


def make_patient(branch, name="Asha Rao", **extra):
    return Patient.objects.create(
        clinic_id=branch.clinic_id,
        branch=branch,
        code=next_patient_code(branch.clinic_id),
        full_name=name,
        mobile="9000000000",
        **extra,
    )
