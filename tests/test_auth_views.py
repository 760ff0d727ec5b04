from django.conf import settings

from apps.accounts.models import User
from apps.audit.models import AuditLog
from apps.settings_core.models import RolePermissionConfig
from core.constants import Role, UserStatus

from .factories import PASSWORD, make_user

REGISTER_URL = "/api/auth/register/"
LOGIN_URL = "/api/auth/login/"
PASSWORD_URL = "/api/auth/password/"


def register(api_client, email="owner@new.test"):
    return api_client.post(
        REGISTER_URL,
        {
            "clinic_name": "New Clinic",
            "full_name": "Owner",
            "email": email,
            "password": "long-enough-1",
        },
        format="json",
    )


# =========================
# Registration
# =========================

def test_register_creates_clinic_and_administrator(api_client, db):
    response = register(api_client)

    assert response.status_code == 201
    assert response.data["clinic"]["code"].startswith("CL-")
    assert response.data["default_branch"] is None
    assert response.data["access"] and response.data["refresh"]

    owner = User.objects.get(email="owner@new.test")
    assert owner.role == Role.ADMINISTRATOR
    assert owner.status == UserStatus.ACTIVE
    assert owner.clinic.created_by_id == owner.pk
    assert RolePermissionConfig.objects.filter(clinic=owner.clinic).count() == len(Role)
    assert AuditLog.objects.filter(clinic=owner.clinic, action="REGISTER").exists()


def test_clinic_codes_are_sequential(api_client, db):
    first = register(api_client, "one@new.test").data["clinic"]["code"]
    second = register(api_client, "two@new.test").data["clinic"]["code"]

    assert int(second.split("-")[1]) == int(first.split("-")[1]) + 1


def test_register_with_taken_email_conflicts(api_client, doctor):
    response = register(api_client, doctor.email)

    assert response.status_code == 409
    assert response.data["error"] == "conflict"


def test_registered_admin_operates_clinic_wide(api_client, db):
    token = register(api_client).data["access"]
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

    response = api_client.get("/api/clinics/branches/")

    assert response.status_code == 200
    assert response.data == []


# =========================
# Login
# =========================

def test_staff_login_requires_clinic_code(api_client, doctor):
    response = api_client.post(LOGIN_URL, {"email": doctor.email, "password": PASSWORD}, format="json")

    assert response.status_code == 400


def test_staff_login_with_wrong_clinic_code(api_client, doctor, other_clinic):
    response = api_client.post(
        LOGIN_URL,
        {"email": doctor.email, "password": PASSWORD, "clinic_code": other_clinic.code},
        format="json",
    )

    assert response.status_code == 401


def test_staff_login_returns_session(api_client, doctor, clinic, branch):
    response = api_client.post(
        LOGIN_URL,
        {"email": doctor.email, "password": PASSWORD, "clinic_code": clinic.code},
        format="json",
    )

    assert response.status_code == 200
    assert response.data["require_password_change"] is False
    assert response.data["clinic"]["code"] == clinic.code
    assert response.data["default_branch"]["code"] == branch.code
    assert [b["id"] for b in response.data["allowed_branches"]] == [branch.pk]
    assert AuditLog.objects.filter(clinic=clinic, action="LOGIN", entity_id=str(doctor.pk)).exists()


def test_admin_login_without_clinic_code(api_client, admin):
    response = api_client.post(LOGIN_URL, {"email": admin.email, "password": PASSWORD}, format="json")

    assert response.status_code == 200
    assert response.data["user"]["role"] == Role.ADMINISTRATOR


def test_wrong_password(api_client, admin):
    response = api_client.post(LOGIN_URL, {"email": admin.email, "password": "nope"}, format="json")

    assert response.status_code == 401


def test_new_staff_must_change_password(api_client, client_for, admin, clinic, branch):
    created = client_for(admin).post(
        "/api/accounts/users/",
        {"email": "new@smile.test", "full_name": "New Hire", "role": Role.RECEPTIONIST, "default_branch": branch.pk},
        format="json",
    )
    assert created.status_code == 201

    response = api_client.post(
        LOGIN_URL,
        {"email": "new@smile.test", "password": settings.DEFAULT_STAFF_PASSWORD, "clinic_code": clinic.code},
        format="json",
    )

    assert response.status_code == 200
    assert response.data["require_password_change"] is True
    assert "clinic" not in response.data


# =========================
# Password change
# =========================

def test_change_password_with_wrong_old_password(client_for, doctor):
    response = client_for(doctor).put(
        PASSWORD_URL,
        {"old_password": "wrong", "new_password": "brand-new-pass"},
        format="json",
    )

    assert response.status_code == 401


def test_change_password_activates_account(client_for, clinic, branch):
    pending = make_user(clinic, "pending@smile.test", default_branch=branch, status=UserStatus.PENDING)
    User.objects.filter(pk=pending.pk).update(must_change_password=True)

    response = client_for(pending).put(
        PASSWORD_URL,
        {"old_password": PASSWORD, "new_password": "brand-new-pass"},
        format="json",
    )

    assert response.status_code == 200
    assert response.data["access"]

    pending.refresh_from_db()
    assert pending.status == UserStatus.ACTIVE
    assert not pending.must_change_password
    assert pending.check_password("brand-new-pass")


def test_change_password_rejects_short_password(client_for, doctor):
    response = client_for(doctor).put(
        PASSWORD_URL,
        {"old_password": PASSWORD, "new_password": "short"},
        format="json",
    )

    assert response.status_code == 400
