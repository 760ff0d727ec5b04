import pytest
from django.core.exceptions import PermissionDenied

from apps.accounts.models import User
from apps.audit.models import AuditLog
from core.constants import PermissionKey, Role, UserStatus

from .factories import make_patient

USERS_URL = "/api/accounts/users/"
ROLES_URL = "/api/settings/roles/"
AUDIT_URL = "/api/audit/logs/"


# =========================
# Staff management
# =========================

def test_admin_creates_pending_staff(client_for, admin, clinic, branch):
    response = client_for(admin).post(
        USERS_URL,
        {"email": "hygienist@smile.test", "full_name": "Hygienist", "role": Role.NURSE, "default_branch": branch.pk},
        format="json",
    )

    assert response.status_code == 201
    user = User.objects.get(email="hygienist@smile.test")
    assert user.clinic_id == clinic.pk
    assert user.status == UserStatus.PENDING
    assert user.must_change_password
    assert list(user.allowed_branches.values_list("pk", flat=True)) == [branch.pk]


def test_duplicate_email_conflicts(client_for, admin, doctor):
    response = client_for(admin).post(
        USERS_URL,
        {"email": doctor.email, "full_name": "Copy", "role": Role.DOCTOR},
        format="json",
    )

    assert response.status_code == 409


def test_branches_of_other_clinic_are_rejected(client_for, admin, other_branch):
    response = client_for(admin).post(
        USERS_URL,
        {"email": "x@smile.test", "full_name": "X", "allowed_branches": [other_branch.pk]},
        format="json",
    )

    assert response.status_code == 400
    assert "allowed_branches" in response.data["detail"]


def test_default_branch_is_added_to_allowed_on_update(client_for, admin, doctor, second_branch):
    response = client_for(admin).patch(
        f"{USERS_URL}{doctor.pk}/",
        {"default_branch": second_branch.pk},
        format="json",
    )

    assert response.status_code == 200
    assert second_branch.pk in response.data["allowed_branches"]


def test_staff_list_is_clinic_scoped(client_for, admin, doctor, other_admin):
    response = client_for(admin).get(USERS_URL)

    emails = {row["email"] for row in response.data}
    assert doctor.email in emails
    assert other_admin.email not in emails


def test_user_of_other_clinic_is_not_found(client_for, admin, other_admin):
    assert client_for(admin).get(f"{USERS_URL}{other_admin.pk}/").status_code == 404


def test_staff_can_not_manage_users(client_for, doctor):
    assert client_for(doctor).get(USERS_URL).status_code == 403


def test_me_is_available_to_staff(client_for, doctor, branch):
    response = client_for(doctor).get(f"{USERS_URL}me/")

    assert response.status_code == 200
    assert response.data["user"]["email"] == doctor.email
    assert response.data["default_branch"]["id"] == branch.pk


def test_admin_can_not_delete_self(client_for, admin):
    response = client_for(admin).delete(f"{USERS_URL}{admin.pk}/")

    assert response.status_code == 400
    assert User.objects.filter(pk=admin.pk).exists()


# =========================
# Role permissions
# =========================

def test_permission_map_lists_every_role(client_for, doctor):
    response = client_for(doctor).get(ROLES_URL)

    assert response.status_code == 200
    assert set(response.data["permissions"]) == set(Role.values)
    assert {entry["key"] for entry in response.data["available"]} == set(PermissionKey.values)


def test_only_admin_changes_permissions(client_for, doctor):
    response = client_for(doctor).put(ROLES_URL, {Role.DOCTOR: [PermissionKey.PT_DELETE]}, format="json")

    assert response.status_code == 403


def test_unknown_permission_key_is_rejected(client_for, admin):
    response = client_for(admin).put(ROLES_URL, {Role.DOCTOR: ["launch_rockets"]}, format="json")

    assert response.status_code == 400


def test_granted_permission_takes_effect(client_for, admin, doctor, clinic, branch):
    patient = make_patient(branch)

    updated = client_for(admin).put(
        ROLES_URL,
        {Role.DOCTOR: [PermissionKey.PT_DELETE, PermissionKey.OPS_CALENDAR]},
        format="json",
    )
    deleted = client_for(doctor).delete(f"/api/patients/{patient.pk}/")

    assert updated.status_code == 200
    assert PermissionKey.PT_DELETE in updated.data["permissions"][Role.DOCTOR]
    assert deleted.status_code == 204
    assert AuditLog.objects.filter(clinic=clinic, action="PERMISSIONS_UPDATE").exists()


# =========================
# Audit log
# =========================

def test_audit_log_is_admin_only_and_clinic_scoped(client_for, admin, doctor, other_admin, clinic):
    client_for(other_admin).post("/api/clinics/branches/", {"name": "Theirs"}, format="json")
    client_for(admin).post("/api/clinics/branches/", {"name": "Ours"}, format="json")

    listed = client_for(admin).get(AUDIT_URL)
    denied = client_for(doctor).get(AUDIT_URL)

    assert listed.status_code == 200
    assert denied.status_code == 403
    assert {entry["id"] for entry in listed.data} == set(
        AuditLog.objects.filter(clinic=clinic).values_list("id", flat=True)
    )
    assert [entry["entity"] for entry in listed.data] == ["Branch"]


def test_audit_log_filters(client_for, admin, branch):
    client = client_for(admin)
    client.post("/api/clinics/branches/", {"name": "Ours"}, format="json")
    client.patch(f"/api/clinics/branches/{branch.pk}/", {"name": "Renamed"}, format="json")

    response = client.get(AUDIT_URL, {"action": "UPDATE"})

    assert [entry["entity_id"] for entry in response.data] == [str(branch.pk)]


def test_audit_entries_are_immutable(client_for, admin):
    client_for(admin).post("/api/clinics/branches/", {"name": "Ours"}, format="json")
    entry = AuditLog.objects.get()

    entry.details = "tampered"
    with pytest.raises(PermissionDenied):
        entry.save()
    with pytest.raises(PermissionDenied):
        entry.delete()
