from apps.accounts.models import User
from apps.audit.models import AuditLog
from apps.clinics.models import Branch
from core.constants import Role

from .factories import make_branch, make_clinic, make_patient, make_user

BRANCHES_URL = "/api/clinics/branches/"


def test_branch_codes_are_sequential_per_clinic(client_for, db):
    clinic = make_clinic("Fresh")
    owner = make_user(clinic, "owner@fresh.test", role=Role.ADMINISTRATOR)
    other_owner = make_user(make_clinic("Elsewhere"), "owner@elsewhere.test", role=Role.ADMINISTRATOR)
    client = client_for(owner)

    codes = [client.post(BRANCHES_URL, {"name": name}, format="json").data["code"] for name in ("A", "B", "C")]
    elsewhere = client_for(other_owner).post(BRANCHES_URL, {"name": "X"}, format="json").data["code"]

    assert codes == ["BID-001", "BID-002", "BID-003"]
    assert elsewhere == "BID-001"


def test_first_branch_becomes_creator_default(client_for, db):
    clinic = make_clinic("Fresh")
    owner = make_user(clinic, "owner@fresh.test", role=Role.ADMINISTRATOR)

    response = client_for(owner).post(BRANCHES_URL, {"name": "Main"}, format="json")

    assert response.status_code == 201
    owner.refresh_from_db()
    assert owner.default_branch_id == response.data["id"]
    assert owner.allowed_branches.filter(pk=response.data["id"]).exists()


def test_client_supplied_code_and_clinic_are_ignored(client_for, admin, clinic, other_clinic):
    response = client_for(admin).post(
        BRANCHES_URL,
        {"name": "Uptown", "code": "BID-999", "clinic": other_clinic.pk},
        format="json",
    )

    assert response.status_code == 201
    created = Branch.objects.get(pk=response.data["id"])
    assert created.clinic_id == clinic.pk
    assert created.code == "BID-003"


def test_staff_can_list_but_not_create(client_for, receptionist, branch, second_branch, other_branch):
    client = client_for(receptionist)

    listed = client.get(BRANCHES_URL)
    created = client.post(BRANCHES_URL, {"name": "Nope"}, format="json")

    assert {row["id"] for row in listed.data} == {branch.pk, second_branch.pk}
    assert created.status_code == 403


def test_other_clinics_branch_is_not_found(client_for, admin, other_branch):
    response = client_for(admin).get(f"{BRANCHES_URL}{other_branch.pk}/")

    assert response.status_code == 404


def test_update_can_not_change_code(client_for, admin, branch):
    response = client_for(admin).patch(
        f"{BRANCHES_URL}{branch.pk}/",
        {"name": "Main Street", "code": "BID-777"},
        format="json",
    )

    assert response.status_code == 200
    branch.refresh_from_db()
    assert branch.name == "Main Street"
    assert branch.code == "BID-001"


def test_last_branch_can_not_be_deleted(client_for, db):
    clinic = make_clinic("Solo")
    only = make_branch(clinic)
    owner = make_user(clinic, "owner@solo.test", role=Role.ADMINISTRATOR)

    response = client_for(owner).delete(f"{BRANCHES_URL}{only.pk}/")

    assert response.status_code == 400
    assert Branch.objects.filter(pk=only.pk).exists()


def test_delete_detaches_branch_from_users(client_for, admin, clinic, branch, second_branch):
    staff = make_user(clinic, "two@smile.test", default_branch=second_branch, allowed=[branch])
    assert set(staff.allowed_branches.values_list("pk", flat=True)) == {branch.pk, second_branch.pk}

    response = client_for(admin).delete(f"{BRANCHES_URL}{second_branch.pk}/")

    assert response.status_code == 204
    assert not Branch.objects.filter(pk=second_branch.pk).exists()

    staff = User.objects.get(pk=staff.pk)
    assert staff.default_branch_id is None
    assert list(staff.allowed_branches.values_list("pk", flat=True)) == [branch.pk]
    assert AuditLog.objects.filter(clinic=clinic, action="DELETE", entity="Branch").exists()


def test_delete_from_within_the_branch_itself(client_for, admin, clinic, branch, second_branch):
    response = client_for(admin, second_branch).delete(f"{BRANCHES_URL}{second_branch.pk}/")

    assert response.status_code == 204
    entry = AuditLog.objects.get(clinic=clinic, action="DELETE", entity="Branch")
    assert entry.branch_id is None


def test_branch_with_records_is_kept(client_for, admin, branch, second_branch):
    make_patient(second_branch)

    response = client_for(admin).delete(f"{BRANCHES_URL}{second_branch.pk}/")

    assert response.status_code == 409
    assert Branch.objects.filter(pk=second_branch.pk).exists()


def test_clinic_profile(client_for, admin, doctor, clinic):
    read = client_for(doctor).get("/api/settings/clinic/")
    denied = client_for(doctor).put("/api/settings/clinic/", {"name": "Mine now"}, format="json")
    updated = client_for(admin).patch("/api/settings/clinic/", {"name": "Smile Dental Care", "code": "CL-1"}, format="json")

    assert read.data["code"] == clinic.code
    assert denied.status_code == 403
    assert updated.status_code == 200
    clinic.refresh_from_db()
    assert clinic.name == "Smile Dental Care"
    assert clinic.code != "CL-1"
