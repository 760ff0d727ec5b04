from apps.accounts.models import User
from apps.accounts.services import issue_tokens
from core.constants import UserStatus

PATIENTS_URL = "/api/patients/"


def test_missing_credential_is_unauthenticated(api_client, doctor):
    response = api_client.get(PATIENTS_URL)

    assert response.status_code == 401
    assert response.data["error"] == "unauthenticated"


def test_malformed_token_is_unauthenticated(api_client, doctor):
    api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")

    response = api_client.get(PATIENTS_URL)

    assert response.status_code == 401


def test_token_of_deleted_user_is_rejected(client_for, doctor):
    client = client_for(doctor)
    User.objects.filter(pk=doctor.pk).delete()

    response = client.get(PATIENTS_URL)

    assert response.status_code == 401


def test_token_of_deactivated_user_is_rejected(client_for, doctor):
    client = client_for(doctor)
    User.objects.filter(pk=doctor.pk).update(status=UserStatus.INACTIVE)

    response = client.get(PATIENTS_URL)

    assert response.status_code == 401


def test_valid_token_with_default_branch(client_for, doctor):
    response = client_for(doctor).get(PATIENTS_URL)

    assert response.status_code == 200


def test_branch_outside_allowed_set_is_forbidden(client_for, receptionist, second_branch):
    response = client_for(receptionist, second_branch).get(PATIENTS_URL)

    assert response.status_code == 403
    assert response.data["error"] == "forbidden"


def test_branch_of_other_clinic_is_forbidden_for_admin(client_for, admin, other_branch):
    response = client_for(admin, other_branch).get(PATIENTS_URL)

    assert response.status_code == 403


def test_malformed_branch_header_is_bad_request(api_client, doctor):
    api_client.credentials(
        HTTP_AUTHORIZATION=f"Bearer {issue_tokens(doctor)['access']}",
        HTTP_X_BRANCH_ID="downtown",
    )

    response = api_client.get(PATIENTS_URL)

    assert response.status_code == 400


def test_admin_without_branch_can_list_branches_clinic_wide(client_for, admin, branch, second_branch):
    response = client_for(admin).get("/api/clinics/branches/")

    assert response.status_code == 200
    assert {row["id"] for row in response.data} == {branch.pk, second_branch.pk}


def test_admin_without_branch_can_not_create_branch_records(client_for, admin):
    response = client_for(admin).post(PATIENTS_URL, {"full_name": "Ravi", "mobile": "98"}, format="json")

    assert response.status_code == 400
    assert response.data["error"] == "bad_request"
