import pytest
from rest_framework.test import APIClient

from apps.accounts.services import issue_tokens
from core.constants import Role

from .factories import make_branch, make_clinic, make_user


# =========================
# Tenants
# =========================

@pytest.fixture
def clinic(db):
    return make_clinic()


@pytest.fixture
def branch(clinic):
    return make_branch(clinic, "Main")


@pytest.fixture
def second_branch(clinic):
    return make_branch(clinic, "Downtown")


@pytest.fixture
def other_clinic(db):
    return make_clinic("Bright Teeth")


@pytest.fixture
def other_branch(other_clinic):
    return make_branch(other_clinic, "Harbour")


# =========================
# Principals
# =========================

@pytest.fixture
def admin(clinic, branch, second_branch):
    """Administrator without a default branch: clinic-wide unless a branch is requested."""
    return make_user(clinic, "admin@smile.test", role=Role.ADMINISTRATOR)


@pytest.fixture
def doctor(clinic, branch):
    return make_user(clinic, "doctor@smile.test", role=Role.DOCTOR, default_branch=branch)


@pytest.fixture
def receptionist(clinic, branch, second_branch):
    return make_user(clinic, "front@smile.test", role=Role.RECEPTIONIST, default_branch=branch)


@pytest.fixture
def other_admin(other_clinic, other_branch):
    return make_user(other_clinic, "admin@bright.test", role=Role.ADMINISTRATOR, default_branch=other_branch)


# =========================
# Clients
# =========================

@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for(db):
    """APIClient carrying a bearer token for ``user`` and an optional branch header."""
    def _client(user, branch=None):
        client = APIClient()
        credentials = {"HTTP_AUTHORIZATION": f"Bearer {issue_tokens(user)['access']}"}
        if branch is not None:
            credentials["HTTP_X_BRANCH_ID"] = str(branch.pk)
        client.credentials(**credentials)
        return client
    return _client
