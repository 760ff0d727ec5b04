from datetime import timedelta

import pytest
from django.utils import timezone

from apps.appointments.models import Appointment
from apps.prescriptions.models import Prescription
from core.constants import AppointmentStatus

from .factories import make_patient


@pytest.fixture
def patient(branch):
    return make_patient(branch, "Kiran")


def slot(minutes=30):
    start = timezone.now().replace(microsecond=0) + timedelta(hours=1)
    return start.isoformat(), (start + timedelta(minutes=minutes)).isoformat()


# =========================
# Appointments
# =========================

def test_booking_copies_patient_details(client_for, receptionist, doctor, branch, patient):
    start, end = slot()

    response = client_for(receptionist).post(
        "/api/appointments/",
        {"patient": patient.pk, "doctor": doctor.pk, "type": "Root Canal", "start": start, "end": end},
        format="json",
    )

    assert response.status_code == 201
    appointment = Appointment.objects.get(pk=response.data["id"])
    assert appointment.branch_id == branch.pk
    assert appointment.title == "Kiran"
    assert appointment.status == AppointmentStatus.SCHEDULED


def test_booking_must_end_after_start(client_for, receptionist, doctor, patient):
    start, _ = slot()

    response = client_for(receptionist).post(
        "/api/appointments/",
        {"patient": patient.pk, "doctor": doctor.pk, "type": "Checkup", "start": start, "end": start},
        format="json",
    )

    assert response.status_code == 400
    assert "end" in response.data["detail"]


def test_booking_patient_of_other_branch(client_for, receptionist, doctor, second_branch):
    elsewhere = make_patient(second_branch)
    start, end = slot()

    response = client_for(receptionist).post(
        "/api/appointments/",
        {"patient": elsewhere.pk, "doctor": doctor.pk, "type": "Checkup", "start": start, "end": end},
        format="json",
    )

    assert response.status_code == 400
    assert "patient" in response.data["detail"]


def test_calendar_is_branch_scoped(client_for, receptionist, admin, doctor, second_branch):
    elsewhere = make_patient(second_branch)
    start, end = slot()
    client_for(admin, second_branch).post(
        "/api/appointments/",
        {"patient": elsewhere.pk, "doctor": doctor.pk, "type": "Checkup", "start": start, "end": end},
        format="json",
    )

    assert client_for(receptionist).get("/api/appointments/").data == []


# =========================
# Prescriptions and drugs
# =========================

def test_prescription_defaults_to_acting_doctor(client_for, doctor, patient):
    response = client_for(doctor).post(
        "/api/prescriptions/",
        {
            "patient": patient.pk,
            "medications": [{"drug_name": "Amoxicillin 500", "dosage": "1-0-1", "duration": "5 Days"}],
        },
        format="json",
    )

    assert response.status_code == 201
    assert response.data["doctor"] == doctor.pk
    assert response.data["total_medicines"] == 1
    assert Prescription.objects.get(pk=response.data["id"]).medications[0]["type"] == "Tablet"


def test_prescription_needs_medications(client_for, doctor, patient):
    response = client_for(doctor).post(
        "/api/prescriptions/",
        {"patient": patient.pk, "medications": []},
        format="json",
    )

    assert response.status_code == 400


def test_drug_catalog_is_per_clinic(client_for, doctor, other_admin):
    client_for(doctor).post("/api/prescriptions/drugs/", {"name": "Ibuprofen 400"}, format="json")

    mine = client_for(doctor).get("/api/prescriptions/drugs/", {"search": "ibu"})
    theirs = client_for(other_admin).get("/api/prescriptions/drugs/")

    assert [row["name"] for row in mine.data] == ["Ibuprofen 400"]
    assert theirs.data == []


# =========================
# Procedure catalog
# =========================

def test_procedure_codes_are_unique_per_clinic(client_for, admin, other_admin):
    first = client_for(admin).post(
        "/api/treatments/procedures/",
        {"code": "rct-01", "name": "Root Canal", "price": "4500"},
        format="json",
    )
    duplicate = client_for(admin).post(
        "/api/treatments/procedures/",
        {"code": "RCT-01", "name": "Root Canal Again", "price": "4000"},
        format="json",
    )
    elsewhere = client_for(other_admin).post(
        "/api/treatments/procedures/",
        {"code": "RCT-01", "name": "Root Canal", "price": "3000"},
        format="json",
    )

    assert first.status_code == 201
    assert first.data["code"] == "RCT-01"
    assert duplicate.status_code == 409
    assert elsewhere.status_code == 201


def test_procedure_catalog_is_admin_managed(client_for, doctor):
    response = client_for(doctor).post(
        "/api/treatments/procedures/",
        {"code": "SCL-01", "name": "Scaling", "price": "800"},
        format="json",
    )

    assert response.status_code == 403


# =========================
# Foreign ids in list filters
# =========================

@pytest.mark.parametrize(
    "url, param",
    [
        ("/api/payments/", "patient"),
        ("/api/billing/invoices/", "patient"),
        ("/api/patients/notes/", "patient"),
        ("/api/appointments/", "patient"),
        ("/api/prescriptions/", "patient"),
        ("/api/appointments/", "doctor"),
        ("/api/billing/invoices/", "doctor"),
    ],
)
def test_foreign_id_filter_looks_like_unknown_id(client_for, other_admin, doctor, patient, url, param):
    foreign_id = patient.pk if param == "patient" else doctor.pk
    client = client_for(other_admin)

    foreign = client.get(url, {param: foreign_id})
    unknown = client.get(url, {param: 999999})

    assert foreign.status_code == unknown.status_code == 200
    assert foreign.data == unknown.data == []
