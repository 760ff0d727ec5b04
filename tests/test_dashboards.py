from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.appointments.models import Appointment
from apps.patients.models import TreatmentItem
from apps.payments.models import Payment
from apps.reports.services import growth_percent
from core.constants import AppointmentStatus, PaymentMethod, TreatmentStatus

from .factories import make_patient

DASHBOARD_URL = "/api/reports/"


def record_payment(patient, amount, method=PaymentMethod.CASH, when=None):
    return Payment.objects.create(
        clinic_id=patient.clinic_id,
        branch_id=patient.branch_id,
        patient=patient,
        amount=Decimal(amount),
        method=method,
        date=when or timezone.now(),
        receipt_number=f"REC-{Payment.objects.count() + 1:05d}",
    )


def book(patient, doctor, status=AppointmentStatus.SCHEDULED, start=None, minutes=30):
    start = start or timezone.now()
    return Appointment.objects.create(
        clinic_id=patient.clinic_id,
        branch_id=patient.branch_id,
        patient=patient,
        doctor=doctor,
        type="Consultation",
        start=start,
        end=start + timedelta(minutes=minutes),
        status=status,
    )


@pytest.mark.parametrize(
    "current, previous, expected",
    [
        (Decimal("150"), Decimal("100"), 50.0),
        (Decimal("50"), Decimal("200"), -75.0),
        (Decimal("10"), Decimal("0"), 100.0),
        (Decimal("0"), Decimal("0"), 0.0),
        (Decimal("100"), Decimal("300"), -66.7),
    ],
)
def test_growth_percent(current, previous, expected):
    assert growth_percent(current, previous) == expected


# =========================
# Reception
# =========================

def test_cash_drawer_splits_methods(client_for, receptionist, branch, second_branch):
    patient = make_patient(branch)
    record_payment(patient, "500", PaymentMethod.CASH)
    record_payment(patient, "300", PaymentMethod.UPI)
    record_payment(make_patient(second_branch, "Elsewhere"), "999", PaymentMethod.CASH)

    response = client_for(receptionist).get(f"{DASHBOARD_URL}reception/")

    assert response.status_code == 200
    drawer = response.data["cash_drawer"]
    assert drawer["total"] == Decimal("800")
    assert drawer["cash"] == Decimal("500")
    assert drawer["online"] == Decimal("300")


def test_doctor_in_session_is_busy(client_for, receptionist, doctor, branch):
    patient = make_patient(branch, "Meera")
    book(patient, doctor, AppointmentStatus.IN_PROGRESS, start=timezone.now() - timedelta(minutes=5))

    response = client_for(receptionist).get(f"{DASHBOARD_URL}reception/")

    status = {row["id"]: row for row in response.data["doctor_status"]}[doctor.pk]
    assert status["status"] == "Busy"
    assert status["patient"] == "Meera"
    assert status["source"] == "Appointment"


def test_doctor_charting_without_appointment_is_busy(client_for, receptionist, doctor, branch):
    patient = make_patient(branch, "Walk In", assigned_doctor=doctor)
    TreatmentItem.objects.create(
        patient=patient, procedure="Filling", cost=Decimal("1200"), status=TreatmentStatus.IN_PROGRESS
    )

    response = client_for(receptionist).get(f"{DASHBOARD_URL}reception/")

    status = {row["id"]: row for row in response.data["doctor_status"]}[doctor.pk]
    assert status["status"] == "Busy"
    assert status["source"] == "Chart"


def test_reception_needs_a_branch(client_for, admin):
    response = client_for(admin).get(f"{DASHBOARD_URL}reception/")

    assert response.status_code == 400


# =========================
# Doctor
# =========================

def test_doctor_without_active_patient_is_idle(client_for, doctor, branch):
    patient = make_patient(branch, "Next Up")
    book(patient, doctor)

    response = client_for(doctor).get(f"{DASHBOARD_URL}doctor/")

    assert response.status_code == 200
    assert response.data["view_mode"] == "idle"
    assert response.data["active_patient"]["name"] == "Next Up"
    assert response.data["stats"] == {"patients_seen": 0, "remaining": 1}
    assert [row["patient_id"] for row in response.data["schedule"]] == [patient.pk]


def test_doctor_in_session_is_active(client_for, doctor, branch):
    patient = make_patient(branch, "In Chair")
    book(patient, doctor, AppointmentStatus.IN_PROGRESS)
    TreatmentItem.objects.create(
        patient=patient, procedure="Scaling", cost=Decimal("800"), status=TreatmentStatus.COMPLETED
    )

    response = client_for(doctor).get(f"{DASHBOARD_URL}doctor/")

    assert response.data["view_mode"] == "active"
    assert response.data["active_patient"]["id"] == patient.pk
    assert response.data["stats"]["remaining"] == 0
    assert [row["procedure"] for row in response.data["history"]] == ["Scaling"]


# =========================
# Administrator
# =========================

def test_admin_rollup_is_clinic_wide_without_branch(client_for, admin, branch, second_branch, other_branch):
    record_payment(make_patient(branch), "1000")
    record_payment(make_patient(second_branch, "Downtown"), "500")
    record_payment(make_patient(other_branch, "Foreign"), "7000")

    response = client_for(admin).get(f"{DASHBOARD_URL}admin/")

    assert response.status_code == 200
    assert response.data["scope"] == "clinic"
    financials = response.data["financials"]
    assert financials["month"] == Decimal("1500")
    assert financials["last_month"] == Decimal("0")
    assert financials["growth"] == 100.0
    assert response.data["patients"]["total"] == 2
    assert len(response.data["transactions"]) == 2


def test_admin_rollup_follows_selected_branch(client_for, admin, branch, second_branch):
    record_payment(make_patient(branch), "1000")
    record_payment(make_patient(second_branch, "Downtown"), "500")

    response = client_for(admin, second_branch).get(f"{DASHBOARD_URL}admin/")

    assert response.data["scope"] == "branch"
    assert response.data["financials"]["month"] == Decimal("500")


def test_admin_rollup_is_admin_only(client_for, receptionist):
    response = client_for(receptionist).get(f"{DASHBOARD_URL}admin/")

    assert response.status_code == 403
