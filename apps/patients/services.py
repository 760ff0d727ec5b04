# apps/patients/services.py

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from apps.clinics.models import Sequence, clinic_scope
from core.constants import BILLABLE_TREATMENT_STATUSES, TreatmentStatus
from core.exceptions import Conflict

from .models import Patient, TreatmentItem

logger = logging.getLogger(__name__)


def next_patient_code(clinic_id) -> str:
    # PID-1001, PID-1002, ... per clinic
    return f"PID-{Sequence.next_value(clinic_scope(clinic_id, 'patient'), start=1000)}"


def adjust_balance(patient_id, cost_delta=Decimal('0'), paid_delta=Decimal('0')):
    """Atomic increment of the patient's running totals."""
    changes = {}
    if cost_delta:
        changes['total_cost'] = F('total_cost') + cost_delta
    if paid_delta:
        changes['total_paid'] = F('total_paid') + paid_delta
    if changes:
        Patient.objects.filter(pk=patient_id).update(**changes)


def _cost_delta(item_cost, old_status, new_status):
    was_billable = old_status in BILLABLE_TREATMENT_STATUSES
    is_billable = new_status in BILLABLE_TREATMENT_STATUSES
    if is_billable and not was_billable:
        return item_cost
    if was_billable and not is_billable:
        return -item_cost
    return Decimal('0')


# ======================================================
# TREATMENT PLAN
# ======================================================

@transaction.atomic
def add_treatment(patient, user, **data) -> TreatmentItem:
    """Proposed items are quotes; billable ones are owed immediately."""
    item = TreatmentItem.objects.create(patient=patient, created_by=user, **data)
    adjust_balance(patient.pk, cost_delta=_cost_delta(item.cost, None, item.status))
    return item


@transaction.atomic
def start_treatments(patient) -> int:
    """Move every proposed item to In Progress and bill it."""
    proposed = TreatmentItem.objects.select_for_update().filter(
        patient=patient,
        status=TreatmentStatus.PROPOSED,
    )
    items = list(proposed)
    if not items:
        raise ValidationError('No proposed treatments to start.')

    started = TreatmentItem.objects.filter(
        pk__in=[item.pk for item in items],
        status=TreatmentStatus.PROPOSED,
    ).update(status=TreatmentStatus.IN_PROGRESS, updated_at=timezone.now())

    adjust_balance(patient.pk, cost_delta=sum((item.cost for item in items), Decimal('0')))
    logger.info(f"Started {started} treatments for patient {patient.code}")
    return started


@transaction.atomic
def change_treatment_status(patient, item_id, new_status) -> TreatmentItem:
    item = TreatmentItem.objects.filter(patient=patient, pk=item_id).first()
    if item is None:
        raise NotFound('Treatment not found.')

    if item.status == new_status:
        return item

    # Conditional on the status we read; a concurrent change makes this a no-op
    updated = TreatmentItem.objects.filter(pk=item.pk, status=item.status).update(
        status=new_status,
        updated_at=timezone.now(),
    )
    if not updated:
        raise Conflict('Treatment was modified concurrently.')

    adjust_balance(patient.pk, cost_delta=_cost_delta(item.cost, item.status, new_status))
    item.status = new_status
    return item


@transaction.atomic
def delete_treatment(patient, item_id) -> None:
    item = TreatmentItem.objects.select_for_update().filter(patient=patient, pk=item_id).first()
    if item is None:
        raise NotFound('Treatment not found.')
    if item.is_billed:
        raise ValidationError('Billed treatments can not be deleted.')

    item.delete()
    adjust_balance(patient.pk, cost_delta=_cost_delta(item.cost, item.status, None))


@transaction.atomic
def complete_treatments(patient, item_ids=None) -> int:
    """
    Mark items Completed. Without ``item_ids`` every In Progress item
    is completed; proposed items completed directly are billed now.
    """
    items = TreatmentItem.objects.select_for_update().filter(patient=patient).exclude(
        status__in=[TreatmentStatus.COMPLETED, TreatmentStatus.CANCELLED]
    )
    if item_ids:
        items = items.filter(pk__in=item_ids)
    else:
        items = items.filter(status=TreatmentStatus.IN_PROGRESS)

    items = list(items)
    delta = sum(
        (_cost_delta(item.cost, item.status, TreatmentStatus.COMPLETED) for item in items),
        Decimal('0'),
    )
    completed = TreatmentItem.objects.filter(pk__in=[item.pk for item in items]).update(
        status=TreatmentStatus.COMPLETED,
        updated_at=timezone.now(),
    )
    adjust_balance(patient.pk, cost_delta=delta)
    return completed
