# apps/payments/services.py

import logging

from django.db import transaction
from django.utils import timezone

from apps.billing.services import apply_invoice_payment
from apps.clinics.models import Sequence, clinic_scope
from apps.patients.services import adjust_balance
from core.constants import BILLABLE_TREATMENT_STATUSES
from core.tenancy import stamp

from .models import Payment

logger = logging.getLogger(__name__)


def next_receipt_number(clinic_id) -> str:
    return f"REC-{Sequence.next_value(clinic_scope(clinic_id, 'receipt')):05d}"


@transaction.atomic
def record_payment(context, *, patient, amount, invoice=None, **extra) -> Payment:
    """
    Record a payment and apply it to the patient's totals (and the
    invoice, when one is given) with atomic increments.
    """
    payment = Payment.objects.create(
        patient=patient,
        invoice=invoice,
        amount=amount,
        receipt_number=next_receipt_number(context.clinic_id),
        date=extra.pop('date', None) or timezone.now(),
        created_by=context.principal,
        **extra,
        **stamp(context, Payment),
    )

    adjust_balance(patient.pk, paid_delta=amount)
    if invoice is not None:
        apply_invoice_payment(invoice.pk, amount)

    logger.info(f"Payment {payment.receipt_number} of {amount} recorded for patient {patient.code}")
    return payment


def patient_ledger(patient, payments):
    """
    Billable treatments (debits) merged with payments (credits),
    newest first.
    """
    debits = [
        {
            'id': item.pk,
            'date': item.date,
            'description': item.procedure,
            'type': 'DEBIT',
            'amount': item.cost,
            'tooth': item.tooth,
        }
        for item in patient.treatment_items.all()
        if item.status in BILLABLE_TREATMENT_STATUSES
    ]
    credits = [
        {
            'id': payment.pk,
            'date': payment.date,
            'description': f"Payment via {payment.method}",
            'type': 'CREDIT',
            'amount': payment.amount,
            'receipt_number': payment.receipt_number,
        }
        for payment in payments
    ]
    return sorted(debits + credits, key=lambda entry: entry['date'], reverse=True)
