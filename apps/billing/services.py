# apps/billing/services.py

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Case, F, Value, When
from rest_framework.exceptions import NotFound, ValidationError

from apps.clinics.models import Sequence, clinic_scope
from apps.patients.models import TreatmentItem
from core.constants import InvoiceStatus
from core.exceptions import Conflict
from core.tenancy import stamp

from .models import Invoice, InvoiceItem

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal('0.01')


def next_invoice_number(clinic_id) -> str:
    return f"INV-{Sequence.next_value(clinic_scope(clinic_id, 'invoice')):05d}"


@transaction.atomic
def create_invoice(context, *, patient, items, doctor=None, discount=Decimal('0'), notes='', due_date=None):
    """
    Create an invoice and freeze the doctor's commission per item.

    Linked treatment items must belong to the patient and must not be
    billed yet; they are marked billed in the same transaction.
    """
    commission_rate = doctor.commission_percentage if doctor else Decimal('0')

    total = sum((item['cost'] for item in items), Decimal('0'))
    if discount > total:
        raise ValidationError({'discount': 'Discount can not exceed the invoice total.'})

    treatment_ids = [item['treatment'].pk for item in items if item.get('treatment')]
    for item in items:
        treatment = item.get('treatment')
        if treatment is not None and treatment.patient_id != patient.pk:
            raise ValidationError({'items': 'Treatment does not belong to this patient.'})

    if treatment_ids:
        marked = TreatmentItem.objects.filter(
            pk__in=treatment_ids,
            patient=patient,
            is_billed=False,
        ).update(is_billed=True)
        if marked != len(set(treatment_ids)):
            raise Conflict('One or more treatments are already billed.')

    invoice = Invoice.objects.create(
        patient=patient,
        doctor=doctor,
        invoice_number=next_invoice_number(context.clinic_id),
        total_amount=total,
        discount=discount,
        final_amount=total - discount,
        status=InvoiceStatus.UNPAID,
        due_date=due_date,
        notes=notes,
        created_by=context.principal,
        **stamp(context, Invoice),
    )

    InvoiceItem.objects.bulk_create([
        InvoiceItem(
            invoice=invoice,
            treatment=item.get('treatment'),
            procedure_name=item['procedure_name'],
            cost=item['cost'],
            doctor_commission_amount=(item['cost'] * commission_rate / 100).quantize(TWO_PLACES),
        )
        for item in items
    ])

    logger.info(f"Invoice {invoice.invoice_number} created for patient {patient.code}: {invoice.final_amount}")
    return invoice


def apply_invoice_payment(invoice_id, amount):
    """
    Atomic increment of paid_amount, then a single-statement status
    recompute. Cancelled invoices keep their status.
    """
    Invoice.objects.filter(pk=invoice_id).update(paid_amount=F('paid_amount') + amount)
    Invoice.objects.filter(pk=invoice_id).exclude(status=InvoiceStatus.CANCELLED).update(
        status=Case(
            When(paid_amount__gte=F('final_amount'), then=Value(InvoiceStatus.PAID)),
            When(paid_amount__gt=0, then=Value(InvoiceStatus.PARTIAL)),
            default=Value(InvoiceStatus.UNPAID),
        )
    )


@transaction.atomic
def cancel_invoice(queryset, invoice_id):
    """Cancel an unpaid invoice and release its treatments for billing."""
    updated = queryset.filter(
        pk=invoice_id,
        paid_amount=0,
    ).exclude(status=InvoiceStatus.CANCELLED).update(status=InvoiceStatus.CANCELLED)

    if not updated:
        invoice = queryset.filter(pk=invoice_id).first()
        if invoice is None:
            raise NotFound()
        raise ValidationError('Only unpaid invoices can be cancelled.')

    TreatmentItem.objects.filter(invoice_items__invoice_id=invoice_id).update(is_billed=False)
