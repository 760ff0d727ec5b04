# apps/reports/services.py

import logging
from datetime import datetime, time, timedelta
from decimal import Decimal

from django.db.models import Count, DecimalField, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from apps.accounts.models import User
from apps.appointments.models import Appointment
from apps.billing.models import Expense
from apps.patients.models import Patient, TreatmentItem
from apps.payments.models import Payment
from core.constants import (
    ONLINE_PAYMENT_METHODS,
    AppointmentStatus,
    PaymentMethod,
    Role,
    TreatmentStatus,
)

logger = logging.getLogger(__name__)

RECENT_TRANSACTIONS = 10


def _total(queryset, field='amount') -> Decimal:
    return queryset.aggregate(
        total=Coalesce(Sum(field), Value(Decimal('0')), output_field=DecimalField())
    )['total']


def _periods(now=None):
    """Local midnight today, first of this month, first of last month."""
    now = timezone.localtime(now)
    day_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    month_start = day_start.replace(day=1)
    last_month_start = (month_start - timedelta(days=1)).replace(day=1)
    return day_start, month_start, last_month_start


def _pay_status(patient):
    if patient.total_cost <= 0:
        return 'Unbilled'
    return 'Paid' if patient.wallet_balance <= 0 else 'Pending'


def growth_percent(current: Decimal, previous: Decimal) -> float:
    if previous > 0:
        return round(float((current - previous) / previous * 100), 1)
    return 100.0 if current > 0 else 0.0


# ======================================================
# RECEPTION
# ======================================================

def reception_dashboard(context) -> dict:
    """Doctor availability, today's queue and the cash drawer of one branch."""
    now = timezone.now()
    day_start, _, _ = _periods(now)
    day_end = day_start + timedelta(days=1)

    doctors = User.objects.filter(
        clinic_id=context.clinic_id,
        role=Role.DOCTOR,
        allowed_branches=context.branch_id,
    ).order_by('full_name')

    busy_in_appointment = {
        appt.doctor_id: appt
        for appt in Appointment.objects.for_context(context).filter(
            status=AppointmentStatus.IN_PROGRESS,
            start__lte=now,
            end__gte=now,
        ).select_related('patient')
    }

    # Patients being treated today without a formal appointment
    busy_in_chart = {}
    charting = TreatmentItem.objects.filter(
        patient__in=Patient.objects.for_context(context),
        status=TreatmentStatus.IN_PROGRESS,
        updated_at__gte=day_start,
        patient__assigned_doctor__isnull=False,
    ).select_related('patient')
    for item in charting:
        busy_in_chart.setdefault(item.patient.assigned_doctor_id, item.patient)

    doctor_status = []
    for doctor in doctors:
        appt = busy_in_appointment.get(doctor.pk)
        patient = busy_in_chart.get(doctor.pk)
        if appt is not None:
            entry = {'status': 'Busy', 'patient': appt.patient.full_name or appt.title, 'source': 'Appointment'}
        elif patient is not None:
            entry = {'status': 'Busy', 'patient': patient.full_name, 'source': 'Chart'}
        else:
            entry = {'status': 'Available', 'patient': None, 'source': None}
        doctor_status.append({'id': doctor.pk, 'doctor': doctor.full_name, **entry})

    today_flow = []
    appointments = Appointment.objects.for_context(context).filter(
        start__gte=day_start,
        start__lt=day_end,
    ).select_related('patient', 'doctor').order_by('start')
    for appt in appointments:
        patient = appt.patient
        today_flow.append({
            'id': appt.pk,
            'start': appt.start,
            'name': patient.full_name or appt.title,
            'patient_id': patient.pk,
            'patient_code': patient.code,
            'doctor': appt.doctor.full_name if appt.doctor else None,
            'status': appt.status,
            'pay_status': _pay_status(patient),
            'due_amount': patient.wallet_balance,
        })

    payments = Payment.objects.for_context(context).filter(date__gte=day_start, date__lt=day_end)
    cash_drawer = {
        'total': _total(payments),
        'cash': _total(payments.filter(method=PaymentMethod.CASH)),
        'online': _total(payments.filter(method__in=ONLINE_PAYMENT_METHODS)),
    }

    return {
        'doctor_status': doctor_status,
        'today_flow': today_flow,
        'cash_drawer': cash_drawer,
    }


# ======================================================
# DOCTOR
# ======================================================

def _patient_card(patient, status, fallback_complaint=''):
    return {
        'id': patient.pk,
        'code': patient.code,
        'name': patient.full_name,
        'age': patient.age,
        'gender': patient.gender,
        'conditions': patient.medical_conditions,
        'complaint': patient.primary_concern or fallback_complaint,
        'notes': patient.notes,
        'status': status,
    }


def doctor_dashboard(context) -> dict:
    """The acting doctor's day at the current branch."""
    doctor = context.principal
    day_start, _, _ = _periods()
    day_end = day_start + timedelta(days=1)

    appointments = list(
        Appointment.objects.for_context(context).filter(
            doctor=doctor,
            start__gte=day_start,
            start__lt=day_end,
        ).exclude(
            status=AppointmentStatus.CANCELLED,
        ).select_related('patient').order_by('start')
    )

    view_mode = 'active'
    active_patient = None

    in_progress = next((a for a in appointments if a.status == AppointmentStatus.IN_PROGRESS), None)
    if in_progress is not None:
        active_patient = _patient_card(in_progress.patient, in_progress.status, in_progress.type)
    else:
        charting = Patient.objects.for_context(context).filter(
            assigned_doctor=doctor,
            treatment_items__status=TreatmentStatus.IN_PROGRESS,
        ).distinct().first()
        if charting is not None:
            active_patient = _patient_card(charting, TreatmentStatus.IN_PROGRESS)
        else:
            view_mode = 'idle'
            upcoming = next((a for a in appointments if a.status == AppointmentStatus.SCHEDULED), None)
            if upcoming is not None:
                active_patient = _patient_card(upcoming.patient, upcoming.status, upcoming.type)

    seen = sum(1 for a in appointments if a.status == AppointmentStatus.COMPLETED)
    remaining = len(appointments) - seen
    if active_patient is not None and view_mode == 'active':
        remaining -= 1

    open_items = {}
    for item in TreatmentItem.objects.filter(
        patient_id__in={a.patient_id for a in appointments},
    ).exclude(status__in=[TreatmentStatus.COMPLETED, TreatmentStatus.CANCELLED]).order_by('date'):
        open_items.setdefault(item.patient_id, []).append(
            f"{item.procedure} (T{item.tooth})" if item.tooth else item.procedure
        )

    schedule = [
        {
            'id': appt.pk,
            'start': appt.start,
            'patient_id': appt.patient_id,
            'patient_code': appt.patient.code,
            'name': appt.patient.full_name or appt.title,
            'type': ', '.join(open_items.get(appt.patient_id, [])) or appt.type,
            'appointment_type': appt.type,
            'status': appt.status,
        }
        for appt in appointments
    ]

    history = []
    if active_patient is not None:
        history = [
            {'id': item.pk, 'procedure': item.procedure, 'tooth': item.tooth, 'date': item.date}
            for item in TreatmentItem.objects.filter(
                patient_id=active_patient['id'],
                status=TreatmentStatus.COMPLETED,
            ).order_by('-updated_at')[:2]
        ]

    return {
        'doctor_name': doctor.full_name,
        'stats': {'patients_seen': seen, 'remaining': max(remaining, 0)},
        'schedule': schedule,
        'active_patient': active_patient,
        'view_mode': view_mode,
        'history': history,
    }


# ======================================================
# ADMINISTRATOR
# ======================================================

def admin_dashboard(context) -> dict:
    """
    Financial and operational rollup. Without a branch in the context
    the figures cover every branch of the clinic.
    """
    clinic_wide = context.branch_id is None
    day_start, month_start, last_month_start = _periods()

    payments = Payment.objects.for_context(context, clinic_wide=clinic_wide)
    expenses = Expense.objects.for_context(context, clinic_wide=clinic_wide)
    patients = Patient.objects.for_context(context, clinic_wide=clinic_wide)
    appointments = Appointment.objects.for_context(context, clinic_wide=clinic_wide)

    revenue_today = _total(payments.filter(date__gte=day_start))
    revenue_month = _total(payments.filter(date__gte=month_start))
    revenue_last_month = _total(payments.filter(date__gte=last_month_start, date__lt=month_start))

    month_expenses = expenses.filter(date__gte=month_start.date())
    expense_month = _total(month_expenses)

    expense_breakdown = [
        {'category': row['category'], 'total': row['total']}
        for row in month_expenses.values('category').annotate(total=Sum('amount')).order_by('-total')
    ]

    transactions = [
        {
            'reference': payment.receipt_number,
            'details': payment.patient.full_name,
            'amount': payment.amount,
            'method': payment.method,
            'date': payment.date,
            'category': 'Patient Payment',
            'type': 'Income',
        }
        for payment in payments.select_related('patient').order_by('-date')[:RECENT_TRANSACTIONS]
    ]
    transactions += [
        {
            'reference': f"EXP-{expense.pk}",
            'details': expense.vendor or expense.title,
            'amount': expense.amount,
            'method': expense.payment_method,
            'date': timezone.make_aware(datetime.combine(expense.date, time.min)),
            'category': expense.category,
            'type': 'Expense',
        }
        for expense in expenses.order_by('-date', '-pk')[:RECENT_TRANSACTIONS]
    ]
    transactions.sort(key=lambda entry: entry['date'], reverse=True)

    performance = [
        {'doctor_id': row['doctor_id'], 'doctor': row['doctor__full_name'], 'completed': row['completed']}
        for row in appointments.filter(
            status=AppointmentStatus.COMPLETED,
            start__gte=month_start,
        ).values('doctor_id', 'doctor__full_name').annotate(completed=Count('id')).order_by('-completed')
    ]

    logger.debug(f"Admin dashboard built for clinic {context.clinic_id} branch {context.branch_id}")

    return {
        'scope': 'clinic' if clinic_wide else 'branch',
        'financials': {
            'today': revenue_today,
            'month': revenue_month,
            'last_month': revenue_last_month,
            'growth': growth_percent(revenue_month, revenue_last_month),
            'expenses': expense_month,
            'profit': revenue_month - expense_month,
        },
        'expense_breakdown': expense_breakdown,
        'patients': {
            'total': patients.filter(is_active=True).count(),
            'new_this_month': patients.filter(created_at__gte=month_start).count(),
        },
        'transactions': transactions[:RECENT_TRANSACTIONS],
        'performance': performance,
    }
