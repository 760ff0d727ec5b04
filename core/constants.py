# core/constants.py

from django.db import models


class Role(models.TextChoices):
    """Closed set of staff roles within a clinic"""
    ADMINISTRATOR = 'Administrator', 'Administrator'
    DOCTOR = 'Doctor', 'Doctor'
    RECEPTIONIST = 'Receptionist', 'Receptionist'
    NURSE = 'Nurse', 'Nurse'


# Two-tier gate: Administrator above every other staff role
ROLE_RANK = {
    Role.ADMINISTRATOR: 2,
    Role.DOCTOR: 1,
    Role.RECEPTIONIST: 1,
    Role.NURSE: 1,
}


class UserStatus(models.TextChoices):
    ACTIVE = 'Active', 'Active'
    INACTIVE = 'Inactive', 'Inactive'
    PENDING = 'Pending', 'Pending'


class PermissionKey(models.TextChoices):
    """Fine-grained permission keys configurable per role"""
    FIN_VIEW_REVENUE = 'fin_view_revenue', 'View revenue'
    FIN_EDIT_INVOICE = 'fin_edit_invoice', 'Create and edit invoices'
    FIN_DISCOUNTS = 'fin_discounts', 'Apply discounts'
    PT_DELETE = 'pt_delete', 'Delete patients'
    PT_EXPORT = 'pt_export', 'Export patients'
    OPS_SETTINGS = 'ops_settings', 'Edit operational settings'
    OPS_CALENDAR = 'ops_calendar', 'Manage calendar'
    BRANCH_MANAGE = 'branch_manage', 'Manage branches'
    BRANCH_CREATE = 'branch_create', 'Create branches'
    USER_MANAGE_GLOBAL = 'user_manage_global', 'Manage users clinic-wide'
    USER_MANAGE_LOCAL = 'user_manage_local', 'Manage users of a branch'


DEFAULT_ROLE_PERMISSIONS = {
    Role.ADMINISTRATOR: [key.value for key in PermissionKey],
    Role.DOCTOR: [PermissionKey.FIN_VIEW_REVENUE, PermissionKey.OPS_CALENDAR],
    Role.RECEPTIONIST: [PermissionKey.OPS_CALENDAR, PermissionKey.FIN_EDIT_INVOICE],
    Role.NURSE: [],
}


class Gender(models.TextChoices):
    MALE = 'Male', 'Male'
    FEMALE = 'Female', 'Female'
    OTHER = 'Other', 'Other'


class TreatmentStatus(models.TextChoices):
    PROPOSED = 'Proposed', 'Proposed'
    IN_PROGRESS = 'In Progress', 'In Progress'
    COMPLETED = 'Completed', 'Completed'
    CANCELLED = 'Cancelled', 'Cancelled'


# Statuses for which the patient owes the treatment cost
BILLABLE_TREATMENT_STATUSES = {TreatmentStatus.IN_PROGRESS, TreatmentStatus.COMPLETED}


class AppointmentStatus(models.TextChoices):
    SCHEDULED = 'Scheduled', 'Scheduled'
    IN_PROGRESS = 'In Progress', 'In Progress'
    COMPLETED = 'Completed', 'Completed'
    CANCELLED = 'Cancelled', 'Cancelled'
    NO_SHOW = 'No Show', 'No Show'


class InvoiceStatus(models.TextChoices):
    DRAFT = 'Draft', 'Draft'
    UNPAID = 'Unpaid', 'Unpaid'
    PARTIAL = 'Partial', 'Partial'
    PAID = 'Paid', 'Paid'
    CANCELLED = 'Cancelled', 'Cancelled'


class PaymentMethod(models.TextChoices):
    CASH = 'Cash', 'Cash'
    UPI = 'UPI', 'UPI'
    CARD = 'Card', 'Card'
    BANK_TRANSFER = 'Bank Transfer', 'Bank Transfer'
    INSURANCE = 'Insurance', 'Insurance'


ONLINE_PAYMENT_METHODS = {PaymentMethod.UPI, PaymentMethod.CARD, PaymentMethod.BANK_TRANSFER}


class ExpenseCategory(models.TextChoices):
    SALARIES = 'Salaries', 'Salaries'
    RENT = 'Rent', 'Rent'
    LAB_FEES = 'Lab Fees', 'Lab Fees'
    INVENTORY = 'Inventory', 'Inventory'
    UTILITIES = 'Utilities', 'Utilities'
    MAINTENANCE = 'Maintenance', 'Maintenance'
    MARKETING = 'Marketing', 'Marketing'
    OTHER = 'Other', 'Other'


class InventoryCategory(models.TextChoices):
    CONSUMABLE = 'Consumable', 'Consumable'
    INSTRUMENT = 'Instrument', 'Instrument'
    EQUIPMENT = 'Equipment', 'Equipment'
    MEDICINE = 'Medicine', 'Medicine'


class InventoryAction(models.TextChoices):
    RESTOCK = 'Restock', 'Restock'
    CONSUMED = 'Consumed', 'Consumed'
    ADJUSTMENT = 'Adjustment', 'Adjustment'
    EXPIRED = 'Expired', 'Expired'
    RETURN = 'Return', 'Return'


class NoteType(models.TextChoices):
    CONSULTATION = 'Consultation', 'Consultation'
    PROCEDURE = 'Procedure', 'Procedure'
    FOLLOW_UP = 'Follow-up', 'Follow-up'
    EMERGENCY = 'Emergency', 'Emergency'


class AuditActions:
    """Audit log action types"""
    CREATE = 'CREATE'
    UPDATE = 'UPDATE'
    DELETE = 'DELETE'
    LOGIN = 'LOGIN'
    REGISTER = 'REGISTER'
    PASSWORD_CHANGE = 'PASSWORD_CHANGE'
    PERMISSIONS_UPDATE = 'PERMISSIONS_UPDATE'
