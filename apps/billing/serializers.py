# apps/billing/serializers.py
from decimal import Decimal

from django.utils import timezone
from rest_framework import serializers

from apps.patients.models import Patient, TreatmentItem
from core.serializers import TenantScopedSerializerMixin

from .models import Expense, Invoice, InvoiceItem


# -----------------------------
# Invoice
# -----------------------------
class InvoiceItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = InvoiceItem
        fields = ['id', 'treatment', 'procedure_name', 'cost', 'doctor_commission_amount']
        read_only_fields = fields


class InvoiceSerializer(serializers.ModelSerializer):
    items = InvoiceItemSerializer(many=True, read_only=True)
    balance = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    patient_name = serializers.CharField(source='patient.full_name', read_only=True)

    class Meta:
        model = Invoice
        fields = [
            'id', 'branch', 'invoice_number', 'patient', 'patient_name', 'doctor',
            'items', 'total_amount', 'discount', 'final_amount', 'paid_amount', 'balance',
            'status', 'due_date', 'notes', 'created_at',
        ]
        read_only_fields = fields


class InvoiceItemInputSerializer(serializers.Serializer):
    treatment = serializers.PrimaryKeyRelatedField(
        queryset=TreatmentItem.objects.all(), required=False, allow_null=True
    )
    procedure_name = serializers.CharField(max_length=200)
    cost = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'))


class InvoiceCreateSerializer(TenantScopedSerializerMixin, serializers.ModelSerializer):
    tenant_scoped_fields = ('patient', 'doctor')

    items = InvoiceItemInputSerializer(many=True, allow_empty=False)
    discount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal('0'), required=False, default=Decimal('0')
    )

    class Meta:
        model = Invoice
        fields = ['patient', 'doctor', 'items', 'discount', 'notes', 'due_date']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        tenant = self.context.get('tenant')
        treatment = self.fields['items'].child.fields['treatment']
        if tenant is None:
            treatment.queryset = TreatmentItem.objects.none()
        else:
            treatment.queryset = TreatmentItem.objects.filter(
                patient__in=Patient.objects.for_context(tenant, clinic_wide=tenant.branch_id is None),
            )


# -----------------------------
# Expense
# -----------------------------
class ExpenseSerializer(serializers.ModelSerializer):
    recorded_by = serializers.PrimaryKeyRelatedField(source='created_by', read_only=True)

    class Meta:
        model = Expense
        fields = [
            'id', 'branch', 'title', 'category', 'amount', 'payment_method',
            'vendor', 'date', 'notes', 'recorded_by', 'created_at',
        ]
        read_only_fields = ['id', 'branch', 'recorded_by', 'created_at']
        extra_kwargs = {'date': {'required': False}}

    def validate(self, data):
        if self.instance is None and not data.get('date'):
            data['date'] = timezone.localdate()
        return data
