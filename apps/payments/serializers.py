# apps/payments/serializers.py
from rest_framework import serializers

from core.constants import InvoiceStatus
from core.serializers import TenantScopedSerializerMixin

from .models import Payment


class PaymentSerializer(TenantScopedSerializerMixin, serializers.ModelSerializer):
    tenant_scoped_fields = ('patient', 'invoice')

    class Meta:
        model = Payment
        fields = [
            'id', 'branch', 'patient', 'invoice', 'amount', 'method',
            'transaction_id', 'date', 'receipt_number', 'notes', 'created_at',
        ]
        read_only_fields = ['id', 'branch', 'receipt_number', 'created_at']
        extra_kwargs = {'date': {'required': False}}

    def validate(self, data):
        invoice = data.get('invoice')
        patient = data.get('patient')
        if invoice is not None and patient is not None and invoice.patient_id != patient.pk:
            raise serializers.ValidationError({'invoice': 'Invoice belongs to another patient.'})
        if invoice is not None and invoice.status == InvoiceStatus.CANCELLED:
            raise serializers.ValidationError({'invoice': 'Invoice is cancelled.'})
        return data


class LedgerEntrySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    date = serializers.DateTimeField()
    description = serializers.CharField()
    type = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    tooth = serializers.CharField(required=False)
    receipt_number = serializers.CharField(required=False)
