# apps/payments/views.py
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from apps.audit.services import log_action
from apps.patients.models import Patient
from apps.patients.serializers import PatientListSerializer
from core.constants import AuditActions
from core.mixins.tenant_scoped import TenantScopedViewSetMixin

from .filters import PaymentFilter
from .models import Payment
from .serializers import LedgerEntrySerializer, PaymentSerializer
from .services import patient_ledger, record_payment


class PaymentViewSet(TenantScopedViewSetMixin,
                     mixins.CreateModelMixin,
                     mixins.ListModelMixin,
                     mixins.RetrieveModelMixin,
                     viewsets.GenericViewSet):
    """Payments are immutable once recorded."""
    queryset = Payment.objects.select_related('patient')
    serializer_class = PaymentSerializer
    filterset_class = PaymentFilter

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payment = record_payment(self.tenant, **serializer.validated_data)
        log_action(
            request,
            action=AuditActions.CREATE,
            entity="Payment",
            entity_id=payment.pk,
            details=f"{payment.receipt_number} {payment.amount} via {payment.method}",
        )

        patient = Patient.objects.get(pk=payment.patient_id)
        return Response(
            {
                'payment': PaymentSerializer(payment).data,
                'patient': PatientListSerializer(patient).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=['get'], url_path=r'ledger/(?P<patient_id>\d+)')
    def ledger(self, request, patient_id=None):
        patient = (
            Patient.objects.for_context(self.tenant)
            .prefetch_related('treatment_items')
            .filter(pk=patient_id)
            .first()
        )
        if patient is None:
            raise NotFound('Patient not found.')

        payments = self.get_queryset().filter(patient=patient)
        entries = patient_ledger(patient, payments)
        return Response(LedgerEntrySerializer(entries, many=True).data)
