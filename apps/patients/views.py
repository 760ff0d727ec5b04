# apps/patients/views.py

import logging

from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from apps.audit.services import log_action
from core.constants import AuditActions, PermissionKey
from core.mixins.tenant_scoped import TenantScopedViewSetMixin
from core.permissions import HasRolePermission
from core.tenancy import scoped_update, stamp

from . import services
from .filters import ClinicalNoteFilter
from .models import ClinicalNote, Patient
from .serializers import (
    ClinicalNoteSerializer,
    CompleteTreatmentsSerializer,
    MedicalAlertsSerializer,
    PatientListSerializer,
    PatientSerializer,
    TreatmentItemSerializer,
    TreatmentStatusSerializer,
)

logger = logging.getLogger(__name__)


class PatientViewSet(TenantScopedViewSetMixin, viewsets.ModelViewSet):
    """
    Patients of the active branch.
    Addressable by numeric id or by code (PID-1001).
    """
    queryset = Patient.objects.select_related('assigned_doctor').prefetch_related('treatment_items')
    serializer_class = PatientSerializer
    required_permissions = {'destroy': PermissionKey.PT_DELETE}
    lookup_value_regex = r'[^/]+'
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['full_name', 'mobile', 'code']
    ordering_fields = ['created_at', 'full_name', 'last_visit']
    immutable_fields = ('code', 'total_cost', 'total_paid')

    def get_permissions(self):
        return super().get_permissions() + [HasRolePermission()]

    def get_serializer_class(self):
        if self.action == 'list':
            return PatientListSerializer
        return PatientSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'list':
            queryset = queryset.filter(is_active=True)
        return queryset

    def get_object(self):
        lookup = str(self.kwargs[self.lookup_field])
        queryset = self.get_queryset()

        if lookup.upper().startswith('PID-'):
            patient = get_object_or_404(queryset, code=lookup.upper())
        elif lookup.isdigit():
            patient = get_object_or_404(queryset, pk=int(lookup))
        else:
            raise NotFound("Patient not found.")

        self.check_object_permissions(self.request, patient)
        return patient

    def perform_create(self, serializer):
        ownership = stamp(self.tenant, Patient)
        with transaction.atomic():
            serializer.save(
                code=services.next_patient_code(self.tenant.clinic_id),
                created_by=self.request.user,
                **ownership,
            )
        logger.info(f"Patient {serializer.instance.code} registered in branch {self.tenant.branch_id}")

    def perform_destroy(self, instance):
        # Archive, history and balances stay intact
        scoped_update(self.get_queryset(), instance.pk, {'is_active': False, 'updated_by': self.request.user})
        log_action(
            self.request,
            action=AuditActions.DELETE,
            entity="Patient",
            entity_id=instance.pk,
            details=f"Archived patient {instance.code}",
        )

    # =========================
    # Treatment plan
    # =========================

    def _patient_response(self, patient, status_code=status.HTTP_200_OK, **extra):
        data = PatientSerializer(
            self.get_queryset().get(pk=patient.pk),
            context=self.get_serializer_context(),
        ).data
        return Response({**extra, 'patient': data} if extra else data, status=status_code)

    @action(detail=True, methods=['post'])
    def treatments(self, request, pk=None):
        patient = self.get_object()
        serializer = TreatmentItemSerializer(data=request.data, context=self.get_serializer_context())
        serializer.is_valid(raise_exception=True)

        services.add_treatment(patient, request.user, **serializer.validated_data)
        return self._patient_response(patient, status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], url_path='treatments/start')
    def start_treatments(self, request, pk=None):
        patient = self.get_object()
        started = services.start_treatments(patient)
        return self._patient_response(patient, message=f"{started} treatments started")

    @action(detail=True, methods=['put', 'post'], url_path='treatments/complete')
    def complete_treatments(self, request, pk=None):
        patient = self.get_object()
        serializer = CompleteTreatmentsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        completed = services.complete_treatments(patient, serializer.validated_data.get('item_ids'))
        return self._patient_response(patient, message=f"{completed} treatments completed")

    @action(detail=True, methods=['patch', 'delete'], url_path=r'treatments/(?P<item_id>\d+)')
    def treatment_item(self, request, pk=None, item_id=None):
        patient = self.get_object()

        if request.method == 'DELETE':
            services.delete_treatment(patient, item_id)
            return self._patient_response(patient)

        serializer = TreatmentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.change_treatment_status(patient, item_id, serializer.validated_data['status'])
        return self._patient_response(patient)

    # =========================
    # Medical alerts
    # =========================

    @action(detail=True, methods=['put'])
    def alerts(self, request, pk=None):
        patient = self.get_object()
        serializer = MedicalAlertsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        scoped_update(self.get_queryset(), patient.pk, dict(serializer.validated_data))
        return self._patient_response(patient)


class ClinicalNoteViewSet(TenantScopedViewSetMixin, viewsets.ModelViewSet):
    """Clinical timeline of the branch's patients, newest first."""
    queryset = ClinicalNote.objects.select_related('patient')
    serializer_class = ClinicalNoteSerializer
    filterset_class = ClinicalNoteFilter
    http_method_names = ['get', 'post', 'put', 'patch', 'delete', 'head', 'options']

    def perform_create(self, serializer):
        user = self.request.user
        with transaction.atomic():
            serializer.save(
                doctor=user,
                doctor_name=user.full_name,
                visit_date=serializer.validated_data.get('visit_date') or timezone.now(),
                created_by=user,
                **stamp(self.tenant, ClinicalNote),
            )
            Patient.objects.filter(pk=serializer.instance.patient_id).update(last_visit=timezone.now())
