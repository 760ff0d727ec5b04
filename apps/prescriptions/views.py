# apps/prescriptions/views.py
from rest_framework import filters, viewsets

from core.mixins.tenant_scoped import TenantScopedViewSetMixin
from core.tenancy import stamp

from .filters import PrescriptionFilter
from .models import Drug, Prescription
from .serializers import DrugSerializer, PrescriptionSerializer


class PrescriptionViewSet(TenantScopedViewSetMixin, viewsets.ModelViewSet):
    """Prescriptions of the active branch; ?patient=<id> gives a patient's history."""
    queryset = Prescription.objects.select_related('doctor')
    serializer_class = PrescriptionSerializer
    filterset_class = PrescriptionFilter

    def perform_create(self, serializer):
        serializer.save(
            doctor=serializer.validated_data.get('doctor') or self.request.user,
            created_by=self.request.user,
            **stamp(self.tenant, Prescription),
        )


class DrugViewSet(TenantScopedViewSetMixin, viewsets.ModelViewSet):
    """Clinic-wide drug catalog."""
    queryset = Drug.objects.all()
    serializer_class = DrugSerializer
    filter_backends = [filters.SearchFilter]
    search_fields = ['name', 'generic_name']
