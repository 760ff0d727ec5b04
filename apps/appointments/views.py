from rest_framework import viewsets

from core.mixins.tenant_scoped import TenantScopedViewSetMixin

from .filters import AppointmentFilter
from .models import Appointment
from .serializers import AppointmentSerializer


class AppointmentViewSet(TenantScopedViewSetMixin, viewsets.ModelViewSet):
    """Calendar of the active branch."""
    queryset = Appointment.objects.select_related('patient', 'doctor')
    serializer_class = AppointmentSerializer
    filterset_class = AppointmentFilter
