from rest_framework import generics

from apps.audit.services import log_action
from apps.clinics.models import Clinic
from apps.clinics.serializers import ClinicSerializer
from core.constants import AuditActions
from core.permissions import IsAdministrator
from core.tenancy import scoped_update


    # =========================
    #✅ ClinicProfileView
    # =========================

class ClinicProfileView(generics.RetrieveUpdateAPIView):
    """GET for every principal of the clinic, PUT for Administrators."""
    serializer_class = ClinicSerializer
    http_method_names = ["get", "put", "patch", "head", "options"]

    def get_permissions(self):
        permissions = super().get_permissions()
        if self.request.method not in ("GET", "HEAD", "OPTIONS"):
            permissions.append(IsAdministrator())
        return permissions

    def get_queryset(self):
        return Clinic.objects.filter(pk=self.request.tenant.clinic_id)

    def get_object(self):
        return generics.get_object_or_404(self.get_queryset())

    def perform_update(self, serializer):
        scoped_update(
            self.get_queryset(),
            serializer.instance.pk,
            dict(serializer.validated_data, updated_by=self.request.user),
            extra_immutable=("code",),
        )
        serializer.instance.refresh_from_db()
        log_action(
            self.request,
            action=AuditActions.UPDATE,
            entity="Clinic",
            entity_id=serializer.instance.pk,
            details="Updated clinic profile",
        )
