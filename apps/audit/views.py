# apps/audit/views.py

from django.conf import settings
from rest_framework import generics
from rest_framework.response import Response

from core.permissions import IsAdministrator

from .filters import AuditLogFilter
from .models import AuditLog
from .serializers import AuditLogSerializer


class AuditLogListView(generics.ListAPIView):
    """Newest audit entries of the clinic, across all branches."""
    serializer_class = AuditLogSerializer
    filterset_class = AuditLogFilter

    def get_permissions(self):
        return super().get_permissions() + [IsAdministrator()]

    def get_queryset(self):
        return AuditLog.objects.for_context(self.request.tenant, clinic_wide=True)

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())[:settings.AUDIT_LOG_LIMIT]
        return Response(self.get_serializer(queryset, many=True).data)
