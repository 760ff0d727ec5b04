# apps/settings_core/views.py

from rest_framework.response import Response
from rest_framework.views import APIView

from apps.audit.services import log_action
from core.constants import AuditActions, PermissionKey
from core.permissions import IsAdministrator

from .serializers import PermissionMapSerializer
from .services import get_permission_map, update_permission_map


class RolePermissionView(APIView):
    """
    Clinic role → permission map.
    Every principal may read it, only Administrators change it.
    """

    def get_permissions(self):
        permissions = super().get_permissions()
        if self.request.method not in ("GET", "HEAD", "OPTIONS"):
            permissions.append(IsAdministrator())
        return permissions

    def get(self, request):
        return Response({
            "permissions": get_permission_map(request.tenant.clinic_id),
            "available": [{"key": key.value, "label": key.label} for key in PermissionKey],
        })

    def put(self, request):
        serializer = PermissionMapSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        permission_map = update_permission_map(
            request.tenant.clinic_id,
            serializer.validated_data,
            user=request.user,
        )
        log_action(
            request,
            action=AuditActions.PERMISSIONS_UPDATE,
            entity="RolePermissionConfig",
            details=f"Updated roles: {', '.join(sorted(serializer.validated_data))}",
        )
        return Response({"permissions": permission_map})
