from rest_framework import filters, viewsets

from core.mixins.tenant_scoped import TenantScopedViewSetMixin
from core.permissions import IsAdministrator

from .models import Procedure
from .serializers import ProcedureSerializer


class ProcedureViewSet(TenantScopedViewSetMixin, viewsets.ModelViewSet):
    """Procedure catalog, managed by Administrators. Duplicate codes are 409."""
    queryset = Procedure.objects.all()
    serializer_class = ProcedureSerializer
    filter_backends = [filters.SearchFilter]
    search_fields = ['code', 'name']

    def get_permissions(self):
        return super().get_permissions() + [IsAdministrator()]
