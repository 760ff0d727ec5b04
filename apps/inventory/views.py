# apps/inventory/views.py
from django.db.models import F
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core.mixins.tenant_scoped import TenantScopedViewSetMixin

from . import services
from .models import InventoryItem, InventoryLog
from .serializers import ConsumeSerializer, InventoryItemSerializer, InventoryLogSerializer


class InventoryViewSet(TenantScopedViewSetMixin, viewsets.ModelViewSet):
    """Stock of the active branch."""
    queryset = InventoryItem.objects.all()
    serializer_class = InventoryItemSerializer
    filter_backends = [filters.SearchFilter]
    search_fields = ['name', 'sku', 'supplier']

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item, created = services.add_or_restock(self.tenant, **serializer.validated_data)
        return Response(
            self.get_serializer(item).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    def perform_update(self, serializer):
        serializer.instance = services.update_item(
            self.tenant,
            serializer.instance.pk,
            dict(serializer.validated_data),
            user=self.request.user,
        )

    @action(detail=True, methods=['post'])
    def consume(self, request, pk=None):
        serializer = ConsumeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = services.consume(
            self.tenant,
            pk,
            serializer.validated_data['quantity'],
            serializer.validated_data.get('reason', ''),
        )
        return Response(self.get_serializer(item).data)

    @action(detail=False, methods=['get'])
    def alerts(self, request):
        """Items at or below their low-stock threshold."""
        items = self.get_queryset().filter(quantity__lte=F('low_stock_threshold'))
        return Response(self.get_serializer(items, many=True).data)

    @action(detail=False, methods=['get'])
    def logs(self, request):
        logs = InventoryLog.objects.for_context(self.tenant).select_related('item')
        item_id = request.query_params.get('item')
        if item_id and item_id.isdigit():
            logs = logs.filter(item_id=int(item_id))
        return Response(InventoryLogSerializer(logs[:200], many=True).data)
