# apps/billing/views.py
import logging

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response

from apps.audit.services import log_action
from apps.settings_core.services import role_has_permission
from core.constants import AuditActions, PermissionKey
from core.mixins.tenant_scoped import TenantScopedViewSetMixin
from core.permissions import HasRolePermission

from . import services
from .filters import InvoiceFilter
from .models import Expense, Invoice
from .serializers import ExpenseSerializer, InvoiceCreateSerializer, InvoiceSerializer

logger = logging.getLogger(__name__)


class InvoiceViewSet(TenantScopedViewSetMixin,
                     mixins.CreateModelMixin,
                     mixins.ListModelMixin,
                     mixins.RetrieveModelMixin,
                     viewsets.GenericViewSet):
    """Invoices of the active branch. Issued invoices are not edited, only cancelled."""

    queryset = Invoice.objects.select_related('patient').prefetch_related('items')
    serializer_class = InvoiceSerializer
    filterset_class = InvoiceFilter
    required_permissions = {
        'create': PermissionKey.FIN_EDIT_INVOICE,
        'cancel': PermissionKey.FIN_EDIT_INVOICE,
    }

    def get_permissions(self):
        return super().get_permissions() + [HasRolePermission()]

    def get_serializer_class(self):
        if self.action == 'create':
            return InvoiceCreateSerializer
        return InvoiceSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if data['discount'] > 0 and not self.tenant.is_administrator:
            if not role_has_permission(self.tenant.clinic_id, request.user.role, PermissionKey.FIN_DISCOUNTS):
                raise PermissionDenied('Your role can not apply discounts.')

        invoice = services.create_invoice(self.tenant, **data)
        log_action(
            request,
            action=AuditActions.CREATE,
            entity="Invoice",
            entity_id=invoice.pk,
            details=f"Invoice {invoice.invoice_number} for {invoice.final_amount}",
        )

        invoice = self.get_queryset().get(pk=invoice.pk)
        return Response(InvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        services.cancel_invoice(self.get_queryset(), pk)
        log_action(request, action=AuditActions.UPDATE, entity="Invoice", entity_id=pk, details="Cancelled")
        return Response(InvoiceSerializer(self.get_queryset().get(pk=pk)).data)


class ExpenseViewSet(TenantScopedViewSetMixin, viewsets.ModelViewSet):
    queryset = Expense.objects.all()
    serializer_class = ExpenseSerializer
    filterset_fields = ['category', 'payment_method']
