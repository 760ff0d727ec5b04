import logging

from django.db import transaction
from rest_framework import viewsets

from apps.audit.services import log_action
from apps.clinics.models import Branch
from apps.clinics.serializers import BranchSerializer
from apps.clinics.services.branch_service import create_branch, delete_branch
from core.constants import AuditActions
from core.mixins.tenant_scoped import TenantScopedViewSetMixin
from core.permissions import IsAdministrator

logger = logging.getLogger(__name__)


    # =========================
    #✅ BranchViewSet
    # =========================

class BranchViewSet(TenantScopedViewSetMixin, viewsets.ModelViewSet):
    """
    Branches of the caller's clinic.
    Listing is open to every principal, changes are Administrator only.
    """
    queryset = Branch.objects.all()
    serializer_class = BranchSerializer
    clinic_wide_actions = ("list", "retrieve")
    immutable_fields = ("code",)

    def get_permissions(self):
        permissions = super().get_permissions()
        if self.action not in ("list", "retrieve"):
            permissions.append(IsAdministrator())
        return permissions

    def perform_create(self, serializer):
        serializer.instance = create_branch(self.tenant, **serializer.validated_data)
        log_action(
            self.request,
            action=AuditActions.CREATE,
            entity="Branch",
            entity_id=serializer.instance.pk,
            details=f"Created branch {serializer.instance.code}",
        )

    def perform_update(self, serializer):
        super().perform_update(serializer)
        log_action(
            self.request,
            action=AuditActions.UPDATE,
            entity="Branch",
            entity_id=serializer.instance.pk,
        )

    def perform_destroy(self, instance):
        # Logged first so the entry's branch reference is cleared by the delete
        with transaction.atomic():
            log_action(
                self.request,
                action=AuditActions.DELETE,
                entity="Branch",
                entity_id=instance.pk,
                details=f"Deleted branch {instance.code}",
            )
            delete_branch(self.tenant, instance.pk)
