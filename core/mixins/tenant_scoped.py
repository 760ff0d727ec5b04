# core/mixins/tenant_scoped.py

from django.db import transaction

from core.tenancy import scoped_delete, scoped_update, stamp


class TenantScopedViewSetMixin:
    """
    Applies the tenant scoping contract to a ModelViewSet.

    - reads are filtered by the resolved clinic (and branch)
    - creates are stamped with the context, never the payload
    - updates/deletes run as a single filtered statement
    """

    # Actions allowed to ignore the branch filter
    clinic_wide_actions = ()
    # Generated identifiers that are never updatable
    immutable_fields = ()

    @property
    def tenant(self):
        return self.request.tenant

    def get_queryset(self):
        queryset = super().get_queryset()
        return queryset.for_context(
            self.tenant,
            clinic_wide=self.action in self.clinic_wide_actions,
        )

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['tenant'] = getattr(self.request, 'tenant', None)
        return context

    def perform_create(self, serializer):
        model = serializer.Meta.model
        ownership = stamp(self.tenant, model)
        with transaction.atomic():
            serializer.save(created_by=self.request.user, **ownership)

    def perform_update(self, serializer):
        instance = serializer.instance
        changes = dict(serializer.validated_data)
        if hasattr(instance, 'updated_by_id'):
            changes['updated_by'] = self.request.user

        with transaction.atomic():
            scoped_update(
                self.get_queryset(),
                instance.pk,
                changes,
                extra_immutable=self.immutable_fields,
            )
        instance.refresh_from_db()

    def perform_destroy(self, instance):
        scoped_delete(self.get_queryset(), instance.pk)
