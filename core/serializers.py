# core/serializers.py


class TenantScopedSerializerMixin:
    """
    Restricts related-field choices to rows of the request's tenant.

    A reference to another clinic's (or branch's) row fails validation
    exactly like a reference to a missing row.
    """
    tenant_scoped_fields = ()

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        tenant = self.context.get('tenant')

        for name in self.tenant_scoped_fields:
            field = self.fields.get(name)
            if field is None or field.read_only:
                continue

            relation = getattr(field, 'child_relation', field)
            if tenant is None:
                relation.queryset = relation.queryset.none()
            else:
                relation.queryset = relation.queryset.for_context(
                    tenant,
                    clinic_wide=tenant.branch_id is None,
                )
