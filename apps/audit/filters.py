import django_filters

from apps.audit.models import AuditLog


class AuditLogFilter(django_filters.FilterSet):
    """Filtering for the clinic audit trail."""

    action = django_filters.CharFilter(field_name="action", lookup_expr="iexact")
    entity = django_filters.CharFilter(field_name="entity", lookup_expr="iexact")
    entity_id = django_filters.CharFilter(field_name="entity_id", lookup_expr="exact")
    user = django_filters.NumberFilter(field_name="user_id")
    date_from = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    date_to = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")

    class Meta:
        model = AuditLog
        fields = ["action", "entity", "entity_id", "user"]
