# apps/audit/services.py

import logging
from typing import Optional

from apps.audit.models import AuditLog

logger = logging.getLogger(__name__)


def _request_origin(request):
    """(ip, user agent) of the caller; first hop of X-Forwarded-For wins."""
    if request is None:
        return None, ""
    meta = request.META
    forwarded = meta.get("HTTP_X_FORWARDED_FOR")
    ip = forwarded.split(",")[0].strip() if forwarded else meta.get("REMOTE_ADDR")
    return ip or None, meta.get("HTTP_USER_AGENT", "")[:500]


def log_action(
    request,
    *,
    action: str,
    entity: str,
    entity_id=None,
    details: str = "",
    user=None,
) -> Optional[AuditLog]:
    """
    Record a privileged operation.

    Clinic and branch come from the resolved request context when
    there is one, otherwise from ``user`` (sign-up and login).
    Principals outside any clinic are not audited.
    """
    user = user or getattr(request, "user", None)
    tenant = getattr(request, "tenant", None)

    clinic_id = tenant.clinic_id if tenant else getattr(user, "clinic_id", None)
    if clinic_id is None:
        return None

    ip_address, user_agent = _request_origin(request)
    entry = AuditLog.objects.create(
        clinic_id=clinic_id,
        branch_id=tenant.branch_id if tenant else None,
        user=user,
        user_name=getattr(user, "full_name", ""),
        action=action,
        entity=entity,
        entity_id="" if entity_id is None else str(entity_id),
        details=details,
        ip_address=ip_address,
        user_agent=user_agent,
    )

    logger.debug(f"Audit {action} {entity}:{entry.entity_id} clinic={clinic_id}")
    return entry
