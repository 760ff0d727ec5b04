# core/permissions.py

import logging

from rest_framework import exceptions
from rest_framework.permissions import BasePermission

from core.constants import ROLE_RANK, Role
from core.tenancy import resolve_request_context

logger = logging.getLogger(__name__)


# =========================
# Basic / Authenticated Permissions
# =========================

class IsAuthenticatedAndActive(BasePermission):
    """Access only for authenticated and active users."""
    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_active)


class HasTenantContext(BasePermission):
    """
    Resolve the clinic/branch context for the request.
    Raises instead of returning False so the caller gets the precise
    failure (403 branch denied, 400 missing branch).
    """
    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        resolve_request_context(request)
        return True


# =========================
# Role-Based Permissions
# =========================

def require_role(context, minimum_role):
    """Raise PermissionDenied unless the principal reaches ``minimum_role``."""
    role = context.principal.role
    if ROLE_RANK.get(role, 0) < ROLE_RANK[minimum_role]:
        logger.warning(
            f"Role check failed: user={context.principal.pk} role={role} "
            f"required={minimum_role}"
        )
        raise exceptions.PermissionDenied(f"{minimum_role} access required.")
    return True


class IsAdministrator(BasePermission):
    """Route-level form of require_role(ctx, Role.ADMINISTRATOR)."""

    def has_permission(self, request, view):
        return require_role(request.tenant, Role.ADMINISTRATOR)


class HasRolePermission(BasePermission):
    """
    Checks the clinic's configurable permission map.
    The view declares ``required_permissions = {action: PermissionKey}``.
    """
    message = 'Your role does not allow this action.'

    def has_permission(self, request, view):
        required = getattr(view, 'required_permissions', {}).get(getattr(view, 'action', None))
        if not required:
            return True

        user = request.user
        if user.role == Role.ADMINISTRATOR:
            return True

        from apps.settings_core.services import role_has_permission
        return role_has_permission(user.clinic_id, user.role, required)
