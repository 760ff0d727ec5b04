# apps/settings_core/services.py

import logging

from django.db import transaction

from core.constants import DEFAULT_ROLE_PERMISSIONS, Role

from .models import RolePermissionConfig

logger = logging.getLogger(__name__)


def ensure_default_permissions(clinic_id):
    """Create the default map for every role the clinic has no entry for."""
    for role, keys in DEFAULT_ROLE_PERMISSIONS.items():
        RolePermissionConfig.objects.get_or_create(
            clinic_id=clinic_id,
            role=role,
            defaults={"permissions": [str(key) for key in keys]},
        )


def get_permission_map(clinic_id):
    configured = dict(
        RolePermissionConfig.objects
        .filter(clinic_id=clinic_id)
        .values_list("role", "permissions")
    )
    return {
        role.value: configured.get(role.value, [str(key) for key in DEFAULT_ROLE_PERMISSIONS[role]])
        for role in Role
    }


def role_has_permission(clinic_id, role, key) -> bool:
    return str(key) in get_permission_map(clinic_id).get(role, [])


@transaction.atomic
def update_permission_map(clinic_id, permission_map, user=None):
    """Replace the keys of every role present in ``permission_map``."""
    for role, keys in permission_map.items():
        RolePermissionConfig.objects.update_or_create(
            clinic_id=clinic_id,
            role=role,
            defaults={"permissions": list(dict.fromkeys(keys)), "updated_by": user},
        )
    logger.info(f"Role permissions updated for clinic {clinic_id}: {sorted(permission_map)}")
    return get_permission_map(clinic_id)
